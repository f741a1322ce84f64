"""Clarke-Wright savings route construction."""

from __future__ import annotations

import logging
import math
from typing import Hashable, Sequence

from ...config import settings
from ...exceptions import InvalidArgumentError
from ...models.domain import DeliveryNode, Location
from ..geospatial import distance, ensure_finite
from .models import Saving, TripSlot

logger = logging.getLogger(__name__)


def _validate_nodes(nodes: Sequence[DeliveryNode], depot: Location, check_coordinates: bool) -> None:
    if check_coordinates:
        ensure_finite(depot, label="Depot")
    seen: set[Hashable] = set()
    for node in nodes:
        if node.id in seen:
            raise InvalidArgumentError(f"Duplicate node id '{node.id}'.")
        seen.add(node.id)
        if math.isnan(node.demand) or node.demand < 0:
            raise InvalidArgumentError(f"Demand for node '{node.id}' must be non-negative, got {node.demand}.")
        if check_coordinates:
            ensure_finite(node.location, label=f"Node '{node.id}'")


def compute_savings(nodes: Sequence[DeliveryNode], depot: Location) -> list[Saving]:
    """Pairwise savings ``d(i, depot) + d(j, depot) - d(i, j)``, sorted descending.

    The sort is stable, so equal savings keep the pair order of ``nodes``.
    Non-finite savings are dropped; they could never start a merge.
    """

    to_depot = [distance(node.location, depot) for node in nodes]
    savings: list[Saving] = []
    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            value = to_depot[i] + to_depot[j] - distance(nodes[i].location, nodes[j].location)
            if math.isnan(value):
                continue
            savings.append(Saving(source=nodes[i].id, target=nodes[j].id, saving=value))
    savings.sort(key=lambda item: item.saving, reverse=True)
    return savings


def _is_endpoint(path: list[Hashable], node_id: Hashable) -> bool:
    return path[0] == node_id or path[-1] == node_id


def build_routes(
    nodes: Sequence[DeliveryNode],
    depot: Location,
    vehicle_capacity: float,
    *,
    validate_coordinates: bool | None = None,
) -> list[list[Hashable]]:
    """Group ``nodes`` into depot round trips that each fit ``vehicle_capacity``.

    Returns one ordered list of node ids per trip. A node whose own demand
    exceeds the capacity stays on a trip of its own.
    """

    if not nodes:
        return []
    check_coordinates = settings.validate_coordinates if validate_coordinates is None else validate_coordinates
    _validate_nodes(nodes, depot, check_coordinates)

    savings = compute_savings(nodes, depot)

    trips = [TripSlot(path=[node.id], load=node.demand) for node in nodes]
    owner: dict[Hashable, int] = {node.id: index for index, node in enumerate(nodes)}

    merges = 0
    for entry in savings:
        if entry.saving <= 0:
            break

        source_index = owner[entry.source]
        target_index = owner[entry.target]
        if source_index == target_index:
            continue

        source_trip = trips[source_index]
        target_trip = trips[target_index]
        if not (_is_endpoint(source_trip.path, entry.source) and _is_endpoint(target_trip.path, entry.target)):
            continue

        combined_load = source_trip.load + target_trip.load
        if combined_load > vehicle_capacity:
            continue

        # Join so that the target trip ends with ``target`` and the source trip starts with ``source``.
        source_path = source_trip.path if source_trip.path[0] == entry.source else source_trip.path[::-1]
        target_path = target_trip.path if target_trip.path[-1] == entry.target else target_trip.path[::-1]

        trips[source_index] = TripSlot(path=target_path + source_path, load=combined_load)
        trips[target_index] = TripSlot(path=[], load=0.0)
        for node_id in target_path:
            owner[node_id] = source_index
        merges += 1
        logger.debug("Merged %s-%s (saving %.4f km, load %.2f)", entry.target, entry.source, entry.saving, combined_load)

    routes = [trip.path for trip in trips if trip.path]
    logger.info("Built %d trips from %d nodes with %d merges", len(routes), len(nodes), merges)
    return routes
