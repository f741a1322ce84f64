"""Daily delivery plan orchestration on top of the savings solver."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Sequence

from ...config import settings
from ...models.domain import DeliveryNode, Location, RoutableOrder, VehicleAssignment
from ..geospatial import distance
from .models import RoutePlan, RouteStop, RoutingResult
from .savings import build_routes

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _StoreStop:
    store_id: str
    location: Location
    total_demand: float = 0.0
    priority: bool = False
    orders: list[RoutableOrder] = field(default_factory=list)


def default_depot() -> Location:
    return Location(latitude=settings.depot_latitude, longitude=settings.depot_longitude)


def annotate_stop_distances(locations: Sequence[Location], depot: Location) -> list[float]:
    """Distance of each location from the one before it, the first measured from ``depot``."""

    distances: list[float] = []
    previous = depot
    for location in locations:
        distances.append(distance(previous, location))
        previous = location
    return distances


def round_trip_distance_km(locations: Sequence[Location], depot: Location) -> float:
    """Length of depot -> locations -> depot."""

    if not locations:
        return 0.0
    return sum(annotate_stop_distances(locations, depot)) + distance(locations[-1], depot)


def _has_coordinates(order: RoutableOrder) -> bool:
    location = order.location
    return (
        location is not None
        and math.isfinite(location.latitude)
        and math.isfinite(location.longitude)
    )


def _group_by_store(orders: Sequence[RoutableOrder]) -> dict[str, _StoreStop]:
    stores: dict[str, _StoreStop] = {}
    for order in orders:
        store = stores.get(order.store_id)
        if store is None:
            store = _StoreStop(store_id=order.store_id, location=order.location)
            stores[order.store_id] = store
        store.total_demand += order.demand
        store.orders.append(order)
        if order.priority:
            store.priority = True
    return stores


def _build_plan(
    *,
    route_id: str,
    vehicle: VehicleAssignment,
    delivery_date: str | None,
    store_ids: list[str],
    stores: dict[str, _StoreStop],
    depot: Location,
) -> RoutePlan:
    trip_orders = [order for store_id in store_ids for order in stores[store_id].orders]
    locations = [order.location for order in trip_orders]
    legs = annotate_stop_distances(locations, depot)
    stops = [
        RouteStop(
            order_id=order.order_id,
            store_id=order.store_id,
            sequence=position,
            location=order.location,
            distance_from_prev_km=leg,
            store_name=order.store_name,
            address=order.address,
        )
        for position, (order, leg) in enumerate(zip(trip_orders, legs), start=1)
    ]
    return RoutePlan(
        route_id=route_id,
        vehicle_id=vehicle.vehicle_id,
        driver_id=vehicle.driver_id,
        date=delivery_date,
        total_load=sum(stores[store_id].total_demand for store_id in store_ids),
        total_distance_km=round_trip_distance_km(locations, depot),
        store_ids=list(store_ids),
        stops=stops,
    )


def plan_daily_routes(
    orders: Sequence[RoutableOrder],
    vehicles: Sequence[VehicleAssignment],
    depot: Location | None = None,
    *,
    delivery_date: str | None = None,
) -> RoutingResult:
    """Assign pending orders to trips, vehicle by vehicle.

    Each vehicle routes every order still pending, grouped by store; the
    orders it covers are removed before the next vehicle is planned.
    """

    depot = depot or default_depot()
    remaining: list[RoutableOrder] = []
    skipped: list[RoutableOrder] = []
    for order in orders:
        if _has_coordinates(order):
            remaining.append(order)
        else:
            logger.warning("Order %s for store %s has no usable coordinates, skipping", order.order_id, order.store_id)
            skipped.append(order)

    plans: list[RoutePlan] = []
    for vehicle in vehicles:
        if not remaining:
            break
        stores = _group_by_store(remaining)
        nodes = [
            DeliveryNode(id=store.store_id, location=store.location, demand=store.total_demand)
            for store in stores.values()
        ]
        trips = build_routes(nodes, depot, vehicle.capacity)

        routed: set[str] = set()
        for trip_number, store_ids in enumerate(trips, start=1):
            plan = _build_plan(
                route_id=f"{vehicle.vehicle_id}_T{trip_number:02d}",
                vehicle=vehicle,
                delivery_date=delivery_date,
                store_ids=store_ids,
                stores=stores,
                depot=depot,
            )
            plans.append(plan)
            routed.update(stop.order_id for stop in plan.stops)

        remaining = [order for order in remaining if order.order_id not in routed]
        logger.info("Vehicle %s: %d trips covering %d orders", vehicle.vehicle_id, len(trips), len(routed))

    metadata = {
        "status": "complete",
        "date": delivery_date,
        "vehicles": len(vehicles),
        "trips": len(plans),
        "routed_orders": sum(len(plan.stops) for plan in plans),
        "depot": {"latitude": depot.latitude, "longitude": depot.longitude},
    }
    return RoutingResult(plans=plans, unrouted_orders=skipped + remaining, metadata=metadata)
