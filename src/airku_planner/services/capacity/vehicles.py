"""Fixed fleet profiles and load approval against them."""

from __future__ import annotations

import logging
import math
from typing import Mapping, Sequence

from ...exceptions import InvalidArgumentError
from .calculator import round_half_away
from .models import LoadLine, VehicleLoadResult, VehicleProfile

logger = logging.getLogger(__name__)

_CONVERSION_RATES = {
    "240ml": 1.0,
    "120ml": 0.571,
    "600ml": 1.6,
    "330ml": 1.0,
    "19L": 3.33,
}

# Capacities are expressed in 240ml-equivalent units.
VEHICLE_PROFILES: dict[str, VehicleProfile] = {
    "L300": VehicleProfile(
        vehicle_type="L300",
        max_capacity_equivalent=200,
        homogeneous_capacity={"240ml": 200, "120ml": 350, "600ml": 150, "330ml": 200, "19L": 60},
        conversion_rates=dict(_CONVERSION_RATES),
    ),
    "Cherry Box": VehicleProfile(
        vehicle_type="Cherry Box",
        max_capacity_equivalent=170,
        homogeneous_capacity={"240ml": 170, "120ml": 300, "600ml": 100, "330ml": 170, "19L": 50},
        conversion_rates=dict(_CONVERSION_RATES),
    ),
}


def get_vehicle_capacity_info(vehicle_type: str) -> VehicleProfile:
    profile = VEHICLE_PROFILES.get(vehicle_type)
    if profile is None:
        raise InvalidArgumentError(f"Vehicle type '{vehicle_type}' is not recognized.")
    return profile


def _requested(line: Mapping[str, object]) -> tuple[str, int]:
    product_type = line.get("product_type")
    quantity = line.get("quantity")
    if not product_type or not isinstance(quantity, (int, float)) or isinstance(quantity, bool):
        raise InvalidArgumentError("Every product needs a product_type and a numeric quantity.")
    if quantity < 0:
        raise InvalidArgumentError(f"Quantity for '{product_type}' must not be negative, got {quantity}.")
    return str(product_type), int(quantity)


def _homogeneous_load(profile: VehicleProfile, product_type: str, requested: int) -> VehicleLoadResult:
    max_allowed = profile.homogeneous_capacity.get(product_type)
    if max_allowed is None:
        raise InvalidArgumentError(
            f"Product type '{product_type}' is not recognized for {profile.vehicle_type}."
        )
    approved = min(requested, max_allowed)
    rate = profile.conversion_rates[product_type]
    load = approved * rate
    is_reduced = requested > max_allowed
    message = (
        f"{product_type} reduced from {requested} to {approved} units "
        f"({profile.vehicle_type} limit)."
        if is_reduced
        else f"All {product_type} fits ({approved} units)."
    )
    return VehicleLoadResult(
        vehicle_type=profile.vehicle_type,
        is_homogeneous=True,
        max_capacity=profile.max_capacity_equivalent,
        total_load_equivalent=round_half_away(load),
        remaining_capacity=round_half_away(profile.max_capacity_equivalent - load),
        utilization_percentage=round_half_away(load / profile.max_capacity_equivalent * 100),
        can_fit=not is_reduced,
        message=message,
        products=[
            LoadLine(
                product_type=product_type,
                requested_quantity=requested,
                approved_quantity=approved,
                conversion_rate=rate,
                load_equivalent=load,
                is_reduced=is_reduced,
            )
        ],
    )


def _heterogeneous_load(profile: VehicleProfile, requested: list[tuple[str, int]]) -> VehicleLoadResult:
    lines: list[LoadLine] = []
    for product_type, quantity in requested:
        rate = profile.conversion_rates.get(product_type)
        if rate is None:
            raise InvalidArgumentError(f"Product type '{product_type}' is not recognized.")
        lines.append(
            LoadLine(
                product_type=product_type,
                requested_quantity=quantity,
                approved_quantity=quantity,
                conversion_rate=rate,
                load_equivalent=quantity * rate,
                is_reduced=False,
            )
        )

    max_capacity = profile.max_capacity_equivalent
    total = sum(line.load_equivalent for line in lines)
    exceeds = total > max_capacity
    if exceeds:
        reduction = max_capacity / total
        for line in lines:
            line.approved_quantity = math.floor(line.requested_quantity * reduction)
            line.load_equivalent = line.approved_quantity * line.conversion_rate
            line.is_reduced = True
        total = sum(line.load_equivalent for line in lines)
        logger.info("Mixed load scaled by %.4f to fit %s", reduction, profile.vehicle_type)

    message = (
        f"Load reduced proportionally to fit {profile.vehicle_type} "
        f"({max_capacity:g} units, 240ml equivalent)."
        if exceeds
        else f"All products fit in {profile.vehicle_type}."
    )
    return VehicleLoadResult(
        vehicle_type=profile.vehicle_type,
        is_homogeneous=False,
        max_capacity=max_capacity,
        total_load_equivalent=round_half_away(total),
        remaining_capacity=round_half_away(max_capacity - total),
        utilization_percentage=round_half_away(total / max_capacity * 100),
        can_fit=not exceeds,
        message=message,
        products=lines,
    )


def calculate_vehicle_load(products: Sequence[Mapping[str, object]], vehicle_type: str = "L300") -> VehicleLoadResult:
    """Approve as much of ``products`` as the named vehicle can carry.

    Single-product loads are capped at the vehicle's per-product limit; mixed
    loads over capacity are scaled down proportionally and floored per line.
    """

    profile = get_vehicle_capacity_info(vehicle_type)
    if not products:
        raise InvalidArgumentError("Products must be a non-empty list.")
    requested = [_requested(line) for line in products]

    if len({product_type for product_type, _ in requested}) == 1:
        product_type = requested[0][0]
        return _homogeneous_load(profile, product_type, sum(quantity for _, quantity in requested))
    return _heterogeneous_load(profile, requested)
