"""Capacity model services."""

from .calculator import (
    compute_demand,
    max_units_for,
    merge_order_items,
    round_half_away,
    size_to_conversion_factor,
    validate_aggregate,
)
from .vehicles import VEHICLE_PROFILES, calculate_vehicle_load, get_vehicle_capacity_info

__all__ = [
    "compute_demand",
    "max_units_for",
    "merge_order_items",
    "round_half_away",
    "size_to_conversion_factor",
    "validate_aggregate",
    "VEHICLE_PROFILES",
    "calculate_vehicle_load",
    "get_vehicle_capacity_info",
]
