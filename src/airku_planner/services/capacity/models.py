"""Capacity domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class CapacityDetail:
    product_id: str
    product_name: Optional[str]
    quantity: float
    conversion_rate: float
    capacity_needed: float
    is_homogeneous: bool


@dataclass(slots=True)
class CapacityResult:
    total_capacity_used: float
    remaining_capacity: float
    is_homogeneous: bool
    can_fit: bool
    utilization_percentage: float
    capacity_details: List[CapacityDetail] = field(default_factory=list)


@dataclass(slots=True)
class AggregateCapacityResult:
    can_fit: bool
    total_capacity_used: float
    remaining_capacity: float
    utilization_percentage: float
    is_homogeneous: bool
    order_count: int
    product_types: int
    recommendation: str
    capacity_details: List[CapacityDetail] = field(default_factory=list)


@dataclass(slots=True)
class ConversionFactors:
    unit_capacity_factor: float
    heterogeneous_conversion_factor: float
    explanation: str
    size_in_ml: Optional[float] = None
    size_formatted: Optional[str] = None
    is_standard_size: bool = False


@dataclass(slots=True)
class VehicleProfile:
    vehicle_type: str
    max_capacity_equivalent: float
    homogeneous_capacity: dict[str, int]
    conversion_rates: dict[str, float]


@dataclass(slots=True)
class LoadLine:
    product_type: str
    requested_quantity: int
    approved_quantity: int
    conversion_rate: float
    load_equivalent: float
    is_reduced: bool


@dataclass(slots=True)
class VehicleLoadResult:
    vehicle_type: str
    is_homogeneous: bool
    max_capacity: float
    total_load_equivalent: float
    remaining_capacity: float
    utilization_percentage: float
    can_fit: bool
    message: str
    products: List[LoadLine] = field(default_factory=list)
