"""Capacity-unit accounting for homogeneous and heterogeneous vehicle loads.

A load is homogeneous when it holds a single distinct product; every unit then
costs the product's unit capacity factor. Mixed loads pack less efficiently, so
each unit costs the product's heterogeneous conversion factor instead.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Sequence

from ...config import settings
from ...exceptions import DivideByZeroError, InvalidArgumentError
from ...models.domain import Order, OrderItem, Product
from .models import AggregateCapacityResult, CapacityDetail, CapacityResult, ConversionFactors

logger = logging.getLogger(__name__)

DEFAULT_CONVERSION_RATE = 1.0

# Standard bottle/gallon sizes in ml -> heterogeneous conversion factor (240ml baseline).
STANDARD_SIZE_FACTORS: dict[float, float] = {
    120: 0.57,
    240: 1.0,
    330: 1.0,
    600: 1.6,
    19000: 3.3,
}
BASELINE_SIZE_ML = 240.0
GALLON_SIZE_ML = 19000.0

_SIZE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(ml|l|liter)", re.IGNORECASE)


def round_half_away(value: float, digits: int = 2) -> float:
    """Round on the scaled integer, ties away from zero (``round`` would use banker's rounding)."""

    scale = 10 ** digits
    scaled = math.floor(abs(value) * scale + 0.5)
    return math.copysign(scaled / scale, value) if scaled else 0.0


def conversion_rate_for(product: Product | None, is_homogeneous: bool) -> float:
    """Select the per-unit capacity cost of ``product`` for the given load composition."""

    if product is None:
        raise InvalidArgumentError("Order item has no product capacity factors.")
    if is_homogeneous:
        rate = product.unit_capacity_factor
    else:
        rate = product.heterogeneous_conversion_factor
        if rate is None:
            rate = product.unit_capacity_factor
    if rate is None:
        rate = DEFAULT_CONVERSION_RATE
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidArgumentError(
            f"Conversion rate for product '{product.product_id}' must be positive, got {rate}."
        )
    return float(rate)


def _check_vehicle_capacity(vehicle_capacity: float) -> float:
    if vehicle_capacity == 0:
        raise DivideByZeroError("Vehicle capacity is zero; utilization is undefined.")
    if not math.isfinite(vehicle_capacity) or vehicle_capacity < 0:
        raise InvalidArgumentError(f"Vehicle capacity must be a positive number, got {vehicle_capacity}.")
    return float(vehicle_capacity)


def _check_quantity(item: OrderItem) -> float:
    if not math.isfinite(item.quantity) or item.quantity < 0:
        raise InvalidArgumentError(
            f"Quantity for product '{item.product_id}' must be a non-negative number, got {item.quantity}."
        )
    return item.quantity


def compute_demand(items: Sequence[OrderItem], vehicle_capacity: float) -> CapacityResult:
    """Compute the capacity units ``items`` consume and whether they fit ``vehicle_capacity``.

    ``can_fit`` compares the unrounded total so a load of 100.004999 does not
    fit a vehicle of 100 even though it is reported as 100.0.
    """

    capacity = _check_vehicle_capacity(vehicle_capacity)
    if not items:
        return CapacityResult(
            total_capacity_used=0.0,
            remaining_capacity=round_half_away(capacity),
            is_homogeneous=True,
            can_fit=True,
            utilization_percentage=0.0,
            capacity_details=[],
        )

    is_homogeneous = len({item.product_id for item in items}) == 1

    total = 0.0
    details: list[CapacityDetail] = []
    for item in items:
        quantity = _check_quantity(item)
        rate = conversion_rate_for(item.product, is_homogeneous)
        needed = quantity * rate
        total += needed
        details.append(
            CapacityDetail(
                product_id=item.product_id,
                product_name=item.product.name,
                quantity=quantity,
                conversion_rate=rate,
                capacity_needed=needed,
                is_homogeneous=is_homogeneous,
            )
        )

    return CapacityResult(
        total_capacity_used=round_half_away(total),
        remaining_capacity=round_half_away(capacity - total),
        is_homogeneous=is_homogeneous,
        can_fit=total <= capacity,
        utilization_percentage=round_half_away(total / capacity * 100),
        capacity_details=details,
    )


def max_units_for(product: Product, vehicle_capacity: float, is_homogeneous: bool = True) -> int:
    """Return how many whole units of ``product`` fit in ``vehicle_capacity``."""

    capacity = _check_vehicle_capacity(vehicle_capacity)
    rate = conversion_rate_for(product, is_homogeneous)
    return math.floor(capacity / rate)


def merge_order_items(orders: Iterable[Order]) -> list[OrderItem]:
    """Sum quantities per product across ``orders``, keeping first-seen product order."""

    merged: dict[str, OrderItem] = {}
    for order in orders:
        for item in order.items or ():
            _check_quantity(item)
            existing = merged.get(item.product_id)
            if existing is None:
                merged[item.product_id] = OrderItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    product=item.product,
                )
            else:
                existing.quantity += item.quantity
                if existing.product is None:
                    existing.product = item.product
    return list(merged.values())


def _recommendation(result: CapacityResult, vehicle_capacity: float, threshold: float) -> str:
    if not result.can_fit:
        excess = round_half_away(-result.remaining_capacity)
        return (
            f"Load exceeds vehicle capacity by {excess:g} units. "
            "Reduce order quantities or split the orders across multiple vehicles."
        )
    if result.utilization_percentage > threshold:
        return (
            f"Vehicle is {result.utilization_percentage:g}% utilized. "
            "Consider a larger vehicle for future loads."
        )
    return f"Capacity is adequate: {result.remaining_capacity:g} of {vehicle_capacity:g} units remain free."


def validate_aggregate(
    orders: Sequence[Order],
    vehicle_capacity: float,
    *,
    high_utilization_threshold: float | None = None,
) -> AggregateCapacityResult:
    """Check whether ``orders`` fit one vehicle together.

    Items are merged by product before the homogeneity test, so two
    single-product orders for different products form a mixed load.
    """

    threshold = (
        settings.high_utilization_threshold if high_utilization_threshold is None else high_utilization_threshold
    )
    merged = merge_order_items(orders)
    result = compute_demand(merged, vehicle_capacity)
    logger.debug(
        "Validated %d orders (%d product types): %.2f/%s units",
        len(orders),
        len(merged),
        result.total_capacity_used,
        vehicle_capacity,
    )
    return AggregateCapacityResult(
        can_fit=result.can_fit,
        total_capacity_used=result.total_capacity_used,
        remaining_capacity=result.remaining_capacity,
        utilization_percentage=result.utilization_percentage,
        is_homogeneous=result.is_homogeneous,
        order_count=len(orders),
        product_types=len(merged),
        recommendation=_recommendation(result, vehicle_capacity, threshold),
        capacity_details=result.capacity_details,
    )


def _format_size(size_in_ml: float) -> str:
    if size_in_ml >= 1000:
        return f"{size_in_ml / 1000:g}L"
    return f"{size_in_ml:g}ml"


def size_to_conversion_factor(size_label: str | None) -> ConversionFactors:
    """Derive capacity factors from a label such as ``"600ml"`` or ``"19L"``.

    Unparseable labels fall back to 1.0 for both factors instead of raising.
    """

    match = _SIZE_PATTERN.search(size_label or "")
    if not match:
        return ConversionFactors(
            unit_capacity_factor=DEFAULT_CONVERSION_RATE,
            heterogeneous_conversion_factor=DEFAULT_CONVERSION_RATE,
            explanation=f"Size '{size_label}' not recognized. Using default factors.",
        )

    size_value = float(match.group(1))
    unit = match.group(2).lower()
    size_in_ml = size_value * 1000 if unit in ("l", "liter") else size_value

    conversion = STANDARD_SIZE_FACTORS.get(size_in_ml)
    is_standard = conversion is not None
    if conversion is None:
        if size_in_ml < GALLON_SIZE_ML:
            conversion = round_half_away(size_in_ml / BASELINE_SIZE_ML)
        else:
            conversion = round_half_away(size_in_ml / GALLON_SIZE_ML * STANDARD_SIZE_FACTORS[19000])

    formatted = _format_size(size_in_ml)
    return ConversionFactors(
        unit_capacity_factor=DEFAULT_CONVERSION_RATE,
        heterogeneous_conversion_factor=conversion,
        explanation=(
            f"Product {formatted} has conversion {conversion:g}. "
            "Mixed loads use this factor; single-product loads use 1.0 per unit."
        ),
        size_in_ml=size_in_ml,
        size_formatted=formatted,
        is_standard_size=is_standard,
    )
