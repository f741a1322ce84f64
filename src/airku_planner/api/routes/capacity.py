"""Capacity endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...exceptions import PlannerError
from ...schemas.capacity import (
    AggregateCapacityRequest,
    AggregateCapacityResponse,
    CapacityResponse,
    ConversionFactorsResponse,
    OrderCapacityRequest,
    VehicleInfoResponse,
    VehicleLoadRequest,
    VehicleLoadResponse,
)
from ...services.capacity import (
    calculate_vehicle_load,
    compute_demand,
    get_vehicle_capacity_info,
    size_to_conversion_factor,
    validate_aggregate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/capacity", tags=["capacity"])


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/calculate", response_model=VehicleLoadResponse, status_code=status.HTTP_200_OK)
def calculate(payload: VehicleLoadRequest) -> VehicleLoadResponse:
    """Approve a product mix against a fleet vehicle profile."""
    products = [product.model_dump() for product in payload.products]
    try:
        result = calculate_vehicle_load(products, payload.vehicle_type or settings.default_vehicle_type)
    except PlannerError as exc:
        raise _bad_request(exc) from exc
    except Exception as exc:
        logger.exception(f"Error calculating vehicle load: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate capacity: {str(exc)}",
        ) from exc
    return VehicleLoadResponse.model_validate(asdict(result))


@router.get("/vehicle-info/{vehicle_type}", response_model=VehicleInfoResponse, status_code=status.HTTP_200_OK)
def vehicle_info(vehicle_type: str) -> VehicleInfoResponse:
    try:
        profile = get_vehicle_capacity_info(vehicle_type)
    except PlannerError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return VehicleInfoResponse.model_validate(asdict(profile))


@router.post("/order", response_model=CapacityResponse, status_code=status.HTTP_200_OK)
def order_capacity(payload: OrderCapacityRequest) -> CapacityResponse:
    try:
        result = compute_demand([item.to_domain() for item in payload.items], payload.vehicle_capacity)
    except PlannerError as exc:
        raise _bad_request(exc) from exc
    return CapacityResponse.model_validate(asdict(result))


@router.post("/validate-orders", response_model=AggregateCapacityResponse, status_code=status.HTTP_200_OK)
def validate_orders(payload: AggregateCapacityRequest) -> AggregateCapacityResponse:
    """Check whether several orders fit into one vehicle together."""
    try:
        result = validate_aggregate([order.to_domain() for order in payload.orders], payload.vehicle_capacity)
    except PlannerError as exc:
        raise _bad_request(exc) from exc
    return AggregateCapacityResponse.model_validate(asdict(result))


@router.get("/recommendation", response_model=ConversionFactorsResponse, status_code=status.HTTP_200_OK)
def recommendation(
    size: str = Query(..., description="Product size label, e.g. '600ml' or '19L'"),
) -> ConversionFactorsResponse:
    return ConversionFactorsResponse.model_validate(asdict(size_to_conversion_factor(size)))
