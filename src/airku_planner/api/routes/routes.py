"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from ...exceptions import PlannerError
from ...schemas.routing import BuildRoutesRequest, BuildRoutesResponse, DailyPlanRequest, DailyPlanResponse
from ...services.outputs.routing_formatter import routing_result_to_csv, routing_result_to_json
from ...services.routing import build_routes, plan_daily_routes
from ...services.routing.service import default_depot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/build", response_model=BuildRoutesResponse, status_code=status.HTTP_200_OK)
def build(payload: BuildRoutesRequest) -> BuildRoutesResponse:
    """Run the savings heuristic over raw nodes and return trips of node ids."""
    depot = payload.depot.to_domain() if payload.depot else default_depot()
    try:
        trips = build_routes(payload.domain_nodes(), depot, payload.vehicle_capacity)
    except PlannerError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BuildRoutesResponse(trips=trips)


@router.post("/plan", response_model=DailyPlanResponse, status_code=status.HTTP_200_OK)
def plan(
    payload: DailyPlanRequest,
    format: str = Query(default="json", pattern="^(json|csv)$"),
):
    """Plan delivery trips for the day's pending orders across the assigned vehicles."""
    depot = payload.depot.to_domain() if payload.depot else None
    try:
        result = plan_daily_routes(
            [order.to_domain() for order in payload.orders],
            [vehicle.to_domain() for vehicle in payload.vehicles],
            depot,
            delivery_date=payload.delivery_date,
        )
    except PlannerError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error planning daily routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to plan routes: {str(exc)}",
        ) from exc

    if format == "csv":
        return PlainTextResponse(routing_result_to_csv(result), media_type="text/csv")
    return DailyPlanResponse.model_validate(routing_result_to_json(result))
