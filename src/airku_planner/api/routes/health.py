"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/depot", status_code=status.HTTP_200_OK)
def health_depot() -> dict:
    """Report the depot every planned trip starts from."""
    return {
        "latitude": settings.depot_latitude,
        "longitude": settings.depot_longitude,
        "validate_coordinates": settings.validate_coordinates,
    }
