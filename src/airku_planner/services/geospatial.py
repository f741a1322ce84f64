"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..exceptions import InvalidArgumentError
from ..models.domain import Location

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance(point_a: Location, point_b: Location) -> float:
    """Great-circle distance in kilometers between two locations."""

    return haversine_km(point_a.latitude, point_a.longitude, point_b.latitude, point_b.longitude)


def ensure_finite(location: Location | None, *, label: str) -> Location:
    """Return ``location`` unchanged or raise if it is missing or not a finite coordinate."""

    if location is None:
        raise InvalidArgumentError(f"{label} has no coordinates.")
    if not (math.isfinite(location.latitude) and math.isfinite(location.longitude)):
        raise InvalidArgumentError(
            f"{label} has non-finite coordinates ({location.latitude}, {location.longitude})."
        )
    return location
