"""Route construction services."""

from .savings import build_routes, compute_savings
from .service import annotate_stop_distances, plan_daily_routes, round_trip_distance_km

__all__ = [
    "build_routes",
    "compute_savings",
    "annotate_stop_distances",
    "plan_daily_routes",
    "round_trip_distance_km",
]
