"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, List, Optional

from ...models.domain import Location, RoutableOrder


@dataclass(slots=True)
class Saving:
    source: Hashable
    target: Hashable
    saving: float


@dataclass(slots=True)
class TripSlot:
    """Working trip during savings merges; an empty path marks a consumed slot."""

    path: List[Hashable]
    load: float


@dataclass(slots=True)
class RouteStop:
    order_id: str
    store_id: str
    sequence: int
    location: Location
    distance_from_prev_km: float
    store_name: Optional[str] = None
    address: Optional[str] = None


@dataclass(slots=True)
class RoutePlan:
    route_id: str
    vehicle_id: str
    driver_id: Optional[str]
    date: Optional[str]
    total_load: float
    total_distance_km: float
    store_ids: List[str]
    stops: List[RouteStop]


@dataclass(slots=True)
class RoutingResult:
    plans: List[RoutePlan]
    unrouted_orders: List[RoutableOrder] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)
