"""Domain models for products, orders and routable stops."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, List, Optional


@dataclass(frozen=True, slots=True)
class Location:
    """WGS-84 coordinate in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(slots=True)
class Product:
    """Capacity factors of a sellable product.

    ``unit_capacity_factor`` applies when the product is loaded alone,
    ``heterogeneous_conversion_factor`` when it shares the vehicle with other
    products. ``None`` means the factor was never configured.
    """

    product_id: str
    name: Optional[str] = None
    unit_capacity_factor: Optional[float] = None
    heterogeneous_conversion_factor: Optional[float] = None


@dataclass(slots=True)
class OrderItem:
    product_id: str
    quantity: float
    product: Optional[Product]


@dataclass(slots=True)
class Order:
    order_id: str
    items: List[OrderItem] = field(default_factory=list)


@dataclass(slots=True)
class DeliveryNode:
    """One routable stop: an order or a store visit with its demand."""

    id: Hashable
    location: Location
    demand: float


@dataclass(slots=True)
class RoutableOrder:
    """A pending order resolved to its store location and capacity demand."""

    order_id: str
    store_id: str
    location: Optional[Location]
    demand: float
    store_name: Optional[str] = None
    address: Optional[str] = None
    priority: bool = False


@dataclass(slots=True)
class VehicleAssignment:
    vehicle_id: str
    capacity: float
    driver_id: Optional[str] = None
