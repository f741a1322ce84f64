"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import DeliveryNode, Location, RoutableOrder, VehicleAssignment


class LocationModel(BaseModel):
    latitude: float
    longitude: float

    def to_domain(self) -> Location:
        return Location(latitude=self.latitude, longitude=self.longitude)


class DeliveryNodeModel(BaseModel):
    id: str
    location: LocationModel
    demand: float = Field(..., ge=0)


class BuildRoutesRequest(BaseModel):
    nodes: List[DeliveryNodeModel]
    depot: Optional[LocationModel] = Field(default=None, description="Defaults to the configured depot.")
    vehicle_capacity: float = Field(..., ge=0)

    def domain_nodes(self) -> list[DeliveryNode]:
        return [DeliveryNode(id=node.id, location=node.location.to_domain(), demand=node.demand) for node in self.nodes]


class BuildRoutesResponse(BaseModel):
    trips: List[List[str]]


class RoutableOrderModel(BaseModel):
    order_id: str
    store_id: str
    location: Optional[LocationModel] = None
    demand: float = Field(..., ge=0)
    store_name: Optional[str] = None
    address: Optional[str] = None
    priority: bool = False

    def to_domain(self) -> RoutableOrder:
        return RoutableOrder(
            order_id=self.order_id,
            store_id=self.store_id,
            location=self.location.to_domain() if self.location else None,
            demand=self.demand,
            store_name=self.store_name,
            address=self.address,
            priority=self.priority,
        )


class VehicleAssignmentModel(BaseModel):
    vehicle_id: str
    capacity: float = Field(..., gt=0)
    driver_id: Optional[str] = None

    def to_domain(self) -> VehicleAssignment:
        return VehicleAssignment(vehicle_id=self.vehicle_id, capacity=self.capacity, driver_id=self.driver_id)


class DailyPlanRequest(BaseModel):
    delivery_date: Optional[str] = None
    depot: Optional[LocationModel] = None
    orders: List[RoutableOrderModel]
    vehicles: List[VehicleAssignmentModel] = Field(..., min_length=1)


class RouteStopModel(BaseModel):
    order_id: str
    store_id: str
    sequence: int
    location: LocationModel
    distance_from_prev_km: float
    store_name: Optional[str] = None
    address: Optional[str] = None


class RoutePlanModel(BaseModel):
    route_id: str
    vehicle_id: str
    driver_id: Optional[str] = None
    date: Optional[str] = None
    total_load: float
    total_distance_km: float
    store_ids: List[str]
    stops: List[RouteStopModel]


class DailyPlanResponse(BaseModel):
    metadata: dict
    plans: List[RoutePlanModel]
    unrouted_order_ids: List[str]
