"""Capacity request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Order, OrderItem, Product


class ProductModel(BaseModel):
    name: Optional[str] = None
    unit_capacity_factor: Optional[float] = None
    heterogeneous_conversion_factor: Optional[float] = None


class OrderItemModel(BaseModel):
    product_id: str
    quantity: float = Field(..., ge=0)
    product: ProductModel

    def to_domain(self) -> OrderItem:
        return OrderItem(
            product_id=self.product_id,
            quantity=self.quantity,
            product=Product(
                product_id=self.product_id,
                name=self.product.name,
                unit_capacity_factor=self.product.unit_capacity_factor,
                heterogeneous_conversion_factor=self.product.heterogeneous_conversion_factor,
            ),
        )


class OrderModel(BaseModel):
    order_id: str
    items: List[OrderItemModel] = Field(default_factory=list)

    def to_domain(self) -> Order:
        return Order(order_id=self.order_id, items=[item.to_domain() for item in self.items])


class OrderCapacityRequest(BaseModel):
    items: List[OrderItemModel] = Field(default_factory=list)
    vehicle_capacity: float = Field(..., ge=0)


class AggregateCapacityRequest(BaseModel):
    orders: List[OrderModel]
    vehicle_capacity: float = Field(..., ge=0)


class CapacityDetailModel(BaseModel):
    product_id: str
    product_name: Optional[str] = None
    quantity: float
    conversion_rate: float
    capacity_needed: float
    is_homogeneous: bool


class CapacityResponse(BaseModel):
    total_capacity_used: float
    remaining_capacity: float
    is_homogeneous: bool
    can_fit: bool
    utilization_percentage: float
    capacity_details: List[CapacityDetailModel]


class AggregateCapacityResponse(CapacityResponse):
    order_count: int
    product_types: int
    recommendation: str


class ConversionFactorsResponse(BaseModel):
    unit_capacity_factor: float
    heterogeneous_conversion_factor: float
    explanation: str
    size_in_ml: Optional[float] = None
    size_formatted: Optional[str] = None
    is_standard_size: bool = False


class LoadProductModel(BaseModel):
    product_type: str
    quantity: int = Field(..., ge=0)


class VehicleLoadRequest(BaseModel):
    products: List[LoadProductModel] = Field(..., min_length=1)
    vehicle_type: Optional[str] = Field(default=None, description="Defaults to the configured vehicle type.")


class LoadLineModel(BaseModel):
    product_type: str
    requested_quantity: int
    approved_quantity: int
    conversion_rate: float
    load_equivalent: float
    is_reduced: bool


class VehicleLoadResponse(BaseModel):
    vehicle_type: str
    is_homogeneous: bool
    max_capacity: float
    total_load_equivalent: float
    remaining_capacity: float
    utilization_percentage: float
    can_fit: bool
    message: str
    products: List[LoadLineModel]


class VehicleInfoResponse(BaseModel):
    vehicle_type: str
    max_capacity_equivalent: float
    homogeneous_capacity: dict[str, int]
    conversion_rates: dict[str, float]
