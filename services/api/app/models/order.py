from __future__ import annotations

from pydantic import BaseModel, Field
from packages.shared.schemas.status_v1 import OrderStatusV1


class OrderItemInput(BaseModel):
    catalog_id: str
    quantity: int = Field(default=1, ge=1)


class OrderCreateRequest(BaseModel):
    table_number: int = 1
    # Emptiness is a core validation concern and surfaces as kind=EmptyOrder.
    items: list[OrderItemInput] = Field(default_factory=list)


class LineItemOut(BaseModel):
    catalog_id: str
    name: str
    unit_price: int
    quantity: int
    line_total: int


class OrderOut(BaseModel):
    id: str
    order_number: str
    table_number: int
    items: list[LineItemOut]
    total: int
    status: OrderStatusV1
    created_at: str


class OrderStatusUpdateRequest(BaseModel):
    # Plain string so values outside the enum reach the core and fail as UnknownStatus.
    status: str
