from __future__ import annotations

from pydantic import BaseModel, Field
from services.api.app.models.order import LineItemOut


class DraftCreateRequest(BaseModel):
    table_number: int = 1


class DraftTableRequest(BaseModel):
    table_number: int


class DraftAddItemRequest(BaseModel):
    catalog_id: str = Field(..., min_length=1)


class DraftQuantityRequest(BaseModel):
    quantity: int


class DraftOut(BaseModel):
    draft_id: str
    table_number: int
    items: list[LineItemOut] = Field(default_factory=list)
    total: int
