"""Core value types for orders.

Everything here is immutable. Operations in the aggregator and lifecycle modules take a
value and return a new one instead of editing in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from services.api.app.domain.totals import compute_total


class OrderStatus(str, Enum):
    WAITING = "waiting"
    COOKING = "cooking"
    READY = "ready"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """A menu entry as supplied by the catalog. Prices are integer minor units."""

    id: str
    name: str
    price: int
    available: bool = True
    description: str = ""
    category: str = ""


@dataclass(frozen=True, slots=True)
class LineItem:
    # Name and price are a snapshot taken when the item was first added.
    catalog_id: str
    name: str
    unit_price: int
    quantity: int = 1

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True, slots=True)
class OrderIdentity:
    order_id: str
    order_number: str


@dataclass(frozen=True, slots=True)
class OrderSubmission:
    table_number: int
    items: tuple[LineItem, ...]
    total: int


@dataclass(frozen=True, slots=True)
class Order:
    id: str
    order_number: str
    table_number: int
    items: tuple[LineItem, ...]
    status: OrderStatus
    created_at: datetime

    @property
    def total(self) -> int:
        return compute_total(self.items)


@dataclass(frozen=True, slots=True)
class DraftOrder:
    """An order being composed at the counter, not yet submitted."""

    table_number: int = 1
    items: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return compute_total(self.items)
