from __future__ import annotations

from typing import Protocol

from packages.shared.schemas.events import EventV1
from services.api.app.domain.types import Order, OrderIdentity, OrderStatus


class OrderStoreError(Exception):
    """Base class for order persistence errors."""


class OrderNotFoundError(OrderStoreError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


class StatusWriteRejectedError(OrderStoreError):
    def __init__(self, order_id: str, status: OrderStatus, reason: str) -> None:
        super().__init__(f"Status update to {status.value!r} rejected for {order_id}: {reason}")
        self.order_id = order_id
        self.status = status
        self.reason = reason


def format_order_number(sequence: int) -> str:
    return f"ORD-{sequence:04d}"


class OrderStore(Protocol):
    """Order submission, identity issuing and status persistence in one place."""

    backend: str

    def issue_identity(self) -> OrderIdentity: ...

    def save_order(self, order: Order) -> None: ...

    def get_order(self, order_id: str) -> Order | None: ...

    def list_orders(self, status: OrderStatus | None = None) -> list[Order]: ...

    def list_events(self, order_id: str) -> list[EventV1]: ...

    async def write_status(self, order_id: str, status: OrderStatus) -> None: ...
