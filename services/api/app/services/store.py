from __future__ import annotations

import asyncio
import itertools
import os
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from uuid import uuid4

from packages.shared.schemas.events import EntityTypeV1, EventTypeV1, EventV1
from services.api.app.domain.types import DraftOrder, Order, OrderIdentity, OrderStatus
from services.api.app.services.order_store_base import OrderNotFoundError, format_order_number


def status_delay_seconds() -> float:
    raw = os.getenv("POS_STATUS_DELAY_MS", "0").strip()
    try:
        return max(0, int(raw)) / 1000
    except ValueError as e:
        raise ValueError(f"POS_STATUS_DELAY_MS must be an integer, got {raw!r}") from e


@dataclass
class DraftRecord:
    draft_id: str
    draft: DraftOrder


class InMemoryDraftStore:
    def __init__(self) -> None:
        self._drafts: dict[str, DraftRecord] = {}

    def create_draft(self, draft: DraftOrder) -> DraftRecord:
        record = DraftRecord(draft_id=uuid4().hex, draft=draft)
        self._drafts[record.draft_id] = record
        return record

    def get_draft(self, draft_id: str) -> DraftRecord | None:
        return self._drafts.get(draft_id)

    def save_draft(self, draft_id: str, draft: DraftOrder) -> DraftRecord:
        record = DraftRecord(draft_id=draft_id, draft=draft)
        self._drafts[draft_id] = record
        return record

    def discard_draft(self, draft_id: str) -> None:
        self._drafts.pop(draft_id, None)


class InMemoryOrderStore:
    backend = "MEMORY"

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._events: dict[str, list[EventV1]] = {}
        self._sequence = itertools.count(1)

    def issue_identity(self) -> OrderIdentity:
        return OrderIdentity(
            order_id=uuid4().hex,
            order_number=format_order_number(next(self._sequence)),
        )

    def save_order(self, order: Order) -> None:
        self._orders[order.id] = order
        self._log_event(
            order.id,
            EventTypeV1.ORDER_CREATED,
            {
                "order_number": order.order_number,
                "table_number": order.table_number,
                "total": order.total,
                "status": order.status.value,
            },
        )

    def get_order(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def list_orders(self, status: OrderStatus | None = None) -> list[Order]:
        orders = [o for o in self._orders.values() if status is None or o.status is status]
        return sorted(orders, key=lambda o: (o.created_at, o.order_number), reverse=True)

    def list_events(self, order_id: str) -> list[EventV1]:
        return list(self._events.get(order_id, []))

    async def write_status(self, order_id: str, status: OrderStatus) -> None:
        delay = status_delay_seconds()
        if delay:
            await asyncio.sleep(delay)

        current = self._orders.get(order_id)
        if current is None:
            raise OrderNotFoundError(order_id)

        self._orders[order_id] = replace(current, status=status)
        self._log_event(
            order_id,
            EventTypeV1.ORDER_STATUS_CHANGED,
            {"from": current.status.value, "to": status.value},
        )

    def _log_event(self, order_id: str, event_type: EventTypeV1, payload: dict) -> None:
        self._events.setdefault(order_id, []).append(
            EventV1(
                id=uuid4().hex,
                entity_type=EntityTypeV1.ORDER,
                entity_id=order_id,
                event_type=event_type,
                payload=payload,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
        )


draft_store = InMemoryDraftStore()
order_store = InMemoryOrderStore()
