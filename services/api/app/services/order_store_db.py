from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

from packages.shared.schemas.events import EntityTypeV1, EventTypeV1, EventV1
from services.api.app.db.database import db_session, session_scope
from services.api.app.db.models import EventLog
from services.api.app.db.models import Order as OrderRow
from services.api.app.db.models import OrderLineItem as LineItemRow
from services.api.app.domain.types import LineItem, Order, OrderIdentity, OrderStatus
from services.api.app.services.order_store_base import (
    OrderNotFoundError,
    OrderStoreError,
    StatusWriteRejectedError,
    format_order_number,
)
from services.api.app.services.store import status_delay_seconds
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_order(row: OrderRow) -> Order:
    return Order(
        id=row.id,
        order_number=row.order_number,
        table_number=row.table_number,
        items=tuple(
            LineItem(
                catalog_id=li.catalog_id,
                name=li.name,
                unit_price=li.unit_price,
                quantity=li.quantity,
            )
            for li in row.line_items
        ),
        status=OrderStatus(row.status),
        created_at=_as_utc(row.created_at),
    )


def _log_event(
    db: Session,
    *,
    entity_id: str,
    event_type: EventTypeV1,
    event_payload: dict,
) -> None:
    db.add(
        EventLog(
            id=uuid4().hex,
            entity_type=EntityTypeV1.ORDER.value,
            entity_id=entity_id,
            event_type=event_type.value,
            event_payload_json=event_payload,
        )
    )


class DatabaseOrderStore:
    """Orders in the ``orders`` / ``order_line_items`` tables with an audit event log."""

    backend = "DB"

    def issue_identity(self) -> OrderIdentity:
        db = db_session()
        try:
            placed = db.scalar(select(func.count()).select_from(OrderRow)) or 0
        finally:
            db.close()

        return OrderIdentity(order_id=uuid4().hex, order_number=format_order_number(placed + 1))

    def save_order(self, order: Order) -> None:
        with session_scope() as db:
            db.add(
                OrderRow(
                    id=order.id,
                    order_number=order.order_number,
                    table_number=order.table_number,
                    status=order.status.value,
                    total=order.total,
                    created_at=order.created_at,
                    updated_at=order.created_at,
                    line_items=[
                        LineItemRow(
                            position=position,
                            catalog_id=item.catalog_id,
                            name=item.name,
                            unit_price=item.unit_price,
                            quantity=item.quantity,
                        )
                        for position, item in enumerate(order.items)
                    ],
                )
            )
            _log_event(
                db,
                entity_id=order.id,
                event_type=EventTypeV1.ORDER_CREATED,
                event_payload={
                    "order_number": order.order_number,
                    "table_number": order.table_number,
                    "total": order.total,
                    "status": order.status.value,
                },
            )

    def get_order(self, order_id: str) -> Order | None:
        db = db_session()
        try:
            row = db.get(OrderRow, order_id, options=[selectinload(OrderRow.line_items)])
            return _to_order(row) if row is not None else None
        finally:
            db.close()

    def list_orders(self, status: OrderStatus | None = None) -> list[Order]:
        stmt = (
            select(OrderRow)
            .options(selectinload(OrderRow.line_items))
            .order_by(OrderRow.created_at.desc(), OrderRow.order_number.desc())
        )
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)

        db = db_session()
        try:
            return [_to_order(row) for row in db.scalars(stmt).all()]
        finally:
            db.close()

    def list_events(self, order_id: str) -> list[EventV1]:
        db = db_session()
        try:
            rows = db.scalars(
                select(EventLog)
                .where(EventLog.entity_id == order_id)
                .order_by(EventLog.created_at)
            ).all()
            return [
                EventV1(
                    id=row.id,
                    entity_type=EntityTypeV1(row.entity_type),
                    entity_id=row.entity_id,
                    event_type=EventTypeV1(row.event_type),
                    payload=row.event_payload_json,
                    created_at=_as_utc(row.created_at).isoformat(),
                )
                for row in rows
            ]
        finally:
            db.close()

    async def write_status(self, order_id: str, status: OrderStatus) -> None:
        delay = status_delay_seconds()
        if delay:
            await asyncio.sleep(delay)

        await asyncio.to_thread(self._write_status_sync, order_id, status)

    def _write_status_sync(self, order_id: str, status: OrderStatus) -> None:
        try:
            self._apply_status(order_id, status)
        except IntegrityError as e:
            raise StatusWriteRejectedError(order_id, status, str(e.orig)) from e
        except SQLAlchemyError as e:
            raise OrderStoreError(f"Status write failed for {order_id}: {e}") from e

    def _apply_status(self, order_id: str, status: OrderStatus) -> None:
        with session_scope() as db:
            row = db.get(OrderRow, order_id)
            if row is None:
                raise OrderNotFoundError(order_id)

            previous = row.status
            row.status = status.value
            row.updated_at = datetime.now(timezone.utc)
            _log_event(
                db,
                entity_id=order_id,
                event_type=EventTypeV1.ORDER_STATUS_CHANGED,
                event_payload={"from": previous, "to": status.value},
            )
