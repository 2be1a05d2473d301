"""Order creation and status transitions.

The declared kitchen flow is waiting -> cooking -> ready -> done, but the transition rule
is permissive: any of the four statuses may be selected from any other. Re-selecting the
current status is a no-op rather than an error.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime, timezone
from typing import Protocol

from services.api.app.domain.aggregator import validate_items, validate_table_number
from services.api.app.domain.errors import UnknownStatusError
from services.api.app.domain.types import LineItem, Order, OrderIdentity, OrderStatus

logger = logging.getLogger(__name__)

STATUS_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.WAITING,
    OrderStatus.COOKING,
    OrderStatus.READY,
    OrderStatus.DONE,
)

INITIAL_STATUS = OrderStatus.WAITING


class IdentityIssuer(Protocol):
    def issue_identity(self) -> OrderIdentity: ...


class StatusWriter(Protocol):
    async def write_status(self, order_id: str, status: OrderStatus) -> None: ...


def parse_status(value: OrderStatus | str) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value

    try:
        return OrderStatus(value)
    except ValueError as e:
        raise UnknownStatusError(value) from e


def is_terminal(status: OrderStatus) -> bool:
    return status is OrderStatus.DONE


def create_order(
    table_number: int,
    items: Sequence[LineItem],
    issuer: IdentityIssuer,
    *,
    now: datetime | None = None,
) -> Order:
    """Build a new order in the initial status.

    Validation runs before an identity is requested so rejected drafts never consume an
    order number.
    """

    validate_items(items)
    validate_table_number(table_number)

    identity = issuer.issue_identity()
    order = Order(
        id=identity.order_id,
        order_number=identity.order_number,
        table_number=table_number,
        items=tuple(items),
        status=INITIAL_STATUS,
        created_at=now or datetime.now(timezone.utc),
    )
    logger.info(
        "Created order %s for table %d (%d lines, total=%d)",
        order.order_number,
        order.table_number,
        len(order.items),
        order.total,
    )
    return order


def transition(order: Order, new_status: OrderStatus | str) -> Order:
    status = parse_status(new_status)
    if status is order.status:
        return order

    return replace(order, status=status)


async def commit_transition(
    order: Order, new_status: OrderStatus | str, writer: StatusWriter
) -> Order:
    """Persist a status change and return the updated order once the write succeeds.

    The caller keeps ``order`` as the known state until this returns. Writer errors are
    propagated untouched; calling again with the same status is safe.
    """

    updated = transition(order, new_status)
    if updated is order:
        logger.debug("Order %s already %s", order.order_number, order.status.value)
        return order

    await writer.write_status(order.id, updated.status)
    logger.info(
        "Order %s status %s -> %s",
        order.order_number,
        order.status.value,
        updated.status.value,
    )
    return updated
