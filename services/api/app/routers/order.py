from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from fastapi import APIRouter, HTTPException
from services.api.app.domain.aggregator import add_item, set_quantity
from services.api.app.domain.errors import ValidationError
from services.api.app.domain.lifecycle import commit_transition, create_order, parse_status
from services.api.app.domain.types import LineItem, Order
from services.api.app.models.order import (
    LineItemOut,
    OrderCreateRequest,
    OrderItemInput,
    OrderOut,
    OrderStatusUpdateRequest,
)
from services.api.app.services.catalog_base import (
    CatalogAdapter,
    CatalogError,
    CatalogItemNotFoundError,
    CatalogItemUnavailableError,
    require_available,
)
from services.api.app.services.catalog_factory import get_catalog_adapter
from services.api.app.services.order_store_base import (
    OrderNotFoundError,
    OrderStore,
    OrderStoreError,
    StatusWriteRejectedError,
)
from services.api.app.services.order_store_factory import get_order_store

logger = logging.getLogger(__name__)

router = APIRouter()


def raise_catalog_http_error(e: Exception) -> None:
    if isinstance(e, CatalogItemNotFoundError):
        raise HTTPException(status_code=404, detail=str(e)) from e

    if isinstance(e, CatalogItemUnavailableError):
        raise HTTPException(status_code=409, detail=str(e)) from e

    if isinstance(e, CatalogError):
        raise HTTPException(status_code=502, detail=str(e)) from e

    raise HTTPException(status_code=500, detail="Internal Server Error") from e


def raise_store_http_error(e: Exception) -> None:
    if isinstance(e, OrderNotFoundError):
        raise HTTPException(status_code=404, detail="Order not found") from e

    if isinstance(e, StatusWriteRejectedError):
        raise HTTPException(status_code=409, detail=str(e)) from e

    if isinstance(e, OrderStoreError):
        raise HTTPException(status_code=502, detail=str(e)) from e

    raise HTTPException(status_code=500, detail="Internal Server Error") from e


def resolve_catalog() -> CatalogAdapter:
    try:
        return get_catalog_adapter()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


def resolve_order_store() -> OrderStore:
    try:
        return get_order_store()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e


def line_items_to_out(items: Sequence[LineItem]) -> list[LineItemOut]:
    return [
        LineItemOut(
            catalog_id=item.catalog_id,
            name=item.name,
            unit_price=item.unit_price,
            quantity=item.quantity,
            line_total=item.line_total,
        )
        for item in items
    ]


def order_to_out(order: Order) -> OrderOut:
    return OrderOut(
        id=order.id,
        order_number=order.order_number,
        table_number=order.table_number,
        items=line_items_to_out(order.items),
        total=order.total,
        status=order.status.value,
        created_at=order.created_at.isoformat(),
    )


def place_order(store: OrderStore, table_number: int, items: Sequence[LineItem]) -> Order:
    """Create an order through the lifecycle and hand it to the store."""

    order = create_order(table_number, items, store)
    try:
        store.save_order(order)
    except Exception as e:
        logger.warning("Saving order %s failed: %s", order.order_number, e)
        raise_store_http_error(e)
    return order


def _build_line_items(
    catalog: CatalogAdapter, entries: Sequence[OrderItemInput]
) -> tuple[LineItem, ...]:
    # Repeated catalog ids collapse into one line with the summed quantity.
    items: tuple[LineItem, ...] = ()
    for entry in entries:
        try:
            catalog_item = require_available(catalog, entry.catalog_id)
        except Exception as e:
            raise_catalog_http_error(e)

        items = add_item(items, catalog_item)
        added = next(item for item in items if item.catalog_id == catalog_item.id)
        items = set_quantity(items, catalog_item.id, added.quantity - 1 + entry.quantity)
    return items


@router.post("/v1/orders", response_model=OrderOut, status_code=201)
def submit_order(payload: OrderCreateRequest) -> OrderOut:
    catalog = resolve_catalog()
    store = resolve_order_store()

    items = _build_line_items(catalog, payload.items)
    return order_to_out(place_order(store, payload.table_number, items))


@router.get("/v1/orders", response_model=list[OrderOut])
def list_orders(status: str | None = None) -> list[OrderOut]:
    store = resolve_order_store()
    wanted = parse_status(status) if status else None
    return [order_to_out(order) for order in store.list_orders(wanted)]


@router.get("/v1/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: str) -> OrderOut:
    store = resolve_order_store()
    order = store.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order_to_out(order)


@router.patch("/v1/orders/{order_id}/status", response_model=OrderOut)
async def update_order_status(order_id: str, payload: OrderStatusUpdateRequest) -> OrderOut:
    store = resolve_order_store()
    # Store reads may block on a database session.
    order = await asyncio.to_thread(store.get_order, order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")

    try:
        updated = await commit_transition(order, payload.status, store)
    except ValidationError:
        raise
    except Exception as e:
        logger.warning("Status write for order %s failed: %s", order.order_number, e)
        raise_store_http_error(e)

    return order_to_out(updated)
