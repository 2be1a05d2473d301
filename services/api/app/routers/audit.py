from __future__ import annotations

from fastapi import APIRouter, HTTPException
from packages.shared.schemas.events import EventV1
from services.api.app.routers.order import resolve_order_store

router = APIRouter()


@router.get("/v1/orders/{order_id}/events", response_model=list[EventV1])
def list_order_events(order_id: str) -> list[EventV1]:
    store = resolve_order_store()
    if store.get_order(order_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")

    return store.list_events(order_id)
