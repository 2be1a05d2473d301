from __future__ import annotations

from fastapi import APIRouter
from packages.shared.schemas.status_v1 import STATUS_OPTIONS_V1, StatusOptionV1
from services.api.app.domain.aggregator import filter_selectable
from services.api.app.models.menu import MenuItemOut
from services.api.app.routers.order import resolve_catalog

router = APIRouter()


@router.get("/v1/menu", response_model=list[MenuItemOut])
def list_menu(search: str = "") -> list[MenuItemOut]:
    """Menu items that can be added to an order right now."""

    catalog = resolve_catalog()
    return [
        MenuItemOut(
            id=item.id,
            name=item.name,
            price=item.price,
            available=item.available,
            description=item.description,
            category=item.category,
        )
        for item in filter_selectable(catalog.list_items(), search)
    ]


@router.get("/v1/order-statuses", response_model=list[StatusOptionV1])
def list_order_statuses() -> list[StatusOptionV1]:
    return STATUS_OPTIONS_V1
