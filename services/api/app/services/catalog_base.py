from __future__ import annotations

from typing import Protocol

from services.api.app.domain.types import CatalogItem


class CatalogError(Exception):
    """Base class for catalog adapter errors."""


class CatalogItemNotFoundError(CatalogError):
    def __init__(self, catalog_id: str) -> None:
        super().__init__(f"Menu item not found: {catalog_id}")
        self.catalog_id = catalog_id


class CatalogItemUnavailableError(CatalogError):
    def __init__(self, item: CatalogItem) -> None:
        super().__init__(f"Menu item is not available: {item.name}")
        self.catalog_id = item.id


class CatalogAdapter(Protocol):
    """Read-only source of menu items."""

    source: str

    def list_items(self) -> list[CatalogItem]: ...

    def get_item(self, catalog_id: str) -> CatalogItem | None: ...


def require_available(catalog: CatalogAdapter, catalog_id: str) -> CatalogItem:
    item = catalog.get_item(catalog_id)
    if item is None:
        raise CatalogItemNotFoundError(catalog_id)
    if not item.available:
        raise CatalogItemUnavailableError(item)
    return item
