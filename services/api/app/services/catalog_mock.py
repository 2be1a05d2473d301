from __future__ import annotations

from services.api.app.domain.types import CatalogItem

DEFAULT_MENU: tuple[CatalogItem, ...] = (
    CatalogItem(
        id="menu-1",
        name="Nasi Goreng",
        price=25000,
        description="Fried rice with egg and crackers",
        category="food",
    ),
    CatalogItem(
        id="menu-2",
        name="Nasi Uduk",
        price=20000,
        available=False,
        description="Coconut rice with fried chicken",
        category="food",
    ),
    CatalogItem(
        id="menu-3",
        name="Mie Ayam",
        price=18000,
        description="Chicken noodles",
        category="food",
    ),
    CatalogItem(
        id="menu-4",
        name="Sate Ayam",
        price=30000,
        description="Ten chicken skewers with peanut sauce",
        category="food",
    ),
    CatalogItem(
        id="menu-5",
        name="Es Teh Manis",
        price=5000,
        description="Sweet iced tea",
        category="drink",
    ),
    CatalogItem(
        id="menu-6",
        name="Es Jeruk",
        price=8000,
        description="Iced orange juice",
        category="drink",
    ),
)


class MockCatalogAdapter:
    source = "MOCK"

    def __init__(self, items: tuple[CatalogItem, ...] = DEFAULT_MENU) -> None:
        self._items = items

    def list_items(self) -> list[CatalogItem]:
        return list(self._items)

    def get_item(self, catalog_id: str) -> CatalogItem | None:
        return next((item for item in self._items if item.id == catalog_id), None)
