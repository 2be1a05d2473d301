from __future__ import annotations

from services.api.app.db.database import db_session
from services.api.app.db.models import MenuItem
from services.api.app.domain.types import CatalogItem
from sqlalchemy import select


def _to_catalog_item(row: MenuItem) -> CatalogItem:
    return CatalogItem(
        id=row.id,
        name=row.name,
        price=row.price,
        available=row.available,
        description=row.description or "",
        category=row.category or "",
    )


class DatabaseCatalogAdapter:
    """Catalog backed by the ``menu_items`` table. See scripts/seed_data.py."""

    source = "DB"

    def list_items(self) -> list[CatalogItem]:
        db = db_session()
        try:
            rows = db.scalars(select(MenuItem).order_by(MenuItem.position, MenuItem.id)).all()
            return [_to_catalog_item(row) for row in rows]
        finally:
            db.close()

    def get_item(self, catalog_id: str) -> CatalogItem | None:
        db = db_session()
        try:
            row = db.get(MenuItem, catalog_id)
            return _to_catalog_item(row) if row is not None else None
        finally:
            db.close()
