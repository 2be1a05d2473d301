from __future__ import annotations

import argparse
import json
from pathlib import Path

from services.api.app.db.database import db_session
from services.api.app.db.init_db import init_db
from services.api.app.db.models import MenuItem
from services.api.app.domain.types import CatalogItem
from services.api.app.services.catalog_mock import DEFAULT_MENU


def _load_menu(path: Path | None) -> tuple[CatalogItem, ...]:
    if path is None:
        return DEFAULT_MENU

    raw = json.loads(path.read_text(encoding="utf-8"))
    return tuple(
        CatalogItem(
            id=str(entry["id"]),
            name=entry["name"],
            price=int(entry["price"]),
            available=bool(entry.get("available", True)),
            description=entry.get("description", ""),
            category=entry.get("category", ""),
        )
        for entry in raw
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the menu catalog table")
    parser.add_argument(
        "--menu-file",
        type=Path,
        default=None,
        help="JSON list of {id, name, price, available, description, category}",
    )
    parser.add_argument(
        "--update",
        action="store_true",
        help="Overwrite rows that already exist instead of skipping them",
    )
    args = parser.parse_args()

    init_db()
    menu = _load_menu(args.menu_file)

    db = db_session()
    try:
        added = 0
        for position, item in enumerate(menu):
            row = db.get(MenuItem, item.id)
            if row is None:
                db.add(
                    MenuItem(
                        id=item.id,
                        name=item.name,
                        price=item.price,
                        available=item.available,
                        description=item.description,
                        category=item.category,
                        position=position,
                    )
                )
                added += 1
            elif args.update:
                row.name = item.name
                row.price = item.price
                row.available = item.available
                row.description = item.description
                row.category = item.category
                row.position = position

        db.commit()
        print(f"Seeded menu: {added} new of {len(menu)} items")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    raise SystemExit(main())
