from __future__ import annotations

import os

from services.api.app.services.catalog_base import CatalogAdapter
from services.api.app.services.catalog_mock import MockCatalogAdapter


def get_catalog_adapter() -> CatalogAdapter:
    """Select the menu catalog based on env vars.

    Defaults to the built-in mock menu so tests and local dev are deterministic.
    """

    mode = os.getenv("POS_CATALOG_ADAPTER", "mock").strip().lower()

    if mode == "mock":
        return MockCatalogAdapter()

    if mode == "db":
        from services.api.app.services.catalog_db import DatabaseCatalogAdapter

        return DatabaseCatalogAdapter()

    raise ValueError(f"Unknown POS_CATALOG_ADAPTER={mode!r}. Expected mock or db.")
