from __future__ import annotations

import os

from services.api.app.services.order_store_base import OrderStore
from services.api.app.services.store import order_store


def get_order_store() -> OrderStore:
    """Select where submitted orders live.

    ``memory`` (default) keeps one process-wide store; ``db`` uses DATABASE_URL.
    """

    backend = os.getenv("POS_ORDER_STORE", "memory").strip().lower()

    if backend == "memory":
        return order_store

    if backend == "db":
        from services.api.app.services.order_store_db import DatabaseOrderStore

        return DatabaseOrderStore()

    raise ValueError(f"Unknown POS_ORDER_STORE={backend!r}. Expected memory or db.")
