"""Line-item aggregation for draft orders.

All functions are pure: they never mutate their inputs and always return a new tuple
(or a new DraftOrder). A line item list holds at most one entry per catalog id, and
every entry has a quantity of at least one.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from services.api.app.domain.errors import (
    EmptyOrderError,
    InvalidLineItemsError,
    InvalidTableError,
)
from services.api.app.domain.totals import compute_total
from services.api.app.domain.types import (
    CatalogItem,
    DraftOrder,
    LineItem,
    OrderSubmission,
)

__all__ = [
    "add_item",
    "add_to_draft",
    "compute_total",
    "filter_selectable",
    "set_draft_quantity",
    "set_quantity",
    "set_table",
    "submit_draft",
    "validate_items",
    "validate_table_number",
]


def add_item(current_items: Sequence[LineItem], catalog_item: CatalogItem) -> tuple[LineItem, ...]:
    if any(item.catalog_id == catalog_item.id for item in current_items):
        return tuple(
            replace(item, quantity=item.quantity + 1)
            if item.catalog_id == catalog_item.id
            else item
            for item in current_items
        )

    return (
        *current_items,
        LineItem(
            catalog_id=catalog_item.id,
            name=catalog_item.name,
            unit_price=catalog_item.price,
            quantity=1,
        ),
    )


def set_quantity(
    current_items: Sequence[LineItem], catalog_id: str, new_quantity: int
) -> tuple[LineItem, ...]:
    """Replace the quantity for ``catalog_id``; zero or less removes the line.

    A catalog id that is not in the list leaves it unchanged.
    """

    if new_quantity <= 0:
        return tuple(item for item in current_items if item.catalog_id != catalog_id)

    return tuple(
        replace(item, quantity=new_quantity) if item.catalog_id == catalog_id else item
        for item in current_items
    )


def filter_selectable(catalog: Iterable[CatalogItem], search_term: str = "") -> list[CatalogItem]:
    needle = search_term.lower()
    return [item for item in catalog if item.available and needle in item.name.lower()]


def validate_table_number(table_number: int) -> None:
    # bool is an int subclass; True is not a table.
    if isinstance(table_number, bool) or not isinstance(table_number, int) or table_number < 1:
        raise InvalidTableError(table_number)


def validate_items(items: Sequence[LineItem]) -> None:
    """Reject empty lists, non-positive quantities and repeated catalog ids."""

    if not items:
        raise EmptyOrderError()

    seen: set[str] = set()
    for item in items:
        if item.quantity < 1:
            raise InvalidLineItemsError(
                f"quantity for {item.catalog_id!r} must be at least 1, got {item.quantity}"
            )
        if item.catalog_id in seen:
            raise InvalidLineItemsError(f"catalog id {item.catalog_id!r} appears more than once")
        seen.add(item.catalog_id)


def set_table(draft: DraftOrder, table_number: int) -> DraftOrder:
    validate_table_number(table_number)
    return replace(draft, table_number=table_number)


def submit_draft(draft: DraftOrder) -> OrderSubmission:
    """Freeze a draft into the payload handed to the order submission boundary."""

    validate_items(draft.items)
    validate_table_number(draft.table_number)
    return OrderSubmission(
        table_number=draft.table_number,
        items=tuple(draft.items),
        total=compute_total(draft.items),
    )


def add_to_draft(draft: DraftOrder, catalog_item: CatalogItem) -> DraftOrder:
    return replace(draft, items=add_item(draft.items, catalog_item))


def set_draft_quantity(draft: DraftOrder, catalog_id: str, new_quantity: int) -> DraftOrder:
    return replace(draft, items=set_quantity(draft.items, catalog_id, new_quantity))
