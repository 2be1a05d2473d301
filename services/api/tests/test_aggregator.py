from __future__ import annotations

import pytest
from services.api.app.domain.aggregator import (
    add_item,
    add_to_draft,
    compute_total,
    filter_selectable,
    set_draft_quantity,
    set_quantity,
    set_table,
    submit_draft,
)
from services.api.app.domain.errors import (
    EmptyOrderError,
    InvalidTableError,
    ValidationError,
    ValidationErrorKind,
)
from services.api.app.domain.types import CatalogItem, DraftOrder, LineItem

NASI_GORENG = CatalogItem(id="m1", name="Nasi Goreng", price=25000)
NASI_UDUK = CatalogItem(id="m2", name="Nasi Uduk", price=20000, available=False)
ES_TEH = CatalogItem(id="m3", name="Es Teh", price=15000)
MIE = CatalogItem(id="m4", name="Mie Ayam", price=18000)


def test_add_item_appends_snapshot_with_quantity_one() -> None:
    items = add_item((), NASI_GORENG)

    assert items == (LineItem(catalog_id="m1", name="Nasi Goreng", unit_price=25000, quantity=1),)


def test_add_same_item_twice_merges_into_one_line() -> None:
    items = add_item(add_item((), NASI_GORENG), NASI_GORENG)

    assert len(items) == 1
    assert items[0].quantity == 2


def test_add_item_keeps_first_snapshot_of_name_and_price() -> None:
    items = add_item((), NASI_GORENG)
    repriced = CatalogItem(id="m1", name="Nasi Goreng Spesial", price=99000)

    items = add_item(items, repriced)

    assert items[0].name == "Nasi Goreng"
    assert items[0].unit_price == 25000
    assert items[0].quantity == 2


def test_add_item_preserves_order_of_lines() -> None:
    items = add_item(add_item(add_item((), NASI_GORENG), ES_TEH), NASI_GORENG)

    assert [i.catalog_id for i in items] == ["m1", "m3"]


def test_add_item_does_not_mutate_input() -> None:
    original = [LineItem(catalog_id="m1", name="Nasi Goreng", unit_price=25000, quantity=1)]
    snapshot = list(original)

    add_item(original, NASI_GORENG)
    add_item(original, ES_TEH)

    assert original == snapshot


def test_set_quantity_replaces_quantity() -> None:
    items = add_item(add_item((), NASI_GORENG), ES_TEH)

    items = set_quantity(items, "m3", 4)

    assert [(i.catalog_id, i.quantity) for i in items] == [("m1", 1), ("m3", 4)]


def test_set_quantity_is_idempotent() -> None:
    items = add_item(add_item((), NASI_GORENG), ES_TEH)

    once = set_quantity(items, "m1", 3)
    twice = set_quantity(once, "m1", 3)

    assert once == twice


@pytest.mark.parametrize("quantity", [0, -1, -10])
def test_set_quantity_non_positive_removes_only_that_line(quantity: int) -> None:
    items = add_item(add_item(add_item((), NASI_GORENG), ES_TEH), MIE)

    items = set_quantity(items, "m3", quantity)

    assert [i.catalog_id for i in items] == ["m1", "m4"]


@pytest.mark.parametrize("quantity", [0, 5])
def test_set_quantity_on_absent_item_is_noop(quantity: int) -> None:
    items = add_item((), NASI_GORENG)

    assert set_quantity(items, "missing", quantity) == items


def test_compute_total_matches_price_times_quantity() -> None:
    items = (
        LineItem(catalog_id="a", name="A", unit_price=25000, quantity=2),
        LineItem(catalog_id="b", name="B", unit_price=15000, quantity=1),
    )

    assert compute_total(items) == 65000
    assert compute_total(()) == 0


def test_compute_total_stays_exact_on_repeated_recomputation() -> None:
    items = (LineItem(catalog_id="a", name="A", unit_price=10, quantity=3),)
    totals = {compute_total(items) for _ in range(1000)}

    assert totals == {30}
    assert isinstance(compute_total(items), int)


def test_filter_selectable_is_case_insensitive_and_skips_unavailable() -> None:
    catalog = [NASI_GORENG, NASI_UDUK, ES_TEH, MIE]

    assert filter_selectable(catalog, "nas") == [NASI_GORENG]
    assert filter_selectable(catalog, "AYAM") == [MIE]
    assert filter_selectable(catalog, "rendang") == []


def test_filter_selectable_empty_term_returns_all_available_in_catalog_order() -> None:
    catalog = [MIE, NASI_UDUK, NASI_GORENG, ES_TEH]

    assert filter_selectable(catalog, "") == [MIE, NASI_GORENG, ES_TEH]


def test_draft_helpers_return_new_drafts() -> None:
    draft = DraftOrder()
    with_item = add_to_draft(draft, NASI_GORENG)
    doubled = set_draft_quantity(with_item, "m1", 2)
    moved = set_table(doubled, 7)

    assert draft.items == ()
    assert with_item.items[0].quantity == 1
    assert moved.table_number == 7
    assert moved.total == 50000


def test_submit_draft_returns_submission_with_total() -> None:
    draft = add_to_draft(add_to_draft(DraftOrder(table_number=3), NASI_GORENG), ES_TEH)

    submission = submit_draft(draft)

    assert submission.table_number == 3
    assert submission.total == 40000
    assert [i.catalog_id for i in submission.items] == ["m1", "m3"]


def test_submit_empty_draft_is_rejected() -> None:
    with pytest.raises(EmptyOrderError) as excinfo:
        submit_draft(DraftOrder(table_number=2))

    assert isinstance(excinfo.value, ValidationError)
    assert excinfo.value.kind is ValidationErrorKind.EMPTY_ORDER


@pytest.mark.parametrize("table_number", [0, -3])
def test_set_table_rejects_non_positive(table_number: int) -> None:
    with pytest.raises(InvalidTableError):
        set_table(DraftOrder(), table_number)
