from __future__ import annotations

from fastapi import APIRouter, HTTPException
from services.api.app.domain.aggregator import (
    add_to_draft,
    set_draft_quantity,
    set_table,
    submit_draft,
)
from services.api.app.domain.types import DraftOrder
from services.api.app.models.draft import (
    DraftAddItemRequest,
    DraftCreateRequest,
    DraftOut,
    DraftQuantityRequest,
    DraftTableRequest,
)
from services.api.app.models.order import OrderOut
from services.api.app.routers.order import (
    line_items_to_out,
    order_to_out,
    place_order,
    raise_catalog_http_error,
    resolve_catalog,
    resolve_order_store,
)
from services.api.app.services.catalog_base import require_available
from services.api.app.services.store import DraftRecord, draft_store

router = APIRouter()


def _draft_to_out(record: DraftRecord) -> DraftOut:
    return DraftOut(
        draft_id=record.draft_id,
        table_number=record.draft.table_number,
        items=line_items_to_out(record.draft.items),
        total=record.draft.total,
    )


def _load(draft_id: str) -> DraftRecord:
    record = draft_store.get_draft(draft_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Draft not found")
    return record


@router.post("/v1/drafts", response_model=DraftOut, status_code=201)
def open_draft(payload: DraftCreateRequest) -> DraftOut:
    draft = set_table(DraftOrder(), payload.table_number)
    return _draft_to_out(draft_store.create_draft(draft))


@router.get("/v1/drafts/{draft_id}", response_model=DraftOut)
def get_draft(draft_id: str) -> DraftOut:
    return _draft_to_out(_load(draft_id))


@router.put("/v1/drafts/{draft_id}/table", response_model=DraftOut)
def change_table(draft_id: str, payload: DraftTableRequest) -> DraftOut:
    record = _load(draft_id)
    draft = set_table(record.draft, payload.table_number)
    return _draft_to_out(draft_store.save_draft(draft_id, draft))


@router.post("/v1/drafts/{draft_id}/items", response_model=DraftOut)
def add_draft_item(draft_id: str, payload: DraftAddItemRequest) -> DraftOut:
    record = _load(draft_id)
    catalog = resolve_catalog()

    try:
        catalog_item = require_available(catalog, payload.catalog_id)
    except Exception as e:
        raise_catalog_http_error(e)

    draft = add_to_draft(record.draft, catalog_item)
    return _draft_to_out(draft_store.save_draft(draft_id, draft))


@router.put("/v1/drafts/{draft_id}/items/{catalog_id}", response_model=DraftOut)
def update_draft_item(draft_id: str, catalog_id: str, payload: DraftQuantityRequest) -> DraftOut:
    record = _load(draft_id)
    draft = set_draft_quantity(record.draft, catalog_id, payload.quantity)
    return _draft_to_out(draft_store.save_draft(draft_id, draft))


@router.post("/v1/drafts/{draft_id}/submit", response_model=OrderOut, status_code=201)
def submit_draft_order(draft_id: str) -> OrderOut:
    record = _load(draft_id)
    store = resolve_order_store()

    submission = submit_draft(record.draft)
    order = place_order(store, submission.table_number, submission.items)

    draft_store.discard_draft(draft_id)
    return order_to_out(order)
