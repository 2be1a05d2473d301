from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from services.api.app.main import app
from services.api.app.services.store import InMemoryOrderStore


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    import services.api.app.routers.order as order_router

    monkeypatch.delenv("POS_CATALOG_ADAPTER", raising=False)
    store = InMemoryOrderStore()
    monkeypatch.setattr(order_router, "get_order_store", lambda: store)
    return TestClient(app)


def _open(client: TestClient, table_number: int = 4) -> str:
    response = client.post("/v1/drafts", json={"table_number": table_number})
    assert response.status_code == 201
    return response.json()["draft_id"]


def test_open_draft_defaults_to_table_one(client: TestClient) -> None:
    response = client.post("/v1/drafts", json={})
    assert response.status_code == 201

    data = response.json()
    assert data["table_number"] == 1
    assert data["items"] == []
    assert data["total"] == 0


def test_adding_same_item_twice_merges(client: TestClient) -> None:
    draft_id = _open(client)

    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-1"})
    response = client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-1"})
    assert response.status_code == 200

    data = response.json()
    assert len(data["items"]) == 1
    assert data["items"][0]["quantity"] == 2
    assert data["items"][0]["line_total"] == 50000
    assert data["total"] == 50000


def test_quantity_zero_removes_line(client: TestClient) -> None:
    draft_id = _open(client)
    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-1"})
    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-5"})

    response = client.put(f"/v1/drafts/{draft_id}/items/menu-1", json={"quantity": 0})
    assert response.status_code == 200

    data = response.json()
    assert [i["catalog_id"] for i in data["items"]] == ["menu-5"]
    assert data["total"] == 5000


def test_quantity_update_for_absent_item_is_noop(client: TestClient) -> None:
    draft_id = _open(client)
    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-1"})

    response = client.put(f"/v1/drafts/{draft_id}/items/menu-6", json={"quantity": 3})
    assert response.status_code == 200
    assert [i["catalog_id"] for i in response.json()["items"]] == ["menu-1"]


def test_add_unknown_item_is_404(client: TestClient) -> None:
    draft_id = _open(client)

    response = client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "nope"})
    assert response.status_code == 404


def test_add_unavailable_item_is_409(client: TestClient) -> None:
    draft_id = _open(client)

    response = client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-2"})
    assert response.status_code == 409
    assert "Nasi Uduk" in response.json()["detail"]


def test_change_table_rejects_zero(client: TestClient) -> None:
    draft_id = _open(client)

    response = client.put(f"/v1/drafts/{draft_id}/table", json={"table_number": 0})
    assert response.status_code == 422
    assert response.json()["kind"] == "InvalidTable"


def test_submit_empty_draft_is_rejected(client: TestClient) -> None:
    draft_id = _open(client)

    response = client.post(f"/v1/drafts/{draft_id}/submit")
    assert response.status_code == 422
    assert response.json()["kind"] == "EmptyOrder"

    # Draft survives so the user can fix it.
    assert client.get(f"/v1/drafts/{draft_id}").status_code == 200


def test_submit_creates_waiting_order_and_discards_draft(client: TestClient) -> None:
    draft_id = _open(client, table_number=3)
    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-1"})
    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-1"})
    client.post(f"/v1/drafts/{draft_id}/items", json={"catalog_id": "menu-5"})

    response = client.post(f"/v1/drafts/{draft_id}/submit")
    assert response.status_code == 201

    order = response.json()
    assert order["status"] == "waiting"
    assert order["table_number"] == 3
    assert order["order_number"] == "ORD-0001"
    assert order["total"] == 55000

    assert client.get(f"/v1/drafts/{draft_id}").status_code == 404
    assert client.get(f"/v1/orders/{order['id']}").json()["total"] == 55000


def test_missing_draft_is_404(client: TestClient) -> None:
    response = client.get("/v1/drafts/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Draft not found"
