"""Inventory adjustment tests: arithmetic, stock upsert and all-or-nothing writes."""
import pytest
from fastapi.testclient import TestClient

from partsdesk.api.main import app
from partsdesk.models.catalog_models import InventoryAdjustment, InventoryAdjustmentItem, Part, Stock
from partsdesk.services.catalog import AdjustmentService


@pytest.fixture
def parts(db_session):
    stocked = Part(part_no="OF-1", description="Oil filter")
    fresh = Part(part_no="AF-2", description="Air filter")
    db_session.add_all([stocked, fresh])
    db_session.flush()
    db_session.add(Stock(part_id=stocked.id, quantity=10))
    db_session.commit()
    return stocked.id, fresh.id


def _stock(db_session, part_id):
    db_session.expire_all()
    row = db_session.query(Stock).filter(Stock.part_id == part_id).first()
    return None if row is None else row.quantity


def _payload(stocked_id, fresh_id):
    return {
        "adjustmentNo": "ADJ-1",
        "date": "2024-03-01T09:00:00Z",
        "notes": "Cycle count",
        "items": [
            {"partId": stocked_id, "partNo": "OF-1", "previousQuantity": 10, "adjustedQuantity": -3, "reason": "damaged"},
            {"partId": fresh_id, "partNo": "AF-2", "adjustedQuantity": 5},
            {"partNo": "LOOSE-1", "previousQuantity": 2, "adjustedQuantity": 1},
        ],
    }


class TestCreateAdjustment:
    def test_new_quantity_is_previous_plus_adjusted(self, client, auth_headers, parts, db_session):
        stocked_id, fresh_id = parts
        response = client.post("/api/inventory-adjustments", json=_payload(stocked_id, fresh_id), headers=auth_headers)
        assert response.status_code == 201
        adjustment = response.json()["adjustment"]

        items = adjustment["items"]
        assert [i["newQuantity"] for i in items] == [7, 5, 3]
        for item in items:
            assert item["newQuantity"] == item["previousQuantity"] + item["adjustedQuantity"]
        assert items[1]["previousQuantity"] == 0
        assert items[0]["part"]["partNo"] == "OF-1"
        assert items[2]["part"] is None
        assert adjustment["total"] == 9
        assert adjustment["createdBy"] == "user-1"

    def test_stock_rows_are_overwritten_or_created(self, client, auth_headers, parts, db_session):
        stocked_id, fresh_id = parts
        client.post("/api/inventory-adjustments", json=_payload(stocked_id, fresh_id), headers=auth_headers)
        assert _stock(db_session, stocked_id) == 7
        assert _stock(db_session, fresh_id) == 5
        assert db_session.query(Stock).count() == 2

    def test_negative_result_is_allowed(self, client, auth_headers, parts, db_session):
        stocked_id, _ = parts
        body = {"items": [{"partId": stocked_id, "partNo": "OF-1", "previousQuantity": 2, "adjustedQuantity": -5}]}
        response = client.post("/api/inventory-adjustments", json=body, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["adjustment"]["items"][0]["newQuantity"] == -3
        assert _stock(db_session, stocked_id) == -3

    @pytest.mark.parametrize("body", [{}, {"items": []}])
    def test_empty_items_are_rejected(self, client, auth_headers, db_session, body):
        response = client.post("/api/inventory-adjustments", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Adjustment must have at least one item"
        assert db_session.query(InventoryAdjustment).count() == 0

    def test_unknown_part_is_not_found(self, client, auth_headers, db_session):
        body = {"items": [{"partId": "ghost", "partNo": "X", "adjustedQuantity": 1}]}
        response = client.post("/api/inventory-adjustments", json=body, headers=auth_headers)
        assert response.status_code == 404
        assert db_session.query(InventoryAdjustment).count() == 0


class TestAtomicity:
    def test_failed_stock_upsert_rolls_back_everything(self, auth_headers, parts, db_session, monkeypatch):
        stocked_id, fresh_id = parts
        original = AdjustmentService._upsert_stock
        calls = []

        def flaky_upsert(self, part_id, quantity):
            calls.append(part_id)
            if len(calls) == 2:
                raise OSError("disk went away")
            return original(self, part_id, quantity)

        monkeypatch.setattr(AdjustmentService, "_upsert_stock", flaky_upsert)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post("/api/inventory-adjustments", json=_payload(stocked_id, fresh_id), headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"
        assert calls == [stocked_id, fresh_id]
        db_session.expire_all()
        assert db_session.query(InventoryAdjustment).count() == 0
        assert db_session.query(InventoryAdjustmentItem).count() == 0
        assert _stock(db_session, stocked_id) == 10
        assert _stock(db_session, fresh_id) is None


class TestListAdjustments:
    def test_latest_date_first_with_pagination(self, client, auth_headers):
        for n, date in enumerate(["2024-01-01T00:00:00Z", "2024-03-01T00:00:00Z", "2024-02-01T00:00:00Z"]):
            body = {"adjustmentNo": f"ADJ-{n}", "date": date, "items": [{"partNo": "X", "adjustedQuantity": 1}]}
            assert client.post("/api/inventory-adjustments", json=body, headers=auth_headers).status_code == 201

        body = client.get("/api/inventory-adjustments", params={"limit": 2}, headers=auth_headers).json()
        assert [a["adjustmentNo"] for a in body["adjustments"]] == ["ADJ-1", "ADJ-2"]
        assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    def test_get_by_id(self, client, auth_headers):
        created = client.post(
            "/api/inventory-adjustments",
            json={"items": [{"partNo": "X", "adjustedQuantity": 4}]},
            headers=auth_headers,
        ).json()["adjustment"]
        fetched = client.get(f"/api/inventory-adjustments/{created['id']}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["adjustment"]["items"][0]["newQuantity"] == 4

        missing = client.get("/api/inventory-adjustments/missing", headers=auth_headers)
        assert missing.status_code == 404
        assert missing.json() == {"error": "Inventory adjustment not found"}


class TestAdjustmentNumbers:
    BODY = {"adjustmentNo": "ADJ-1", "items": [{"partNo": "X", "adjustedQuantity": 1}]}

    def test_duplicate_number_is_a_conflict(self, client, auth_headers, db_session):
        assert client.post("/api/inventory-adjustments", json=self.BODY, headers=auth_headers).status_code == 201

        response = client.post("/api/inventory-adjustments", json=self.BODY, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Inventory adjustment with this number already exists"}
        assert db_session.query(InventoryAdjustment).count() == 1

    def test_unique_constraint_reported_as_conflict(self, client, auth_headers, db_session, monkeypatch):
        assert client.post("/api/inventory-adjustments", json=self.BODY, headers=auth_headers).status_code == 201
        # Concurrent request that passed the lookup before the first one committed.
        monkeypatch.setattr(AdjustmentService, "_ensure_number_free", lambda self, adjustment_no: None)

        response = client.post("/api/inventory-adjustments", json=self.BODY, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Inventory adjustment with this number already exists"
        db_session.expire_all()
        assert db_session.query(InventoryAdjustment).count() == 1
        assert db_session.query(InventoryAdjustmentItem).count() == 1

    def test_adjustments_without_number_never_clash(self, client, auth_headers):
        body = {"items": [{"partNo": "X", "adjustedQuantity": 1}]}
        for _ in range(2):
            assert client.post("/api/inventory-adjustments", json=body, headers=auth_headers).status_code == 201


def test_rollback_logged_once_without_traceback(auth_headers, parts, monkeypatch, caplog):
    def failing_upsert(self, part_id, quantity):
        raise OSError("disk went away")

    monkeypatch.setattr(AdjustmentService, "_upsert_stock", failing_upsert)
    client = TestClient(app, raise_server_exceptions=False)
    stocked_id, fresh_id = parts

    with caplog.at_level("WARNING"):
        response = client.post("/api/inventory-adjustments", json=_payload(stocked_id, fresh_id), headers=auth_headers)

    assert response.status_code == 500
    service_records = [r for r in caplog.records if r.name == "partsdesk.services.catalog.adjustment_service"]
    assert len(service_records) == 1
    assert service_records[0].levelname == "WARNING"
    assert service_records[0].exc_info is None
