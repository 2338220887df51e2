"""Tests for the JSON-file stock transfer store and its routes."""
import json
import re

import pytest

from partsdesk.core.exceptions import TransferStoreError
from partsdesk.services.transfer_store import JsonTransferStore, new_transfer_id

TRANSFER = {
    "transferNo": "ST-1",
    "transferDate": "2024-05-01",
    "items": [{"partId": "p-1", "quantity": 2}],
    "fromStoreId": "s-1",
    "toStoreId": "s-2",
}


class TestJsonTransferStore:
    def test_missing_file_reads_as_empty(self, tmp_path):
        store = JsonTransferStore(tmp_path / "nothing" / "here.json")
        assert store.list() == ([], 0)
        assert not store.path.exists()

    def test_create_appends_and_persists(self, tmp_path):
        store = JsonTransferStore(tmp_path / "data" / "stock-transfers.json")
        first = store.create(TRANSFER)
        second = store.create({**TRANSFER, "transferNo": "ST-2", "status": "sent", "notes": "urgent"})

        assert first["status"] == "draft"
        assert first["notes"] == ""
        assert second["status"] == "sent"
        assert first["createdAt"] == first["updatedAt"]
        on_disk = json.loads(store.path.read_text(encoding="utf-8"))
        assert [t["transferNo"] for t in on_disk] == ["ST-1", "ST-2"]

    def test_list_is_newest_first_and_paged(self, tmp_path):
        path = tmp_path / "transfers.json"
        records = [
            {"id": f"t{i}", "transferNo": f"ST-{i}", "createdAt": f"2024-01-0{i}T00:00:00.000Z"}
            for i in range(1, 6)
        ]
        path.write_text(json.dumps(records), encoding="utf-8")
        store = JsonTransferStore(path)

        page, total = store.list(page=1, limit=2)
        assert total == 5
        assert [t["id"] for t in page] == ["t5", "t4"]
        page, _ = store.list(page=3, limit=2)
        assert [t["id"] for t in page] == ["t1"]

    def test_list_orders_by_timestamp_not_text(self, tmp_path):
        path = tmp_path / "transfers.json"
        records = [
            {"id": "no-millis", "createdAt": "2024-01-02T00:00:00+00:00"},
            {"id": "late-jan-1", "createdAt": "2024-01-01T23:00:00.000Z"},
            {"id": "offset", "createdAt": "2024-01-02T01:00:00+05:00"},
            {"id": "missing"},
            {"id": "garbage", "createdAt": "yesterday"},
            {"id": "newest", "createdAt": "2024-01-03T00:00:00Z"},
        ]
        path.write_text(json.dumps(records), encoding="utf-8")

        page, total = JsonTransferStore(path).list(page=1, limit=10)

        assert total == 6
        assert [t["id"] for t in page[:4]] == ["newest", "no-millis", "late-jan-1", "offset"]
        assert {t["id"] for t in page[4:]} == {"missing", "garbage"}

    def test_corrupt_file_raises_and_is_left_alone(self, tmp_path):
        path = tmp_path / "transfers.json"
        path.write_text("[{broken", encoding="utf-8")
        store = JsonTransferStore(path)
        with pytest.raises(TransferStoreError):
            store.list()
        with pytest.raises(TransferStoreError):
            store.create(TRANSFER)
        assert path.read_text(encoding="utf-8") == "[{broken"

    def test_id_format(self):
        assert re.fullmatch(r"transfer-\d{13}-[0-9a-z]{9}", new_transfer_id())


class TestStockTransferRoutes:
    def test_empty_list_when_no_file(self, client, auth_headers, transfer_store):
        response = client.get("/api/stock-transfers", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {
            "transfers": [],
            "pagination": {"page": 1, "limit": 10, "total": 0, "totalPages": 0},
        }

    def test_create_then_list(self, client, auth_headers, transfer_store):
        response = client.post("/api/stock-transfers", json=TRANSFER, headers=auth_headers)
        assert response.status_code == 201
        transfer = response.json()["transfer"]
        assert transfer["id"].startswith("transfer-")
        assert transfer["fromStoreId"] == "s-1"

        listed = client.get("/api/stock-transfers", headers=auth_headers).json()
        assert [t["id"] for t in listed["transfers"]] == [transfer["id"]]

    @pytest.mark.parametrize("missing", ["transferNo", "transferDate", "items"])
    def test_missing_required_fields(self, client, auth_headers, transfer_store, missing):
        body = {k: v for k, v in TRANSFER.items() if k != missing}
        response = client.post("/api/stock-transfers", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"
        assert not transfer_store.path.exists()

    def test_empty_items_rejected(self, client, auth_headers, transfer_store):
        response = client.post("/api/stock-transfers", json={**TRANSFER, "items": []}, headers=auth_headers)
        assert response.status_code == 400

    def test_unauthenticated_does_not_touch_file(self, client, transfer_store):
        response = client.post("/api/stock-transfers", json=TRANSFER)
        assert response.status_code == 401
        assert not transfer_store.path.exists()
