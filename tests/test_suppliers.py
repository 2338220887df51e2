"""Supplier endpoint tests."""
from partsdesk.models.catalog_models import PurchaseOrder


def _supplier(client, headers, **body):
    response = client.post("/api/suppliers", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["supplier"]


def test_create_and_duplicate_code(client, auth_headers):
    supplier = _supplier(client, auth_headers, code="SUP-1", name="Acme Parts", contactPerson="Jo")
    assert supplier["contactPerson"] == "Jo"
    assert supplier["purchaseOrderCount"] == 0

    duplicate = client.post("/api/suppliers", json={"code": "SUP-1", "name": "Other"}, headers=auth_headers)
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "Supplier with this code already exists"


def test_suppliers_without_code_do_not_collide(client, auth_headers):
    _supplier(client, auth_headers, name="First")
    _supplier(client, auth_headers, name="Second", code="")


def test_list_sorted_by_name_with_search_field(client, auth_headers):
    _supplier(client, auth_headers, name="Zenith", email="sales@zenith.example", phone="555-0100")
    _supplier(client, auth_headers, name="Alpha", code="ZEN-2", phone="555-0199")
    _supplier(client, auth_headers, name="Mid", status="I")

    def names(**params):
        body = client.get("/api/suppliers", params=params, headers=auth_headers).json()
        return [s["name"] for s in body["suppliers"]]

    assert names() == ["Alpha", "Mid", "Zenith"]
    assert names(status="A") == ["Alpha", "Zenith"]
    assert names(search="zen") == ["Alpha", "Zenith"]
    assert names(search="zen", searchField="name") == ["Zenith"]
    assert names(search="zen", searchField="code") == ["Alpha"]
    assert names(search="0199", searchField="phone") == ["Alpha"]


def test_purchase_order_count(client, auth_headers, db_session):
    supplier = _supplier(client, auth_headers, name="Acme")
    db_session.add_all(
        [PurchaseOrder(po_no=f"PO-{i}", supplier_id=supplier["id"]) for i in range(2)]
    )
    db_session.commit()

    listed = client.get("/api/suppliers", headers=auth_headers).json()["suppliers"]
    assert listed[0]["purchaseOrderCount"] == 2
    single = client.get(f"/api/suppliers/{supplier['id']}", headers=auth_headers).json()["supplier"]
    assert single["purchaseOrderCount"] == 2
