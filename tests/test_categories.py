"""Category endpoint tests."""


def test_create_main_and_sub_category(client, auth_headers):
    main = client.post("/api/categories", json={"name": "Engine"}, headers=auth_headers)
    assert main.status_code == 201
    main_body = main.json()["category"]
    assert main_body["type"] == "main"
    assert main_body["subcategories"] == []

    sub = client.post(
        "/api/categories",
        json={"name": "Pistons", "type": "sub", "parentId": main_body["id"]},
        headers=auth_headers,
    )
    assert sub.status_code == 201
    assert sub.json()["category"]["parent"]["name"] == "Engine"

    listed = client.get("/api/categories", params={"type": "main"}, headers=auth_headers).json()["categories"]
    assert len(listed) == 1
    assert [s["name"] for s in listed[0]["subcategories"]] == ["Pistons"]


def test_unknown_parent_is_not_found(client, auth_headers):
    response = client.post(
        "/api/categories",
        json={"name": "Orphan", "type": "sub", "parentId": "missing"},
        headers=auth_headers,
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Parent category not found"


def test_list_sorted_by_name_with_status_filter(client, auth_headers):
    for name, status in [("Suspension", "A"), ("Brakes", "A"), ("Body", "I")]:
        client.post("/api/categories", json={"name": name, "status": status}, headers=auth_headers)

    names = [c["name"] for c in client.get("/api/categories", headers=auth_headers).json()["categories"]]
    assert names == ["Body", "Brakes", "Suspension"]

    active = client.get("/api/categories", params={"status": "A"}, headers=auth_headers).json()["categories"]
    assert [c["name"] for c in active] == ["Brakes", "Suspension"]


def test_invalid_type_is_rejected(client, auth_headers):
    response = client.post("/api/categories", json={"name": "X", "type": "other"}, headers=auth_headers)
    assert response.status_code == 400
