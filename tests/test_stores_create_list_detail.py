from tests.store_helpers import auth_headers, create_store, store_payload, warehouse_headers


def test_create_store_starts_active(client, seeded_db):
    response = client.post(
        "/warehouse/stores",
        headers=warehouse_headers(),
        json=store_payload("Site A", 42, storeLocation="Gate 3", storeManagerId=1001),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"]
    data = body["data"]
    assert data["storeCode"] > 0
    assert data["storeName"] == "Site A"
    assert data["projectCode"] == 42
    assert data["projectName"] == "Riyadh Metro Site A"
    assert data["storeLocation"] == "Gate 3"
    assert data["status"] == "ACTIVE"
    assert data["isActive"] is True
    assert data["itemCount"] == 0
    assert data["storeManagerId"] == 1001
    assert data["storeManagerName"] == "Store Keeper One"
    assert data["createdBy"] == "wh-1"
    assert data["createdAt"] == data["modifiedAt"]


def test_create_store_ignores_client_status_and_timestamps(client, seeded_db):
    data = create_store(
        client,
        "Site B",
        42,
        status="INACTIVE",
        isActive=False,
        createdAt="1999-01-01T00:00:00",
    )
    assert data["status"] == "ACTIVE"
    assert not data["createdAt"].startswith("1999")


def test_create_store_unknown_project_is_not_found(client, seeded_db):
    response = client.post("/warehouse/stores", headers=warehouse_headers(), json=store_payload("Site A", 999))
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["data"] is None
    assert body["code"] == "PROJECT_NOT_FOUND"


def test_create_store_unknown_manager_is_not_found(client, seeded_db):
    response = client.post(
        "/warehouse/stores",
        headers=warehouse_headers(),
        json=store_payload("Site A", 42, storeManagerId=4242),
    )
    assert response.status_code == 404
    assert response.json()["code"] == "EMPLOYEE_NOT_FOUND"


def test_create_store_requires_name_and_project(client, seeded_db):
    response = client.post("/warehouse/stores", headers=warehouse_headers(), json={"storeName": "   "})
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {error["field"] for error in body["details"]["errors"]}
    assert {"storeName", "projectCode"} <= fields


def test_create_store_rejects_overlong_name(client, seeded_db):
    response = client.post("/warehouse/stores", headers=warehouse_headers(), json=store_payload("x" * 201, 42))
    assert response.status_code == 422


def test_create_store_duplicate_active_name_conflicts(client, seeded_db):
    create_store(client, "Site A", 42)
    response = client.post("/warehouse/stores", headers=warehouse_headers(), json=store_payload("site a", 43))
    assert response.status_code == 409
    assert response.json()["code"] == "STORE_NAME_EXISTS"


def test_get_store_by_id(client, seeded_db):
    created = create_store(client, "Site A", 42)

    response = client.get(f"/warehouse/stores/{created['storeCode']}", headers=auth_headers("EMPLOYEE"))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["storeCode"] == created["storeCode"]
    assert data["status"] == "ACTIVE"


def test_get_unknown_store_is_not_found(client, seeded_db):
    response = client.get("/warehouse/stores/9999", headers=auth_headers("ADMIN"))
    assert response.status_code == 404
    assert response.json()["code"] == "STORE_NOT_FOUND"


def test_list_stores_returns_summaries_sorted_by_name(client, seeded_db):
    create_store(client, "Zulu Yard", 42)
    create_store(client, "Alpha Yard", 43)

    response = client.get("/warehouse/stores", headers=auth_headers("FINANCE_MANAGER"))
    assert response.status_code == 200
    rows = response.json()["data"]
    assert [row["storeName"] for row in rows] == ["Alpha Yard", "Zulu Yard"]
    assert "createdAt" not in rows[0]
    assert "modifiedBy" not in rows[0]


def test_list_stores_status_filter(client, seeded_db):
    keep = create_store(client, "Keep", 42)
    gone = create_store(client, "Gone", 42)
    client.delete(f"/warehouse/stores/{gone['storeCode']}", headers=warehouse_headers())

    active = client.get("/warehouse/stores?status=ACTIVE", headers=auth_headers("ADMIN")).json()["data"]
    inactive = client.get("/warehouse/stores?status=INACTIVE", headers=auth_headers("ADMIN")).json()["data"]
    assert [row["storeCode"] for row in active] == [keep["storeCode"]]
    assert [row["storeCode"] for row in inactive] == [gone["storeCode"]]

    invalid = client.get("/warehouse/stores?status=DELETED", headers=auth_headers("ADMIN"))
    assert invalid.status_code == 422


def test_list_stores_by_project(client, seeded_db):
    first = create_store(client, "Site A", 42)
    create_store(client, "Site B", 43)

    response = client.get("/warehouse/stores/project/42", headers=auth_headers("PROJECT_MANAGER"))
    assert response.status_code == 200
    rows = response.json()["data"]
    assert [row["storeCode"] for row in rows] == [first["storeCode"]]
    assert rows[0]["createdAt"]


def test_list_stores_by_unknown_project_is_empty(client, seeded_db):
    response = client.get("/warehouse/stores/project/999", headers=auth_headers("ADMIN"))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"] == []
