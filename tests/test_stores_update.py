from tests.store_helpers import admin_headers, create_store, store_payload, warehouse_headers


def test_update_store_changes_mutable_fields(client, seeded_db):
    store = create_store(client, "Site A", 42)

    response = client.put(
        f"/warehouse/stores/{store['storeCode']}",
        headers=admin_headers(),
        json=store_payload("Site A North", 42, storeLocation="Block 7", storeManagerId=1002),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["storeName"] == "Site A North"
    assert data["storeLocation"] == "Block 7"
    assert data["storeManagerName"] == "Store Keeper Two"
    assert data["projectCode"] == 42
    assert data["status"] == "ACTIVE"
    assert data["createdBy"] == "wh-1"
    assert data["modifiedBy"] == "admin-1"
    assert data["modifiedAt"] >= data["createdAt"]


def test_update_store_rejects_project_change(client, seeded_db):
    store = create_store(client, "Site A", 42)

    response = client.put(
        f"/warehouse/stores/{store['storeCode']}",
        headers=warehouse_headers(),
        json=store_payload("Site A", 43),
    )

    assert response.status_code == 409
    body = response.json()
    assert body["code"] == "STORE_PROJECT_IMMUTABLE"
    assert body["details"]["current_project_code"] == 42
    assert body["details"]["requested_project_code"] == 43

    unchanged = client.get(f"/warehouse/stores/{store['storeCode']}", headers=admin_headers()).json()["data"]
    assert unchanged["projectCode"] == 42


def test_update_unknown_store_is_not_found(client, seeded_db):
    response = client.put("/warehouse/stores/9999", headers=warehouse_headers(), json=store_payload("Site A", 42))
    assert response.status_code == 404
    assert response.json()["code"] == "STORE_NOT_FOUND"


def test_update_inactive_store_is_rejected(client, seeded_db):
    store = create_store(client, "Site A", 42)
    client.delete(f"/warehouse/stores/{store['storeCode']}", headers=warehouse_headers())

    response = client.put(
        f"/warehouse/stores/{store['storeCode']}",
        headers=warehouse_headers(),
        json=store_payload("Site A Renamed", 42),
    )

    assert response.status_code == 409
    assert response.json()["code"] == "STORE_INACTIVE"


def test_update_cannot_reactivate_store(client, seeded_db):
    store = create_store(client, "Site A", 42)
    client.delete(f"/warehouse/stores/{store['storeCode']}", headers=warehouse_headers())

    client.put(
        f"/warehouse/stores/{store['storeCode']}",
        headers=warehouse_headers(),
        json=store_payload("Site A", 42, isActive=True, status="ACTIVE"),
    )

    data = client.get(f"/warehouse/stores/{store['storeCode']}", headers=admin_headers()).json()["data"]
    assert data["status"] == "INACTIVE"


def test_update_store_keeps_name_unique(client, seeded_db):
    create_store(client, "Site A", 42)
    other = create_store(client, "Site B", 42)

    response = client.put(
        f"/warehouse/stores/{other['storeCode']}",
        headers=warehouse_headers(),
        json=store_payload("Site A", 42),
    )

    assert response.status_code == 409
    assert response.json()["code"] == "STORE_NAME_EXISTS"


def test_update_store_may_keep_its_own_name(client, seeded_db):
    store = create_store(client, "Site A", 42)

    response = client.put(
        f"/warehouse/stores/{store['storeCode']}",
        headers=warehouse_headers(),
        json=store_payload("Site A", 42, storeLocation="Moved"),
    )

    assert response.status_code == 200
    assert response.json()["data"]["storeLocation"] == "Moved"
