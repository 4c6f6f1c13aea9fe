"""API testy pro servisní historii vybavení."""


def _item(client, code="REG-001", **extra):
    eq = client.post("/api/equipment", json={"name": "Regulátor"}).json()
    payload = {"equipment_id": eq["id"], "inventory_code": code, **extra}
    return client.post("/api/equipment-items", json=payload).json()


def test_create_item_with_service_interval(client):
    item = _item(client, requires_service=True, service_interval_days=365, purchase_date="2026-01-01")
    assert item["requires_service"] is True
    assert item["next_service_date"] == "2027-01-01"


def test_service_record_crud(client):
    item = _item(client, requires_service=True, service_interval_days=365)
    res = client.post(f"/api/equipment-items/{item['id']}/service-history", json={
        "service_date": "2026-05-01", "service_type": "Revize", "cost": "1500.00",
    })
    assert res.status_code == 201
    record = res.json()
    assert record["next_service_due_date"] == "2027-05-01"
    assert record["equipment_label"] == "REG-001"

    detail = client.get(f"/api/equipment-items/{item['id']}").json()
    assert detail["last_service_date"] == "2026-05-01"
    assert detail["next_service_date"] == "2027-05-01"

    res = client.put(f"/api/equipment-items/{item['id']}/service-history/{record['id']}",
                     json={"technician": "Lucie"})
    assert res.status_code == 200
    assert res.json()["technician"] == "Lucie"

    page = client.get(f"/api/equipment-items/{item['id']}/service-history").json()
    assert page["total"] == 1

    res = client.delete(f"/api/equipment-items/{item['id']}/service-history/{record['id']}")
    assert res.status_code == 204
    assert client.get(f"/api/equipment-items/{item['id']}").json()["last_service_date"] is None


def test_service_record_requires_date(client):
    item = _item(client)
    res = client.post(f"/api/equipment-items/{item['id']}/service-history", json={"service_type": "Revize"})
    assert res.status_code == 422


def test_service_record_unknown_item(client):
    res = client.post("/api/equipment-items/9999/service-history", json={"service_date": "2026-05-01"})
    assert res.status_code == 404
    assert res.json()["detail"]["kind"] == "NotFound"


def test_service_releases_hold(client):
    item = _item(client)
    client.put(f"/api/equipment-items/{item['id']}/hold", json={"hold_status": "Maintenance"})
    assert client.get(f"/api/equipment-items/{item['id']}").json()["status"] == "Maintenance"

    client.post(f"/api/equipment-items/{item['id']}/service-history",
                json={"service_date": "2026-05-01", "release_hold": True})
    data = client.get(f"/api/equipment-items/{item['id']}").json()
    assert data["status"] == "Available"
    assert data["hold_status"] is None


def test_bulk_service(client):
    a = _item(client, "REG-001")
    b = _item(client, "REG-002")
    res = client.post("/api/equipment-items/bulk-service", json={
        "equipment_item_ids": [a["id"], b["id"], 4242], "service_date": "2026-05-01",
    })
    assert res.status_code == 201
    data = res.json()
    assert data["created_count"] == 2
    assert [e["equipment_item_id"] for e in data["errors"]] == [4242]
