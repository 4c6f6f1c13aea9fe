"""API testy pro /api/equipment a /api/equipment-items."""


def _type(client, name="BCD"):
    return client.post("/api/equipment", json={"name": name, "category": "Jackety"}).json()


def _item(client, equipment_id, code, **extra):
    return client.post("/api/equipment-items", json={"equipment_id": equipment_id, "inventory_code": code, **extra})


# ── Typy ─────────────────────────────────────────────────────────────────────

def test_create_equipment_type(client):
    res = client.post("/api/equipment", json={"name": "Regulátor", "category": "Automatiky"})
    assert res.status_code == 201
    data = res.json()
    assert data["name"] == "Regulátor"
    assert data["is_active"] is True


def test_list_and_filter_types(client):
    _type(client, "BCD")
    client.post("/api/equipment", json={"name": "Maska", "category": "Výstroj"})
    res = client.get("/api/equipment", params={"category": "Výstroj"})
    assert res.status_code == 200
    assert [e["name"] for e in res.json()["items"]] == ["Maska"]


def test_update_and_delete_type(client):
    eq = _type(client)
    res = client.put(f"/api/equipment/{eq['id']}", json={"description": "Žaket s integrovanou zátěží"})
    assert res.json()["description"] == "Žaket s integrovanou zátěží"

    res = client.delete(f"/api/equipment/{eq['id']}")
    assert res.status_code == 200
    assert res.json()["is_active"] is False
    assert client.get("/api/equipment").json()["total"] == 0


def test_type_not_found(client):
    res = client.get("/api/equipment/999")
    assert res.status_code == 404
    assert res.json()["detail"]["kind"] == "NotFound"


# ── Kusy ─────────────────────────────────────────────────────────────────────

def test_create_item(client):
    eq = _type(client)
    res = _item(client, eq["id"], "BCD-001", size="M", brand="Aqualung")
    assert res.status_code == 201
    data = res.json()
    assert data["status"] == "Available"
    assert data["label"] == "BCD-001"
    assert data["equipment_name"] == "BCD"


def test_create_item_on_hold(client):
    eq = _type(client)
    res = _item(client, eq["id"], "BCD-002", hold_status="Maintenance")
    assert res.json()["status"] == "Maintenance"


def test_create_item_unknown_type(client):
    res = _item(client, 999, "BCD-003")
    assert res.status_code == 404


def test_duplicate_inventory_code(client):
    eq = _type(client)
    _item(client, eq["id"], "DUP-001")
    res = _item(client, eq["id"], "DUP-001")
    assert res.status_code == 409
    assert res.json()["detail"]["kind"] == "DuplicateCode"


def test_status_is_not_writable(client):
    eq = _type(client)
    item = _item(client, eq["id"], "BCD-010").json()
    res = client.put(f"/api/equipment-items/{item['id']}", json={"status": "Lost", "color": "modrá"})
    assert res.status_code == 200
    assert res.json()["status"] == "Available"
    assert res.json()["color"] == "modrá"


def test_filter_items_by_status(client):
    eq = _type(client)
    _item(client, eq["id"], "BCD-011")
    _item(client, eq["id"], "BCD-012", hold_status="Retired")
    res = client.get("/api/equipment-items", params={"status": "Retired"})
    assert [i["inventory_code"] for i in res.json()["items"]] == ["BCD-012"]


def test_search_items(client):
    eq = _type(client)
    _item(client, eq["id"], "BCD-020", brand="Scubapro")
    _item(client, eq["id"], "BCD-021", brand="Mares")
    res = client.get("/api/equipment-items", params={"search": "scuba"})
    assert res.json()["total"] == 1


def test_get_by_code(client):
    eq = _type(client)
    _item(client, eq["id"], "BCD-030")
    assert client.get("/api/equipment-items/by-code/BCD-030").status_code == 200
    assert client.get("/api/equipment-items/by-code/NOPE").status_code == 404


def test_hold_endpoint(client):
    eq = _type(client)
    item = _item(client, eq["id"], "BCD-040").json()
    res = client.put(f"/api/equipment-items/{item['id']}/hold", json={"hold_status": "Maintenance"})
    assert res.status_code == 200
    assert res.json()["status"] == "Maintenance"

    res = client.put(f"/api/equipment-items/{item['id']}/hold", json={"hold_status": None})
    assert res.json()["status"] == "Available"


def test_delete_item_retires(client):
    eq = _type(client)
    item = _item(client, eq["id"], "BCD-050").json()
    res = client.delete(f"/api/equipment-items/{item['id']}")
    assert res.status_code == 200
    assert res.json()["status"] == "Retired"


def test_item_assignment_history_empty(client):
    eq = _type(client)
    item = _item(client, eq["id"], "BCD-060").json()
    res = client.get(f"/api/equipment-items/{item['id']}/assignments")
    assert res.status_code == 200
    data = res.json()
    assert data["equipment_item"]["id"] == item["id"]
    assert data["total_assignments"] == 0
    assert data["assignments"] == []


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}
