"""API testy pro /api/equipment-baskets."""
from datetime import date


def _customer(client, name="Jana Nováková"):
    return client.post("/api/customers", json={"full_name": name}).json()


def _item(client, code):
    eq = client.post("/api/equipment", json={"name": f"Typ {code}"}).json()
    return client.post("/api/equipment-items", json={"equipment_id": eq["id"], "inventory_code": code}).json()


def _basket(client, customer_id, **extra):
    payload = {"customer_id": customer_id, "checkout_date": "2026-07-01", "expected_return_date": "2026-07-05"}
    payload.update(extra)
    return client.post("/api/equipment-baskets", json=payload)


def test_create_basket(client):
    c = _customer(client)
    res = _basket(client, c["id"], center_bucket_no="B-12")
    assert res.status_code == 201
    data = res.json()
    assert data["basket_no"] == f"BASK-{date.today().year}-001"
    assert data["status"] == "Active"
    assert data["customer_name"] == "Jana Nováková"
    assert data["center_bucket_no"] == "B-12"


def test_basket_numbers_increment(client):
    c = _customer(client)
    first = _basket(client, c["id"]).json()["basket_no"]
    second = _basket(client, c["id"]).json()["basket_no"]
    assert first.endswith("-001")
    assert second.endswith("-002")


def test_checkout_date_defaults_to_today(client):
    c = _customer(client)
    res = client.post("/api/equipment-baskets", json={"customer_id": c["id"]})
    assert res.status_code == 201
    assert res.json()["checkout_date"] == date.today().isoformat()


def test_expected_return_before_checkout_rejected(client):
    c = _customer(client)
    res = _basket(client, c["id"], expected_return_date="2026-06-30")
    assert res.status_code == 422


def test_basket_unknown_customer(client):
    res = _basket(client, 999)
    assert res.status_code == 404


def test_list_baskets_filters(client):
    a = _customer(client, "Anna")
    b = _customer(client, "Boris")
    _basket(client, a["id"])
    _basket(client, b["id"])
    res = client.get("/api/equipment-baskets", params={"customer_id": a["id"]})
    assert res.json()["total"] == 1
    res = client.get("/api/equipment-baskets", params={"status": "Returned"})
    assert res.json()["total"] == 0


def test_update_basket(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    res = client.put(f"/api/equipment-baskets/{basket['id']}", json={"notes": "Dva ponory", "center_bucket_no": "B-7"})
    assert res.status_code == 200
    assert res.json()["notes"] == "Dva ponory"
    assert res.json()["center_bucket_no"] == "B-7"


def test_add_item_uses_basket_window(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    item = _item(client, "BCD-001")
    res = client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_item_id": item["id"]})
    assert res.status_code == 201
    data = res.json()
    assert data["assignment_status"] == "Pending"
    assert data["checkout_date"] == "2026-07-01"
    assert data["return_date"] == "2026-07-05"
    assert data["basket_no"] == basket["basket_no"]


def test_add_unavailable_item_conflict(client):
    a = _customer(client, "Anna")
    b = _customer(client, "Boris")
    first = _basket(client, a["id"]).json()
    second = _basket(client, b["id"], checkout_date="2026-07-05", expected_return_date="2026-07-08").json()
    item = _item(client, "REG-001")
    client.post(f"/api/equipment-baskets/{first['id']}/items", json={"equipment_item_id": item["id"]})

    res = client.post(f"/api/equipment-baskets/{second['id']}/items", json={"equipment_item_id": item["id"]})
    assert res.status_code == 409
    detail = res.json()["detail"]
    assert detail["kind"] == "ItemUnavailable"
    assert detail["conflicting_assignments"][0]["customer_name"] == "Anna"
    assert detail["conflicting_assignments"][0]["basket_no"] == first["basket_no"]


def test_add_customer_own_item(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    res = client.post(f"/api/equipment-baskets/{basket['id']}/items", json={
        "equipment_source": "Customer Own",
        "customer_equipment_type": "Počítač",
        "customer_equipment_brand": "Suunto",
    })
    assert res.status_code == 201
    assert res.json()["equipment_item_id"] is None
    assert res.json()["equipment_label"] == "Počítač Suunto"


def test_center_item_requires_id(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    res = client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_source": "Center"})
    assert res.status_code == 422


def test_full_lifecycle(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    x = _item(client, "BCD-X")
    y = _item(client, "BCD-Y")
    ax = client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_item_id": x["id"]}).json()
    ay = client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_item_id": y["id"]}).json()

    res = client.post(f"/api/equipment-baskets/{basket['id']}/checkout")
    assert res.status_code == 200
    assert sorted(res.json()["checked_out_ids"]) == sorted([ax["id"], ay["id"]])
    assert client.get(f"/api/equipment-items/{x['id']}").json()["status"] == "Rented"

    res = client.put(f"/api/equipment-baskets/{basket['id']}/return", json={
        "equipment_ids": [ax["id"]],
        "lost_ids": [ay["id"]],
        "actual_return_date": "2026-07-05",
    })
    assert res.status_code == 200
    summary = res.json()
    assert summary["returned_count"] == 1
    assert summary["lost_count"] == 1
    assert summary["skipped_lost_count"] == 0
    assert summary["closed_basket_ids"] == [basket["id"]]

    detail = client.get(f"/api/equipment-baskets/{basket['id']}").json()
    assert detail["status"] == "Returned"
    assert detail["actual_return_date"] == "2026-07-05"
    assert {a["assignment_status"] for a in detail["assignments"]} == {"Returned", "Lost"}
    assert client.get(f"/api/equipment-items/{x['id']}").json()["status"] == "Available"
    assert client.get(f"/api/equipment-items/{y['id']}").json()["status"] == "Lost"


def test_closed_basket_rejects_items(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    client.put(f"/api/equipment-baskets/{basket['id']}/return", json={})
    item = _item(client, "BCD-001")
    res = client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_item_id": item["id"]})
    assert res.status_code == 422
    assert res.json()["detail"]["kind"] == "InvalidStateTransition"


def test_delete_pending_basket(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    item = _item(client, "BCD-001")
    client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_item_id": item["id"]})

    res = client.delete(f"/api/equipment-baskets/{basket['id']}")
    assert res.status_code == 204
    assert client.get(f"/api/equipment-baskets/{basket['id']}").status_code == 404
    assert client.get("/api/booking-equipment").json()["total"] == 0


def test_delete_checked_out_basket_rejected(client):
    c = _customer(client)
    basket = _basket(client, c["id"]).json()
    item = _item(client, "BCD-001")
    client.post(f"/api/equipment-baskets/{basket['id']}/items", json={"equipment_item_id": item["id"]})
    client.post(f"/api/equipment-baskets/{basket['id']}/checkout")

    res = client.delete(f"/api/equipment-baskets/{basket['id']}")
    assert res.status_code == 422
