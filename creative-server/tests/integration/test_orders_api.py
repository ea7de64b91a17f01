from conftest import CDN


def create_brand(client, headers, **overrides):
    payload = {
        "name": "Northwind",
        "tagline": "Built for the cold",
        "color_palette": ["#112233", "#ffffff"],
        "logo_url": f"{CDN}/brand/logo.svg",
        "reference_assets": [f"{CDN}/brand/moodboard.jpg"],
    }
    payload.update(overrides)
    response = client.post("/api/brands/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_order(client, headers, brand_id, **overrides):
    payload = {
        "brand_id": brand_id,
        "title": "Summer Drop",
        "description": "Three tees",
        "sizes": "S-XL",
        "attachments": [{"url": f"{CDN}/briefs/sketch.pdf", "name": "sketch.pdf", "type": "document"}],
    }
    payload.update(overrides)
    response = client.post("/api/orders/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_brand_lifecycle(client, customer, admin_headers):
    headers = customer["headers"]
    brand = create_brand(client, headers)

    assert brand["customer_id"] == customer["account"]["id"]
    assert brand["color_palette"] == ["#112233", "#ffffff"]

    updated = client.patch(
        f"/api/brands/{brand['id']}",
        json={"tagline": None, "reference_assets": [" ", f"{CDN}/brand/extra.png"]},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["tagline"] is None
    assert updated.json()["reference_assets"] == [f"{CDN}/brand/extra.png"]
    assert updated.json()["name"] == "Northwind"

    own = client.get("/api/brands/", headers=headers).json()
    assert own["total"] == 1

    everything = client.get("/api/admin/brands", params={"customer": customer["account"]["id"]}, headers=admin_headers)
    assert everything.json()["total"] == 1


def test_admin_cannot_create_brands(client, admin_headers):
    response = client.post("/api/brands/", json={"name": "Nope"}, headers=admin_headers)

    assert response.status_code == 403


def test_brands_are_private(client, customer, register_customer):
    brand = create_brand(client, customer["headers"])
    other = register_customer("other@brand.test", "Other")

    assert client.get(f"/api/brands/{brand['id']}", headers=other["headers"]).status_code == 403
    assert client.patch(f"/api/brands/{brand['id']}", json={"name": "Mine"}, headers=other["headers"]).status_code == 403
    assert client.get("/api/brands/missing", headers=other["headers"]).status_code == 404


def test_order_workflow(client, customer, admin_headers):
    headers = customer["headers"]
    brand = create_brand(client, headers)
    order = create_order(client, headers, brand["id"])

    assert order["status"] == "Pending"
    assert [attachment["name"] for attachment in order["attachments"]] == ["sketch.pdf"]

    listed = client.get("/api/orders/", params={"status": "Pending"}, headers=admin_headers).json()
    assert [item["id"] for item in listed["orders"]] == [order["id"]]

    premature = client.post(f"/api/orders/{order['id']}/complete", headers=headers)
    assert premature.status_code == 409

    delivered = client.patch(
        f"/api/admin/orders/{order['id']}",
        json={
            "status": "Awaiting Customer Feedback",
            "admin_notes": "Round one",
            "results": [{"url": f"{CDN}/finals/front.png", "name": "front.png"}],
        },
        headers=admin_headers,
    )
    assert delivered.status_code == 200
    assert delivered.json()["status"] == "Awaiting Customer Feedback"
    assert {item["type"] for item in delivered.json()["attachments"]} == {"document", "result"}

    revision = client.post(f"/api/orders/{order['id']}/revision", json={"notes": "Bigger logo"}, headers=headers)
    assert revision.status_code == 200
    assert revision.json()["status"] == "Revisions Requested"
    assert revision.json()["revision_notes"] == "Bigger logo"

    client.patch(
        f"/api/admin/orders/{order['id']}",
        json={"status": "Awaiting Customer Feedback"},
        headers=admin_headers,
    )
    completed = client.post(f"/api/orders/{order['id']}/complete", headers=headers)
    assert completed.json()["status"] == "Completed"


def test_customer_adds_brief_attachments(client, customer):
    headers = customer["headers"]
    order = create_order(client, headers, create_brand(client, headers)["id"], attachments=[])

    response = client.post(
        f"/api/orders/{order['id']}/attachments",
        json={"attachments": [{"url": f"{CDN}/briefs/photo.jpg", "name": "photo.jpg", "type": "image"}]},
        headers=headers,
    )

    assert response.status_code == 200
    assert [item["name"] for item in response.json()["attachments"]] == ["photo.jpg"]


def test_orders_are_private(client, customer, register_customer):
    order = create_order(client, customer["headers"], create_brand(client, customer["headers"])["id"])
    other = register_customer("other@brand.test", "Other")

    assert client.get(f"/api/orders/{order['id']}", headers=other["headers"]).status_code == 403
    assert client.get("/api/orders/", headers=other["headers"]).json()["total"] == 0
    assert client.get("/api/orders/unknown", headers=other["headers"]).status_code == 404


def test_order_against_foreign_brand_is_rejected(client, customer, register_customer):
    brand = create_brand(client, customer["headers"])
    other = register_customer("other@brand.test", "Other")

    response = client.post(
        "/api/orders/",
        json={"brand_id": brand["id"], "title": "Sneaky"},
        headers=other["headers"],
    )

    assert response.status_code == 403


def test_admin_lists_customers(client, customer, admin_headers):
    response = client.get("/api/admin/customers", headers=admin_headers)

    assert [item["email"] for item in response.json()] == ["maker@brand.test"]
    assert client.get("/api/admin/customers", headers=customer["headers"]).status_code == 403


def test_change_feed_pushes_order_events(client, customer):
    headers = customer["headers"]
    brand = create_brand(client, headers)

    with client.websocket_connect(f"/ws/web?token={customer['token']}") as websocket:
        order = create_order(client, headers, brand["id"])
        message = websocket.receive_json()

    assert message == {"type": "change", "data": {"table": "orders", "event": "INSERT", "id": order["id"]}}
