from conftest import add_customer


async def place(client, shop, qty=1):
    resp = await client.post(
        "/api/orders",
        json={
            "customer_id": shop["customer_id"],
            "shipping_address": "1 Main St",
            "items": [{"product_id": shop["r"], "quantity": qty}],
        },
    )
    assert resp.status_code == 201
    return resp.json()["order_id"]


async def test_get_order_includes_customer_and_items(client, shop):
    order_id = await place(client, shop, qty=2)

    resp = await client.get(f"/api/orders/{order_id}")
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"
    order = resp.json()["data"]
    assert order["id"] == order_id
    assert order["customer_name"] == "Ada Lovelace"
    assert order["customer_email"] == "ada@example.com"
    assert order["tracking_number"] is None
    assert order["items"][0]["product_name"] == "Ruler"
    assert order["items"][0]["quantity"] == 2


async def test_get_unknown_order(client):
    resp = await client.get("/api/orders/12345")
    assert resp.status_code == 404
    assert resp.json() == {"status": "error", "message": "Order not found", "order_id": 12345}


async def test_update_status_with_tracking_number(client, shop):
    order_id = await place(client, shop)

    resp = await client.patch(
        f"/api/orders/{order_id}/status", json={"status": "shipped", "tracking_number": "1Z999"}
    )
    assert resp.status_code == 200
    assert resp.json()["new_status"] == "shipped"

    order = (await client.get(f"/api/orders/{order_id}")).json()["data"]
    assert order["status"] == "shipped"
    assert order["tracking_number"] == "1Z999"


async def test_update_status_rejects_unknown_status(client, shop):
    order_id = await place(client, shop)

    resp = await client.patch(f"/api/orders/{order_id}/status", json={"status": "lost"})
    assert resp.status_code == 400
    assert resp.json()["valid_statuses"] == ["pending", "processing", "shipped", "delivered"]


async def test_update_status_unknown_order(client):
    resp = await client.patch("/api/orders/999/status", json={"status": "processing"})
    assert resp.status_code == 404
    assert resp.json() == {"status": "error", "message": "Order not found", "order_id": 999}


async def test_customer_orders_newest_first(client, shop):
    first = await place(client, shop)
    second = await place(client, shop)

    resp = await client.get(f"/api/orders/customer/{shop['customer_id']}")
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"
    assert [o["id"] for o in resp.json()["data"]] == [second, first]


async def test_customer_orders_empty_and_unknown(client):
    customer_id = await add_customer(name="New", email="new@example.com")
    assert (await client.get(f"/api/orders/customer/{customer_id}")).json() == {"status": "success", "data": []}

    resp = await client.get("/api/orders/customer/999")
    assert resp.status_code == 404
    assert resp.json() == {"status": "error", "message": "Customer not found", "customer_id": 999}


async def test_collection_route_answers_without_trailing_slash(client, shop):
    resp = await client.post(
        "/api/orders",
        json={"customer_id": shop["customer_id"], "shipping_address": "1 Main St", "items": [{"product_id": shop["p"], "quantity": 1}]},
    )
    assert resp.status_code == 201
    assert "location" not in resp.headers
