from contextlib import asynccontextmanager

import pytest

from services.order_service.exceptions import InputValidationError
from services.order_service.schemas import OrderCreate
from services.order_service.service import OrderService, validate_order_input


class UnusableProvider:
    """Fails the test if the workflow ever asks for a database transaction."""

    def __init__(self):
        self.opened = 0

    @asynccontextmanager
    async def transaction(self):
        self.opened += 1
        raise AssertionError("validation failures must not reach the database")
        yield


def messages(errors):
    return [e.message for e in errors]


def test_empty_body_lists_every_missing_field():
    errors = validate_order_input(OrderCreate())
    assert messages(errors) == [
        "Customer ID is required",
        "Shipping address is required",
        "Order items are required",
    ]
    assert {e.code for e in errors} == {"required"}


def test_empty_items():
    errors = validate_order_input(OrderCreate(customer_id=1, shipping_address="x", items=[]))
    assert messages(errors) == ["Order must contain at least one item"]
    assert errors[0].code == "empty"


def test_blank_shipping_address_is_missing():
    errors = validate_order_input(
        OrderCreate(customer_id=1, shipping_address="   ", items=[{"product_id": 1, "quantity": 1}])
    )
    assert messages(errors) == ["Shipping address is required"]


def test_item_problems_are_indexed():
    data = OrderCreate(
        customer_id=1,
        shipping_address="1 Main St",
        items=[
            {"product_id": 1, "quantity": 1},
            {"quantity": 2},
            {"product_id": 3, "quantity": 0},
            {"product_id": 4},
        ],
    )
    errors = validate_order_input(data)
    assert messages(errors) == [
        "Product ID is required for item at index 1",
        "Valid quantity is required for item at index 2",
        "Valid quantity is required for item at index 3",
    ]
    assert [e.code for e in errors] == ["required", "not_positive", "required"]
    assert errors[1].field == "items[2].quantity"


def test_valid_input_has_no_errors():
    data = OrderCreate(customer_id=1, shipping_address="1 Main St", items=[{"product_id": 1, "quantity": 2, "price": 9.5}])
    assert validate_order_input(data) == []


async def test_invalid_order_never_opens_a_transaction():
    provider = UnusableProvider()
    with pytest.raises(InputValidationError) as exc_info:
        await OrderService.create_order(provider, OrderCreate(customer_id=1, shipping_address="x", items=[]))

    assert provider.opened == 0
    assert exc_info.value.status_code == 400
    assert exc_info.value.to_response() == {
        "status": "error",
        "message": "Validation failed",
        "errors": [{"field": "items", "code": "empty", "message": "Order must contain at least one item"}],
    }


async def test_http_validation_failure_envelope(client):
    resp = await client.post("/api/orders", json={"items": [{"product_id": 1, "quantity": -1}]})

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "error"
    assert body["message"] == "Validation failed"
    assert [e["message"] for e in body["errors"]] == [
        "Customer ID is required",
        "Shipping address is required",
        "Valid quantity is required for item at index 0",
    ]


async def test_items_must_be_an_array(client):
    resp = await client.post(
        "/api/orders", json={"customer_id": 1, "shipping_address": "x", "items": "lots"}
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation failed"
    assert body["errors"] == [{"field": "items", "code": "invalid_type", "message": "Items must be an array"}]


async def test_badly_typed_quantity(client):
    resp = await client.post(
        "/api/orders",
        json={"customer_id": 1, "shipping_address": "x", "items": [{"product_id": 1, "quantity": "many"}]},
    )

    assert resp.status_code == 400
    assert resp.json()["errors"] == [
        {
            "field": "items[0].quantity",
            "code": "invalid_type",
            "message": "Valid quantity is required for item at index 0",
        }
    ]


async def test_wrong_items_type_still_reports_missing_fields(client):
    resp = await client.post("/api/orders", json={"items": "lots"})

    assert resp.status_code == 400
    assert [(e["code"], e["message"]) for e in resp.json()["errors"]] == [
        ("required", "Customer ID is required"),
        ("required", "Shipping address is required"),
        ("invalid_type", "Items must be an array"),
    ]


async def test_type_and_presence_problems_across_items(client):
    resp = await client.post(
        "/api/orders",
        json={"customer_id": 1, "shipping_address": "x", "items": [{"quantity": "many"}, {"quantity": 2}]},
    )

    assert resp.status_code == 400
    assert [e["message"] for e in resp.json()["errors"]] == [
        "Product ID is required for item at index 0",
        "Valid quantity is required for item at index 0",
        "Product ID is required for item at index 1",
    ]


def test_wrong_scalar_types():
    data = OrderCreate(
        customer_id="abc",
        shipping_address=42,
        items=[{"product_id": True, "quantity": 1, "price": "cheap"}, "pen"],
    )
    errors = validate_order_input(data)
    assert [(e.field, e.code) for e in errors] == [
        ("customer_id", "invalid_type"),
        ("shipping_address", "invalid_type"),
        ("items[0].product_id", "invalid_type"),
        ("items[0].price", "invalid_type"),
        ("items[1]", "invalid_type"),
    ]
    assert messages(errors)[3] == "Price must be a number for item at index 0"
