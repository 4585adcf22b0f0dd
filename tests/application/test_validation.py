"""Tests for request-shape validation of order bodies."""

import pytest

from storefront.application.validation import (
    InvalidOrderRequest,
    ValidOrderRequest,
    parse_place_order,
)
from storefront.domain.model.order import DEFAULT_COUNTRY, OrderLineRequest


def _body(**overrides):
    body = {
        "userId": "u1",
        "items": [{"productId": "p1", "quantity": 2}],
        "shippingAddress": {"street": "1 Rue A", "city": "Dakar", "zipCode": "10000"},
    }
    body.update(overrides)
    return body


class TestValidBodies:

    def test_maps_to_command(self):
        result = parse_place_order(_body())
        assert isinstance(result, ValidOrderRequest)
        command = result.command
        assert command.user_id == "u1"
        assert command.lines == (OrderLineRequest("p1", 2),)
        assert command.shipping_address.city == "Dakar"
        assert command.shipping_address.zip_code == "10000"
        assert command.shipping_address.country == DEFAULT_COUNTRY

    def test_shipping_address_optional(self):
        body = _body()
        del body["shippingAddress"]
        result = parse_place_order(body)
        assert isinstance(result, ValidOrderRequest)
        assert result.command.shipping_address is None

    def test_whitespace_is_trimmed(self):
        result = parse_place_order(_body(userId="  u1 ", items=[{"productId": " p1 ", "quantity": 1}]))
        assert result.command.user_id == "u1"
        assert result.command.lines[0].product_id == "p1"

    def test_unknown_fields_ignored(self):
        result = parse_place_order(_body(coupon="SAVE10"))
        assert isinstance(result, ValidOrderRequest)


class TestInvalidBodies:

    @pytest.mark.parametrize(
        "payload, location",
        [
            (_body(userId=""), "userId"),
            (_body(items=[]), "items"),
            (_body(items="p1"), "items"),
            (_body(items=[{"quantity": 1}]), "items.0.productId"),
            (_body(items=[{"productId": "p1", "quantity": 0}]), "items.0.quantity"),
            (_body(items=[{"productId": "p1", "quantity": 1.5}]), "items.0.quantity"),
            (_body(items=[{"productId": "p1", "quantity": "2"}]), "items.0.quantity"),
            (_body(items=[{"productId": "p1", "quantity": True}]), "items.0.quantity"),
        ],
    )
    def test_reason_points_at_field(self, payload, location):
        result = parse_place_order(payload)
        assert isinstance(result, InvalidOrderRequest)
        assert any(reason.startswith(location) for reason in result.reasons)

    def test_missing_user_reported(self):
        body = _body()
        del body["userId"]
        result = parse_place_order(body)
        assert isinstance(result, InvalidOrderRequest)
        assert any(reason.startswith("userId") for reason in result.reasons)

    def test_every_problem_reported(self):
        result = parse_place_order(
            {"items": [{"productId": "", "quantity": -1}, {"productId": "p2", "quantity": 0}]}
        )
        assert isinstance(result, InvalidOrderRequest)
        assert len(result.reasons) == 4

    @pytest.mark.parametrize("payload", [None, [], "order", 42])
    def test_non_object_body(self, payload):
        result = parse_place_order(payload)
        assert isinstance(result, InvalidOrderRequest)
        assert result.reasons
