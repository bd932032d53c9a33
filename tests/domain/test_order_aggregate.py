"""Tests for the Order aggregate: snapshot lines and totals."""

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.events import OrderPlaced
from storefront.ordering.order import Order, OrderStatus


def _line(product_id, price, quantity, name=None, code=None):
    return {
        "product_id": product_id,
        "product_name": name or f"Product {product_id}",
        "product_code": code or f"SKU-{product_id}",
        "quantity": quantity,
        "price_at_order": price,
    }


class TestPlaceOrder:
    def test_total_is_sum_of_snapshot_lines(self):
        order = Order.place(user_id="user-001", lines=[_line("p1", 90.0, 1), _line("p2", 45.0, 2)])
        assert order.total_amount == 180.0

    def test_total_is_rounded_to_cents(self):
        order = Order.place(user_id="user-001", lines=[_line("p1", 0.1, 3)])
        assert order.total_amount == 0.3

    def test_starts_pending(self):
        order = Order.place(user_id="user-001", lines=[_line("p1", 10.0, 1)])
        assert order.status == OrderStatus.PENDING.value

    def test_items_copy_snapshot_fields(self):
        order = Order.place(
            user_id="user-001",
            lines=[_line("p1", 12.5, 2, name="RTX 4070", code="GPU-4070")],
        )
        item = order.items[0]
        assert item.product_name == "RTX 4070"
        assert item.product_code == "GPU-4070"
        assert item.price_at_order == 12.5
        assert item.quantity == 2

    def test_raises_order_placed_event(self):
        order = Order.place(user_id="user-001", lines=[_line("p1", 10.0, 1)], cart_id="cart-001")
        events = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(events) == 1
        assert events[0].cart_id == "cart-001"
        assert events[0].item_count == 1
        assert events[0].total_amount == 10.0

    def test_cannot_place_order_without_lines(self):
        with pytest.raises(ValidationError):
            Order.place(user_id="user-001", lines=[])
