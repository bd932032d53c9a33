"""Application tests for reading carts with resolved products and totals."""

from decimal import Decimal

from factories import make_cart, make_category, make_product, make_user
from storefront.cart.reader import get_all_users_with_carts, get_cart_total, get_cart_with_items


class TestGetCartWithItems:
    def test_user_without_cart_yields_none(self):
        make_user("alice")
        assert get_cart_with_items("alice") is None

    def test_lines_resolve_product_and_category(self):
        make_user("alice")
        category = make_category("graphics card")
        gpu = make_product("GPU-001", 100.0, category=category)
        make_cart("alice", (gpu, 2))

        cart = get_cart_with_items("alice")

        line = cart.lines[0]
        assert line.product.code == "GPU-001"
        assert line.category.name == "graphics card"
        assert line.item.quantity == 2

    def test_lines_are_most_recent_first(self):
        make_user("alice")
        first = make_product("P1", 10.0)
        second = make_product("P2", 20.0)
        third = make_product("P3", 30.0)
        make_cart("alice", (first, 1), (second, 1), (third, 1))

        cart = get_cart_with_items("alice")

        assert [line.product.code for line in cart.lines] == ["P3", "P2", "P1"]


class TestGetCartTotal:
    def test_sums_undiscounted_prices(self):
        make_user("alice")
        make_cart("alice", (make_product("P1", 100.0), 1), (make_product("P2", 50.0), 2))
        assert get_cart_total("alice") == Decimal("200.00")

    def test_rounds_to_cents(self):
        make_user("alice")
        make_cart("alice", (make_product("P1", 0.1), 3))
        assert get_cart_total("alice") == Decimal("0.30")

    def test_missing_cart_totals_zero(self):
        assert get_cart_total("nobody") == 0


class TestGetAllUsersWithCarts:
    def test_reports_item_counts(self):
        make_user("alice")
        make_user("bob")
        make_cart("alice", (make_product("P1", 10.0), 1), (make_product("P2", 10.0), 5))

        summaries = {s.user.user_id: s for s in get_all_users_with_carts()}

        assert summaries["alice"].item_count == 2
        assert summaries["bob"].cart is None
        assert summaries["bob"].item_count == 0
