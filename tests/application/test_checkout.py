"""Application tests for checkout: converting a cart into an order."""

import pytest
from factories import load_cart, make_cart, make_product, make_user
from protean import current_domain
from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.errors import EmptyCart, NotFound
from storefront.ordering.checkout import checkout, list_orders
from storefront.ordering.order import Order, OrderStatus


@pytest.fixture()
def filled_cart():
    make_user("alice")
    p1 = make_product("P1", 100.0, name="Processor")
    p2 = make_product("P2", 50.0, name="Memory")
    return make_cart("alice", (p1, 1), (p2, 2))


class TestCheckout:
    def test_totals_discounted_snapshot_prices(self, filled_cart):
        order = checkout(filled_cart.id)
        assert order.total_amount == 180.0

    def test_snapshots_price_name_and_code(self, filled_cart):
        order = checkout(filled_cart.id)
        lines = {item.product_code: item for item in order.items}
        assert lines["P1"].price_at_order == 90.0
        assert lines["P1"].product_name == "Processor"
        assert lines["P2"].price_at_order == 45.0
        assert lines["P2"].quantity == 2

    def test_order_belongs_to_cart_owner(self, filled_cart):
        order = checkout(filled_cart.id)
        assert str(order.user_id) == "alice"
        assert order.status == OrderStatus.PENDING.value

    def test_cart_is_kept_but_emptied(self, filled_cart):
        checkout(filled_cart.id)
        cart = load_cart("alice")
        assert str(cart.id) == str(filled_cart.id)
        assert cart.is_empty

    def test_order_is_persisted_with_items(self, filled_cart):
        order = checkout(filled_cart.id)
        stored = current_domain.repository_for(Order).get(order.id)
        assert len(stored.items) == 2

    def test_later_repricing_does_not_change_order(self, filled_cart):
        order = checkout(filled_cart.id)

        repo = current_domain.repository_for(Product)
        for item in order.items:
            product = repo.get(item.product_id)
            product.reprice(999.0)
            repo.add(product)

        stored = current_domain.repository_for(Order).get(order.id)
        assert stored.total_amount == 180.0
        assert sorted(i.price_at_order for i in stored.items) == [45.0, 90.0]

    def test_revalidates_cart_and_order_views(self, filled_cart, revalidated_paths):
        checkout(filled_cart.id)
        assert revalidated_paths == ["/basket", "/orders"]


class TestCheckoutFailures:
    def test_empty_cart_is_rejected(self):
        make_user("alice")
        cart = Cart.create(user_id="alice")
        current_domain.repository_for(Cart).add(cart)

        with pytest.raises(EmptyCart):
            checkout(cart.id)

        assert list_orders("alice") == []

    def test_emptied_cart_cannot_be_checked_out_twice(self, filled_cart):
        checkout(filled_cart.id)
        with pytest.raises(EmptyCart):
            checkout(filled_cart.id)
        assert len(list_orders("alice")) == 1

    def test_unknown_cart_is_not_found(self):
        with pytest.raises(NotFound):
            checkout("no-such-cart")

    def test_missing_product_leaves_cart_and_orders_untouched(self):
        make_user("alice")
        kept = make_product("P1", 100.0)
        cart = Cart.create(user_id="alice")
        cart.add_item(str(kept.id), 1)
        cart.add_item("deleted-product", 1)
        current_domain.repository_for(Cart).add(cart)

        with pytest.raises(NotFound):
            checkout(cart.id)

        assert len(load_cart("alice").items) == 2
        assert list_orders("alice") == []


class TestOrderHistory:
    def test_lists_newest_first(self):
        make_user("alice")
        product = make_product("P1", 10.0)
        first = checkout(make_cart("alice", (product, 1)).id)

        cart = load_cart("alice")
        cart.add_item(str(product.id), 3)
        current_domain.repository_for(Cart).add(cart)
        second = checkout(cart.id)

        assert [str(o.id) for o in list_orders("alice")] == [str(second.id), str(first.id)]

    def test_other_users_orders_are_excluded(self, filled_cart):
        checkout(filled_cart.id)
        assert list_orders("bob") == []
