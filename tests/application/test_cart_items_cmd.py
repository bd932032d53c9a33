"""Application tests for adding and removing cart items."""

import pytest
from factories import load_cart, make_product, make_user
from protean import current_domain
from storefront.cart.items import AddToCart, RemoveFromCart
from storefront.errors import NotFound
from storefront.identity.user import User


def _add(user_id, product, quantity=1):
    return current_domain.process(
        AddToCart(user_id=user_id, product_id=str(product.id), quantity=quantity),
        asynchronous=False,
    )


class TestAddToCart:
    def test_creates_cart_lazily(self):
        make_user("user-001")
        product = make_product("GPU-001", 100.0)
        assert load_cart("user-001") is None

        _add("user-001", product, 2)

        cart = load_cart("user-001")
        assert cart is not None
        assert cart.items[0].quantity == 2

    def test_opened_cart_is_recorded_on_user(self):
        make_user("user-001")
        product = make_product("GPU-001", 100.0)

        _add("user-001", product)
        _add("user-001", product)

        user = current_domain.repository_for(User).get("user-001")
        assert str(user.cart_id) == str(load_cart("user-001").id)

    def test_repeated_add_increments_quantity(self):
        make_user("user-001")
        product = make_product("GPU-001", 100.0)

        first = _add("user-001", product, 1)
        second = _add("user-001", product, 4)

        cart = load_cart("user-001")
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
        assert first == second

    def test_registers_placeholder_for_unknown_user(self):
        product = make_product("GPU-001", 100.0)

        _add("newcomer", product)

        user = current_domain.repository_for(User).get("newcomer")
        assert user.email == "user_newcomer@example.com"
        assert user.name == "Auto Generated User"

    def test_unknown_product_is_not_found(self):
        make_user("user-001")
        with pytest.raises(NotFound):
            current_domain.process(
                AddToCart(user_id="user-001", product_id="missing", quantity=1),
                asynchronous=False,
            )
        assert load_cart("user-001") is None


class TestRemoveFromCart:
    def test_removes_product_line(self):
        make_user("user-001")
        kept = make_product("GPU-001", 100.0)
        dropped = make_product("RAM-001", 50.0)
        _add("user-001", kept)
        _add("user-001", dropped)

        current_domain.process(
            RemoveFromCart(user_id="user-001", product_id=str(dropped.id)),
            asynchronous=False,
        )

        cart = load_cart("user-001")
        assert [str(i.product_id) for i in cart.items] == [str(kept.id)]

    def test_user_without_cart_is_not_found(self):
        make_user("user-001")
        with pytest.raises(NotFound):
            current_domain.process(
                RemoveFromCart(user_id="user-001", product_id="prod-001"),
                asynchronous=False,
            )
