"""Helpers that put catalogue, users and carts straight into the repositories."""

from protean import current_domain
from storefront.cart.cart import Cart
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.identity.user import User


def make_category(name="graphics card"):
    category = Category(name=name)
    current_domain.repository_for(Category).add(category)
    return category


def make_product(code, price, category=None, name=None, amount=10):
    category = category or make_category(name=f"category-{code}")
    product = Product.create(
        code=code,
        name=name or f"Product {code}",
        price=price,
        category_id=str(category.id),
        type=category.name,
        amount=amount,
    )
    current_domain.repository_for(Product).add(product)
    return product


def make_user(user_id, email=None, name=None):
    user = User.register(email=email or f"{user_id}@example.com", name=name or user_id, user_id=user_id)
    current_domain.repository_for(User).add(user)
    return user


def make_cart(user_id, *lines):
    """Create a cart for ``user_id`` holding ``(product, quantity)`` lines."""
    cart = Cart.create(user_id=user_id)
    for product, quantity in lines:
        cart.add_item(product_id=str(product.id), quantity=quantity)
    current_domain.repository_for(Cart).add(cart)
    return current_domain.repository_for(Cart).get(cart.id)


def load_cart(user_id):
    return current_domain.repository_for(Cart).for_user(user_id)
