"""Checkout: converting a cart into an order.

The order, its lines and the clearing of the cart are written in one Unit of
Work. An empty cart is rejected before anything is written.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.atomic import process_atomically
from storefront.cache import CART_VIEW_PATH, ORDERS_VIEW_PATH, revalidate_path
from storefront.cart.cart import Cart, ClearReason
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import EmptyCart, NotFound
from storefront.ordering.order import Order
from storefront.pricing import discounted_price
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    cart_id = Identifier(required=True)


def _snapshot_line(item):
    try:
        product = current_domain.repository_for(Product).get(item.product_id)
    except ObjectNotFoundError as exc:
        raise NotFound({"product_id": [f"Product {item.product_id} does not exist"]}) from exc

    return {
        "product_id": str(product.id),
        "product_name": product.name,
        "product_code": product.code,
        "quantity": item.quantity,
        "price_at_order": float(discounted_price(product.price)),
    }


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        try:
            cart = cart_repo.get(command.cart_id)
        except ObjectNotFoundError as exc:
            raise NotFound({"cart_id": [f"Cart {command.cart_id} does not exist"]}) from exc

        if cart.is_empty:
            raise EmptyCart({"cart_id": [f"Cart {command.cart_id} has no items"]})

        lines = [_snapshot_line(item) for item in cart.items]
        order = Order.place(user_id=cart.user_id, lines=lines, cart_id=cart.id)
        cart.clear(reason=ClearReason.CHECKED_OUT)

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)
        return str(order.id)


def checkout(cart_id) -> Order:
    """Turn the cart's current contents into an order and empty the cart.

    Raises:
        NotFound: the cart, or a product on it, does not exist.
        EmptyCart: the cart has no items.
        StorageFailure: the order could not be committed; nothing changed.
    """
    order_id = process_atomically(PlaceOrder(cart_id=str(cart_id)))
    order = current_domain.repository_for(Order).get(order_id)

    revalidate_path(CART_VIEW_PATH)
    revalidate_path(ORDERS_VIEW_PATH)
    logger.info(
        "order_placed",
        order_id=order_id,
        cart_id=str(cart_id),
        user_id=str(order.user_id),
        total_amount=order.total_amount,
    )
    return order


def list_orders(user_id) -> list[Order]:
    return current_domain.repository_for(Order).for_user(user_id)
