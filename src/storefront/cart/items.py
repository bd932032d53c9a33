"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, cart_for
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.identity.user import ensure_user


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        try:
            current_domain.repository_for(Product).get(command.product_id)
        except ObjectNotFoundError as exc:
            raise NotFound({"product_id": [f"Product {command.product_id} does not exist"]}) from exc

        cart = cart_for(ensure_user(command.user_id))
        item = cart.add_item(product_id=command.product_id, quantity=command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(item.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_user(command.user_id)
        if cart is None:
            raise NotFound({"user_id": [f"User {command.user_id} has no cart"]})

        cart.remove_product(command.product_id)
        repo.add(cart)
