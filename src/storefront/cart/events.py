"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to a cart, or its quantity was increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A product line was removed from a cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartsMerged:
    """Another cart's lines were folded into this cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    source_cart_id = Identifier()
    items_merged_count = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """Every line was removed from a cart, which itself remains."""

    __version__ = 1

    cart_id = Identifier(required=True)
    reason = String(required=True, max_length=50)
    items_removed_count = Integer(required=True)
