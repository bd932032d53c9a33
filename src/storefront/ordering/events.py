"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into an order at checkout prices."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    cart_id = Identifier()
    total_amount = Float(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
