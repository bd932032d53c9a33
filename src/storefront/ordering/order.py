"""Order aggregate: an immutable, price-snapshotted record of a purchase.

Order lines copy the product's name, code and discounted price at the moment
of checkout. Later edits to a product (renaming, repricing, deleting) never
change an existing order, and the order total is never recomputed from live
prices.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.events import OrderPlaced
from storefront.pricing import lines_total


class OrderStatus(Enum):
    PENDING = "Pending"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_at_order = Float(required=True, min_value=0.0)
    product_name = String(required=True, max_length=255)
    product_code = String(required=True, max_length=50)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, user_id, lines, cart_id=None):
        """Create an order from snapshot lines.

        Args:
            user_id: The user the order belongs to.
            lines: List of dicts with product_id, product_name, product_code,
                quantity and price_at_order (already discounted and rounded).
            cart_id: The cart the lines were taken from, recorded on the event.
        """
        if not lines:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        total = lines_total((line["price_at_order"], line["quantity"]) for line in lines)

        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total_amount=float(total),
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(OrderItem(**line))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                cart_id=str(cart_id) if cart_id else None,
                total_amount=float(total),
                item_count=len(lines),
                placed_at=now,
            )
        )
        return order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """The user's orders, newest first."""
        orders = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)
