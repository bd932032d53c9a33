"""Cart aggregate: a user's mutable pre-purchase collection of products.

A user owns at most one cart, created the first time something is put in it.
Each product appears on at most one line; adding a product that is already in
the cart increases that line's quantity. Transferring or checking out a cart
removes its lines but keeps the cart itself.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import NAMESPACE_URL, uuid5

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartsMerged
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.identity.user import User

CART_NAMESPACE = uuid5(NAMESPACE_URL, "storefront:cart")


class ClearReason(Enum):
    TRANSFERRED = "Transferred"
    CHECKED_OUT = "Checked_Out"


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()
    updated_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_appears_once_per_cart(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        """A new, empty cart. Its id is derived from the owner, one cart per user."""
        now = datetime.now(UTC)
        return cls(
            id=str(uuid5(CART_NAMESPACE, str(user_id))),
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def lines(self):
        """Plain ``{product_id, quantity}`` dicts for every line in the cart."""
        return [{"product_id": str(item.product_id), "quantity": item.quantity} for item in self.items]

    @property
    def is_empty(self):
        return not self.items

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _upsert(self, product_id, quantity, now):
        existing = self.item_for(product_id)
        if existing:
            existing.quantity += quantity
            existing.updated_at = now
            return existing

        item = CartItem(product_id=product_id, quantity=quantity, added_at=now, updated_at=now)
        self.add_items(item)
        return item

    def add_item(self, product_id, quantity):
        """Add ``quantity`` of a product, increasing the existing line if there is one."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        now = datetime.now(UTC)
        item = self._upsert(product_id, quantity, now)
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                new_quantity=item.quantity,
            )
        )
        return item

    def remove_product(self, product_id):
        item = self.item_for(product_id)
        if item is None:
            raise NotFound({"product_id": [f"Product {product_id} is not in the cart"]})

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
            )
        )

    # -------------------------------------------------------------------
    # Merging and clearing
    # -------------------------------------------------------------------
    def absorb(self, lines, source_cart_id=None):
        """Fold another cart's lines into this one, adding quantities per product.

        Args:
            lines: Iterable of dicts with ``product_id`` and ``quantity``.
            source_cart_id: The cart the lines came from, recorded on the event.

        Returns:
            The number of lines absorbed.
        """
        now = datetime.now(UTC)
        merged = 0
        for line in lines:
            self._upsert(line["product_id"], line["quantity"], now)
            merged += 1

        self.updated_at = now

        self.raise_(
            CartsMerged(
                cart_id=str(self.id),
                source_cart_id=str(source_cart_id) if source_cart_id else None,
                items_merged_count=merged,
            )
        )
        return merged

    def clear(self, reason):
        """Remove every line. The cart row itself is kept."""
        removed = list(self.items)
        for item in removed:
            self.remove_items(item)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                reason=ClearReason(reason).value,
                items_removed_count=len(removed),
            )
        )
        return len(removed)


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        """The cart owned by ``user_id``, or None when the user has none yet."""
        found = self._dao.query.filter(user_id=str(user_id)).all().items
        if not found:
            return None
        return self.get(found[0].id)


def cart_for(user) -> Cart:
    """The cart owned by ``user``, opening an empty one when they have none.

    Opening a cart is recorded on the user in the same unit of work, so
    concurrent openers conflict on the user's version instead of each
    committing a cart of their own.
    """
    cart = current_domain.repository_for(Cart).for_user(user.user_id)
    if cart is None:
        cart = Cart.create(user_id=user.user_id)
        user.open_cart(cart.id)
        current_domain.repository_for(User).add(user)
    return cart
