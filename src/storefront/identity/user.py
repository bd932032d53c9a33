"""User aggregate: the owner of a cart and of order history."""

from datetime import UTC, datetime
from uuid import uuid4

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront


@storefront.aggregate
class User:
    user_id = Identifier(identifier=True, required=True)
    email = String(required=True, max_length=254, unique=True)
    name = String(max_length=255)
    cart_id = Identifier()
    created_at = DateTime()

    @classmethod
    def register(cls, email, name=None, user_id=None):
        return cls(
            user_id=user_id or str(uuid4()),
            email=email,
            name=name,
            created_at=datetime.now(UTC),
        )

    @classmethod
    def placeholder(cls, user_id):
        """A stand-in account for an id seen before the user signed up."""
        return cls.register(
            email=f"user_{user_id}@example.com",
            name="Auto Generated User",
            user_id=user_id,
        )

    def open_cart(self, cart_id):
        """Record the cart this user now owns.

        The user's version moves with it, so of two units of work opening a
        cart for the same user only the first to commit succeeds.
        """
        self.cart_id = cart_id


def ensure_user(user_id):
    """Return the user with ``user_id``, registering a placeholder when unknown."""
    repo = current_domain.repository_for(User)
    try:
        return repo.get(user_id)
    except ObjectNotFoundError:
        user = User.placeholder(str(user_id))
        repo.add(user)
        return user
