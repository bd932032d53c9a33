"""Storefront error taxonomy.

Every error carries a ``messages`` dict keyed by the offending field (or
``_entity``), the same shape Protean uses for its own exceptions, so the API
layer can serialize either kind uniformly.
"""


class StorefrontError(Exception):
    """Base class for failures raised by cart and order operations."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)


class InvalidOperation(StorefrontError):
    """The requested operation makes no sense for the given arguments."""


class EmptyCart(StorefrontError):
    """Checkout was attempted on a cart without line items."""


class NotFound(StorefrontError):
    """A user, cart or product referenced by id does not exist."""


class StorageFailure(StorefrontError):
    """An atomic batch failed to commit; nothing from it was applied."""
