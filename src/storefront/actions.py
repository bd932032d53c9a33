"""Server-side procedures for the presentation layer.

These are called in-process by page renderers rather than over HTTP. Each one
runs inside the storefront domain context, so callers need not push one.
"""

from functools import wraps

from storefront.cart import reader
from storefront.cart import transfer
from storefront.domain import storefront


def _in_domain_context(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        with storefront.domain_context():
            return func(*args, **kwargs)

    return wrapper


@_in_domain_context
def get_cart_with_items(user_id):
    return reader.get_cart_with_items(user_id)


@_in_domain_context
def get_cart_total(user_id):
    return reader.get_cart_total(user_id)


@_in_domain_context
def get_all_users_with_carts():
    return reader.get_all_users_with_carts()


@_in_domain_context
def transfer_cart(from_user_id, to_user_id):
    return transfer.transfer_cart(from_user_id, to_user_id)
