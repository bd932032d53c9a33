"""Path-level cache revalidation.

Mutations of carts and orders announce which rendered views became stale.
What a revalidator does with the path (purge a CDN entry, bust a template
cache) is up to whoever registers it.
"""

from collections.abc import Callable

from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CART_VIEW_PATH = "/basket"
ORDERS_VIEW_PATH = "/orders"

_revalidators: list[Callable[[str], None]] = []


def register_revalidator(revalidator: Callable[[str], None]) -> Callable[[str], None]:
    _revalidators.append(revalidator)
    return revalidator


def unregister_revalidator(revalidator: Callable[[str], None]) -> None:
    if revalidator in _revalidators:
        _revalidators.remove(revalidator)


def revalidate_path(path: str) -> None:
    logger.info("cache_path_revalidated", path=path, revalidators=len(_revalidators))
    for revalidator in list(_revalidators):
        revalidator(path)
