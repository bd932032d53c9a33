"""Storefront API package."""

from storefront.api.errors import register_storefront_exception_handlers
from storefront.api.routes import router

__all__ = ["router", "register_storefront_exception_handlers"]
