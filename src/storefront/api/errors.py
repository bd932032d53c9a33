"""HTTP mapping for storefront errors."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import EmptyCart, InvalidOperation, NotFound, StorageFailure, StorefrontError

_STATUS_CODES = {
    InvalidOperation: 400,
    EmptyCart: 400,
    NotFound: 404,
    StorageFailure: 409,
}


async def _storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = next((code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)), 500)
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.__class__.__name__, "messages": exc.messages},
    )


def register_storefront_exception_handlers(app: FastAPI) -> None:
    """Map storefront and Protean exceptions to HTTP responses."""
    register_exception_handlers(app)
    app.add_exception_handler(StorefrontError, _storefront_error_handler)
