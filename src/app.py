"""Storefront FastAPI application.

Every request under ``/api`` is handled inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3001 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - "test"       → in-memory providers
#   - "production" → PostgreSQL, async event processing
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from storefront.domain import storefront

storefront.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Catalogue browsing, shopping carts and checkout",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for API requests."""
    if request.url.path.startswith("/api"):
        with storefront.domain_context():
            return await call_next(request)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import register_storefront_exception_handlers, router  # noqa: E402

app.include_router(router)
register_storefront_exception_handlers(app)


@app.get("/")
async def root():
    return {"message": "Storefront backend running", "domain": storefront.name}
