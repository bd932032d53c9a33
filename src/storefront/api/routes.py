"""FastAPI routes for the Storefront: catalogue, carts and orders."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemIdResponse,
    CartResponse,
    CategorySummaryResponse,
    CreateOrderRequest,
    HealthResponse,
    OrderResponse,
    ProductSchema,
    StatusResponse,
)
from storefront.cache import CART_VIEW_PATH, revalidate_path
from storefront.cart.items import AddToCart, RemoveFromCart
from storefront.cart.reader import get_cart_with_items
from storefront.catalogue import listing
from storefront.catalogue.category import Category
from storefront.ordering.checkout import checkout, list_orders
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
@router.get("/products", response_model=list[ProductSchema], tags=["products"])
async def list_products() -> list[ProductSchema]:
    return [ProductSchema.from_aggregate(entry.product, entry.category) for entry in listing.list_products()]


@router.get("/products/category/{category_id}", response_model=list[ProductSchema], tags=["products"])
async def list_products_by_category(category_id: str) -> list[ProductSchema]:
    return [
        ProductSchema.from_aggregate(entry.product, entry.category)
        for entry in listing.list_products_by_category(category_id)
    ]


@router.get("/products/{product_id}", response_model=ProductSchema, tags=["products"])
async def get_product(product_id: str) -> ProductSchema:
    entry = listing.get_product(product_id)
    return ProductSchema.from_aggregate(entry.product, entry.category)


@router.get("/categories", response_model=list[CategorySummaryResponse], tags=["categories"])
async def list_categories() -> list[CategorySummaryResponse]:
    return [
        CategorySummaryResponse(
            id=str(summary.category.id),
            name=summary.category.name,
            product_count=summary.product_count,
        )
        for summary in listing.list_categories()
    ]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@router.get("/cart/{user_id}", response_model=CartResponse, tags=["cart"])
async def get_cart(user_id: str) -> CartResponse:
    return CartResponse.from_cart(get_cart_with_items(user_id))


@router.post("/cart/{user_id}/items", response_model=CartItemIdResponse, tags=["cart"])
async def add_cart_item(user_id: str, body: AddToCartRequest) -> CartItemIdResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    item_id = current_domain.process(command, asynchronous=False)
    revalidate_path(CART_VIEW_PATH)
    return CartItemIdResponse(item_id=item_id)


@router.delete("/cart/{user_id}/items/{product_id}", response_model=StatusResponse, tags=["cart"])
async def remove_cart_item(user_id: str, product_id: str) -> StatusResponse:
    command = RemoveFromCart(user_id=user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    revalidate_path(CART_VIEW_PATH)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@router.get("/orders/{user_id}", response_model=list[OrderResponse], tags=["orders"])
async def get_orders(user_id: str) -> list[OrderResponse]:
    return [OrderResponse.from_aggregate(order) for order in list_orders(user_id)]


@router.post("/orders", status_code=201, response_model=OrderResponse, tags=["orders"])
async def create_order(body: CreateOrderRequest) -> OrderResponse:
    return OrderResponse.from_aggregate(checkout(body.cart_id))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@router.get("/health", response_model=HealthResponse, tags=["health"])
async def health():
    try:
        current_domain.repository_for(Category)._dao.query.limit(1).all()
    except Exception:
        logger.exception("health_check_failed")
        return JSONResponse(status_code=503, content={"status": "error", "database": "Disconnected"})
    return HealthResponse(status="ok", database="Connected")
