"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands and aggregates.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CategorySchema(BaseModel):
    id: str
    name: str

    @classmethod
    def from_aggregate(cls, category):
        return cls(id=str(category.id), name=category.name)


class CategorySummaryResponse(CategorySchema):
    product_count: int = 0


class ProductSchema(BaseModel):
    id: str
    code: str
    name: str
    type: str | None = None
    description: str | None = None
    price: float
    amount: int = 0
    image: str | None = None
    category_id: str
    category: CategorySchema | None = None

    @classmethod
    def from_aggregate(cls, product, category=None):
        return cls(
            id=str(product.id),
            code=product.code,
            name=product.name,
            type=product.type,
            description=product.description,
            price=product.price,
            amount=product.amount or 0,
            image=product.image,
            category_id=str(product.category_id),
            category=CategorySchema.from_aggregate(category) if category else None,
        )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(ge=1, default=1)


class CartItemSchema(BaseModel):
    id: str
    product_id: str
    quantity: int
    added_at: datetime | None = None
    line_total: float
    product: ProductSchema

    @classmethod
    def from_line(cls, line):
        return cls(
            id=str(line.item.id),
            product_id=str(line.item.product_id),
            quantity=line.item.quantity,
            added_at=line.item.added_at,
            line_total=float(line.line_total),
            product=ProductSchema.from_aggregate(line.product, line.category),
        )


class CartResponse(BaseModel):
    """A user's cart. Users without a cart get ``id=None`` and no items."""

    id: str | None = None
    user_id: str | None = None
    items: list[CartItemSchema] = Field(default_factory=list)
    total: float = 0.0

    @classmethod
    def from_cart(cls, cart_with_items):
        if cart_with_items is None:
            return cls()
        return cls(
            id=str(cart_with_items.cart.id),
            user_id=str(cart_with_items.cart.user_id),
            items=[CartItemSchema.from_line(line) for line in cart_with_items.lines],
            total=float(cart_with_items.total),
        )


class CartItemIdResponse(BaseModel):
    item_id: str


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class CreateOrderRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"cart_id": "a1b2c3d4-e5f6-7890-abcd-ef1234567890"}]}}

    cart_id: str


class OrderItemSchema(BaseModel):
    id: str
    product_id: str
    quantity: int
    price_at_order: float
    product_name: str
    product_code: str


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    total_amount: float
    created_at: datetime | None = None
    items: list[OrderItemSchema] = Field(default_factory=list)

    @classmethod
    def from_aggregate(cls, order):
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            total_amount=order.total_amount,
            created_at=order.created_at,
            items=[
                OrderItemSchema(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    price_at_order=item.price_at_order,
                    product_name=item.product_name,
                    product_code=item.product_code,
                )
                for item in order.items
            ],
        )


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"


class HealthResponse(BaseModel):
    status: str
    database: str
