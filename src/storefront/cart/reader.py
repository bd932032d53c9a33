"""Cart reads: a user's cart resolved down to products and categories."""

from dataclasses import dataclass, field
from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, CartItem
from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.errors import NotFound
from storefront.identity.user import User
from storefront.pricing import lines_total, to_money


@dataclass(frozen=True)
class CartLine:
    item: CartItem
    product: Product
    category: Category | None

    @property
    def line_total(self) -> Decimal:
        return to_money(Decimal(str(self.product.price)) * self.item.quantity)


@dataclass(frozen=True)
class CartWithItems:
    """A cart with its lines, most recently added first."""

    cart: Cart
    lines: list[CartLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return lines_total((line.product.price, line.item.quantity) for line in self.lines)

    @property
    def item_count(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class UserCartSummary:
    user: User
    cart: Cart | None
    item_count: int


def _resolve_lines(cart: Cart) -> list[CartLine]:
    product_repo = current_domain.repository_for(Product)
    category_repo = current_domain.repository_for(Category)
    categories: dict[str, Category | None] = {}

    lines = []
    for item in sorted(cart.items, key=lambda i: i.added_at, reverse=True):
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError as exc:
            raise NotFound({"product_id": [f"Product {item.product_id} does not exist"]}) from exc

        category_id = str(product.category_id)
        if category_id not in categories:
            try:
                categories[category_id] = category_repo.get(category_id)
            except ObjectNotFoundError:
                categories[category_id] = None

        lines.append(CartLine(item=item, product=product, category=categories[category_id]))
    return lines


def get_cart_with_items(user_id) -> CartWithItems | None:
    """The user's cart with resolved lines, or None when the user has no cart."""
    cart = current_domain.repository_for(Cart).for_user(user_id)
    if cart is None:
        return None
    return CartWithItems(cart=cart, lines=_resolve_lines(cart))


def get_cart_total(user_id) -> Decimal:
    """Undiscounted value of the user's cart; zero when there is no cart."""
    cart = get_cart_with_items(user_id)
    if cart is None:
        return to_money(0)
    return cart.total


def get_all_users_with_carts() -> list[UserCartSummary]:
    cart_repo = current_domain.repository_for(Cart)
    summaries = []
    for user in current_domain.repository_for(User)._dao.query.all().items:
        cart = cart_repo.for_user(user.user_id)
        summaries.append(
            UserCartSummary(user=user, cart=cart, item_count=len(cart.items) if cart else 0)
        )
    return summaries
