"""Read-only catalogue queries backing the product and category endpoints."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.errors import NotFound


@dataclass(frozen=True)
class ProductListing:
    product: Product
    category: Category | None


@dataclass(frozen=True)
class CategorySummary:
    category: Category
    product_count: int


def _categories_by_id() -> dict[str, Category]:
    categories = current_domain.repository_for(Category)._dao.query.all().items
    return {str(category.id): category for category in categories}


def list_products() -> list[ProductListing]:
    categories = _categories_by_id()
    products = current_domain.repository_for(Product)._dao.query.all().items
    return [ProductListing(product=p, category=categories.get(str(p.category_id))) for p in products]


def get_product(product_id) -> ProductListing:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError as exc:
        raise NotFound({"product_id": [f"Product {product_id} does not exist"]}) from exc
    return ProductListing(product=product, category=_categories_by_id().get(str(product.category_id)))


def list_products_by_category(category_id) -> list[ProductListing]:
    category = _categories_by_id().get(str(category_id))
    products = current_domain.repository_for(Product).in_category(category_id)
    return [ProductListing(product=p, category=category) for p in products]


def list_categories() -> list[CategorySummary]:
    repo = current_domain.repository_for(Product)
    return [
        CategorySummary(category=category, product_count=repo.count_in_category(category.id))
        for category in _categories_by_id().values()
    ]
