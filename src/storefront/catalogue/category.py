"""Category aggregate: a named grouping of products."""

from protean.fields import String

from storefront.domain import storefront


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100, unique=True)
