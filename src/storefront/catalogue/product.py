"""Product aggregate and its repository."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    """A sellable item in the catalogue.

    ``code`` is the human-readable SKU and is unique across the catalogue.
    Only ``price`` and ``amount`` change after a product has been ordered, which
    is why order lines copy the name, code and price they were sold at.
    """

    code: String(required=True, max_length=50, unique=True)
    name: String(required=True, max_length=255)
    type: String(max_length=100)
    description: Text()
    price: Float(required=True, min_value=0.0)
    amount: Integer(default=0, min_value=0)
    image: String(max_length=500)
    category_id: Identifier(required=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, code, name, price, category_id, type=None, description=None, amount=0, image=None):
        now = datetime.now(UTC)
        return cls(
            code=code,
            name=name,
            type=type,
            description=description,
            price=price,
            amount=amount,
            image=image,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )

    def reprice(self, new_price):
        if new_price < 0:
            raise ValidationError({"price": ["Price cannot be negative"]})
        self.price = new_price
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=Product)
class ProductRepository:
    def in_category(self, category_id) -> list[Product]:
        return self._dao.query.filter(category_id=str(category_id)).all().items

    def count_in_category(self, category_id) -> int:
        return self._dao.query.filter(category_id=str(category_id)).all().total
