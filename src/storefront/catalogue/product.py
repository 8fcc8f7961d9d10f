"""Product aggregate: the catalogue records the cart snapshots from.

The storefront never edits products during checkout; it only reads them
through the catalogue gateway.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.domain import storefront


class ProductCategory(Enum):
    BEBIDAS = "bebidas"
    ALIMENTOS = "alimentos"
    LIMPEZA = "limpeza"
    HIGIENE = "higiene"
    OUTROS = "outros"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text()
    category = String(choices=ProductCategory, default=ProductCategory.OUTROS.value)
    price = Float(required=True, min_value=0.0)
    unit = String(max_length=50, default="un")
    stock = Integer(default=0, min_value=0)
    image_ref = String(max_length=1024)
    active = Boolean(default=True)
    created_at = DateTime()

    @classmethod
    def register(cls, name, price, category=ProductCategory.OUTROS.value, **details):
        return cls(
            name=name,
            price=price,
            category=category,
            created_at=datetime.now(UTC),
            **details,
        )
