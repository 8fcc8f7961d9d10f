"""Catalogue gateway: read-only product listing for the storefront.

Only active products are ever surfaced. Filtering mirrors the catalogue page:
a free-text search over name and description plus a category selector where
``"all"`` means any category.
"""

import unicodedata

import structlog
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

ALL_CATEGORIES = "all"
_SORTABLE_FIELDS = {"name", "price", "category", "stock", "unit", "created_at"}


@storefront.value_object
class ProductFilter:
    search = String(max_length=255)
    category = String(max_length=50, default=ALL_CATEGORIES)

    def matches(self, product) -> bool:
        if self.category and self.category != ALL_CATEGORIES and product.category != self.category:
            return False
        if self.search:
            term = self.search.lower()
            haystack = [product.name or "", product.description or ""]
            return any(term in text.lower() for text in haystack)
        return True


class CatalogueGateway:
    def list(self, product_filter: ProductFilter | None = None, sort_key: str = "name") -> list:
        """Return active products matching ``product_filter`` ordered by ``sort_key``.

        ``sort_key`` names a Product field; a leading ``-`` sorts descending.
        Products missing the sort field are placed last.
        """
        product_filter = product_filter or ProductFilter()
        products = current_domain.repository_for(Product)._dao.query.filter(active=True).limit(None).all().items
        selected = [p for p in products if product_filter.matches(p)]

        descending = sort_key.startswith("-")
        field_name = sort_key.lstrip("-")
        if field_name not in _SORTABLE_FIELDS:
            logger.warning("Unknown product sort key, falling back to name", sort_key=sort_key)
            field_name = "name"

        present = [p for p in selected if getattr(p, field_name) is not None]
        missing = [p for p in selected if getattr(p, field_name) is None]
        present.sort(key=lambda p: _sort_value(getattr(p, field_name)), reverse=descending)
        return present + missing


def _sort_value(value):
    if isinstance(value, str):
        # Accents are ignored so "Água" sorts with "agua"
        decomposed = unicodedata.normalize("NFKD", value)
        return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return value
