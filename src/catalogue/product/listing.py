"""Read side of the catalogue: keyword search, product lookup and top-rated ranking.

Nothing is cached; every call goes back to the repository.
"""

import math
from typing import NamedTuple

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue import settings
from catalogue.product.product import Product


class ProductPage(NamedTuple):
    items: list
    page_number: int
    total_pages: int


def coerce_page_number(page_number) -> int:
    """Page numbers are 1-based; anything missing, non-numeric or below 1 means page 1."""
    if page_number is None or isinstance(page_number, bool):
        return 1
    try:
        value = int(page_number)
    except (TypeError, ValueError):
        return 1
    return value if value >= 1 else 1


class CatalogService:
    def __init__(self, repository=None):
        self._repository = repository

    @property
    def repository(self):
        return self._repository or current_domain.repository_for(Product)

    def search_products(self, keyword: str | None = None, page_number=None) -> ProductPage:
        page = coerce_page_number(page_number)
        keyword = keyword.strip() if keyword else None

        items, total = self.repository.paginate(keyword, settings.PAGE_SIZE, page)
        return ProductPage(
            items=items,
            page_number=page,
            total_pages=math.ceil(total / settings.PAGE_SIZE),
        )

    def get_product(self, product_id) -> Product:
        return self.repository.get_by_id(product_id)

    def top_products(self, limit: int = settings.TOP_PRODUCTS_LIMIT) -> list[Product]:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise ValidationError({"limit": ["Limit must be a positive integer"]})
        return self.repository.top_rated(limit)
