# storefront/repositories/product_repo.py
from typing import Iterable

from storefront.catalog_data import PRODUCTS
from storefront.models.product import Product


class ProductRepository:
    """
    Read-only access to the in-memory catalog.
    - No FastAPI, no business logic.
    """

    def __init__(self, products: Iterable[Product] = PRODUCTS):
        self._products: dict[int, Product] = {p.id: p for p in products}

    def get_by_id(self, product_id: int) -> Product | None:
        return self._products.get(product_id)

    def list(self) -> list[Product]:
        return list(self._products.values())
