# storefront/services/catalog_service.py
from typing import Literal

from fastapi import HTTPException, status

from storefront.models.product import Category, Product
from storefront.repositories.product_repo import ProductRepository

SortKey = Literal["name", "price-low", "price-high", "rating"]

# Category filter value meaning "no filter"
ALL_CATEGORIES = "Всички"


class CatalogService:
    """
    Catalog queries.

    Responsibilities:
      - free-text search over name and description
      - category filter
      - sorting by name, price or rating
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def list_products(
        self,
        query: str | None = None,
        category: str | None = None,
        sort_by: SortKey = "name",
    ) -> list[Product]:
        needle = (query or "").strip().lower()

        def matches(product: Product) -> bool:
            if needle and needle not in product.name.lower() and needle not in product.description.lower():
                return False
            if category and category != ALL_CATEGORIES and product.category.value != category:
                return False
            return True

        products = [p for p in self.repo.list() if matches(p)]

        if sort_by == "price-low":
            products.sort(key=lambda p: p.price)
        elif sort_by == "price-high":
            products.sort(key=lambda p: p.price, reverse=True)
        elif sort_by == "rating":
            products.sort(key=lambda p: p.rating, reverse=True)
        else:
            products.sort(key=lambda p: p.name.casefold())
        return products

    def list_categories(self) -> list[str]:
        return [ALL_CATEGORIES] + [c.value for c in Category]

    def find_product(self, product_id: int) -> Product | None:
        return self.repo.get_by_id(product_id)

    def get_product(self, product_id: int) -> Product:
        product = self.repo.get_by_id(product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product
