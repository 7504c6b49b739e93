# storefront/routers/products.py
from fastapi import APIRouter, Depends, Query

from storefront.core.session import get_shop
from storefront.models.cart import ShopSession
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductRead
from storefront.services.catalog_service import CatalogService, SortKey

router = APIRouter(prefix="/products", tags=["Products"])

product_repo = ProductRepository()
service = CatalogService(product_repo)


@router.get("", response_model=list[ProductRead])
def list_products(
    q: str | None = Query(default=None, description="Search in name and description"),
    category: str | None = Query(default=None, description='Category name, or "Всички" for all'),
    sort_by: SortKey = Query(default="name"),
    shop: ShopSession = Depends(get_shop),
):
    """
    List catalog products with optional search, category filter and sort.
    """
    products = service.list_products(query=q, category=category, sort_by=sort_by)
    return [ProductRead.from_product(p, p.id in shop.favorites) for p in products]


@router.get("/categories", response_model=list[str])
def list_categories():
    """
    Category names in display order, starting with "Всички".
    """
    return service.list_categories()


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    shop: ShopSession = Depends(get_shop),
):
    """
    Get a single product; 404 if the id is not in the catalog.
    """
    product = service.get_product(product_id)
    return ProductRead.from_product(product, product.id in shop.favorites)
