# storefront/routers/favorites.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.session import get_session_store, get_shop
from storefront.database import get_session
from storefront.models.cart import ShopSession
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import FavoriteToggleRead, ProductRead
from storefront.services.catalog_service import CatalogService
from storefront.services.session_store import ShopSessionStore

router = APIRouter(prefix="/favorites", tags=["Favorites"])

catalog = CatalogService(ProductRepository())


@router.get("", response_model=list[ProductRead])
def list_favorites(shop: ShopSession = Depends(get_shop)):
    """
    Favorite products in the order they were marked.
    """
    products = [catalog.find_product(pid) for pid in shop.favorites]
    return [ProductRead.from_product(p, True) for p in products if p is not None]


@router.post("/{product_id}", response_model=FavoriteToggleRead)
def toggle_favorite(
    product_id: int,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Mark or unmark a product as favorite; 404 for unknown products.
    """
    catalog.get_product(product_id)
    is_favorite = shop.toggle_favorite(product_id)
    store.save(session, shop)
    return FavoriteToggleRead(
        product_id=product_id,
        is_favorite=is_favorite,
        favorites=list(shop.favorites),
    )
