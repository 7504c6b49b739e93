# storefront/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.core.session import get_session_store, get_shop
from storefront.database import get_session
from storefront.models.cart import ShopSession
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import CartSummary, CartItemCreate, CartItemUpdate
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.session_store import ShopSessionStore

router = APIRouter(prefix="/cart", tags=["Cart"])

product_repo = ProductRepository()
service = CartService(CatalogService(product_repo))


@router.get("", response_model=CartSummary)
def get_my_cart(shop: ShopSession = Depends(get_shop)):
    """
    Get the shopper's cart summary.
    """
    return service.get_cart_summary(shop)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Add one unit of a product to the cart.

    Returns the updated cart summary.
    """
    return service.add_to_cart(session, store, shop, payload)


@router.patch("/{product_id}", response_model=CartSummary)
def update_cart_item(
    product_id: int,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Set the quantity of a product in the cart (<= 0 removes it).

    Returns the updated cart summary.
    """
    return service.update_quantity(
        session=session,
        store=store,
        shop=shop,
        product_id=product_id,
        payload=payload,
    )


@router.delete("/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: int,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Remove a product from the cart.

    Returns the updated cart summary.
    """
    return service.remove_item(session, store, shop, product_id)


@router.delete("", response_model=CartSummary)
def clear_cart(
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Clear the entire cart, its delivery quote and any open checkout.

    Returns an empty cart summary.
    """
    return service.clear_cart(session, store, shop)
