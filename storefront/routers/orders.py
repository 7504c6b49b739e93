# storefront/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.session import get_session_store, get_shop
from storefront.database import get_session
from storefront.models.cart import ShopSession
from storefront.schemas.order import OrderConfirmation, OrderCreate
from storefront.services.order_service import OrderService
from storefront.services.session_store import ShopSessionStore

router = APIRouter(prefix="/orders", tags=["Orders"])

service = OrderService()


@router.post("", response_model=OrderConfirmation, status_code=status.HTTP_201_CREATED)
def submit_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Submit the order from the checkout summary.

    400 lists every missing precondition (cart, delivery, contact fields,
    terms) and leaves the cart untouched. On success the cart is emptied.
    """
    return service.submit_order(session, store, shop, payload)
