# storefront/routers/checkout.py
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.core.session import get_courier, get_session_store, get_shop
from storefront.database import get_session
from storefront.models.cart import ShopSession
from storefront.schemas.checkout import (
    AddressStep,
    CheckoutRead,
    MethodSelect,
    OfficeChoices,
    OfficeStep,
)
from storefront.services.checkout_service import CheckoutService
from storefront.services.courier_client import CourierClient
from storefront.services.session_store import ShopSessionStore

router = APIRouter(prefix="/checkout", tags=["Checkout"])

service = CheckoutService(get_settings())


@router.post("/start", response_model=CheckoutRead)
def start_checkout(
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Open checkout for the current cart (400 if the cart is empty).
    """
    return service.start(session, store, shop)


@router.get("", response_model=CheckoutRead)
def get_checkout(shop: ShopSession = Depends(get_shop)):
    return service.get_checkout(shop)


@router.post("/method", response_model=CheckoutRead)
def select_method(
    payload: MethodSelect,
    shop: ShopSession = Depends(get_shop),
):
    """
    Choose door or office delivery.
    """
    return service.select_method(shop, payload)


@router.post("/back", response_model=CheckoutRead)
def go_back(
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    """
    Return to method selection, discarding any pending or priced quote.
    """
    return service.back(session, store, shop)


@router.post("/edit-delivery", response_model=CheckoutRead)
def edit_delivery(
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
):
    return service.edit_delivery(session, store, shop)


@router.get("/offices", response_model=OfficeChoices)
async def office_choices(
    city_id: int = Query(),
    courier: CourierClient = Depends(get_courier),
):
    """
    Offices to pick from in a city, with the first one pre-selected.
    """
    return await service.office_choices(courier, city_id)


@router.post("/address", response_model=CheckoutRead)
async def complete_address(
    payload: AddressStep,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
    courier: CourierClient = Depends(get_courier),
):
    """
    Price door delivery and move to the summary step.

    400 lists the missing fields; 409 if a quote is already being priced.
    """
    return await service.complete_address(session, store, shop, courier, payload)


@router.post("/office", response_model=CheckoutRead)
async def complete_office(
    payload: OfficeStep,
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
    shop: ShopSession = Depends(get_shop),
    courier: CourierClient = Depends(get_courier),
):
    """
    Price pickup-office delivery and move to the summary step.
    """
    return await service.complete_office(session, store, shop, courier, payload)
