# storefront/services/checkout_service.py
import logging
from decimal import Decimal

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.core.config import Settings
from storefront.core.errors import (
    CheckoutValidationError,
    EmptyCartError,
    InvalidTransitionError,
    PricingInProgressError,
    raise_http,
)
from storefront.models.cart import Cart, ShopSession
from storefront.models.checkout import CheckoutState, PricingTicket, default_office
from storefront.models.delivery import DeliveryAddress, DeliveryMethod, DeliveryQuote
from storefront.schemas.checkout import (
    AddressStep,
    CheckoutRead,
    MethodSelect,
    OfficeChoices,
    OfficeOption,
    OfficeStep,
)
from storefront.schemas.courier import (
    City,
    Office,
    ShippingCalculateRequest,
    ShippingCalculateResponse,
    ShippingMode,
)
from storefront.services.courier_client import CourierClient
from storefront.services.delivery_pricing import round_money
from storefront.services.session_store import ShopSessionStore

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Drives the checkout steps for one shopper.

    Responsibilities:
      - open a checkout only for a non-empty cart
      - map step actions onto CheckoutState transitions
      - resolve city / office against the courier directory
      - price the parcel through the courier client and store the quote
      - persist the snapshot whenever the cart's quote changes
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    # ---- internal helpers ----

    @staticmethod
    def _require_checkout(shop: ShopSession) -> CheckoutState:
        if shop.checkout is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No checkout in progress",
            )
        return shop.checkout

    @staticmethod
    def _begin(begin, *args) -> PricingTicket:
        try:
            return begin(*args)
        except PricingInProgressError as e:
            raise_http(e, status.HTTP_409_CONFLICT)
        except (CheckoutValidationError, InvalidTransitionError) as e:
            raise_http(e)

    def _pricing_request(
        self,
        cart: Cart,
        receiver_city_id: int,
        mode: ShippingMode,
        saturday_delivery: bool,
    ) -> ShippingCalculateRequest:
        weight = max(cart.total_weight(), Decimal(str(self.settings.MIN_SHIPPING_WEIGHT_KG)))
        return ShippingCalculateRequest(
            sender_city_id=self.settings.SENDER_CITY_ID,
            receiver_city_id=receiver_city_id,
            weight=float(weight),
            shipment_type="PACK",
            mode=mode,
            declared_value=float(round_money(cart.merchandise_total())),
            saturday_delivery=saturday_delivery,
        )

    @staticmethod
    def _quote_from_result(
        result: ShippingCalculateResponse,
        method: DeliveryMethod,
        city: City,
        address: DeliveryAddress | None = None,
        office: Office | None = None,
    ) -> DeliveryQuote:
        return DeliveryQuote(
            method=method,
            price=Decimal(str(result.total_price)),
            currency=result.currency,
            deadline=result.delivery_deadline,
            pickup_date=result.pickup_date,
            delivery_date=result.delivery_date,
            saturday_delivery=bool(result.saturday_delivery),
            city=city,
            address=address,
            office=office,
        )

    def _finish(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        state: CheckoutState,
        ticket: PricingTicket,
        quote: DeliveryQuote,
    ) -> None:
        # The checkout may have been restarted or dropped while pricing ran
        if shop.checkout is not state or not state.finish_pricing(ticket, quote):
            logger.info(f"Discarding stale delivery quote for session {shop.session_id}")
            return
        store.save(session, shop)
        logger.info(
            f"Delivery priced for session {shop.session_id}: "
            f"{quote.method.value} {quote.price} {quote.currency}, {quote.deadline}d"
        )

    # ---- public operations ----

    def start(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
    ) -> CheckoutRead:
        """
        Open a new checkout attempt at the method step.

        An empty cart cannot enter checkout (400); the caller should send
        the shopper back to the catalog.
        """
        try:
            state = CheckoutState(shop.cart)
        except EmptyCartError as e:
            raise_http(e)

        shop.checkout = state
        if shop.cart.delivery_quote is not None:
            shop.cart.delivery_quote = None
            store.save(session, shop)
        return CheckoutRead.from_state(state)

    def get_checkout(self, shop: ShopSession) -> CheckoutRead:
        return CheckoutRead.from_state(self._require_checkout(shop))

    def select_method(self, shop: ShopSession, payload: MethodSelect) -> CheckoutRead:
        state = self._require_checkout(shop)
        try:
            state.select_method(payload.method)
        except InvalidTransitionError as e:
            raise_http(e)
        return CheckoutRead.from_state(state)

    def back(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
    ) -> CheckoutRead:
        state = self._require_checkout(shop)
        try:
            state.back()
        except InvalidTransitionError as e:
            raise_http(e)
        store.save(session, shop)
        return CheckoutRead.from_state(state)

    def edit_delivery(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
    ) -> CheckoutRead:
        state = self._require_checkout(shop)
        try:
            state.edit_delivery()
        except InvalidTransitionError as e:
            raise_http(e)
        store.save(session, shop)
        return CheckoutRead.from_state(state)

    async def office_choices(self, courier: CourierClient, city_id: int) -> OfficeChoices:
        """Offices in a city with the default pre-selection applied."""
        offices = await courier.get_offices(city_id)
        chosen = default_office(offices)
        return OfficeChoices(
            city_id=city_id,
            offices=[OfficeOption.from_office(o) for o in offices],
            default_office_id=chosen.id if chosen else None,
            saturday_available=any(o.works_saturday for o in offices),
        )

    async def complete_address(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        courier: CourierClient,
        payload: AddressStep,
    ) -> CheckoutRead:
        """
        Complete door delivery.

        Requires a non-empty street and a city known to the courier.
        Missing fields leave the checkout on the address step (400).
        """
        state = self._require_checkout(shop)
        city = await courier.get_city(payload.city_id) if payload.city_id else None

        ticket = self._begin(state.begin_address_pricing, payload.street, city)
        try:
            req = self._pricing_request(state.cart, city.id, "door", payload.saturday_delivery)
            result = await courier.calculate(req)
            address = DeliveryAddress(
                street=payload.street.strip(),
                quarter=(payload.quarter or "").strip() or None,
                notes=(payload.notes or "").strip() or None,
            )
            quote = self._quote_from_result(result, DeliveryMethod.DOOR, city, address=address)
            self._finish(session, store, shop, state, ticket, quote)
        finally:
            state.abort_pricing(ticket)

        return CheckoutRead.from_state(state)

    async def complete_office(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        courier: CourierClient,
        payload: OfficeStep,
    ) -> CheckoutRead:
        """
        Complete pickup-office delivery.

        Requires a city known to the courier and an office from that
        city's listing. Automated kiosks are priced with mode "aps".
        """
        state = self._require_checkout(shop)
        city = await courier.get_city(payload.city_id) if payload.city_id else None

        office = None
        if city is not None and payload.office_id is not None:
            offices = await courier.get_offices(city.id)
            office = next((o for o in offices if o.id == payload.office_id), None)

        ticket = self._begin(state.begin_office_pricing, city, office)
        try:
            mode: ShippingMode = "aps" if office.is_kiosk else "office"
            req = self._pricing_request(state.cart, city.id, mode, payload.saturday_delivery)
            result = await courier.calculate(req)
            quote = self._quote_from_result(result, DeliveryMethod.OFFICE, city, office=office)
            self._finish(session, store, shop, state, ticket, quote)
        finally:
            state.abort_pricing(ticket)

        return CheckoutRead.from_state(state)
