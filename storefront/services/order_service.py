# storefront/services/order_service.py
import logging
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from storefront.core.errors import CheckoutValidationError, raise_http
from storefront.models.cart import ShopSession
from storefront.schemas.cart import CartLineRead, CartSummary, DeliveryQuoteRead
from storefront.schemas.order import OrderConfirmation, OrderCreate
from storefront.services.session_store import ShopSessionStore

logger = logging.getLogger(__name__)


def generate_order_reference() -> str:
    """Opaque order token, e.g. "ORD-3F9A1C07BE"."""
    return f"ORD-{uuid.uuid4().hex[:10].upper()}"


class OrderService:
    """
    Business logic for submitting an order.

    Responsibilities:
      - check the cart, the delivery quote, contact fields and terms
      - report every missing precondition at once, changing nothing
      - on success clear the cart (and its quote), close the checkout
        and return a confirmation with a fresh order reference
    """

    def submit_order(
        self,
        session: Session,
        store: ShopSessionStore,
        shop: ShopSession,
        payload: OrderCreate,
    ) -> OrderConfirmation:
        """
        Submit the order from the checkout summary.

        Steps:
          1. Collect missing preconditions; 400 if any.
          2. Snapshot lines, quote and totals for the confirmation.
          3. Clear the cart and drop the checkout.
          4. Persist the emptied session and return the confirmation.
        """
        cart = shop.cart
        checkout = shop.checkout

        # 1) Preconditions
        missing: list[str] = []
        if cart.is_empty():
            missing.append("cart")
        if checkout is None or not checkout.can_submit or cart.delivery_quote is None:
            missing.append("delivery")
        missing.extend(payload.missing_fields())

        if missing:
            raise_http(CheckoutValidationError(missing, "Order cannot be submitted"))

        # 2) Build confirmation before the cart is emptied
        summary = CartSummary.from_cart(cart)
        confirmation = OrderConfirmation(
            reference=generate_order_reference(),
            created_at=datetime.now(timezone.utc),
            customer_name=f"{payload.first_name} {payload.last_name}",
            email=payload.email,
            phone=payload.phone,
            payment_method=payload.payment_method,
            note=payload.note,
            items=[CartLineRead.from_line(line) for line in cart.lines],
            item_count=summary.item_count,
            delivery=DeliveryQuoteRead.from_quote(cart.delivery_quote),
            merchandise_total=summary.merchandise_total,
            delivery_fee=summary.delivery_fee,
            final_total=summary.final_total,
        )

        # 3) Clear cart, quote and checkout
        shop.clear_cart()

        # 4) Persist
        store.save(session, shop)

        logger.info(
            f"Order {confirmation.reference} submitted for session {shop.session_id}: "
            f"{confirmation.item_count} items, total {confirmation.final_total:.2f}"
        )
        return confirmation
