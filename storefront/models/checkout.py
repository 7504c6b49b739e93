# storefront/models/checkout.py
"""
Checkout step flow.

    method --door--> address --complete--> summary
    method --office--> office --complete--> summary
    address/office --back--> method
    summary --edit delivery--> method

Completing a delivery step is split in two: `begin_*_pricing` checks the
guards and marks a pricing call as in flight, `finish_pricing` stores the
quote and moves to the summary. A result whose ticket no longer matches
the current attempt (the shopper went back meanwhile) is ignored.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from storefront.core.errors import (
    CheckoutValidationError,
    EmptyCartError,
    InvalidTransitionError,
    PricingInProgressError,
)
from storefront.models.cart import Cart
from storefront.models.delivery import DeliveryMethod, DeliveryQuote
from storefront.schemas.courier import City, Office


class CheckoutStep(str, Enum):
    METHOD = "method"
    ADDRESS = "address"
    OFFICE = "office"
    SUMMARY = "summary"


@dataclass(frozen=True)
class PricingTicket:
    attempt: int
    step: CheckoutStep


def default_office(offices: Sequence[Office]) -> Office | None:
    """Pre-selected pickup office: the first one in listing order."""
    return offices[0] if offices else None


class CheckoutState:
    """State of one checkout attempt for one cart."""

    def __init__(self, cart: Cart) -> None:
        if cart.is_empty():
            raise EmptyCartError()
        self.cart = cart
        self.step = CheckoutStep.METHOD
        self.method: DeliveryMethod | None = None
        self.quote: DeliveryQuote | None = None
        self.pricing_in_flight = False
        self._attempt = 0

    # ---- helpers ----

    def _require(self, action: str, *steps: CheckoutStep) -> None:
        if self.step not in steps:
            raise InvalidTransitionError(self.step.value, action)

    def _reset_to_method(self) -> None:
        self.step = CheckoutStep.METHOD
        self.method = None
        self.quote = None
        self.cart.delivery_quote = None
        self.pricing_in_flight = False
        # Any pricing call still pending now belongs to a dead attempt
        self._attempt += 1

    def _begin_pricing(self, missing: list[str]) -> PricingTicket:
        if self.pricing_in_flight:
            raise PricingInProgressError()
        if missing:
            raise CheckoutValidationError(missing, "Delivery details are incomplete")
        self.pricing_in_flight = True
        return PricingTicket(attempt=self._attempt, step=self.step)

    # ---- transitions ----

    def select_method(self, method: DeliveryMethod) -> None:
        self._require(f"select {method.value}", CheckoutStep.METHOD)
        self.method = method
        self.step = CheckoutStep.ADDRESS if method == DeliveryMethod.DOOR else CheckoutStep.OFFICE

    def back(self) -> None:
        self._require("back", CheckoutStep.ADDRESS, CheckoutStep.OFFICE)
        self._reset_to_method()

    def edit_delivery(self) -> None:
        self._require("edit delivery", CheckoutStep.SUMMARY)
        self._reset_to_method()

    def begin_address_pricing(self, street: str | None, city: City | None) -> PricingTicket:
        self._require("complete address", CheckoutStep.ADDRESS)
        missing = []
        if not (street or "").strip():
            missing.append("street")
        if city is None:
            missing.append("city")
        return self._begin_pricing(missing)

    def begin_office_pricing(self, city: City | None, office: Office | None) -> PricingTicket:
        self._require("complete office", CheckoutStep.OFFICE)
        missing = []
        if city is None:
            missing.append("city")
        if office is None:
            missing.append("office")
        return self._begin_pricing(missing)

    def is_current(self, ticket: PricingTicket) -> bool:
        return ticket.attempt == self._attempt and ticket.step == self.step

    def finish_pricing(self, ticket: PricingTicket, quote: DeliveryQuote) -> bool:
        """
        Store the quote and move to the summary.

        Returns False (and changes nothing) when the ticket is stale.
        """
        if not self.is_current(ticket):
            return False
        self.pricing_in_flight = False
        self.quote = quote
        self.cart.delivery_quote = quote
        self.step = CheckoutStep.SUMMARY
        return True

    def abort_pricing(self, ticket: PricingTicket) -> None:
        if self.is_current(ticket):
            self.pricing_in_flight = False

    @property
    def can_submit(self) -> bool:
        return self.step == CheckoutStep.SUMMARY and self.quote is not None
