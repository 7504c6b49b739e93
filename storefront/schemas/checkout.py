# storefront/schemas/checkout.py
from pydantic import ConfigDict
from sqlmodel import SQLModel

from storefront.models.checkout import CheckoutState, CheckoutStep
from storefront.models.delivery import DeliveryMethod
from storefront.schemas.cart import CartSummary, DeliveryQuoteRead
from storefront.schemas.courier import Office


class MethodSelect(SQLModel):
    """
    Payload for the first checkout step.
    """

    model_config = ConfigDict(extra="forbid")

    method: DeliveryMethod


class AddressStep(SQLModel):
    """
    Payload for completing door delivery.

    Fields are optional at the schema level so that the step can report
    every missing field at once.
    """

    model_config = ConfigDict(extra="forbid")

    city_id: int | None = None
    street: str = ""
    quarter: str | None = None
    notes: str | None = None
    saturday_delivery: bool = False


class OfficeStep(SQLModel):
    """
    Payload for completing pickup-office delivery.
    """

    model_config = ConfigDict(extra="forbid")

    city_id: int | None = None
    office_id: int | None = None
    saturday_delivery: bool = False


class OfficeOption(SQLModel):
    """
    One office in the picker, with its hours rendered for display.
    """

    office: Office
    working_hours: str
    saturday_hours: str
    is_kiosk: bool = False

    @classmethod
    def from_office(cls, office: Office) -> "OfficeOption":
        return cls(
            office=office,
            working_hours=office.working_hours,
            saturday_hours=office.saturday_hours,
            is_kiosk=office.is_kiosk,
        )


class OfficeChoices(SQLModel):
    """
    Offices available in a city plus the pre-selected one.
    """

    city_id: int
    offices: list[OfficeOption]
    default_office_id: int | None = None
    saturday_available: bool = False


class CheckoutRead(SQLModel):
    """
    Current checkout step with the cart it is pricing.
    """

    step: CheckoutStep
    method: DeliveryMethod | None = None
    pricing_in_flight: bool
    delivery: DeliveryQuoteRead | None = None
    cart: CartSummary

    @classmethod
    def from_state(cls, state: CheckoutState) -> "CheckoutRead":
        return cls(
            step=state.step,
            method=state.method,
            pricing_in_flight=state.pricing_in_flight,
            delivery=DeliveryQuoteRead.from_quote(state.quote) if state.quote else None,
            cart=CartSummary.from_cart(state.cart),
        )
