# storefront/schemas/order.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel

from storefront.schemas.cart import CartLineRead, DeliveryQuoteRead

PaymentMethod = Literal["card", "cash"]

REQUIRED_CONTACT_FIELDS = ("first_name", "last_name", "email", "phone")


class OrderCreate(SQLModel):
    """
    Payload for submitting the order from the checkout summary.

    Contact fields default to empty so the service can report every
    missing field together instead of failing on the first.

    Backend derives:
      - items and totals from the cart
      - delivery from the checkout quote
      - order reference
    """

    model_config = ConfigDict(extra="forbid")

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    terms_accepted: bool = False
    payment_method: PaymentMethod = "card"
    note: str | None = None

    @field_validator("first_name", "last_name", "email", "phone", mode="before")
    @classmethod
    def strip_contact(cls, v: str | None) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("note", mode="before")
    @classmethod
    def normalize_note(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None

    def missing_fields(self) -> list[str]:
        missing = [name for name in REQUIRED_CONTACT_FIELDS if not getattr(self, name)]
        if not self.terms_accepted:
            missing.append("terms_accepted")
        return missing


class OrderConfirmation(SQLModel):
    """
    Success signal returned once the order is accepted.
    """

    reference: str
    created_at: datetime
    customer_name: str
    email: str
    phone: str
    payment_method: PaymentMethod
    note: str | None = None
    items: list[CartLineRead]
    item_count: int
    delivery: DeliveryQuoteRead
    merchandise_total: float
    delivery_fee: float
    final_total: float
