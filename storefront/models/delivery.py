# storefront/models/delivery.py
from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from storefront.schemas.courier import City, Office


class DeliveryMethod(str, Enum):
    DOOR = "door"
    OFFICE = "office"


class DeliveryAddress(BaseModel):
    """Street address for door delivery."""

    street: str = Field(min_length=1)
    quarter: str | None = None
    notes: str | None = None


class DeliveryQuote(BaseModel):
    """
    Priced delivery choice for the current cart.

    Exactly one of `address` / `office` is set, matching `method`:
      - door   -> address
      - office -> office
    """

    method: DeliveryMethod
    price: Decimal = Field(ge=0)
    currency: str = "BGN"
    deadline: int = Field(ge=0, description="Delivery deadline in days")
    pickup_date: date | None = None
    delivery_date: date | None = None
    saturday_delivery: bool = False

    city: City
    address: DeliveryAddress | None = None
    office: Office | None = None

    @model_validator(mode="after")
    def check_location_matches_method(self) -> "DeliveryQuote":
        if self.method == DeliveryMethod.DOOR:
            if self.address is None or self.office is not None:
                raise ValueError("door delivery requires an address and no office")
        else:
            if self.office is None or self.address is not None:
                raise ValueError("office delivery requires an office and no address")
        return self
