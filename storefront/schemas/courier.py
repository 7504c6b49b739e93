# storefront/schemas/courier.py
"""
Wire models for the courier (Econt) proxy endpoints.

Field names follow the courier's camelCase JSON; Python code uses the
snake_case attribute names. Extra upstream fields are kept so that a
live response passes through the proxy unchanged.
"""

from datetime import date, datetime
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ShipmentType = Literal["PACK", "DOCUMENT", "PALLET"]
ShippingMode = Literal["office", "door", "aps"]

DAY_MS = 86_400_000
CLOSED_LABEL = "Не работи"

# Econt sends absolute epoch instants for staffed offices; read them in local time
_COURIER_TZ = ZoneInfo("Europe/Sofia")


def format_working_hours(ms: int) -> str:
    """
    Render a business-hours value as HH:MM.

    Values within one day are offsets from midnight (86400000 is "24:00");
    larger values are epoch instants shown in Sofia time.
    """
    if ms > DAY_MS:
        return datetime.fromtimestamp(ms / 1000, tz=_COURIER_TZ).strftime("%H:%M")
    if ms == DAY_MS:
        return "24:00"
    hours, minutes = divmod(ms // 60_000, 60)
    return f"{hours:02d}:{minutes:02d}"


def format_hours_range(start: int, end: int) -> str:
    if not start and not end:
        return CLOSED_LABEL
    return f"{format_working_hours(start)} - {format_working_hours(end)}"


class CourierModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class Country(CourierModel):
    id: int | None = None
    code2: str = ""
    code3: str = ""
    name: str = ""
    name_en: str = ""
    is_eu: bool = Field(default=False, alias="isEU")


class GeoLocation(CourierModel):
    latitude: float
    longitude: float
    confidence: int | None = None


class City(CourierModel):
    id: int
    country: Country | None = None
    post_code: str = ""
    name: str
    name_en: str = ""
    region_name: str = ""
    region_name_en: str = ""
    phone_code: str = ""
    location: GeoLocation | None = None
    express_city_deliveries: bool = False


class CityRef(CourierModel):
    """City as embedded in an office address (may be partial)."""

    id: int
    name: str = ""
    post_code: str = ""


class OfficeAddress(CourierModel):
    id: int | None = None
    city: CityRef | None = None
    full_address: str = ""
    quarter: str = ""
    street: str = ""
    num: str = ""
    other: str = ""
    location: GeoLocation | None = None
    zip: str | None = None


class Office(CourierModel):
    id: int
    code: str = ""
    name: str
    name_en: str = ""
    address: OfficeAddress | None = None
    info: str = ""
    currency: str = "BGN"
    language: str = "bg"

    # Epoch instants for staffed offices; 0..86400000 marks a 24/7 kiosk
    normal_business_hours_from: int = 0
    normal_business_hours_to: int = 0
    half_day_business_hours_from: int = 0
    half_day_business_hours_to: int = 0

    shipment_types: list[str] = Field(default_factory=list)
    partner_code: str = ""
    hub_code: str = ""
    hub_name: str = ""
    hub_name_en: str = ""
    is_mps: bool = Field(default=False, alias="isMPS")
    is_aps: bool = Field(default=False, alias="isAPS")
    phones: list[str] = Field(default_factory=list)
    emails: list[str] = Field(default_factory=list)

    @property
    def is_kiosk(self) -> bool:
        return self.is_aps

    @property
    def works_saturday(self) -> bool:
        return self.half_day_business_hours_from > 0 and self.half_day_business_hours_to > 0

    @property
    def working_hours(self) -> str:
        return format_hours_range(self.normal_business_hours_from, self.normal_business_hours_to)

    @property
    def saturday_hours(self) -> str:
        return format_hours_range(self.half_day_business_hours_from, self.half_day_business_hours_to)


class CitiesResponse(CourierModel):
    cities: list[City] = Field(default_factory=list)


class OfficesResponse(CourierModel):
    offices: list[Office] = Field(default_factory=list)


class ShippingCalculateRequest(CourierModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    sender_city_id: int
    receiver_city_id: int
    weight: float = Field(ge=0)
    shipment_type: ShipmentType = "PACK"
    mode: ShippingMode = "office"
    declared_value: float = Field(default=0, ge=0)
    saturday_delivery: bool = False


class ShippingCalculateResponse(CourierModel):
    total_price: float
    currency: str = "BGN"
    delivery_deadline: int
    pickup_date: date
    delivery_date: date
    saturday_delivery: bool | None = None


class SaturdayAvailability(CourierModel):
    city_id: int
    available: bool
