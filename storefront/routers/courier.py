# storefront/routers/courier.py
"""
Proxy endpoints in front of the Econt courier API.

Upstream failures never reach the caller: the client answers from the
local directory and tariff instead.
"""

from fastapi import APIRouter, Depends, Query

from storefront.core.session import get_courier
from storefront.schemas.courier import (
    CitiesResponse,
    OfficesResponse,
    SaturdayAvailability,
    ShippingCalculateRequest,
    ShippingCalculateResponse,
)
from storefront.services.courier_client import CourierClient

router = APIRouter(prefix="/econt", tags=["Courier"])


@router.get("/cities", response_model=CitiesResponse)
async def list_cities(
    country_code: str | None = Query(default=None, alias="countryCode"),
    name: str | None = Query(default=None),
    courier: CourierClient = Depends(get_courier),
):
    """
    Cities served by the courier, optionally filtered by name.
    """
    cities = await courier.get_cities(country_code, name)
    return CitiesResponse(cities=cities)


@router.get("/offices", response_model=OfficesResponse)
async def list_offices(
    city_id: int | None = Query(default=None, alias="cityId"),
    country_code: str | None = Query(default=None, alias="countryCode"),
    courier: CourierClient = Depends(get_courier),
):
    """
    Courier offices in a city ([] for unknown cities).
    """
    offices = await courier.get_offices(city_id, country_code)
    return OfficesResponse(offices=offices)


@router.get("/saturday-availability", response_model=SaturdayAvailability)
async def saturday_availability(
    city_id: int = Query(alias="cityId"),
    courier: CourierClient = Depends(get_courier),
):
    """
    Whether any office in the city works on Saturday.
    """
    available = await courier.is_saturday_delivery_available(city_id)
    return SaturdayAvailability(city_id=city_id, available=available)


@router.post("/calculate", response_model=ShippingCalculateResponse)
async def calculate_shipping(
    payload: ShippingCalculateRequest,
    courier: CourierClient = Depends(get_courier),
):
    """
    Price a shipment (live courier price or local tariff).
    """
    return await courier.calculate(payload)
