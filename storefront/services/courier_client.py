# storefront/services/courier_client.py
"""Econt courier API client with local fallbacks."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from storefront.core.config import Settings
from storefront.courier_fallback import fallback_cities, fallback_offices
from storefront.schemas.courier import (
    City,
    CitiesResponse,
    Office,
    OfficesResponse,
    ShippingCalculateRequest,
    ShippingCalculateResponse,
)
from storefront.services.delivery_pricing import fallback_quote, normalize_quote

logger = logging.getLogger(__name__)

NOMENCLATURES_PATH = "/Nomenclatures/NomenclaturesService"
SHIPMENTS_PATH = "/Shipments/ShipmentService"

# Errors that mean "the courier could not answer usefully"
UPSTREAM_ERRORS = (httpx.HTTPError, ValidationError, ValueError, TypeError, KeyError)


class CourierClient:
    """
    Client for the Econt nomenclature and pricing services.

    Every public method makes exactly one upstream request. Transport
    errors, non-2xx statuses and malformed bodies are logged and answered
    from the local directory / tariff instead; nothing is raised to callers.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            settings: Application settings (base URL, timeout, express cities)
            transport: Optional httpx transport, used by tests to stub Econt
        """
        self.settings = settings
        self.client = httpx.AsyncClient(
            base_url=settings.COURIER_API_BASE,
            timeout=settings.COURIER_TIMEOUT_SECONDS,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _post(self, path: str, body: dict[str, Any]) -> Any:
        response = await self.client.post(path, json=body)
        response.raise_for_status()
        return response.json()

    async def get_cities(self, country_code: str | None = None, name: str | None = None) -> list[City]:
        body: dict[str, Any] = {"countryCode": country_code or self.settings.DEFAULT_COUNTRY_CODE}
        if name:
            body["name"] = name

        logger.info(f"Fetching cities from Econt: {body}")
        try:
            data = await self._post(f"{NOMENCLATURES_PATH}.getCities.json", body)
            return CitiesResponse.model_validate(data).cities
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Econt getCities failed, using local directory: {e!r}")
            return fallback_cities(name)

    async def get_city(self, city_id: int, country_code: str | None = None) -> City | None:
        """Resolve a city id against the (live or fallback) directory."""
        for city in await self.get_cities(country_code):
            if city.id == city_id:
                return city
        return None

    async def get_offices(self, city_id: int | None = None, country_code: str | None = None) -> list[Office]:
        body: dict[str, Any] = {}
        if city_id:
            body["cityID"] = city_id
        if country_code:
            body["countryCode"] = country_code

        logger.info(f"Fetching offices from Econt: {body}")
        try:
            data = await self._post(f"{NOMENCLATURES_PATH}.getOffices.json", body)
            return OfficesResponse.model_validate(data).offices
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Econt getOffices failed, using local offices: {e!r}")
            return fallback_offices(city_id)

    async def is_saturday_delivery_available(self, city_id: int) -> bool:
        offices = await self.get_offices(city_id)
        return any(office.works_saturday for office in offices)

    async def calculate(self, req: ShippingCalculateRequest) -> ShippingCalculateResponse:
        """
        Price a shipment.

        One attempt against Econt, no retry. Any failure falls back to the
        local tariff, so this always returns a quote.
        """
        body = req.model_dump(by_alias=True, exclude={"saturday_delivery"})
        if req.saturday_delivery:
            body["services"] = [{"type": "PRIORITY_TIME", "timeTo": "13:00"}]

        logger.info(f"Calculating shipping with Econt: {body}")
        try:
            data = await self._post(f"{SHIPMENTS_PATH}.calculateShipmentPrice.json", body)
            return normalize_quote(data, req)
        except UPSTREAM_ERRORS as e:
            logger.warning(f"Econt pricing failed, using local tariff: {e!r}")
            return fallback_quote(req, self.settings.EXPRESS_CITY_IDS)
