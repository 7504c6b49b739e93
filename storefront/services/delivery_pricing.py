# storefront/services/delivery_pricing.py
"""
Delivery price rules used by the courier adapter.

`fallback_quote` is the local pricing formula applied whenever the courier
cannot price a parcel. It depends only on its arguments and on the date it
is given as "today", so two calls with the same inputs agree to the cent.

`normalize_quote` turns a courier pricing payload into the same shape,
filling documented defaults for missing fields.
"""

from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable

from storefront.schemas.courier import ShippingCalculateRequest, ShippingCalculateResponse

CENT = Decimal("0.01")

SAME_CITY_BASE = Decimal("5.99")
INTERCITY_BASE = Decimal("8.99")
DOOR_SURCHARGE = Decimal("2.00")
SATURDAY_SURCHARGE = Decimal("3.00")
PER_EXTRA_KG = Decimal("0.5")

EXPRESS_DEADLINE_DAYS = 1
STANDARD_DEADLINE_DAYS = 2
DEFAULT_CURRENCY = "BGN"


def round_money(amount: Decimal) -> Decimal:
    """Round half-up to whole cents."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def fallback_price(
    sender_city_id: int,
    receiver_city_id: int,
    weight_kg: Decimal | float,
    mode: str,
    saturday_delivery: bool = False,
) -> Decimal:
    price = SAME_CITY_BASE if sender_city_id == receiver_city_id else INTERCITY_BASE

    if mode == "door":
        price += DOOR_SURCHARGE

    if saturday_delivery:
        price += SATURDAY_SURCHARGE

    weight = Decimal(str(weight_kg))
    if weight > 1:
        price += PER_EXTRA_KG * (weight - 1)

    return round_money(price)


def fallback_deadline(
    receiver_city_id: int,
    express_city_ids: Iterable[int],
    saturday_delivery: bool = False,
) -> int:
    if saturday_delivery:
        return EXPRESS_DEADLINE_DAYS
    if receiver_city_id in set(express_city_ids):
        return EXPRESS_DEADLINE_DAYS
    return STANDARD_DEADLINE_DAYS


def fallback_quote(
    req: ShippingCalculateRequest,
    express_city_ids: Iterable[int],
    today: date | None = None,
) -> ShippingCalculateResponse:
    """Price a parcel locally with the fixed tariff."""
    today = today or date.today()
    deadline = fallback_deadline(req.receiver_city_id, express_city_ids, req.saturday_delivery)
    price = fallback_price(
        req.sender_city_id,
        req.receiver_city_id,
        req.weight,
        req.mode,
        req.saturday_delivery,
    )
    return ShippingCalculateResponse(
        total_price=float(price),
        currency=DEFAULT_CURRENCY,
        delivery_deadline=deadline,
        pickup_date=today,
        delivery_date=today + timedelta(days=deadline),
        saturday_delivery=req.saturday_delivery,
    )


def _first_present(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def normalize_quote(
    data: Any,
    req: ShippingCalculateRequest,
    today: date | None = None,
) -> ShippingCalculateResponse:
    """
    Build a pricing result from a courier payload.

    Raises:
        ValueError: if the payload is not an object or carries no usable
        price. Callers treat that as a malformed response.
    """
    if not isinstance(data, dict):
        raise ValueError("Courier pricing payload is not an object")

    raw_price = _first_present(data, "totalPrice", "price")
    if raw_price is None or isinstance(raw_price, bool):
        raise ValueError("Courier pricing payload has no price")
    # Decimal() raises decimal.InvalidOperation (an ArithmeticError) on junk
    try:
        price = Decimal(str(raw_price))
    except ArithmeticError as exc:
        raise ValueError(f"Unparseable courier price: {raw_price!r}") from exc
    if not price.is_finite() or price < 0:
        raise ValueError(f"Unusable courier price: {raw_price!r}")

    # 0 is a valid same-day deadline; only an absent field takes the default
    raw_deadline = _first_present(data, "deliveryDeadline", "deadline")
    deadline = STANDARD_DEADLINE_DAYS if raw_deadline is None else int(raw_deadline)

    today = today or date.today()
    pickup = data.get("pickupDate") or today.isoformat()
    pickup_date = date.fromisoformat(str(pickup)[:10])
    delivery = data.get("deliveryDate")
    delivery_date = (
        date.fromisoformat(str(delivery)[:10])
        if delivery
        else pickup_date + timedelta(days=deadline)
    )

    return ShippingCalculateResponse(
        total_price=float(round_money(price)),
        currency=data.get("currency") or DEFAULT_CURRENCY,
        delivery_deadline=deadline,
        pickup_date=pickup_date,
        delivery_date=delivery_date,
        saturday_delivery=req.saturday_delivery,
    )
