"""Local delivery tariff and courier payload normalization."""

from datetime import date
from decimal import Decimal

import pytest

from storefront.schemas.courier import ShippingCalculateRequest
from storefront.services.delivery_pricing import (
    fallback_deadline,
    fallback_price,
    fallback_quote,
    normalize_quote,
    round_money,
)

EXPRESS = [1, 2, 11, 12]
TODAY = date(2026, 10, 19)


def request(**overrides):
    fields = {
        "sender_city_id": 1,
        "receiver_city_id": 1,
        "weight": 0.72,
        "mode": "office",
    }
    fields.update(overrides)
    return ShippingCalculateRequest(**fields)


class TestFallbackPrice:
    def test_same_city_office_light_parcel(self):
        assert fallback_price(1, 1, 0.72, "office") == Decimal("5.99")

    def test_intercity_base(self):
        assert fallback_price(1, 7, 1, "office") == Decimal("8.99")

    def test_door_and_saturday_surcharges_with_extra_weight(self):
        assert fallback_price(1, 7, 2, "door", saturday_delivery=True) == Decimal("14.49")

    def test_kiosk_mode_has_no_door_surcharge(self):
        assert fallback_price(1, 1, 0.5, "aps") == Decimal("5.99")

    def test_rounds_half_up(self):
        # 8.99 + 0.5 * 0.03 = 9.005
        assert fallback_price(1, 7, 1.03, "office") == Decimal("9.01")

    def test_deterministic(self):
        assert fallback_price(2, 16, 3.7, "door", True) == fallback_price(2, 16, 3.7, "door", True)


class TestFallbackDeadline:
    @pytest.mark.parametrize("city_id", EXPRESS)
    def test_express_cities(self, city_id):
        assert fallback_deadline(city_id, EXPRESS) == 1

    def test_other_cities(self):
        assert fallback_deadline(7, EXPRESS) == 2

    def test_saturday_forces_next_day(self):
        assert fallback_deadline(7, EXPRESS, saturday_delivery=True) == 1


class TestFallbackQuote:
    def test_full_quote(self):
        quote = fallback_quote(
            request(receiver_city_id=7, weight=2, mode="door", saturday_delivery=True),
            EXPRESS,
            today=TODAY,
        )
        assert quote.total_price == 14.49
        assert quote.currency == "BGN"
        assert quote.delivery_deadline == 1
        assert quote.pickup_date == TODAY
        assert quote.delivery_date == date(2026, 10, 20)
        assert quote.saturday_delivery is True

    def test_quote_wire_shape(self):
        body = fallback_quote(request(), EXPRESS, today=TODAY).model_dump(mode="json", by_alias=True)
        assert body["totalPrice"] == 5.99
        assert body["deliveryDeadline"] == 1
        assert body["pickupDate"] == "2026-10-19"
        assert body["deliveryDate"] == "2026-10-20"


class TestNormalizeQuote:
    def test_fills_defaults(self):
        quote = normalize_quote({"totalPrice": 7.2}, request(), today=TODAY)
        assert quote.total_price == 7.2
        assert quote.currency == "BGN"
        assert quote.delivery_deadline == 2
        assert quote.pickup_date == TODAY
        assert quote.delivery_date == date(2026, 10, 21)

    def test_accepts_price_alias_and_rounds(self):
        quote = normalize_quote({"price": "6.505", "deadline": 3}, request(), today=TODAY)
        assert quote.total_price == 6.51
        assert quote.delivery_deadline == 3

    def test_keeps_same_day_deadline(self):
        quote = normalize_quote({"totalPrice": 4.5, "deliveryDeadline": 0}, request(), today=TODAY)
        assert quote.delivery_deadline == 0
        assert quote.delivery_date == TODAY

    def test_keeps_upstream_dates(self):
        quote = normalize_quote(
            {
                "totalPrice": 9,
                "currency": "EUR",
                "deliveryDeadline": 1,
                "pickupDate": "2026-10-20T10:00:00",
                "deliveryDate": "2026-10-22",
            },
            request(),
            today=TODAY,
        )
        assert quote.currency == "EUR"
        assert quote.pickup_date == date(2026, 10, 20)
        assert quote.delivery_date == date(2026, 10, 22)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"totalPrice": None},
            {"totalPrice": "abc"},
            {"totalPrice": -1},
            {"totalPrice": True},
            ["not", "an", "object"],
        ],
    )
    def test_malformed_payload(self, payload):
        with pytest.raises(ValueError):
            normalize_quote(payload, request(), today=TODAY)


def test_round_money():
    assert round_money(Decimal("2.675")) == Decimal("2.68")
    assert round_money(Decimal("2.665")) == Decimal("2.67")
