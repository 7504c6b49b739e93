"""Courier client against a stubbed Econt API, and the proxy endpoints."""

import asyncio

from storefront.courier_fallback import fallback_offices
from storefront.schemas.courier import (
    CLOSED_LABEL,
    ShippingCalculateRequest,
    format_hours_range,
    format_working_hours,
)

API = "/api/v1"


def calc_request(**overrides):
    fields = {
        "sender_city_id": 1,
        "receiver_city_id": 7,
        "weight": 2,
        "mode": "door",
        "declared_value": 30.3,
    }
    fields.update(overrides)
    return ShippingCalculateRequest(**fields)


class TestCities:
    def test_live_cities(self, courier, econt):
        econt.reply("getCities", json={"cities": [{"id": 41, "name": "Лом", "postCode": "3600"}]})

        cities = asyncio.run(courier.get_cities())

        assert [c.name for c in cities] == ["Лом"]
        assert econt.bodies("getCities") == [{"countryCode": "BGR"}]

    def test_name_filter_is_sent_upstream(self, courier, econt):
        econt.reply("getCities", json={"cities": []})
        asyncio.run(courier.get_cities("BGR", "Рупите"))
        assert econt.bodies("getCities")[0]["name"] == "Рупите"

    def test_failure_uses_local_directory(self, courier):
        cities = asyncio.run(courier.get_cities())
        assert len(cities) == 12
        assert {1, 2, 11, 12} <= {c.id for c in cities if c.express_city_deliveries}

    def test_local_directory_filters_by_name(self, courier):
        assert [c.id for c in asyncio.run(courier.get_cities(name="sofia"))] == [1]
        assert [c.id for c in asyncio.run(courier.get_cities(name="благоев"))] == [7, 8, 9, 10]

    def test_malformed_body_uses_local_directory(self, courier, econt):
        econt.reply("getCities", json={"cities": [{"name": "no id"}]})
        assert len(asyncio.run(courier.get_cities())) == 12

    def test_get_city(self, courier):
        assert asyncio.run(courier.get_city(10)).name == "Рупите"
        assert asyncio.run(courier.get_city(999)) is None


class TestOffices:
    def test_live_offices_keep_unknown_fields(self, courier, econt):
        econt.reply(
            "getOffices",
            json={"offices": [{"id": 5, "name": "Лом", "isAPS": True, "clientNumber": "x1"}]},
        )

        offices = asyncio.run(courier.get_offices(41))

        assert offices[0].is_kiosk
        assert offices[0].model_dump(by_alias=True)["clientNumber"] == "x1"
        assert econt.bodies("getOffices") == [{"cityID": 41}]

    def test_fallback_offices(self, courier):
        offices = asyncio.run(courier.get_offices(1))
        assert [o.id for o in offices] == [101, 102]
        assert [o.is_kiosk for o in offices] == [False, True]

    def test_unknown_city_has_no_offices(self, courier):
        assert asyncio.run(courier.get_offices(999)) == []

    def test_saturday_availability(self, courier):
        assert asyncio.run(courier.is_saturday_delivery_available(1)) is True
        assert asyncio.run(courier.is_saturday_delivery_available(2)) is False


class TestCalculate:
    def test_live_price(self, courier, econt):
        econt.reply("calculateShipmentPrice", json={"totalPrice": 11.4, "deliveryDeadline": 1})

        quote = asyncio.run(courier.calculate(calc_request()))

        assert quote.total_price == 11.4
        assert quote.delivery_deadline == 1
        body = econt.bodies("calculateShipmentPrice")[0]
        assert body["senderCityId"] == 1
        assert body["receiverCityId"] == 7
        assert body["shipmentType"] == "PACK"
        assert "services" not in body
        assert "saturdayDelivery" not in body

    def test_saturday_adds_priority_time_service(self, courier, econt):
        econt.reply("calculateShipmentPrice", json={"totalPrice": 12})
        asyncio.run(courier.calculate(calc_request(saturday_delivery=True)))
        body = econt.bodies("calculateShipmentPrice")[0]
        assert body["services"] == [{"type": "PRIORITY_TIME", "timeTo": "13:00"}]

    def test_server_error_uses_local_tariff(self, courier, econt):
        econt.reply("calculateShipmentPrice", status_code=500, json={"error": "boom"})
        quote = asyncio.run(courier.calculate(calc_request(saturday_delivery=True)))
        assert quote.total_price == 14.49
        assert quote.delivery_deadline == 1

    def test_invalid_json_uses_local_tariff(self, courier, econt):
        econt.reply("calculateShipmentPrice", content=b"<html>maintenance</html>")
        assert asyncio.run(courier.calculate(calc_request())).total_price == 11.49

    def test_missing_price_uses_local_tariff(self, courier, econt):
        econt.reply("calculateShipmentPrice", json={"currency": "BGN"})
        assert asyncio.run(courier.calculate(calc_request())).total_price == 11.49

    def test_one_attempt_per_call(self, courier, econt):
        asyncio.run(courier.calculate(calc_request()))
        assert len(econt.bodies("calculateShipmentPrice")) == 1


class TestWorkingHours:
    def test_epoch_instants_in_local_time(self):
        assert format_working_hours(1524117600000) == "09:00"
        assert format_working_hours(1524150000000) == "18:00"

    def test_day_offsets(self):
        assert format_working_hours(0) == "00:00"
        assert format_working_hours(30_600_000) == "08:30"
        assert format_working_hours(86_400_000) == "24:00"

    def test_closed(self):
        assert format_hours_range(0, 0) == CLOSED_LABEL

    def test_office_hours(self):
        office, kiosk = fallback_offices(1)
        assert office.working_hours == "09:00 - 18:00"
        assert office.saturday_hours == "09:00 - 13:00"
        assert kiosk.working_hours == "00:00 - 24:00"


class TestCourierEndpoints:
    def test_cities(self, client):
        response = client.get(f"{API}/econt/cities", params={"name": "Варна"})
        assert response.status_code == 200
        cities = response.json()["cities"]
        assert cities[0]["id"] == 11
        assert cities[0]["nameEn"] == "Varna"
        assert cities[0]["country"]["isEU"] is True

    def test_offices(self, client):
        offices = client.get(f"{API}/econt/offices", params={"cityId": 1}).json()["offices"]
        assert [o["id"] for o in offices] == [101, 102]
        assert offices[1]["isAPS"] is True

    def test_offices_unknown_city(self, client):
        assert client.get(f"{API}/econt/offices", params={"cityId": 999}).json() == {"offices": []}

    def test_saturday_availability(self, client):
        data = client.get(f"{API}/econt/saturday-availability", params={"cityId": 7}).json()
        assert data == {"cityId": 7, "available": True}

    def test_calculate(self, client):
        response = client.post(
            f"{API}/econt/calculate",
            json={
                "senderCityId": 1,
                "receiverCityId": 7,
                "weight": 2,
                "mode": "door",
                "saturdayDelivery": True,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["totalPrice"] == 14.49
        assert data["deliveryDeadline"] == 1
        assert data["currency"] == "BGN"

    def test_calculate_rejects_negative_weight(self, client):
        response = client.post(
            f"{API}/econt/calculate",
            json={"senderCityId": 1, "receiverCityId": 7, "weight": -1},
        )
        assert response.status_code == 422
