# storefront/courier_fallback.py
"""
Local courier directory used when the Econt API cannot be reached.

Shapes mirror the courier's JSON so the fallback can be validated with
the same wire models as a live response.
"""

from storefront.schemas.courier import City, Office

_BULGARIA = {
    "id": 1,
    "code2": "BG",
    "code3": "BGR",
    "name": "България",
    "nameEn": "Bulgaria",
    "isEU": True,
}

# Business hours as epoch milliseconds; kiosks use day offsets
_OPENS = 1524117600000       # 09:00 Sofia
_CLOSES = 1524150000000      # 18:00 Sofia
_SATURDAY_CLOSES = 1524132000000  # 13:00 Sofia
_KIOSK_FROM = 0
_KIOSK_TO = 86400000


def _city(id_, post_code, name, name_en, region, region_en, phone_code, lat, lng, express):
    return {
        "id": id_,
        "country": _BULGARIA,
        "postCode": post_code,
        "name": name,
        "nameEn": name_en,
        "regionName": region,
        "regionNameEn": region_en,
        "phoneCode": phone_code,
        "location": {"latitude": lat, "longitude": lng},
        "expressCityDeliveries": express,
    }


_CITY_ROWS = [
    _city(1, "1000", "София", "Sofia", "София-град", "Sofia-city", "02", 42.6977, 23.3219, True),
    _city(2, "4000", "Пловдив", "Plovdiv", "Пловдив", "Plovdiv", "032", 42.1354, 24.7453, True),
    _city(7, "2850", "Петрич", "Petrich", "Благоевград", "Blagoevgrad", "0745", 41.3981, 23.2039, False),
    _city(8, "2700", "Благоевград", "Blagoevgrad", "Благоевград", "Blagoevgrad", "073", 42.0116, 23.0905, False),
    _city(9, "2800", "Сандански", "Sandanski", "Благоевград", "Blagoevgrad", "0746", 41.5667, 23.2833, False),
    _city(10, "2820", "Рупите", "Rupite", "Благоевград", "Blagoevgrad", "0745", 41.4167, 23.25, False),
    _city(11, "9000", "Варна", "Varna", "Варна", "Varna", "052", 43.2141, 27.9147, True),
    _city(12, "8000", "Бургас", "Burgas", "Бургас", "Burgas", "056", 42.5048, 27.4626, True),
    _city(13, "7000", "Русе", "Ruse", "Русе", "Ruse", "082", 43.8564, 25.9656, False),
    _city(14, "6000", "Стара Загора", "Stara Zagora", "Стара Загора", "Stara Zagora", "042", 42.4258, 25.6342, False),
    _city(15, "3000", "Враца", "Vratsa", "Враца", "Vratsa", "092", 43.2103, 23.5628, False),
    _city(16, "5000", "Велико Търново", "Veliko Tarnovo", "Велико Търново", "Veliko Tarnovo", "062", 43.0757, 25.6172, False),
]


def _office(id_, code, name, name_en, city, street, num, info, phones, emails, kiosk=False):
    return {
        "id": id_,
        "code": code,
        "name": name,
        "nameEn": name_en,
        "address": {
            "id": None,
            "city": {"id": city["id"], "name": city["name"], "postCode": city["postCode"]},
            "fullAddress": f"{city['name']} {street} {num}",
            "quarter": "",
            "street": street,
            "num": num,
            "other": "",
            "location": {**city["location"], "confidence": 3},
            "zip": None,
        },
        "info": info,
        "currency": "BGN",
        "language": "bg",
        "normalBusinessHoursFrom": _KIOSK_FROM if kiosk else _OPENS,
        "normalBusinessHoursTo": _KIOSK_TO if kiosk else _CLOSES,
        "halfDayBusinessHoursFrom": _KIOSK_FROM if kiosk else _OPENS,
        "halfDayBusinessHoursTo": _KIOSK_TO if kiosk else _SATURDAY_CLOSES,
        "shipmentTypes": ["courier", "post"],
        "partnerCode": "",
        "hubCode": city["postCode"],
        "hubName": city["name"],
        "hubNameEn": city["nameEn"],
        "isMPS": False,
        "isAPS": kiosk,
        "phones": phones,
        "emails": emails,
    }


_CITIES_BY_ID = {row["id"]: row for row in _CITY_ROWS}

_OFFICE_ROWS: dict[int, list[dict]] = {
    1: [
        _office(
            101, "1000", "София - Център", "Sofia - Center", _CITIES_BY_ID[1],
            "ул. Витоша", "1", "Офис София Център",
            ["+359 2 123 456"], ["sofia@econt.com"],
        ),
        _office(
            102, "1001", "Автомат София Мол", "Sofia Mall Automat", _CITIES_BY_ID[1],
            "бул. Александър Стамболийски", "101", "Автомат 24/7",
            [], [], kiosk=True,
        ),
    ],
    7: [
        _office(
            701, "2850", "Петрич - Център", "Petrich - Center", _CITIES_BY_ID[7],
            "ул. Цар Борис III", "15", "Офис Петрич",
            ["+359 745 123 456"], ["petrich@econt.com"],
        ),
    ],
    8: [
        _office(
            801, "2700", "Благоевград - Център", "Blagoevgrad - Center", _CITIES_BY_ID[8],
            "ул. Македония", "12", "Офис Благоевград",
            ["+359 73 123 456"], ["blagoevgrad@econt.com"],
        ),
    ],
}


def fallback_cities(name_filter: str | None = None) -> list[City]:
    """
    Return the local city directory, optionally filtered by a
    case-insensitive substring of the name, English name or region.
    """
    rows = _CITY_ROWS
    if name_filter:
        needle = name_filter.lower()
        rows = [
            row
            for row in rows
            if needle in row["name"].lower()
            or needle in row["nameEn"].lower()
            or needle in row["regionName"].lower()
        ]
    return [City.model_validate(row) for row in rows]


def fallback_offices(city_id: int | None) -> list[Office]:
    """Return the local office list for a city; unknown ids get []."""
    return [Office.model_validate(row) for row in _OFFICE_ROWS.get(city_id or 0, [])]
