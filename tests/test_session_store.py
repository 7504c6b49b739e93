"""Shopper session persistence and session id handling."""

import json
from decimal import Decimal

from fastapi.testclient import TestClient

from storefront.courier_fallback import fallback_offices
from storefront.models.cart import ShopSession
from storefront.models.checkout import CheckoutState
from storefront.models.delivery import DeliveryMethod, DeliveryQuote
from storefront.repositories.session_repo import SessionSnapshotRepository
from storefront.schemas.courier import City
from storefront.services.session_store import ShopSessionStore

API = "/api/v1"


def fresh_store(products):
    return ShopSessionStore(SessionSnapshotRepository(), products)


class TestSnapshots:
    def test_round_trip(self, db_session, store, products):
        shop = store.get(db_session, "abc")
        shop.cart.add_item(products.get_by_id(1))
        shop.cart.add_item(products.get_by_id(7))
        shop.cart.set_quantity(7, 3)
        shop.toggle_favorite(5)
        office = fallback_offices(1)[0]
        shop.cart.delivery_quote = DeliveryQuote(
            method=DeliveryMethod.OFFICE,
            price=Decimal("5.99"),
            deadline=1,
            city=City(id=1, name="София"),
            office=office,
        )
        store.save(db_session, shop)

        restored = fresh_store(products).get(db_session, "abc")

        assert [(l.product_id, l.quantity) for l in restored.cart.lines] == [(1, 1), (7, 3)]
        assert restored.favorites == [5]
        assert restored.cart.delivery_quote.price == Decimal("5.99")
        assert restored.cart.delivery_quote.office.id == office.id
        assert restored.cart.delivery_quote.office.working_hours == "09:00 - 18:00"
        assert restored.checkout is None

    def test_payload_layout(self, products):
        shop = ShopSession("layout")
        shop.cart.add_item(products.get_by_id(2))

        data = ShopSessionStore.encode(shop)
        assert data == {
            "version": 1,
            "cart": [{"product_id": 2, "quantity": 1}],
            "favorites": [],
            "delivery_info": None,
        }

    def test_missing_snapshot_is_empty(self, db_session, store):
        shop = store.get(db_session, "nobody")
        assert shop.cart.is_empty()
        assert shop.favorites == []

    def test_version_mismatch_resets(self, db_session, products):
        payload = json.dumps({"version": 99, "cart": [{"product_id": 1, "quantity": 2}]})
        SessionSnapshotRepository().upsert(db_session, "old", 99, payload)

        shop = fresh_store(products).get(db_session, "old")

        assert shop.cart.is_empty()

    def test_unreadable_payload_resets(self, db_session, products):
        SessionSnapshotRepository().upsert(db_session, "broken", 1, "{not json")
        assert fresh_store(products).get(db_session, "broken").cart.is_empty()

    def test_invalid_quote_resets(self, db_session, products):
        payload = json.dumps(
            {
                "version": 1,
                "cart": [{"product_id": 1, "quantity": 1}],
                "favorites": [],
                "delivery_info": {"method": "door", "price": 5},
            }
        )
        SessionSnapshotRepository().upsert(db_session, "bad-quote", 1, payload)

        assert fresh_store(products).get(db_session, "bad-quote").cart.is_empty()

    def test_unknown_products_are_dropped(self, db_session, products):
        payload = json.dumps(
            {
                "version": 1,
                "cart": [{"product_id": 999, "quantity": 1}, {"product_id": 3, "quantity": 2}],
                "favorites": [4, 4],
                "delivery_info": None,
            }
        )
        SessionSnapshotRepository().upsert(db_session, "legacy", 1, payload)

        shop = fresh_store(products).get(db_session, "legacy")

        assert [(l.product_id, l.quantity) for l in shop.cart.lines] == [(3, 2)]
        assert shop.favorites == [4]

    def test_forget_reloads_from_snapshot(self, db_session, store, products):
        shop = store.get(db_session, "abc")
        shop.cart.add_item(products.get_by_id(1))
        store.save(db_session, shop)
        shop.cart.add_item(products.get_by_id(2))

        store.forget("abc")

        assert store.get(db_session, "abc").cart.item_count() == 1


class TestSessionCache:
    def test_reads_without_snapshot_are_not_cached(self, db_session, store):
        store.get(db_session, "visitor")
        assert len(store) == 0

    def test_save_caches_the_session(self, db_session, store, products):
        shop = store.get(db_session, "buyer")
        shop.cart.add_item(products.get_by_id(1))
        store.save(db_session, shop)

        assert len(store) == 1
        assert store.get(db_session, "buyer") is shop

    def test_loaded_snapshot_is_cached_once(self, db_session, products):
        seeded = ShopSession("returning")
        seeded.cart.add_item(products.get_by_id(3))
        SessionSnapshotRepository().upsert(
            db_session, "returning", 1, json.dumps(ShopSessionStore.encode(seeded))
        )
        store = fresh_store(products)

        assert store.get(db_session, "returning") is store.get(db_session, "returning")
        assert len(store) == 1

    def test_concurrent_first_loads_share_one_session(self, db_session, products, monkeypatch):
        seeded = ShopSession("race")
        seeded.cart.add_item(products.get_by_id(3))
        SessionSnapshotRepository().upsert(db_session, "race", 1, json.dumps(ShopSessionStore.encode(seeded)))
        store = fresh_store(products)
        load = store._load
        calls, rival = [], []

        def interleaved_load(session, session_id):
            # a second request for the same id completes while this load is running
            calls.append(session_id)
            if len(calls) == 1:
                rival.append(store.get(session, session_id))
            return load(session, session_id)

        monkeypatch.setattr(store, "_load", interleaved_load)

        assert store.get(db_session, "race") is rival[0]
        assert len(store) == 1

    def test_anonymous_browsing_leaves_nothing_behind(self, app, store):
        anonymous = TestClient(app)
        for _ in range(20):
            assert anonymous.get(f"{API}/products").status_code == 200
            anonymous.get(f"{API}/products/1")
            anonymous.get(f"{API}/favorites")

        assert len(store) == 0

    def test_open_checkout_survives_between_requests(self, client, store, db_session):
        client.post(f"{API}/cart", json={"product_id": 1})
        client.post(f"{API}/checkout/start")
        client.post(f"{API}/checkout/method", json={"method": "office"})

        state = store.get(db_session, "shopper-1").checkout

        assert isinstance(state, CheckoutState)
        assert client.get(f"{API}/checkout").json()["step"] == "office"


class TestSessionHeader:
    def test_generated_when_missing(self, app):
        response = TestClient(app).get(f"{API}/cart")

        assert len(response.headers["X-Session-Id"]) == 32

    def test_echoed_when_valid(self, client):
        response = client.get(f"{API}/cart")
        assert response.headers["X-Session-Id"] == "shopper-1"

    def test_replaced_when_malformed(self, client):
        response = client.get(f"{API}/cart", headers={"X-Session-Id": "not a valid id!"})
        assert response.headers["X-Session-Id"] != "not a valid id!"

    def test_cart_survives_restart(self, client, app, products):
        client.post(f"{API}/cart", json={"product_id": 7})

        app.state.session_store = fresh_store(products)

        assert client.get(f"{API}/cart").json()["item_count"] == 1
