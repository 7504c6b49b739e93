import asyncio
import json

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storefront.core.config import Settings
from storefront.database import get_session
from storefront.models import session as _session_models  # noqa: F401
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.session_repo import SessionSnapshotRepository
from storefront.routers.cart import router as cart_router
from storefront.routers.checkout import router as checkout_router
from storefront.routers.courier import router as courier_router
from storefront.routers.favorites import router as favorites_router
from storefront.routers.orders import router as orders_router
from storefront.routers.products import router as products_router
from storefront.services.courier_client import CourierClient
from storefront.services.session_store import ShopSessionStore

API = "/api/v1"


class FakeEcont:
    """
    Programmable stand-in for the Econt HTTP API.

    Service methods ("getCities", "getOffices", "calculateShipmentPrice")
    answer 503 until a reply is registered, so the client falls back by
    default.
    """

    def __init__(self):
        self.replies: dict[str, tuple[int, object, bytes | None]] = {}
        self.requests: list[httpx.Request] = []

    def reply(self, method: str, status_code: int = 200, json=None, content: bytes | None = None):
        self.replies[method] = (status_code, json, content)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # ".../NomenclaturesService.getCities.json" -> "getCities"
        method = request.url.path.rsplit("/", 1)[-1].split(".")[1]
        if method not in self.replies:
            return httpx.Response(503, json={"message": "Service unavailable"})
        status_code, body, content = self.replies[method]
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=body)

    def bodies(self, method: str) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path.endswith(f".{method}.json")
        ]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture()
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def settings():
    return Settings()


@pytest.fixture()
def econt():
    return FakeEcont()


@pytest.fixture()
def courier(settings, econt):
    client = CourierClient(settings, transport=httpx.MockTransport(econt.handle))
    yield client
    asyncio.run(client.aclose())


@pytest.fixture()
def products():
    return ProductRepository()


@pytest.fixture()
def store(products):
    return ShopSessionStore(SessionSnapshotRepository(), products)


@pytest.fixture()
def app(engine, store, courier):
    app = FastAPI()
    for router in (
        products_router,
        favorites_router,
        cart_router,
        checkout_router,
        orders_router,
        courier_router,
    ):
        app.include_router(router, prefix=API)

    app.state.session_store = store
    app.state.courier = courier

    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    return app


@pytest.fixture()
def client(app):
    client = TestClient(app)
    client.headers["X-Session-Id"] = "shopper-1"
    return client