# storefront/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from storefront.core.config import get_settings
from storefront.core.session import SESSION_HEADER
from storefront.database import create_db_and_tables
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.session_repo import SessionSnapshotRepository
from storefront.services.courier_client import CourierClient
from storefront.services.session_store import ShopSessionStore

# Import models so SQLModel metadata is populated before create_all()
from storefront.models import session as _session_models  # noqa: F401


# Routers
from storefront.routers.products import router as products_router
from storefront.routers.favorites import router as favorites_router
from storefront.routers.cart import router as cart_router
from storefront.routers.checkout import router as checkout_router
from storefront.routers.orders import router as orders_router
from storefront.routers.courier import router as courier_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create the snapshot table.
      - Build the shopper session store and the courier client.

    Shutdown:
      - Close the courier HTTP client.
    """
    logger.info("Startup: preparing session snapshot storage...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise

    app.state.session_store = ShopSessionStore(SessionSnapshotRepository(), ProductRepository())
    app.state.courier = CourierClient(settings)
    logger.info(f"Startup: courier API at {settings.COURIER_API_BASE}")
    yield
    await app.state.courier.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[SESSION_HEADER],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(favorites_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(checkout_router, prefix=settings.API_V1_STR)
app.include_router(orders_router, prefix=settings.API_V1_STR)
app.include_router(courier_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "rupite-storefront"}
