# storefront/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Nothing is strictly required; every value has a local default so the
    storefront boots against SQLite and the fallback courier data.

    Useful env vars (.env):
      - DATABASE_URL (SQLite file by default, Postgres URLs also work)
      - COURIER_API_BASE (Econt services root)
      - COURIER_TIMEOUT_SECONDS
      - SENDER_CITY_ID (courier city the shop ships from)
    """

    PROJECT_NAME: str = "Rupite Greens Storefront"
    API_V1_STR: str = "/api/v1"

    # Persistence for session snapshots
    DATABASE_URL: str = "sqlite:///./storefront.db"

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Courier (Econt) integration
    COURIER_API_BASE: str = "https://ee.econt.com/services"
    COURIER_TIMEOUT_SECONDS: float = 10.0
    DEFAULT_COUNTRY_CODE: str = "BGR"

    # Sofia
    SENDER_CITY_ID: int = 1

    # Sofia, Plovdiv, Varna, Burgas
    EXPRESS_CITY_IDS: list[int] = [1, 2, 11, 12]

    # Lower bound for the parcel weight sent to pricing
    MIN_SHIPPING_WEIGHT_KG: float = 0.5

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
