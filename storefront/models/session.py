# storefront/models/session.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field

# Bump when the snapshot payload layout changes
SNAPSHOT_VERSION = 1


class SessionSnapshot(SQLModel, table=True):
    """
    Persisted shopper state, one row per session id.

    `payload` is JSON:
      {"version": 1, "cart": [{"product_id", "quantity"}],
       "favorites": [int], "delivery_info": DeliveryQuote | null}
    """

    __tablename__ = "session_snapshots"

    key: str = Field(
        primary_key=True,
        max_length=64,
        description="Shopper session id",
    )

    version: int = Field(default=SNAPSHOT_VERSION)

    payload: str = Field(description="JSON snapshot body")

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
