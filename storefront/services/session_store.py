# storefront/services/session_store.py
import json
import logging
import threading
from typing import Any

from pydantic import ValidationError
from sqlmodel import Session

from storefront.models.cart import ShopSession
from storefront.models.delivery import DeliveryQuote
from storefront.models.session import SNAPSHOT_VERSION
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.session_repo import SessionSnapshotRepository

logger = logging.getLogger(__name__)


class ShopSessionStore:
    """
    Owner of every live ShopSession.

    A session is kept in memory once it has a snapshot: after its first
    save, or when an existing snapshot is loaded. Visitors that never
    change anything are not cached, so anonymous browsing leaves nothing
    behind. Only the cart, favorites and delivery quote are persisted;
    checkout state is never written.

    One store is created per application and reaches route handlers
    through a FastAPI dependency.
    """

    def __init__(self, snapshot_repo: SessionSnapshotRepository, product_repo: ProductRepository):
        self.snapshot_repo = snapshot_repo
        self.product_repo = product_repo
        self._sessions: dict[str, ShopSession] = {}
        # sync handlers run in the threadpool
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session: Session, session_id: str) -> ShopSession:
        with self._lock:
            shop = self._sessions.get(session_id)
        if shop is not None:
            return shop

        shop = self._load(session, session_id)
        if shop is None:
            return ShopSession(session_id)

        # A concurrent first access may have cached its own copy meanwhile
        with self._lock:
            return self._sessions.setdefault(session_id, shop)

    def save(self, session: Session, shop: ShopSession) -> None:
        payload = json.dumps(self.encode(shop), ensure_ascii=False)
        self.snapshot_repo.upsert(session, shop.session_id, SNAPSHOT_VERSION, payload)
        with self._lock:
            self._sessions[shop.session_id] = shop

    def forget(self, session_id: str) -> None:
        """Drop the in-memory copy; the next access reloads the snapshot."""
        with self._lock:
            self._sessions.pop(session_id, None)

    # ---- snapshot encoding ----

    @staticmethod
    def encode(shop: ShopSession) -> dict[str, Any]:
        quote = shop.cart.delivery_quote
        return {
            "version": SNAPSHOT_VERSION,
            "cart": [
                {"product_id": line.product_id, "quantity": line.quantity}
                for line in shop.cart.lines
            ],
            "favorites": list(shop.favorites),
            "delivery_info": quote.model_dump(mode="json", by_alias=True) if quote else None,
        }

    def decode(self, session_id: str, data: Any) -> ShopSession:
        """
        Rebuild a session from a snapshot body.

        Raises:
            ValueError / TypeError / KeyError: on a body that does not match
            the current layout.
        """
        if not isinstance(data, dict):
            raise ValueError("Snapshot body is not an object")
        if data.get("version") != SNAPSHOT_VERSION:
            raise ValueError(f"Unsupported snapshot version: {data.get('version')!r}")

        shop = ShopSession(session_id)

        for row in data.get("cart") or []:
            product = self.product_repo.get_by_id(int(row["product_id"]))
            quantity = int(row["quantity"])
            if product is None:
                logger.info(f"Dropping unknown product {row['product_id']} from session {session_id}")
                continue
            if quantity <= 0:
                continue
            shop.cart.add_item(product)
            shop.cart.set_quantity(product.id, quantity)

        for product_id in data.get("favorites") or []:
            if int(product_id) not in shop.favorites:
                shop.favorites.append(int(product_id))

        delivery_info = data.get("delivery_info")
        if delivery_info and not shop.cart.is_empty():
            shop.cart.delivery_quote = DeliveryQuote.model_validate(delivery_info)

        return shop

    def _load(self, session: Session, session_id: str) -> ShopSession | None:
        """Session rebuilt from its snapshot, or None when nothing is stored."""
        row = self.snapshot_repo.get(session, session_id)
        if row is None:
            return None

        if row.version != SNAPSHOT_VERSION:
            logger.warning(
                f"Snapshot for session {session_id} has version {row.version}, "
                f"expected {SNAPSHOT_VERSION}; starting empty"
            )
            return ShopSession(session_id)

        try:
            return self.decode(session_id, json.loads(row.payload))
        except (ValidationError, ValueError, TypeError, KeyError) as e:
            logger.warning(f"Unreadable snapshot for session {session_id}; starting empty: {e!r}")
            return ShopSession(session_id)
