# storefront/repositories/session_repo.py
from datetime import datetime, timezone

from sqlmodel import Session

from storefront.models.session import SessionSnapshot


class SessionSnapshotRepository:
    """
    Key-value access to persisted shopper snapshots.
    - Pure DB operations.
    - Payload encoding lives in the session store.
    """

    def get(self, session: Session, key: str) -> SessionSnapshot | None:
        return session.get(SessionSnapshot, key)

    def upsert(self, session: Session, key: str, version: int, payload: str) -> SessionSnapshot:
        row = session.get(SessionSnapshot, key)
        if row is None:
            row = SessionSnapshot(key=key, version=version, payload=payload)
        else:
            row.version = version
            row.payload = payload
            row.updated_at = datetime.now(timezone.utc)
        session.add(row)
        session.commit()
        session.refresh(row)
        return row
