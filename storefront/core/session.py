# storefront/core/session.py
"""
Shopper session resolution.

There are no accounts: a shopper is identified by an opaque id sent in
the `X-Session-Id` header. A request without a usable id gets a fresh
one, echoed back in the response header so the client can keep it.
"""

import re
import uuid

from fastapi import Depends, Header, Request, Response
from sqlmodel import Session

from storefront.database import get_session
from storefront.models.cart import ShopSession
from storefront.services.courier_client import CourierClient
from storefront.services.session_store import ShopSessionStore

SESSION_HEADER = "X-Session-Id"

_VALID_SESSION_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_session_store(request: Request) -> ShopSessionStore:
    """The application's session store (created in the lifespan handler)."""
    return request.app.state.session_store


def get_courier(request: Request) -> CourierClient:
    """The application's courier client (created in the lifespan handler)."""
    return request.app.state.courier


def get_session_id(
    response: Response,
    x_session_id: str | None = Header(default=None, alias=SESSION_HEADER),
) -> str:
    """
    Resolve the shopper id from the request header.

    Missing or malformed ids are replaced by a new random id.
    """
    if x_session_id and _VALID_SESSION_ID.match(x_session_id):
        session_id = x_session_id
    else:
        session_id = uuid.uuid4().hex
    response.headers[SESSION_HEADER] = session_id
    return session_id


def get_shop(
    session_id: str = Depends(get_session_id),
    session: Session = Depends(get_session),
    store: ShopSessionStore = Depends(get_session_store),
) -> ShopSession:
    """FastAPI dependency returning the caller's ShopSession."""
    return store.get(session, session_id)
