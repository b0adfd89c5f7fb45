"""
Bookmarks Service — FastAPI Dependencies
==========================================

What:  Per-request collaborators injected into the /bookmarks routes.

    get_settings        → Settings the app was created with (app.state)
    require_api_token   → auth gate; raises AuthenticationError (401)
    get_bookmark_store  → SQLAlchemyBookmarkStore bound to the request session

Tests replace `get_bookmark_store` through `app.dependency_overrides` to run
the routes against an in-memory store.
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.config import Settings
from bookmarks_api.database import get_db_session
from bookmarks_api.exceptions import AuthenticationError
from bookmarks_api.storage.base import BookmarkStore
from bookmarks_api.storage.sqlalchemy_store import SQLAlchemyBookmarkStore

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def require_api_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Reject the request unless it carries `Authorization: Bearer <API_TOKEN>`.

    An empty configured token rejects every request rather than letting
    everything through.
    """
    expected = settings.api_token
    supplied = credentials.credentials if credentials else ""

    if not expected or not secrets.compare_digest(supplied.encode(), expected.encode()):
        logger.warning(
            "Unauthorized request (%s bearer token)",
            "wrong" if supplied else "missing",
        )
        raise AuthenticationError()


async def get_bookmark_store(
    session: AsyncSession = Depends(get_db_session),
) -> BookmarkStore:
    return SQLAlchemyBookmarkStore(session)
