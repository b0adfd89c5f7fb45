"""
Bookmarks Service — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings for an isolated app (SQLite, known API token)
    ├── memory_store: In-memory BookmarkStore fake
    ├── test_app: App wired to memory_store via dependency_overrides
    ├── test_client: Authenticated HTTPX AsyncClient
    ├── anonymous_client: HTTPX AsyncClient without credentials
    ├── sqlite_session_factory: Real async SQLAlchemy sessions on in-memory SQLite
    └── bookmarks_array: Sample rows mirroring a seeded table
"""

import os

# Must be set before any bookmarks_api import: main.py builds its default app
# from the environment at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["API_TOKEN"] = "test-api-token"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bookmarks_api.config import Settings  # noqa: E402
from bookmarks_api.database import Base, build_session_factory  # noqa: E402
from bookmarks_api.dependencies import get_bookmark_store  # noqa: E402
from bookmarks_api.main import create_app  # noqa: E402
from bookmarks_api.models.bookmark import Bookmark  # noqa: E402, F401
from bookmarks_api.storage.base import BOOKMARK_COLUMNS, BookmarkRow, BookmarkStore  # noqa: E402

TEST_API_TOKEN = "test-api-token"
AUTH_HEADERS = {"Authorization": f"Bearer {TEST_API_TOKEN}"}


# ══════════════════════════════════════════════════════════════════════════
# In-memory storage fake
# ══════════════════════════════════════════════════════════════════════════

class InMemoryBookmarkStore(BookmarkStore):
    """
    Dict-backed BookmarkStore with auto-incrementing ids.

    Rows are copied in and out so callers can never mutate stored state.
    """

    def __init__(self, rows: Optional[List[BookmarkRow]] = None):
        self._rows: Dict[int, BookmarkRow] = {}
        self._next_id = 1
        for row in rows or []:
            self._rows[row["id"]] = {column: row.get(column) for column in BOOKMARK_COLUMNS}
            self._next_id = max(self._next_id, row["id"] + 1)

    async def list_all(self) -> List[BookmarkRow]:
        return [dict(self._rows[key]) for key in sorted(self._rows)]

    async def get_by_id(self, bookmark_id: int) -> Optional[BookmarkRow]:
        row = self._rows.get(bookmark_id)
        return dict(row) if row is not None else None

    async def insert(self, fields: Dict[str, Any]) -> BookmarkRow:
        row = {
            "id": self._next_id,
            "title": fields["title"],
            "url": fields["url"],
            "description": fields.get("description"),
            "rating": fields["rating"],
        }
        self._rows[row["id"]] = row
        self._next_id += 1
        return dict(row)

    async def delete_by_id(self, bookmark_id: int) -> int:
        return 1 if self._rows.pop(bookmark_id, None) is not None else 0

    async def update_by_id(self, bookmark_id: int, fields: Dict[str, Any]) -> int:
        row = self._rows.get(bookmark_id)
        if row is None:
            return 0
        for key, value in fields.items():
            if key in BOOKMARK_COLUMNS and key != "id":
                row[key] = value
        return 1


# ══════════════════════════════════════════════════════════════════════════
# Data fixtures
# ══════════════════════════════════════════════════════════════════════════

def make_bookmarks_array() -> List[BookmarkRow]:
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": None,
            "rating": 5,
        },
    ]


@pytest.fixture
def bookmarks_array() -> List[BookmarkRow]:
    return make_bookmarks_array()


@pytest.fixture
def new_bookmark_payload() -> Dict[str, Any]:
    return {
        "title": "new bookmark test",
        "url": "http://test.com",
        "rating": "5",
        "description": "new bookmark description test...",
    }


# ══════════════════════════════════════════════════════════════════════════
# Application fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        api_token=TEST_API_TOKEN,
        log_level="WARNING",
    )


@pytest.fixture
def memory_store() -> InMemoryBookmarkStore:
    return InMemoryBookmarkStore()


@pytest.fixture
def test_app(test_settings, memory_store):
    """
    Application under test with storage replaced by `memory_store`.

    Tests that need seeded data fill `memory_store` directly.
    """
    app = create_app(test_settings)
    app.dependency_overrides[get_bookmark_store] = lambda: memory_store
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Authenticated HTTPX AsyncClient talking to the app over ASGI.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/bookmarks")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=AUTH_HEADERS,
    ) as client:
        yield client


@pytest_asyncio.fixture
async def anonymous_client(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_session_factory():
    """
    Session factory over a fresh in-memory SQLite database.

    StaticPool keeps the single in-memory connection alive across sessions,
    so rows written by one session are visible to the next.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_session_factory(engine)

    await engine.dispose()
