"""
Bookmarks Service — Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI session dependency.
How:   `build_engine()` creates the pooled async engine from Settings; the
       application factory stores the engine and its session factory on
       `app.state`. `get_db_session()` hands one session to each request,
       commits on success and rolls back on error.
Who:   Used by the storage dependency in routes and by the health check.

Connection Pooling:
    pool_size / max_overflow come from Settings (defaults 10 / 5).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
    SQLite URLs (tests, local experiments) use SQLAlchemy's default pool and
    receive none of these arguments.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookmarks_api.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine described by `settings`."""
    if settings.is_sqlite:
        return create_async_engine(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
        )

    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps attributes readable after commit, when the
    session is no longer around to lazy-load them.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Alembic reads `Base.metadata` for autogenerate.
    """
    pass


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on `app.state`
        2. Yields it to the route (through the storage dependency)
        3. On success: commits the transaction
        4. On error: rolls back, then re-raises for the global error handler
        5. Always: closes the session (returns connection to pool)
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine(engine: AsyncEngine) -> None:
    """Closes all pooled connections. Called from the lifespan on shutdown."""
    await engine.dispose()
