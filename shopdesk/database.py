"""
ShopDesk Backend: Store and Session Management
===============================================

What:  The Store (async engine + session factory), the declarative Base and
       the FastAPI session dependency.
How:   The application factory constructs one Store per app and keeps it on
       `app.state.store`. `get_db_session` pulls it from there, so a test can
       hand the app a Store pointing at a throwaway database.
When:  Store is created with the app; sessions are created per request.

Architecture Decision:
    We use async SQLAlchemy (with the aiosqlite driver) because:
    1. Non-blocking I/O: a slow statement doesn't block other requests
    2. Natural fit with FastAPI's async request handling
    3. Every value reaches SQL as a bound parameter through SQLAlchemy
       expressions; no statement is built by string concatenation

Schema:
    `create_schema()` runs `metadata.create_all`, which only issues CREATE
    TABLE for tables that are missing. Existing tables are never altered.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with a single metadata
    object, which `Store.create_schema()` uses to create the tables.
    """
    pass


class Store:
    """
    Owns the engine and session factory for one database.

    Lifecycle:
        1. Constructed by create_app() from Settings.database_url
        2. create_schema() runs once during app startup
        3. session() is entered once per request (via get_db_session)
        4. dispose() closes pooled connections at shutdown
    """

    def __init__(self, database_url: str, echo: bool = False, pool_pre_ping: bool = True):
        self.database_url = database_url
        self.engine = create_async_engine(
            database_url,
            pool_pre_ping=pool_pre_ping,
            # Echo SQL only in DEBUG mode
            echo=echo,
        )
        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> None:
        """Create any missing tables. Safe to call on every startup."""
        # Models must be imported so their tables are registered on Base.metadata
        from shopdesk import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        The connection is always returned to the pool, even if commit or
        rollback fails.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()


def describe_error(exc: SQLAlchemyError) -> str:
    """
    Return the driver's own error text for a failed statement.

    SQLAlchemy wraps DBAPI errors and appends the SQL and a documentation
    link to str(); clients only get the original driver message.
    """
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/getBills")
        async def list_bills(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    store: Store = request.app.state.store
    async with store.session() as session:
        yield session
