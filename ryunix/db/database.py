"""
Database engine and session management.

One engine per process. Request handlers get a session through `get_session`;
the overlay services receive `async_session_factory` itself and open a
session per unit of work, so a slow directory lookup never holds a request
transaction open.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ryunix.config import settings
from ryunix.models.db import Base


def build_engine(url: str | None = None) -> AsyncEngine:
    """Create an async engine for `url`, defaulting to the configured database."""
    url = url or settings.database_url
    options: dict[str, Any] = {"echo": settings.debug}
    if not url.startswith("sqlite"):
        options["pool_pre_ping"] = True
    return create_async_engine(url, **options)


engine = build_engine()

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency.

    Commits when the handler returns, rolls back on a database error.
    Handlers that raise a KnownError leave nothing committed.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


async def init_db(target: AsyncEngine | None = None) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
