"""Database module.

This module provides async SQLAlchemy engine and session factories
for the reference user store.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.ext.asyncio import create_async_engine

from authflow.abstract.entity import Entity

from .config import get_settings


def create_engine(url: str | None = None, **kwargs) -> AsyncEngine:
    """Create an async engine.

    Args:
        url: Database URL. Defaults to the configured one.
        **kwargs: Extra ``create_async_engine`` options.

    Returns:
        A new AsyncEngine.
    """
    settings = get_settings()
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(url or settings.database_url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create all entity tables (use migrations in production)."""
    # Registers User with Entity.metadata
    from authflow.domains.auth import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Entity.metadata.create_all)


@asynccontextmanager
async def get_session_context(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session that commits on success and rolls back on error.

    Example:
        async with get_session_context(session_factory) as session:
            auth_service = AuthService(UserRepository(session), ...)
            await auth_service.register(data)
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
