# catalogo/db/session_async.py
"""Async SQLAlchemy session utilities."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from catalogo.core.config import settings
from catalogo.db.base import Base

T = TypeVar("T")


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; SQLite connections are not pooled across event loops."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, poolclass=NullPool)
    return create_async_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


async_engine: AsyncEngine = build_engine(settings.ASYNC_DATABASE_URL)

AsyncSessionLocal = build_session_factory(async_engine)


async def init_models(engine: AsyncEngine) -> None:
    """Create the catalog tables if they do not exist yet."""
    import catalogo.models.product  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_async_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields an AsyncSession bound to the app's engine."""
    async with request.app.state.session_factory() as session:
        yield session


async def run_in_transaction(
    operation: Callable[[AsyncSession], Awaitable[T]],
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> T:
    """Execute an async operation within a managed transaction."""
    async with session_factory() as session:
        try:
            result = await operation(session)
            await session.commit()
            return result
        except Exception:
            await session.rollback()
            raise
