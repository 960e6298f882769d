# catalogo/db/operations.py
"""Session steps shared by the product and category services."""

import logging
from typing import Any, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

M = TypeVar("M")


async def save_async(session: AsyncSession, instance: M) -> M:
    """Stage ``instance`` and reload it so server-side values are visible."""
    session.add(instance)
    await session.flush([instance])
    await session.refresh(instance)
    return instance


async def remove_async(session: AsyncSession, instance: Any) -> None:
    await session.delete(instance)
    await session.flush()


async def commit_async(session: AsyncSession) -> None:
    await session.commit()


async def rollback_async(session: AsyncSession) -> None:
    if session.in_transaction():
        logger.warning("Rolling back open transaction")
    await session.rollback()
