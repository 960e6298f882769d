from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalogo.db.operations import save_async
from catalogo.models.product import Category
from catalogo.schemas.category import CategoryCreate


async def list_categories(db: AsyncSession) -> Sequence[Category]:
    result = await db.execute(select(Category).order_by(Category.nombre))
    return result.scalars().all()


async def get_category_by_id(db: AsyncSession, category_id: str) -> Category | None:
    return await db.get(Category, category_id)


async def get_category_by_nombre(db: AsyncSession, nombre: str) -> Category | None:
    stmt = select(Category).where(Category.nombre == nombre).limit(1)
    result = await db.execute(stmt)
    return result.scalars().first()


# El nombre no es único: dos categorías pueden compartirlo.
async def create_category(db: AsyncSession, payload: CategoryCreate) -> Category:
    category = Category(nombre=payload.nombre)
    return await save_async(db, category)
