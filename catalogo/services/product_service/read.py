from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from catalogo.models.product import Product


async def list_products(db: AsyncSession, nombre: str | None = None) -> Sequence[Product]:
    stmt = select(Product)
    if nombre:
        stmt = stmt.where(Product.nombre == nombre)
    stmt = stmt.order_by(Product.create_at.desc())
    result = await db.execute(stmt)
    return result.scalars().all()


async def get_product_by_id(db: AsyncSession, product_id: str) -> Product | None:
    return await db.get(Product, product_id)


async def get_product_by_nombre(db: AsyncSession, nombre: str) -> Product | None:
    result = await db.execute(
        select(Product).where(Product.nombre == nombre).limit(1)
    )
    return result.scalars().first()
