from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from catalogo.db.operations import remove_async, save_async
from catalogo.models.product import Product
from catalogo.schemas.product import CategoryRef, ProductCreate, ProductUpdate


def categoria_document(categoria: CategoryRef | None) -> dict | None:
    if categoria is None:
        return None
    return categoria.model_dump()


async def create_product(db: AsyncSession, payload: ProductCreate, *, foto: str | None = None) -> Product:
    # createAt solo se asigna si no vino en el payload
    prod = Product(
        nombre=payload.nombre,
        precio=payload.precio,
        categoria=categoria_document(payload.categoria),
        create_at=payload.create_at or datetime.now(timezone.utc),
        foto=foto,
    )
    return await save_async(db, prod)


async def update_product(db: AsyncSession, prod: Product, changes: ProductUpdate) -> Product:
    prod.nombre = changes.nombre
    prod.precio = changes.precio
    prod.categoria = categoria_document(changes.categoria)

    return await save_async(db, prod)


async def delete_product(db: AsyncSession, prod: Product) -> None:
    await remove_async(db, prod)
