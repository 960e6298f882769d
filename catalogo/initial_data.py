# catalogo/initial_data.py
"""Demo catalog data, inserted idempotently at startup or from the command line."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalogo.db.session_async import AsyncSessionLocal, async_engine, init_models, run_in_transaction
from catalogo.models.product import Category
from catalogo.schemas.category import CategoryCreate
from catalogo.schemas.product import CategoryRef, ProductCreate
from catalogo.services import category_service, product_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProductSeed:
    nombre: str
    precio: Decimal
    category_key: str


CATEGORIES: dict[str, str] = {
    "electronico": "Electrónico",
    "deporte": "Deporte",
    "computacion": "Computación",
    "muebles": "Muebles",
}

PRODUCTS: tuple[ProductSeed, ...] = (
    ProductSeed("TV Panasonic Pantalla LCD", Decimal("456.89"), "electronico"),
    ProductSeed("Sony Cámara HD Digital", Decimal("177.89"), "electronico"),
    ProductSeed("Apple iPod", Decimal("46.89"), "electronico"),
    ProductSeed("Sony Notebook", Decimal("846.89"), "computacion"),
    ProductSeed("Hewlett Packard Multifuncional", Decimal("200.89"), "computacion"),
    ProductSeed("Bianchi Bicicleta", Decimal("70.89"), "deporte"),
    ProductSeed("HP Notebook Omen 17", Decimal("2500.89"), "computacion"),
    ProductSeed("Mica Cómoda 5 Cajones", Decimal("150.89"), "muebles"),
    ProductSeed("TV Sony Bravia OLED 4K Ultra HD", Decimal("2255.89"), "electronico"),
)


async def _ensure_category(db: AsyncSession, nombre: str) -> Category:
    existing = await category_service.get_category_by_nombre(db, nombre)
    if existing:
        return existing
    return await category_service.create_category(db, CategoryCreate(nombre=nombre))


async def _seed(db: AsyncSession) -> tuple[int, int]:
    category_map: dict[str, Category] = {}
    for key, nombre in CATEGORIES.items():
        category_map[key] = await _ensure_category(db, nombre)

    created = 0
    skipped = 0
    for seed in PRODUCTS:
        if await product_service.get_product_by_nombre(db, seed.nombre):
            skipped += 1
            continue
        category = category_map[seed.category_key]
        payload = ProductCreate(
            nombre=seed.nombre,
            precio=seed.precio,
            categoria=CategoryRef(id=category.id, nombre=category.nombre),
        )
        await product_service.create_product(db, payload)
        created += 1
        logger.debug("Created product %s", seed.nombre)

    return created, skipped


async def seed_catalog(session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal) -> tuple[int, int]:
    """Insert demo categories and products; existing names are left untouched."""
    created, skipped = await run_in_transaction(_seed, session_factory)
    logger.info("Seed completed", extra={"products_created": created, "products_skipped": skipped})
    return created, skipped


async def main() -> None:
    await init_models(async_engine)
    await seed_catalog()


def run() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
