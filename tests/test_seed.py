# tests/test_seed.py
import httpx
import pytest
from sqlalchemy import select

from catalogo.core.config import settings
from catalogo.db.session_async import AsyncSessionLocal
from catalogo.initial_data import CATEGORIES, PRODUCTS, seed_catalog
from catalogo.main import create_app
from catalogo.models.product import Category, Product


@pytest.mark.asyncio
async def test_seed_catalog_is_idempotent():
    created, skipped = await seed_catalog(AsyncSessionLocal)
    assert (created, skipped) == (len(PRODUCTS), 0)

    created, skipped = await seed_catalog(AsyncSessionLocal)
    assert (created, skipped) == (0, len(PRODUCTS))

    async with AsyncSessionLocal() as session:
        categories = (await session.execute(select(Category))).scalars().all()
        products = (await session.execute(select(Product))).scalars().all()

    assert sorted(c.nombre for c in categories) == sorted(CATEGORIES.values())
    assert len(products) == len(PRODUCTS)
    by_nombre = {p.nombre: p for p in products}
    assert by_nombre["Bianchi Bicicleta"].categoria["nombre"] == "Deporte"
    assert all(p.create_at is not None for p in products)


@pytest.mark.asyncio
async def test_seeded_products_are_listed(client):
    await seed_catalog(AsyncSessionLocal)

    r = await client.get("/api/v3/productos")
    assert r.status_code == 200
    assert {item["nombre"] for item in r.json()} == {seed.nombre for seed in PRODUCTS}


@pytest.mark.asyncio
async def test_startup_seeds_catalog_when_enabled(uploads_dir):
    app = create_app(settings.model_copy(update={"SEED_ON_STARTUP": True, "UPLOADS_PATH": str(uploads_dir)}))

    async with app.router.lifespan_context(app):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            r = await ac.get("/api/v2/productos", params={"nombre": "Sony Cámara HD Digital"})

    assert r.status_code == 200
    assert [item["precio"] for item in r.json()] == [177.89]
