# tests/test_async_db_smoke.py
from decimal import Decimal

import pytest
from sqlalchemy import func, select, text

from catalogo.db.session_async import AsyncSessionLocal, run_in_transaction
from catalogo.models.product import Product


@pytest.mark.asyncio
async def test_async_engine_executes_simple_query() -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(text("SELECT 1"))
        assert result.scalar_one() == 1


@pytest.mark.asyncio
async def test_run_in_transaction_commits_successfully() -> None:
    async def _operation(session):
        session.add(Product(nombre="Apple iPod", precio=Decimal("46.89")))
        return "ok"

    assert await run_in_transaction(_operation) == "ok"

    async with AsyncSessionLocal() as session:
        total = (await session.execute(select(func.count(Product.id)))).scalar_one()
    assert total == 1


@pytest.mark.asyncio
async def test_run_in_transaction_rolls_back_on_error() -> None:
    async def _operation(session):
        session.add(Product(nombre="Apple iPod", precio=Decimal("46.89")))
        await session.flush()
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await run_in_transaction(_operation)

    async with AsyncSessionLocal() as session:
        total = (await session.execute(select(func.count(Product.id)))).scalar_one()
    assert total == 0
