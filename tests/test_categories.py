# tests/test_categories.py
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_category(client: AsyncClient):
    resp = await client.post("/api/categorias", json={"nombre": "  Muebles "})
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["id"]
    assert data["nombre"] == "Muebles"


@pytest.mark.asyncio
async def test_create_category_requires_nombre(client: AsyncClient):
    resp = await client.post("/api/categorias", json={"nombre": ""})
    assert resp.status_code == 400
    assert resp.json()["errors"] == ["nombre must not be empty"]


@pytest.mark.asyncio
async def test_list_categories_sorted_by_nombre(client: AsyncClient):
    for nombre in ("Muebles", "Deporte", "Electrónico"):
        await client.post("/api/categorias", json={"nombre": nombre})

    resp = await client.get("/api/categorias")
    assert resp.status_code == 200
    assert [c["nombre"] for c in resp.json()] == ["Deporte", "Electrónico", "Muebles"]


@pytest.mark.asyncio
async def test_get_category(client: AsyncClient):
    created = (await client.post("/api/categorias", json={"nombre": "Deporte"})).json()

    resp = await client.get(f"/api/categorias/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created

    missing = await client.get("/api/categorias/no-existe")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_category_copy_is_stored_in_product(client: AsyncClient):
    categoria = (await client.post("/api/categorias", json={"nombre": "Computación"})).json()
    r = await client.post(
        "/api/v2/productos",
        json={"nombre": "HP Notebook Omen 17", "precio": 2500.00, "categoria": categoria},
    )
    assert r.status_code == 201, r.text
    assert r.json()["categoria"] == categoria
