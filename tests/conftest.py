# tests/conftest.py
import sys
from pathlib import Path

# --- Configuración del Path ---
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import os
import tempfile

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ASYNC_DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("UPLOADS_PATH", str(Path(tempfile.gettempdir()) / "catalogo-test-uploads"))
os.environ.setdefault("SEED_ON_STARTUP", "false")

from catalogo.core.config import settings
from catalogo.client_main import create_client_app
from catalogo.db.base import Base
from catalogo.db.session_async import AsyncSessionLocal
from catalogo.main import create_app
import catalogo.models.product  # noqa: F401

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
CATALOG_BASE_URL = "http://catalog/api/v2/productos"

sync_engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})


# ---------- Fixtures ----------
@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Crea las tablas en SQLite solo una vez por sesión de tests."""
    Base.metadata.create_all(bind=sync_engine)
    yield
    Base.metadata.drop_all(bind=sync_engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with sync_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture(scope="function")
def uploads_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture(scope="function")
def catalog_app(uploads_dir: Path):
    """App del catálogo con un directorio de uploads propio por test."""
    return create_app(settings.model_copy(update={"UPLOADS_PATH": str(uploads_dir)}))


@pytest_asyncio.fixture(scope="function")
async def client(catalog_app):
    """AsyncClient enlazado a la app del catálogo."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=catalog_app), base_url="http://test") as ac:
        yield ac


def _client_service_app(transport: httpx.AsyncBaseTransport):
    return create_client_app(
        settings.model_copy(update={"CATALOG_BASE_URL": CATALOG_BASE_URL}),
        transport=transport,
    )


@pytest.fixture
def build_client_service():
    """Fábrica de apps cliente con un transporte saliente a elección."""
    return _client_service_app


@pytest_asyncio.fixture(scope="function")
async def client_service(catalog_app):
    """AsyncClient del servicio cliente; sus llamadas salientes llegan al catálogo en memoria."""
    app = _client_service_app(httpx.ASGITransport(app=catalog_app))
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    await app.state.catalog_client.aclose()


@pytest_asyncio.fixture(scope="function")
async def async_db_session() -> AsyncSession:
    """Provee una AsyncSession para pruebas asíncronas directas."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def product(client: httpx.AsyncClient) -> dict:
    """Producto base creado vía API."""
    resp = await client.post(
        "/api/v2/productos",
        json={"nombre": "Sony Notebook", "precio": 846.89, "categoria": {"id": "c-comp", "nombre": "Computación"}},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
