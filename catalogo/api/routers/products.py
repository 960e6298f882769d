"""Product endpoints of the catalog service.

Every operation has one handler. ``PRODUCT_ROUTES`` is the dispatch table:
each entry is mounted under every prefix in ``PRODUCT_PREFIXES`` plus its own
absolute aliases.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from catalogo.api.deps import get_photo_storage
from catalogo.db.operations import commit_async
from catalogo.db.session_async import get_async_db
from catalogo.models.product import Product
from catalogo.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalogo.services import product_service
from catalogo.services.exceptions import ResourceNotFoundError
from catalogo.services.photo_storage import PhotoStorage

PRODUCT_PREFIXES = ("/api/productos", "/api/v2/productos")
CANONICAL_PREFIX = "/api/v2/productos"


def _location(response: Response, product: Product) -> None:
    response.headers["Location"] = f"{CANONICAL_PREFIX}/{product.id}"


async def _get_or_404(db: AsyncSession, product_id: str) -> Product:
    prod = await product_service.get_product_by_id(db, product_id)
    if not prod:
        raise ResourceNotFoundError(f"Product {product_id} not found")
    return prod


# ---------- Lectura ----------
async def list_products(
    nombre: str | None = Query(None, description="nombre exacto del producto"),
    db: AsyncSession = Depends(get_async_db),
):
    return await product_service.list_products(db, nombre=nombre)


async def get_product(product_id: str, db: AsyncSession = Depends(get_async_db)):
    return await _get_or_404(db, product_id)


# ---------- Escritura ----------
async def create_product(
    payload: ProductCreate,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
):
    product = await product_service.create_product(db, payload)
    await commit_async(db)
    _location(response, product)
    return product


async def update_product(
    product_id: str,
    payload: ProductUpdate,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
):
    prod = await _get_or_404(db, product_id)
    updated = await product_service.update_product(db, prod, payload)
    await commit_async(db)
    _location(response, updated)
    return updated


async def delete_product(
    product_id: str,
    db: AsyncSession = Depends(get_async_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    prod = await _get_or_404(db, product_id)
    await product_service.remove_product(db, storage, prod)
    return


# ---------- Fotos ----------
async def upload_photo(
    product_id: str,
    response: Response,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_async_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    prod = await _get_or_404(db, product_id)
    updated = await product_service.attach_photo(db, storage, prod, file)
    _location(response, updated)
    return updated


def _form_payload(**fields: str | None) -> ProductCreate:
    categoria_id = fields.pop("categoria_id")
    categoria_nombre = fields.pop("categoria_nombre")
    data: dict[str, Any] = {key: value for key, value in fields.items() if value is not None}
    if categoria_id is not None or categoria_nombre is not None:
        data["categoria"] = {"id": categoria_id, "nombre": categoria_nombre}
    try:
        return ProductCreate.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


async def create_product_with_photo(
    response: Response,
    nombre: str | None = Form(None),
    precio: str | None = Form(None),
    categoria_id: str | None = Form(None, alias="categoria.id"),
    categoria_nombre: str | None = Form(None, alias="categoria.nombre"),
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_async_db),
    storage: PhotoStorage = Depends(get_photo_storage),
):
    payload = _form_payload(
        nombre=nombre,
        precio=precio,
        categoria_id=categoria_id,
        categoria_nombre=categoria_nombre,
    )
    product = await product_service.create_product_with_photo(db, storage, payload, file)
    _location(response, product)
    return product


# ---------- Tabla de rutas ----------
@dataclass(frozen=True, slots=True)
class ProductRoute:
    method: str
    path: str
    endpoint: Callable[..., Any]
    status_code: int = status.HTTP_200_OK
    response_model: Any = ProductRead
    aliases: tuple[str, ...] = field(default_factory=tuple)


PRODUCT_ROUTES: tuple[ProductRoute, ...] = (
    ProductRoute("GET", "", list_products, response_model=list[ProductRead], aliases=("/api/v3/productos",)),
    ProductRoute("GET", "/{product_id}", get_product),
    ProductRoute("POST", "", create_product, status.HTTP_201_CREATED),
    ProductRoute("PUT", "/{product_id}", update_product, status.HTTP_201_CREATED),
    ProductRoute("DELETE", "/{product_id}", delete_product, status.HTTP_204_NO_CONTENT, response_model=None),
    ProductRoute("POST", "/upload/{product_id}", upload_photo, status.HTTP_201_CREATED),
    ProductRoute("POST", "/crear", create_product_with_photo, status.HTTP_201_CREATED, aliases=("/api/productos/v2",)),
)


def build_router(routes: tuple[ProductRoute, ...] = PRODUCT_ROUTES) -> APIRouter:
    router = APIRouter(tags=["productos"])
    for route in routes:
        paths = [prefix + route.path for prefix in PRODUCT_PREFIXES] + list(route.aliases)
        for path in paths:
            router.add_api_route(
                path,
                route.endpoint,
                methods=[route.method],
                status_code=route.status_code,
                response_model=route.response_model,
            )
    return router


router = build_router()
