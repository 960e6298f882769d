"""Client service endpoints: relay every call to the catalog service.

Catalog errors propagate as ``CatalogServiceError`` and are translated by the
client app's exception handlers; only the create paths answer a downstream
400 locally, echoing the catalog's body.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Form, Response, UploadFile, status

from catalogo.api.deps import get_catalog_client
from catalogo.schemas.product import ProductRead
from catalogo.services.catalog_client import CatalogClient
from catalogo.services.exceptions import CatalogServiceError

router = APIRouter(prefix="/api/client", tags=["client"])


def _location(response: Response, product: ProductRead) -> None:
    response.headers["Location"] = f"/api/client/{product.id}"


def _bad_request_passthrough(exc: CatalogServiceError) -> Response:
    if exc.status_code != status.HTTP_400_BAD_REQUEST:
        raise exc
    return Response(
        content=exc.body,
        status_code=status.HTTP_400_BAD_REQUEST,
        media_type="application/json",
    )


@router.get("", response_model=list[ProductRead])
async def list_products(catalog: CatalogClient = Depends(get_catalog_client)):
    return await catalog.find_all()


@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: str, catalog: CatalogClient = Depends(get_catalog_client)):
    return await catalog.find_by_id(product_id)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    response: Response,
    payload: dict[str, Any] = Body(...),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    try:
        product = await catalog.save(payload)
    except CatalogServiceError as exc:
        return _bad_request_passthrough(exc)
    _location(response, product)
    return product


@router.post("/crear", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product_with_photo(
    response: Response,
    nombre: str | None = Form(None),
    precio: str | None = Form(None),
    categoria_id: str | None = Form(None, alias="categoria.id"),
    categoria_nombre: str | None = Form(None, alias="categoria.nombre"),
    file: UploadFile = File(...),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    fields = {
        "nombre": nombre,
        "precio": precio,
        "categoria.id": categoria_id,
        "categoria.nombre": categoria_nombre,
    }
    content = await file.read()
    try:
        product = await catalog.create_with_photo(
            {key: value for key, value in fields.items() if value is not None},
            file.filename or "",
            content,
            file.content_type,
        )
    except CatalogServiceError as exc:
        return _bad_request_passthrough(exc)
    _location(response, product)
    return product


@router.put("/{product_id}", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def update_product(
    product_id: str,
    response: Response,
    payload: dict[str, Any] = Body(...),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    product = await catalog.update(product_id, payload)
    _location(response, product)
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: str, catalog: CatalogClient = Depends(get_catalog_client)):
    await catalog.delete(product_id)
    return


@router.post("/upload/{product_id}", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def upload_photo(
    product_id: str,
    response: Response,
    file: UploadFile = File(...),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    content = await file.read()
    product = await catalog.upload(product_id, file.filename or "", content, file.content_type)
    _location(response, product)
    return product
