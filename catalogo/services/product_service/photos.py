# catalogo/services/product_service/photos.py
"""Product pipelines that also touch the upload directory.

The file write and the database commit are not one transaction. Each pipeline
writes the file first and commits inside ``PhotoStorage.stage`` so a failed
commit removes the file it just wrote.
"""

import logging

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from catalogo.db.operations import commit_async, rollback_async, save_async
from catalogo.models.product import Product
from catalogo.schemas.product import ProductCreate
from catalogo.services.photo_storage import PhotoStorage
from .crud import create_product, delete_product

logger = logging.getLogger(__name__)


async def create_product_with_photo(
    db: AsyncSession,
    storage: PhotoStorage,
    payload: ProductCreate,
    upload: UploadFile,
) -> Product:
    data = await upload.read()
    async with storage.stage(upload.filename, data) as foto:
        try:
            prod = await create_product(db, payload, foto=foto)
            await commit_async(db)
        except Exception:
            await rollback_async(db)
            raise

    logger.info("Product created with photo", extra={"product_id": prod.id, "foto": foto})
    return prod


async def attach_photo(
    db: AsyncSession,
    storage: PhotoStorage,
    prod: Product,
    upload: UploadFile,
) -> Product:
    previous = prod.foto
    data = await upload.read()
    async with storage.stage(upload.filename, data) as foto:
        try:
            prod.foto = foto
            await save_async(db, prod)
            await commit_async(db)
        except Exception:
            await rollback_async(db)
            raise

    if previous and previous != foto:
        await storage.discard(previous)

    logger.info("Photo attached to product", extra={"product_id": prod.id, "foto": foto})
    return prod


async def remove_product(db: AsyncSession, storage: PhotoStorage, prod: Product) -> None:
    """Delete the product, then its photo once the delete is committed."""
    foto = prod.foto
    await delete_product(db, prod)
    await commit_async(db)
    await storage.discard(foto)
