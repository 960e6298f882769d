from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalogo.db.operations import commit_async
from catalogo.db.session_async import get_async_db
from catalogo.schemas.category import CategoryCreate, CategoryRead
from catalogo.services import category_service
from catalogo.services.exceptions import ResourceNotFoundError

router = APIRouter(prefix="/api/categorias", tags=["categorias"])


@router.get("", response_model=list[CategoryRead])
async def list_categories(db: AsyncSession = Depends(get_async_db)):
    return await category_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: str, db: AsyncSession = Depends(get_async_db)):
    category = await category_service.get_category_by_id(db, category_id)
    if not category:
        raise ResourceNotFoundError(f"Category {category_id} not found")
    return category


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    db: AsyncSession = Depends(get_async_db),
):
    category = await category_service.create_category(db, payload)
    await commit_async(db)
    return category
