from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer, field_validator

# Numeric(12, 2) en la base; en JSON sale como número
Precio = Annotated[
    Decimal,
    Field(ge=0, max_digits=12, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


# --- Categoría embebida ---
class CategoryRef(BaseModel):
    """Denormalized category copy stored inside a product."""

    id: str | None = None
    nombre: str | None = None
    model_config = ConfigDict(from_attributes=True)


# --- Product ---
class ProductBase(BaseModel):
    nombre: str = Field(..., max_length=200)
    precio: Precio
    categoria: CategoryRef | None = None

    @field_validator("nombre")
    @classmethod
    def nombre_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()


class ProductCreate(ProductBase):
    create_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("createAt", "create_at"),
    )


class ProductUpdate(ProductBase):
    """Fields overlaid onto a stored product; id, createAt and foto are kept."""


class ProductRead(BaseModel):
    id: str
    nombre: str
    precio: Precio
    create_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("createAt", "create_at"),
        serialization_alias="createAt",
    )
    foto: str | None = None
    categoria: CategoryRef | None = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
