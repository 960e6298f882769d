# catalogo/schemas/category.py
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryCreate(BaseModel):
    nombre: str = Field(..., max_length=120)

    @field_validator("nombre")
    @classmethod
    def nombre_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()


class CategoryRead(BaseModel):
    id: str
    nombre: str
    model_config = ConfigDict(from_attributes=True)
