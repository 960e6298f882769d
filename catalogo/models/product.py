from datetime import datetime, timezone
from decimal import Decimal
import uuid

from sqlalchemy import JSON, DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from catalogo.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


# --- Categoría ---
class Category(Base):
    __tablename__ = "categorias"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    nombre: Mapped[str] = mapped_column(String(120), nullable=False, index=True)


# --- Producto ---
class Product(Base):
    __tablename__ = "productos"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    nombre: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    precio: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    create_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, nullable=False)

    # nombre generado del archivo subido: {uuid}-{nombre original saneado}
    foto: Mapped[str | None] = mapped_column(String(300), nullable=True)

    # copia desnormalizada {"id": ..., "nombre": ...}; no es una FK
    categoria: Mapped[dict | None] = mapped_column(JSON, nullable=True)
