"""Application configuration with strict environment validation."""

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file.

    A single instance is built at startup and handed to ``create_app`` /
    ``create_client_app``; components receive the values they need through
    their constructors instead of reading the module-level object.
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- API metadata ---
    PROJECT_NAME: str = "Catalogo de Productos"
    CLIENT_PROJECT_NAME: str = "Catalogo de Productos - Cliente"

    # --- Database ---
    DATABASE_URL: str = "sqlite:///./catalogo.db"
    ASYNC_DATABASE_URL: str | None = None
    SEED_ON_STARTUP: bool = False

    # --- Uploads ---
    UPLOADS_PATH: str = "./uploads"
    MAX_REQUEST_SIZE_BYTES: int = 10 * 1024 * 1024  # 10MB default

    # --- Client service ---
    CATALOG_BASE_URL: str = "http://127.0.0.1:8000/api/v2/productos"
    CATALOG_TIMEOUT_SECONDS: float = 10.0

    # --- Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json | text
    METRICS_ENABLED: bool = True
    METRICS_NAMESPACE: str = "catalogo"
    METRICS_LATENCY_BUCKETS: list[float] = Field(default_factory=lambda: [0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0])

    @field_validator("UPLOADS_PATH")
    @classmethod
    def validate_uploads_path(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("UPLOADS_PATH must point to a directory.")
        return value.strip()

    @field_validator("CATALOG_BASE_URL")
    @classmethod
    def validate_catalog_base_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError("CATALOG_BASE_URL must be an http(s) URL.")
        return value.rstrip("/")

    @field_validator("CATALOG_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("CATALOG_TIMEOUT_SECONDS must be positive.")
        return value

    @field_validator("MAX_REQUEST_SIZE_BYTES")
    @classmethod
    def validate_request_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("MAX_REQUEST_SIZE_BYTES must be positive.")
        return value

    @field_validator("METRICS_LATENCY_BUCKETS", mode="before")
    @classmethod
    def validate_metric_buckets(cls, value: str | list[float] | None) -> list[float]:
        if isinstance(value, str):
            value = [item.strip() for item in value.split(",") if item.strip()]
        floats: list[float] = []
        for item in value or []:
            try:
                floats.append(float(item))
            except (TypeError, ValueError):
                continue
        return floats or [0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0]

    @model_validator(mode="after")
    def ensure_async_database_url(self) -> "Settings":
        """Ensure an async URL is always available."""
        if not self.ASYNC_DATABASE_URL:
            self.ASYNC_DATABASE_URL = self._derive_async_url(self.DATABASE_URL)
        if not self.ASYNC_DATABASE_URL:
            raise ValueError(f"Could not derive async database URL from: {self.DATABASE_URL}")
        return self

    @staticmethod
    def _derive_async_url(url: str | None) -> str | None:
        """Best-effort conversion from sync to async driver."""
        if not url:
            return None
        if "+asyncpg" in url or "+aiosqlite" in url:
            return url
        if url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        if url.startswith("sqlite:"):
            return url.replace("sqlite:", "sqlite+aiosqlite:", 1)
        if "://" not in url:
            return url

        scheme, rest = url.split("://", 1)
        if scheme.startswith("postgres"):
            return f"postgresql+asyncpg://{rest}"
        return url

    @property
    def uploads_dir(self) -> Path:
        return Path(self.UPLOADS_PATH)


settings = Settings()
