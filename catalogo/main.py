# catalogo/main.py
"""Catalog service: owns products, categories and uploaded photos."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from catalogo.api.error_handlers import register_exception_handlers
from catalogo.api.routers import categories, products
from catalogo.core.config import Settings, settings
from catalogo.core.logging import get_logger, setup_logging
from catalogo.core.metrics import ServiceMetrics
from catalogo.db.session_async import (
    AsyncSessionLocal,
    async_engine,
    build_engine,
    build_session_factory,
    init_models,
)
from catalogo.initial_data import seed_catalog
from catalogo.middleware import ObservabilityMiddleware, PayloadLimitMiddleware
from catalogo.services.photo_storage import PhotoStorage

logger = get_logger(__name__)

# --- Metadatos de la API para la documentación ---
TAGS_METADATA = [
    {"name": "productos", "description": "CRUD de productos y subida de fotos."},
    {"name": "categorias", "description": "Categorias que se copian dentro de cada producto."},
]


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL, service="catalog", fmt=app_settings.LOG_FORMAT)
    metrics = ServiceMetrics.from_settings(app_settings, "catalog")

    if app_settings.ASYNC_DATABASE_URL == settings.ASYNC_DATABASE_URL:
        engine, session_factory = async_engine, AsyncSessionLocal
    else:
        engine = build_engine(app_settings.ASYNC_DATABASE_URL)
        session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models(engine)
        if app_settings.SEED_ON_STARTUP:
            await seed_catalog(session_factory)
        logger.info(
            "Catalog service started",
            extra={"uploads_path": app_settings.UPLOADS_PATH},
        )
        yield
        await engine.dispose()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version="0.1.0",
        description=(
            "API REST del catálogo de productos.\n\n"
            "- **Productos**: alta, edición, baja y consulta.\n"
            "- **Fotos**: subida multipart asociada a un producto."
        ),
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.session_factory = session_factory
    app.state.photo_storage = PhotoStorage(app_settings.uploads_dir)
    app.state.metrics = metrics

    # --- Middlewares ---
    app.add_middleware(PayloadLimitMiddleware, max_bytes=app_settings.MAX_REQUEST_SIZE_BYTES)
    app.add_middleware(ObservabilityMiddleware, metrics=metrics)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Ajustar en producción para mayor seguridad
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # --- Routers ---
    app.include_router(products.router)
    app.include_router(categories.router)

    @app.get("/", include_in_schema=False)
    def root():
        return {"status": "ok", "docs_url": "/docs", "redoc_url": "/redoc"}

    @app.get("/metrics", include_in_schema=False)
    def prometheus_metrics():
        body, content_type = metrics.export()
        return Response(content=body, media_type=content_type)

    return app


app = create_app()
