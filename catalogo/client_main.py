# catalogo/client_main.py
"""Client service: relays /api/client calls to the catalog service."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from catalogo.api.error_handlers import register_client_exception_handlers
from catalogo.api.routers import client
from catalogo.core.config import Settings, settings
from catalogo.core.logging import get_logger, setup_logging
from catalogo.core.metrics import ServiceMetrics
from catalogo.middleware import ObservabilityMiddleware, PayloadLimitMiddleware
from catalogo.services.catalog_client import CatalogClient

logger = get_logger(__name__)


def create_client_app(
    app_settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app_settings = app_settings or settings
    setup_logging(app_settings.LOG_LEVEL, service="client", fmt=app_settings.LOG_FORMAT)
    metrics = ServiceMetrics.from_settings(app_settings, "client")
    catalog_client = CatalogClient.from_settings(app_settings, transport=transport, metrics=metrics)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Client service started", extra={"catalog_base_url": catalog_client.base_url})
        yield
        await catalog_client.aclose()

    app = FastAPI(
        title=app_settings.CLIENT_PROJECT_NAME,
        version="0.1.0",
        description="Fachada que reenvía las operaciones de productos al servicio de catálogo.",
        openapi_tags=[{"name": "client", "description": "Productos vía servicio de catálogo."}],
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.catalog_client = catalog_client
    app.state.metrics = metrics

    # --- Middlewares ---
    app.add_middleware(PayloadLimitMiddleware, max_bytes=app_settings.MAX_REQUEST_SIZE_BYTES)
    app.add_middleware(ObservabilityMiddleware, metrics=metrics)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_client_exception_handlers(app)

    app.include_router(client.router)

    @app.get("/", include_in_schema=False)
    def root():
        return {"status": "ok", "catalog": catalog_client.base_url}

    @app.get("/metrics", include_in_schema=False)
    def prometheus_metrics():
        body, content_type = metrics.export()
        return Response(content=body, media_type=content_type)

    return app


app = create_client_app()
