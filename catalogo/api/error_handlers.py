from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from catalogo.core.logging import get_logger
from catalogo.services.exceptions import (
    CatalogServiceError,
    CatalogUnavailableError,
    PhotoStorageError,
    ResourceNotFoundError,
    ServiceError,
)

logger = get_logger("catalogo.errors")

_MESSAGES = {
    "missing": "is required",
}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def field_error_messages(errors: list[dict[str, Any]]) -> list[str]:
    """Render validation errors as ``"<field> <message>"`` strings."""
    messages: list[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "form")]
        label = ".".join(loc) or "body"
        message = _MESSAGES.get(error.get("type", ""), error.get("msg", "is invalid"))
        messages.append(f"{label} {message.removeprefix('Value error, ')}")
    return messages


async def handle_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "errors": field_error_messages(list(exc.errors())),
            "timestamp": _timestamp(),
            "status": status.HTTP_400_BAD_REQUEST,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Handlers for the catalog service."""

    app.add_exception_handler(RequestValidationError, handle_validation)

    @app.exception_handler(ResourceNotFoundError)
    async def handle_not_found(_: Request, exc: ResourceNotFoundError) -> Response:
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(PhotoStorageError)
    async def handle_storage(_: Request, exc: PhotoStorageError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": exc.detail})

    @app.exception_handler(ServiceError)
    async def handle_service_error(_: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": exc.detail})


def register_client_exception_handlers(app: FastAPI) -> None:
    """Handlers for the client service: translate catalog errors."""

    app.add_exception_handler(RequestValidationError, handle_validation)

    @app.exception_handler(CatalogServiceError)
    async def handle_catalog_error(request: Request, exc: CatalogServiceError) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "error": f"product does not exist: {exc.detail}",
                    "timestamp": _timestamp(),
                    "status": status.HTTP_404_NOT_FOUND,
                },
            )
        logger.error(
            "Unhandled catalog service error",
            extra={"path": request.url.path, "status_code": exc.status_code, "detail": exc.detail},
        )
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": exc.detail})

    @app.exception_handler(CatalogUnavailableError)
    async def handle_unavailable(_: Request, exc: CatalogUnavailableError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": exc.detail})
