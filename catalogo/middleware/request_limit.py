from __future__ import annotations

from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from catalogo.core.logging import get_logger
from .observability import client_ip


class PayloadLimitMiddleware(BaseHTTPMiddleware):
    """Answer 413 for bodies larger than ``max_bytes``.

    Photo uploads are the only large bodies the services accept, so the
    limit is effectively the maximum photo size.
    """

    def __init__(self, app, max_bytes: int) -> None:
        super().__init__(app)
        self.max_bytes = max_bytes
        self.logger = get_logger("catalogo.request_limit")

    async def dispatch(self, request: Request, call_next):
        declared = request.headers.get("content-length", "")
        size = int(declared) if declared.isdigit() else None
        if size is None or size <= self.max_bytes:
            # sin content-length (chunked) hay que leer el cuerpo para medirlo
            size = len(await request.body()) if size is None else size
        if size > self.max_bytes:
            return self._too_large(request, size)
        return await call_next(request)

    def _too_large(self, request: Request, size: int) -> JSONResponse:
        is_upload = request.headers.get("content-type", "").startswith("multipart/")
        self.logger.warning(
            "Payload over limit",
            extra={
                "path": request.url.path,
                "size": size,
                "max_bytes": self.max_bytes,
                "upload": is_upload,
                "client_ip": client_ip(request),
            },
        )
        detail = "Uploaded file too large." if is_upload else "Request payload too large."
        return JSONResponse({"detail": detail}, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
