from __future__ import annotations

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from catalogo.core.logging import get_logger
from catalogo.core.metrics import ServiceMetrics, normalize_path

REQUEST_ID_HEADER = "X-Request-ID"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Times each request, records it per service and logs failed ones.

    The incoming ``X-Request-ID`` is reused (or a new one generated) and
    echoed on the response so a caller can quote it when reporting a failure.
    """

    def __init__(self, app, *, metrics: ServiceMetrics, log_4xx: bool = True) -> None:
        super().__init__(app)
        self.metrics = metrics
        self.log_4xx = log_4xx
        self.logger = get_logger(f"catalogo.requests.{metrics.service}")

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed = time.perf_counter() - start
            self.metrics.record_request(request, 500, elapsed)
            self.logger.exception("Unhandled error", extra=self._context(request, request_id, 500, elapsed))
            raise

        elapsed = time.perf_counter() - start
        self.metrics.record_request(request, response.status_code, elapsed)
        response.headers[REQUEST_ID_HEADER] = request_id

        if response.status_code >= 500:
            self.logger.error("Request failed", extra=self._context(request, request_id, response.status_code, elapsed))
        elif response.status_code >= 400 and self.log_4xx:
            self.logger.warning("Request rejected", extra=self._context(request, request_id, response.status_code, elapsed))
        return response

    @staticmethod
    def _context(request: Request, request_id: str, status_code: int, elapsed: float) -> dict:
        return {
            "request_id": request_id,
            "method": request.method,
            "path": normalize_path(request),
            "status_code": status_code,
            "duration_ms": round(elapsed * 1000, 3),
            "client_ip": client_ip(request),
        }


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None
