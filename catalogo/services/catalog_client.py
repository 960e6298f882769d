"""HTTP client used by the client service to reach the catalog service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from catalogo.core.config import Settings
from catalogo.core.metrics import ServiceMetrics
from catalogo.schemas.product import ProductRead
from catalogo.services.exceptions import CatalogServiceError, CatalogUnavailableError


logger = logging.getLogger(__name__)


class CatalogClient:
    """Thin async wrapper over the catalog's product endpoints.

    Every non-2xx reply is raised as ``CatalogServiceError`` carrying the
    downstream status code and raw body; connection failures are raised as
    ``CatalogUnavailableError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: ServiceMetrics | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.metrics = metrics
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: ServiceMetrics | None = None,
    ) -> "CatalogClient":
        return cls(
            settings.CATALOG_BASE_URL,
            timeout=settings.CATALOG_TIMEOUT_SECONDS,
            transport=transport,
            metrics=metrics,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _url(self, *parts: str) -> str:
        return "/".join([self.base_url, *parts])

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            if self.metrics is not None:
                self.metrics.record_upstream_error(exc.response.status_code)
            raise _status_error(exc.response) from exc
        except httpx.HTTPError as exc:
            logger.error("Catalog service unreachable", extra={"method": method, "url": url, "error": str(exc)})
            raise CatalogUnavailableError(f"Catalog service connection error: {exc}") from exc
        return response

    async def find_all(self) -> list[ProductRead]:
        response = await self._send("GET", self.base_url)
        return [ProductRead.model_validate(item) for item in response.json()]

    async def find_by_id(self, product_id: str) -> ProductRead:
        response = await self._send("GET", self._url(product_id))
        return ProductRead.model_validate(response.json())

    async def save(self, payload: dict[str, Any]) -> ProductRead:
        response = await self._send("POST", self.base_url, json=payload)
        return ProductRead.model_validate(response.json())

    async def update(self, product_id: str, payload: dict[str, Any]) -> ProductRead:
        response = await self._send("PUT", self._url(product_id), json=payload)
        return ProductRead.model_validate(response.json())

    async def delete(self, product_id: str) -> None:
        await self._send("DELETE", self._url(product_id))

    async def upload(
        self,
        product_id: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> ProductRead:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        response = await self._send("POST", self._url("upload", product_id), files=files)
        return ProductRead.model_validate(response.json())

    async def create_with_photo(
        self,
        fields: dict[str, str],
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> ProductRead:
        files = {"file": (filename, content, content_type or "application/octet-stream")}
        response = await self._send("POST", self._url("crear"), data=fields, files=files)
        return ProductRead.model_validate(response.json())


def _status_error(response: httpx.Response) -> CatalogServiceError:
    request = response.request
    message = f"{response.status_code} {response.reason_phrase} from {request.method} {request.url}"
    logger.info(
        "Catalog service returned an error",
        extra={"status_code": response.status_code, "url": str(request.url)},
    )
    return CatalogServiceError(message, status_code=response.status_code, body=response.text)


__all__ = ["CatalogClient"]
