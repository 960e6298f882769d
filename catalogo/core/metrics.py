from __future__ import annotations

from typing import Any

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST

from catalogo.core.config import Settings

_REQUEST_LABELS = ["service", "method", "path", "status_code"]


class _NoOpMetric:
    def labels(self, *args: Any, **kwargs: Any) -> "_NoOpMetric":
        return self

    def observe(self, *_: Any, **__: Any) -> None:
        return None

    def inc(self, *_: Any, **__: Any) -> None:
        return None


class ServiceMetrics:
    """Prometheus collectors for one service, kept in their own registry.

    Each app builds its own instance from the settings it was given, so two
    apps in one process (tests, or catalog and client side by side) never
    clash on metric names.
    """

    def __init__(
        self,
        service: str,
        *,
        namespace: str = "catalogo",
        buckets: list[float] | None = None,
        enabled: bool = True,
    ) -> None:
        self.service = service
        self.enabled = enabled
        self.registry = CollectorRegistry(auto_describe=True)

        if not enabled:
            noop = _NoOpMetric()
            self.request_latency = self.request_count = self.request_errors = self.upstream_errors = noop
            return

        self.request_latency = Histogram(
            f"{namespace}_http_request_duration_seconds",
            "HTTP request latency in seconds.",
            _REQUEST_LABELS,
            buckets=buckets or Histogram.DEFAULT_BUCKETS,
            registry=self.registry,
        )
        self.request_count = Counter(
            f"{namespace}_http_requests_total",
            "Total HTTP requests processed.",
            _REQUEST_LABELS,
            registry=self.registry,
        )
        self.request_errors = Counter(
            f"{namespace}_http_errors_total",
            "Total HTTP requests resulting in 4xx/5xx.",
            _REQUEST_LABELS,
            registry=self.registry,
        )
        self.upstream_errors = Counter(
            f"{namespace}_upstream_errors_total",
            "Catalog service replies that were not 2xx, seen by the client service.",
            ["status_code"],
            registry=self.registry,
        )

    @classmethod
    def from_settings(cls, settings: Settings, service: str) -> "ServiceMetrics":
        return cls(
            service,
            namespace=settings.METRICS_NAMESPACE,
            buckets=settings.METRICS_LATENCY_BUCKETS,
            enabled=settings.METRICS_ENABLED,
        )

    def record_request(self, request, status_code: int, elapsed: float) -> None:
        labels = (self.service, request.method, normalize_path(request), str(status_code))
        self.request_count.labels(*labels).inc()
        self.request_latency.labels(*labels).observe(elapsed)
        if status_code >= 400:
            self.request_errors.labels(*labels).inc()

    def record_upstream_error(self, status_code: int) -> None:
        self.upstream_errors.labels(status_code=str(status_code)).inc()

    def export(self) -> tuple[bytes, str]:
        if not self.enabled:
            return b"", "text/plain; charset=utf-8"
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def normalize_path(request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if path:
        return path
    return request.url.path
