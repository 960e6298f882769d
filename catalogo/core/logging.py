"""Structured logging shared by the catalog and client services."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "service"}


class ServiceFilter(logging.Filter):
    """Stamps every record with the name of the service that emitted it."""

    def __init__(self, service: str) -> None:
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields are emitted at top level."""

    def format(self, record: logging.LogRecord) -> str:
        document: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", None),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED and key not in document:
                document[key] = value
        if record.exc_info:
            document["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(document, default=str, ensure_ascii=False)


_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(service)s %(name)s: %(message)s"


def setup_logging(level_name: str = "INFO", *, service: str = "catalog", fmt: str = "json") -> None:
    """Configure the root logger for one service process."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    formatter: dict[str, Any] = {"()": JsonFormatter} if fmt == "json" else {"format": _TEXT_FORMAT}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"service": {"()": ServiceFilter, "service": service}},
            "formatters": {"default": formatter},
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["service"],
                }
            },
            "root": {"handlers": ["default"], "level": level},
            "loggers": {
                "uvicorn.error": {"level": level},
                "uvicorn.access": {"handlers": ["default"], "level": level, "propagate": False},
                # httpx registra cada request saliente en INFO
                "httpx": {"level": max(level, logging.WARNING)},
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
