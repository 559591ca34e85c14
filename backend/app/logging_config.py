"""Application-wide logging setup.

Log records may carry context via ``extra={...}``; the keys listed in
``_DEFAULT_EXTRA_KEYS`` are appended to the line as ``key=value`` pairs.
"""

from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Iterable, Sequence

from app.config import settings

_DEFAULT_EXTRA_KEYS = (
    "path",
    "method",
    "error_code",
    "storage_unit_id",
    "sensor_reading_id",
    "shipment_id",
    "alert_id",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Formats timestamps in UTC and appends whitelisted record context."""

    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or _DEFAULT_EXTRA_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context_parts: list[str] = []
        for key in self._extra_keys:
            value = getattr(record, key, None)
            if value is None:
                continue
            context_parts.append(f"{key}={value}")
        if context_parts:
            return f"{message} | {' '.join(context_parts)}"
        return message


def configure_logging(level: str | int | None = None) -> None:
    """Install the contextual formatter on the root logger (once)."""
    global _configured
    if _configured:
        return

    log_level = level if level is not None else settings.log_level.upper()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": "app.logging_config.ContextualFormatter",
                    "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "style": "%",
                    "extra_keys": list(_DEFAULT_EXTRA_KEYS),
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "contextual",
                }
            },
            "root": {"handlers": ["default"], "level": log_level},
        }
    )

    _configured = True
