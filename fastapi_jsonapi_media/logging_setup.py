"""Stdout logging for apps that host the JSON:API middleware."""

from __future__ import annotations

import logging
from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send ``fastapi_jsonapi_media`` records to stdout at ``level``.

    No-op when the root logger already has handlers.
    """
    if logging.getLogger().handlers:
        return
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"plain": {"format": LOG_FORMAT}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "plain",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {"level": "WARNING", "handlers": ["stdout"]},
            "loggers": {"fastapi_jsonapi_media": {"level": level.upper()}},
        }
    )
