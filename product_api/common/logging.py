"""
Logging configuration helpers.
Every entrypoint calls `configure_logging` once; modules then use named loggers.
"""

from __future__ import annotations

import logging

from product_api.common.settings import get_settings

_LOGGING_CONFIGURED = False


def configure_logging(level_name: str | None = None) -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    resolved_level = level_name or get_settings().LOG_LEVEL
    level = getattr(logging, resolved_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
