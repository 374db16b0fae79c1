"""Logging configuration for the application."""

import logging
import sys

from app.core.config import get_settings
from app.shared.context import RequestIDLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def _resolve_level(debug: bool, level_name: str) -> int:
    """DEBUG when debug is set; else the named level, falling back to INFO."""
    if debug:
        return logging.DEBUG
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level
    (INFO by default). Output goes to stdout; every record carries the
    current request ID.
    """
    settings = get_settings()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=_resolve_level(settings.debug, settings.log_level),
        format=LOG_FORMAT,
        handlers=[handler],
    )
