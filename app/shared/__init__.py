"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    RequestIDLogFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)

__all__ = [
    "RequestIDLogFilter",
    "get_request_id",
    "reset_request_id",
    "set_request_id",
]
