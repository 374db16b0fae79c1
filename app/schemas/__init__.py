"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.product import (
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)

__all__ = [
    "HealthResponse",
    "ProductCreateRequest",
    "ProductResponse",
    "ProductUpdateRequest",
    "ReadinessResponse",
]
