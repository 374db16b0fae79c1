"""Tests for domain exceptions (error_code, message, details) and HTTP status mapping."""

import pytest

from app.core.exception_handlers import status_for_error_code
from app.domain.exceptions import (
    CacheException,
    ProductServiceException,
    ResourceNotFoundException,
    StoreException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base ProductServiceException uses class name as error_code when not provided."""
    exc = ProductServiceException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "ProductServiceException"
    assert exc.details == {}
    assert str(exc) == "Something failed"


def test_to_dict_envelope() -> None:
    exc = ProductServiceException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid price", field="price")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "price"}
    assert ValidationException("Invalid").details == {}


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("product", 42)
    assert exc.message == "no product with id 42"
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert exc.details == {"resource_type": "product", "resource_id": 42}


def test_store_exception() -> None:
    exc = StoreException("create", "connection refused")
    assert exc.error_code == "STORE_ERROR"
    assert exc.details == {"operation": "create", "reason": "connection refused"}


def test_cache_exception() -> None:
    exc = CacheException("evict", "product:id:1")
    assert exc.error_code == "CACHE_ERROR"
    assert "product:id:1" in exc.message


@pytest.mark.parametrize(
    "exc,status",
    [
        (ValidationException("bad"), 400),
        (ResourceNotFoundException("product", 1), 404),
        (StoreException("save", "boom"), 500),
        (CacheException("evict", "product:id:1"), 503),
        (ProductServiceException("other"), 400),
    ],
)
def test_each_error_maps_to_one_status(exc, status) -> None:
    assert status_for_error_code(exc.error_code) == status
