"""Health check endpoints. No DB dependency; used for liveness and readiness checks."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/ready", response_model=ReadinessResponse)
def readiness_check(request: Request) -> ReadinessResponse:
    """Report readiness and cache state.

    The service stays ready without a cache (reads fall through to the
    store), so an unavailable cache is reported but not fatal.
    """
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        state = "disabled"
    elif cache.is_available():
        state = "available"
    else:
        state = "unavailable"
    return ReadinessResponse(cache=state)
