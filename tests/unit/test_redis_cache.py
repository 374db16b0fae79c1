"""CacheService tests with a mocked redis.asyncio client."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
import redis.asyncio as redis

from app.core.config import Settings
from app.infrastructure.cache.redis_cache import CacheService


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def cache_service(redis_client) -> CacheService:
    return CacheService(redis_client=redis_client, settings=Settings(cache_ttl_products=600))


def test_injected_client_counts_as_connected(cache_service) -> None:
    assert cache_service.is_available()
    assert not CacheService(settings=Settings()).is_available()


async def test_get_hit_decodes_json(cache_service, redis_client) -> None:
    redis_client.get.return_value = json.dumps({"id": 1, "name": "Widget", "price": "9.99"})
    assert await cache_service.get("product:id:1") == {"id": 1, "name": "Widget", "price": "9.99"}
    redis_client.get.assert_awaited_once_with("product:id:1")


async def test_get_miss_returns_none(cache_service, redis_client) -> None:
    redis_client.get.return_value = None
    assert await cache_service.get("product:id:1") is None


async def test_get_invalid_json_is_a_miss(cache_service, redis_client) -> None:
    redis_client.get.return_value = "{not json"
    assert await cache_service.get("product:id:1") is None


async def test_get_redis_error_returns_none(cache_service, redis_client) -> None:
    redis_client.get.side_effect = redis.ResponseError("WRONGTYPE")
    assert await cache_service.get("product:id:1") is None


async def test_set_uses_setex_with_default_ttl(cache_service, redis_client) -> None:
    assert await cache_service.set("product:id:1", {"id": 1}) is True
    redis_client.setex.assert_awaited_once_with("product:id:1", 600, json.dumps({"id": 1}))


async def test_set_explicit_ttl(cache_service, redis_client) -> None:
    await cache_service.set("product:id:1", {"id": 1}, ttl=30)
    assert redis_client.setex.await_args.args[1] == 30


async def test_set_none_is_never_cached(cache_service, redis_client) -> None:
    assert await cache_service.set("product:id:1", None) is False
    redis_client.setex.assert_not_awaited()


async def test_set_unserializable_value_returns_false(cache_service, redis_client) -> None:
    assert await cache_service.set("product:id:1", {"x": object()}) is False
    redis_client.setex.assert_not_awaited()


async def test_set_redis_error_returns_false(cache_service, redis_client) -> None:
    redis_client.setex.side_effect = redis.ResponseError("OOM")
    assert await cache_service.set("product:id:1", {"id": 1}) is False


async def test_delete_returns_true_even_for_missing_key(cache_service, redis_client) -> None:
    redis_client.delete.return_value = 0
    assert await cache_service.delete("product:id:1") is True
    redis_client.delete.assert_awaited_once_with("product:id:1")


async def test_delete_redis_error_returns_false(cache_service, redis_client) -> None:
    redis_client.delete.side_effect = redis.ResponseError("READONLY")
    assert await cache_service.delete("product:id:1") is False


async def test_operations_when_unavailable() -> None:
    service = CacheService(settings=Settings())
    assert await service.get("k") is None
    assert await service.set("k", 1) is False
    assert await service.delete("k") is False
    assert await service.delete_pattern("product:id:*") == 0


async def test_delete_pattern_unlinks_scanned_keys(cache_service, redis_client) -> None:
    async def scan_iter(match: str):
        assert match == "product:id:*"
        for key in ("product:id:1", "product:id:2"):
            yield key

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[2])
    pipeline_cm = MagicMock()
    pipeline_cm.__aenter__.return_value = pipe
    redis_client.scan_iter = scan_iter
    redis_client.pipeline = MagicMock(return_value=pipeline_cm)

    assert await cache_service.delete_pattern("product:id:*") == 2
    pipe.unlink.assert_called_once_with("product:id:1", "product:id:2")


async def test_disconnect_closes_client(cache_service, redis_client) -> None:
    await cache_service.disconnect()
    redis_client.aclose.assert_awaited_once()
    assert not cache_service.is_available()


def _install_clients(monkeypatch, *clients: AsyncMock) -> list[AsyncMock]:
    """Make redis.Redis(...) hand out clients in order; return the ones handed out."""
    queue = list(clients)
    handed_out: list[AsyncMock] = []

    def factory(**kwargs):
        client = queue.pop(0)
        handed_out.append(client)
        return client

    monkeypatch.setattr(redis, "Redis", factory)
    return handed_out


def _unreachable_client() -> AsyncMock:
    client = AsyncMock()
    client.ping.side_effect = redis.ConnectionError("connection refused")
    return client


async def test_connection_error_reconnects_and_retries(cache_service, redis_client, monkeypatch) -> None:
    redis_client.delete.side_effect = redis.ConnectionError("connection reset")
    fresh = AsyncMock()
    _install_clients(monkeypatch, fresh)

    assert await cache_service.delete("product:id:1") is True
    redis_client.aclose.assert_awaited_once()
    fresh.delete.assert_awaited_once_with("product:id:1")
    assert cache_service.is_available()


async def test_failed_reconnect_recovers_on_a_later_call(cache_service, redis_client, monkeypatch) -> None:
    cache_service.reconnect_interval = 0
    redis_client.delete.side_effect = redis.ConnectionError("connection reset")
    fresh = AsyncMock()
    _install_clients(monkeypatch, _unreachable_client(), fresh)

    assert await cache_service.delete("product:id:1") is False
    assert not cache_service.is_available()

    assert await cache_service.delete("product:id:1") is True
    assert cache_service.is_available()
    fresh.delete.assert_awaited_once_with("product:id:1")


async def test_no_reconnect_attempt_within_backoff(cache_service, redis_client, monkeypatch) -> None:
    redis_client.get.side_effect = redis.TimeoutError("timed out")
    handed_out = _install_clients(monkeypatch, _unreachable_client(), AsyncMock())

    assert await cache_service.get("product:id:1") is None
    assert await cache_service.get("product:id:1") is None
    assert len(handed_out) == 1


async def test_no_reconnect_after_disconnect(cache_service, monkeypatch) -> None:
    handed_out = _install_clients(monkeypatch, AsyncMock())
    await cache_service.disconnect()

    assert await cache_service.delete("product:id:1") is False
    assert handed_out == []
