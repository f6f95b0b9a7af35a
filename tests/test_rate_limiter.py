import asyncio
from unittest.mock import MagicMock

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from shuvodin import rate_limiter


@pytest.fixture(autouse=True)
def clear_memory_cache():
    rate_limiter.memory_cache.clear()
    yield
    rate_limiter.memory_cache.clear()


@pytest.fixture
def redis_mock():
    client = MagicMock()
    client.get.return_value = None
    client.ttl.return_value = -2
    return client


def _request(ip: str = "10.0.0.1", forwarded: str = None) -> Request:
    headers = [(b"x-forwarded-for", forwarded.encode())] if forwarded else []
    return Request({"type": "http", "headers": headers, "client": (ip, 1234), "path": "/", "method": "POST"})


class TestCheckRateLimit:
    def test_allows_until_limit(self, redis_mock):
        results = [rate_limiter.check_rate_limit("login:1.2.3.4", 3, 60, redis_mock)[0] for _ in range(4)]
        assert results == [True, True, True, False]

    def test_keys_are_independent(self, redis_mock):
        rate_limiter.check_rate_limit("login:a", 1, 60, redis_mock)
        assert rate_limiter.check_rate_limit("login:b", 1, 60, redis_mock)[0] is True

    def test_resumes_count_from_redis(self, redis_mock):
        redis_mock.get.return_value = "5"
        redis_mock.ttl.return_value = 30

        allowed, count, ttl = rate_limiter.check_rate_limit("login:x", 5, 60, redis_mock)

        assert allowed is False
        assert count == 5
        assert 0 < ttl <= 30

    def test_syncs_count_to_redis_periodically(self, redis_mock):
        rate_limiter.check_rate_limit("signup:x", 5, 60, redis_mock)
        redis_mock.set.assert_not_called()

        rate_limiter.memory_cache["signup:x"]["last_redis_sync"] = 0
        rate_limiter.check_rate_limit("signup:x", 5, 60, redis_mock)
        redis_mock.set.assert_called_once_with("signup:x", 2, ex=60)

    def test_redis_read_failure_uses_memory(self, redis_mock):
        redis_mock.get.side_effect = ConnectionError("down")
        assert rate_limiter.check_rate_limit("login:y", 2, 60, redis_mock)[0] is True


class TestDependency:
    def test_disabled_is_a_no_op(self, monkeypatch):
        monkeypatch.setattr(rate_limiter, "RATE_LIMIT_ENABLED", False)
        assert asyncio.run(rate_limiter.rate_limit_dependency(_request(), 1, 60)) is None

    def test_raises_429_over_limit(self, monkeypatch, redis_mock):
        monkeypatch.setattr(rate_limiter, "RATE_LIMIT_ENABLED", True)
        monkeypatch.setattr(rate_limiter, "get_redis_client", lambda: redis_mock)
        limiter = rate_limiter.create_rate_limiter(limit=1, window_seconds=60, key_prefix="test")

        asyncio.run(limiter(_request()))
        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(limiter(_request()))

        assert exc_info.value.status_code == 429
        assert "Retry-After" in exc_info.value.headers

    def test_redis_unavailable_fails_closed(self, monkeypatch):
        def broken():
            raise ConnectionError("no redis")

        monkeypatch.setattr(rate_limiter, "RATE_LIMIT_ENABLED", True)
        monkeypatch.setattr(rate_limiter, "get_redis_client", broken)

        with pytest.raises(HTTPException) as exc_info:
            asyncio.run(rate_limiter.rate_limit_dependency(_request(), 5, 60))
        assert exc_info.value.status_code == 503


def test_client_ip_prefers_forwarded_header():
    assert rate_limiter.client_ip(_request(forwarded="203.0.113.9, 10.0.0.1")) == "203.0.113.9"
    assert rate_limiter.client_ip(_request(ip="192.0.2.4")) == "192.0.2.4"
