"""Tests for security/rate_limit.py"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.security.rate_limit import FixedWindowCounter, RateLimitMiddleware


class TestFixedWindowCounter:

    def test_allows_up_to_limit(self):
        now = [0.0]
        counter = FixedWindowCounter(limit=2, window_seconds=60, clock=lambda: now[0])

        assert counter.hit("1.2.3.4") == (True, 1, 60.0)
        assert counter.hit("1.2.3.4")[0]
        allowed, remaining, _ = counter.hit("1.2.3.4")
        assert not allowed
        assert remaining == 0

    def test_keys_counted_separately(self):
        counter = FixedWindowCounter(limit=1, window_seconds=60, clock=lambda: 0.0)

        assert counter.hit("a")[0]
        assert counter.hit("b")[0]
        assert not counter.hit("a")[0]

    def test_window_resets(self):
        now = [0.0]
        counter = FixedWindowCounter(limit=1, window_seconds=60, clock=lambda: now[0])

        counter.hit("a")
        assert not counter.hit("a")[0]
        now[0] = 60.0
        assert counter.hit("a")[0]


def _app(limit):
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limit=limit, window_seconds=900)

    @app.get("/api/ping")
    async def ping():
        return {"pong": True}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def test_middleware_rejects_over_limit():
    client = TestClient(_app(limit=2))

    first = client.get("/api/ping")
    assert first.status_code == 200
    assert first.headers["RateLimit-Limit"] == "2"
    assert first.headers["RateLimit-Remaining"] == "1"

    assert client.get("/api/ping").status_code == 200
    rejected = client.get("/api/ping")
    assert rejected.status_code == 429
    assert rejected.json() == {"error": "Too many requests, try again later"}


def test_middleware_ignores_non_api_paths():
    client = TestClient(_app(limit=1))

    for _ in range(3):
        assert client.get("/health").status_code == 200
    assert "RateLimit-Limit" not in client.get("/health").headers


def test_expired_windows_are_swept():
    now = [0.0]
    counter = FixedWindowCounter(limit=5, window_seconds=60, clock=lambda: now[0])
    for ip in ("10.0.0.1", "10.0.0.2", "10.0.0.3"):
        counter.hit(ip)
    assert len(counter) == 3

    now[0] = 61.0
    counter.hit("10.0.0.4")

    assert len(counter) == 1


def test_evict_expired_keeps_open_windows():
    now = [0.0]
    counter = FixedWindowCounter(limit=5, window_seconds=60, clock=lambda: now[0])
    counter.hit("old")
    now[0] = 30.0
    counter.hit("recent")

    now[0] = 70.0
    assert counter.evict_expired() == 1
    assert len(counter) == 1
