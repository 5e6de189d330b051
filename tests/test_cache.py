"""Tests for core/cache.py"""

import pytest

from storefront.core.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl=300, clock=clock)


def test_get_within_ttl(cache, clock):
    cache.set("products:1:12:0", ["a"])
    clock.advance(299)

    assert cache.get("products:1:12:0") == ["a"]
    assert cache.has("products:1:12:0")


def test_entry_expires_after_ttl(cache, clock):
    cache.set("categories", [1])
    clock.advance(300)

    assert cache.get("categories") is None
    assert not cache.has("categories")


def test_missing_key(cache):
    assert cache.get("nope") is None


def test_set_overwrites_and_restarts_ttl(cache, clock):
    cache.set("k", 1)
    clock.advance(200)
    cache.set("k", 2)
    clock.advance(200)

    assert cache.get("k") == 2


def test_per_entry_ttl(cache, clock):
    cache.set("short", "x", ttl=10)
    cache.set("long", "y")
    clock.advance(11)

    assert cache.get("short") is None
    assert cache.get("long") == "y"


def test_evict_expired(cache, clock):
    cache.set("a", 1, ttl=5)
    cache.set("b", 2, ttl=5)
    cache.set("c", 3)
    clock.advance(6)

    assert cache.evict_expired() == 2
    assert cache.keys() == ["c"]
    assert len(cache) == 1


def test_delete_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)

    assert cache.delete("a")
    assert not cache.delete("a")
    cache.clear()
    assert len(cache) == 0
