"""Tests for the TTL cache."""

from src.utils.cache import TTLCache


class FakeTimer:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_hit_then_expire():
    timer = FakeTimer()
    cache = TTLCache(timer=timer)
    cache.set("k", {"v": 1}, ttl=300)
    
    timer.now += 299
    assert cache.get("k") == {"v": 1}
    
    timer.now += 1
    assert cache.get("k") is None
    assert len(cache) == 0


def test_missing_key():
    cache = TTLCache()
    assert cache.get("absent") is None
    assert cache.stats["misses"] == 1


def test_overwrite_resets_ttl():
    timer = FakeTimer()
    cache = TTLCache(timer=timer)
    cache.set("k", "old", ttl=10)
    timer.now += 8
    cache.set("k", "new", ttl=10)
    timer.now += 8
    assert cache.get("k") == "new"


def test_delete_and_clear():
    cache = TTLCache()
    cache.set("a", 1, ttl=60)
    cache.set("b", 2, ttl=60)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert len(cache) == 0
    assert cache.stats["hits"] == 0


def test_eviction_prefers_expired_then_oldest():
    timer = FakeTimer()
    cache = TTLCache(max_size=4, timer=timer)
    cache.set("short", 0, ttl=1)
    for i in range(3):
        timer.now += 1
        cache.set(f"k{i}", i, ttl=100)
    
    timer.now += 1
    cache.set("k3", 3, ttl=100)
    assert cache.get("short") is None
    assert len(cache) == 4
    
    timer.now += 1
    cache.set("k4", 4, ttl=100)
    assert cache.get("k0") is None
    assert cache.get("k4") == 4


def test_stats_hit_rate():
    cache = TTLCache()
    cache.set("k", 1, ttl=60)
    cache.get("k")
    cache.get("k")
    cache.get("missing")
    stats = cache.stats
    assert stats["hits"] == 2
    assert stats["misses"] == 1
    assert stats["hit_rate"] == 66.7
