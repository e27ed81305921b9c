"""
Tests du cache edge du proxy de repli.
"""
from cachetools import TTLCache

from gamehub_proxy.config.settings import FallbackConfig
from gamehub_proxy.services.edge_cache import CachedResponse, EdgeCache


def test_put_and_get():
    cache = EdgeCache(ttl=300, max_entries=10)
    entry = CachedResponse(404, {"content-type": "text/plain"}, b"404: Not Found")
    cache.put("/missing", entry)
    assert cache.get("/missing") is entry
    assert cache.get("/other") is None
    assert len(cache) == 1


def test_disabled_cache_stores_nothing():
    cache = EdgeCache.from_config(FallbackConfig(cache_enabled=False))
    cache.put("/a", CachedResponse(200, {}, b"a"))
    assert cache.get("/a") is None
    assert len(cache) == 0


def test_entries_expire():
    now = [0.0]
    cache = EdgeCache(ttl=300, max_entries=10)
    cache._cache = TTLCache(maxsize=10, ttl=300, timer=lambda: now[0])
    cache.put("/a", CachedResponse(200, {}, b"a"))

    now[0] = 299
    assert cache.get("/a") is not None
    now[0] = 301
    assert cache.get("/a") is None


def test_clear():
    cache = EdgeCache(ttl=300, max_entries=10)
    cache.put("/a", CachedResponse(200, {}, b"a"))
    cache.clear()
    assert len(cache) == 0
