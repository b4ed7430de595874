from shaderlib import CompiledTextCache


def test_cache_get_set():
    cache = CompiledTextCache()
    assert cache.get(1) is None
    assert cache.get_stats() == (0, 0, 1)

    cache.set(1, "text")
    assert cache.get(1) == "text"
    assert 1 in cache
    assert len(cache) == 1
    assert cache.get_stats() == (1, 1, 1)


def test_cache_set_is_idempotent():
    cache = CompiledTextCache()
    cache.set(1, "first")
    cache.set(1, "second")
    assert cache.get(1) == "first"
    assert len(cache) == 1


def test_cache_disable():
    cache = CompiledTextCache()
    cache.set(1, "text")

    cache.disable()
    assert cache.get(1) is None
    assert 1 not in cache
    # Disabled lookups are not counted
    assert cache.hits == 0 and cache.misses == 0

    cache.enable()
    assert cache.get(1) == "text"


def test_cache_clear():
    cache = CompiledTextCache()
    cache.set(1, "text")
    cache.get(1)
    cache.get(2)
    cache.clear()
    assert cache.get_stats() == (0, 0, 0)

    cache.set(1, "text")
    cache.get(1)
    cache.clear(stats=False)
    assert 1 not in cache
    assert cache.get_stats() == (0, 1, 0)
