"""
Tests for the in-memory command cache.
"""

from voice_commands.protocols import CommandCache
from voice_commands.repositories import MemoryCommandCache


def test_satisfies_protocol(cache):
    assert isinstance(cache, CommandCache)


def test_get_returns_fresh_payload(cache):
    cache.put("ventas de hoy", {"id": 1})

    assert cache.get("ventas de hoy") == {"id": 1}
    assert cache.get("ventas de ayer") is None


def test_expired_entry_is_absent_but_kept(cache, clock):
    cache.put("ventas de hoy", {"id": 1})
    clock.advance(300)

    assert cache.get("ventas de hoy") is None
    assert "ventas de hoy" in cache
    stats = cache.get_stats()
    assert stats["total_entries"] == 1
    assert stats["fresh_entries"] == 0


def test_fifty_first_insert_evicts_oldest(cache):
    """Capacity is enforced FIFO, reads do not refresh entries."""
    for i in range(50):
        cache.put(f"comando {i}", i)
    cache.get("comando 0")

    cache.put("comando 50", 50)

    assert len(cache) == 50
    assert "comando 0" not in cache
    assert cache.get("comando 1") == 1
    assert cache.get("comando 50") == 50


def test_reinsert_moves_key_without_eviction(clock):
    cache = MemoryCommandCache(ttl=300, max_size=2, clock=clock)
    cache.put("a", 1)
    cache.put("b", 2)

    cache.put("a", 3)
    assert cache.keys() == ["b", "a"]
    assert cache.get("a") == 3

    cache.put("c", 4)
    assert cache.keys() == ["a", "c"]


def test_reinsert_refreshes_timestamp(cache, clock):
    cache.put("ventas de hoy", 1)
    clock.advance(200)
    cache.put("ventas de hoy", 2)
    clock.advance(200)

    assert cache.get("ventas de hoy") == 2


def test_clear_returns_count(cache):
    cache.put("a b c", 1)
    cache.put("d e f", 2)

    assert cache.clear() == 2
    assert len(cache) == 0


def test_defaults_come_from_settings():
    cache = MemoryCommandCache.create()

    assert cache.ttl == 300
    assert cache.max_size == 50
