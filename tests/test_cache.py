"""Tests for the TTL cache."""

from portwatch.infrastructure.cache import TTLCache


def make_cache(clock, timeout: float = 10.0, max_size: int = 100) -> TTLCache[str, int]:
    return TTLCache(timeout=timeout, max_size=max_size, clock=clock)


class TestExpiry:
    def test_value_returned_before_timeout(self, clock):
        cache = make_cache(clock)
        cache.set("a", 1)
        clock.advance(9.9)
        assert cache.get("a") == 1

    def test_value_returned_exactly_at_timeout(self, clock):
        """Expiry is strictly greater-than the timeout."""
        cache = make_cache(clock)
        cache.set("a", 1)
        clock.advance(10.0)
        assert cache.get("a") == 1
        assert cache.has("a")

    def test_value_expires_after_timeout(self, clock):
        cache = make_cache(clock)
        cache.set("a", 1)
        clock.advance(10.01)
        assert cache.get("a") is None

    def test_get_evicts_stale_entry(self, clock):
        cache = make_cache(clock)
        cache.set("a", 1)
        clock.advance(11)
        assert cache.size() == 1
        cache.get("a")
        assert cache.size() == 0

    def test_has_evicts_stale_entry(self, clock):
        cache = make_cache(clock)
        cache.set("a", 1)
        clock.advance(11)
        assert not cache.has("a")
        assert len(cache) == 0

    def test_missing_key(self, clock):
        cache = make_cache(clock)
        assert cache.get("missing") is None
        assert not cache.has("missing")


class TestMutation:
    def test_set_overwrites_and_restamps(self, clock):
        cache = make_cache(clock)
        cache.set("a", 1)
        clock.advance(8)
        cache.set("a", 2)
        clock.advance(8)
        assert cache.get("a") == 2

    def test_delete_and_clear(self, clock):
        cache = make_cache(clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.delete("a")
        cache.delete("not-there")
        assert cache.get("a") is None
        assert cache.get("b") == 2
        cache.clear()
        assert cache.size() == 0


class TestCleanup:
    def test_cleanup_on_empty_cache(self, clock):
        cache = make_cache(clock)
        assert cache.cleanup() == 0
        assert cache.cleanup() == 0

    def test_cleanup_removes_expired(self, clock):
        cache = make_cache(clock)
        cache.set("old", 1)
        clock.advance(6)
        cache.set("new", 2)
        clock.advance(6)
        assert cache.cleanup() == 1
        assert cache.get("new") == 2
        assert cache.size() == 1

    def test_cleanup_evicts_oldest_over_max_size(self, clock):
        cache = make_cache(clock, max_size=2)
        for index, key in enumerate(["a", "b", "c", "d"]):
            cache.set(key, index)
            clock.advance(1)

        assert cache.size() == 4
        assert cache.cleanup() == 2
        assert cache.size() == 2
        assert cache.get("a") is None
        assert cache.get("b") is None
        assert cache.get("c") == 2
        assert cache.get("d") == 3

    def test_cleanup_expires_before_trimming(self, clock):
        cache = make_cache(clock, timeout=5, max_size=2)
        cache.set("stale1", 0)
        cache.set("stale2", 0)
        clock.advance(6)
        cache.set("fresh1", 1)
        clock.advance(1)
        cache.set("fresh2", 2)

        cache.cleanup()
        assert cache.size() == 2
        assert cache.has("fresh1")
        assert cache.has("fresh2")

    def test_cleanup_is_idempotent(self, clock):
        cache = make_cache(clock, max_size=1)
        cache.set("a", 1)
        clock.advance(1)
        cache.set("b", 2)
        cache.cleanup()
        assert cache.cleanup() == 0
        assert cache.get("b") == 2
