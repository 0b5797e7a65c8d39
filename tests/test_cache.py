"""Tests for the path value cache."""

import threading as _threading

import consul_parser.cache as cache


class TestValueCacheBasics:
    """Store, read and clear entries."""

    def test_get_missing_returns_default(self) -> None:
        """Unknown keys return the default."""
        c = cache.ValueCache()
        assert c.get("a,b") is None
        assert c.get("a,b", "fallback") == "fallback"

    def test_set_then_get(self) -> None:
        """A stored value is returned."""
        c = cache.ValueCache()
        c.set("a,b", 1)
        assert c.get("a,b") == 1

    def test_set_overwrites(self) -> None:
        """A second set replaces the first."""
        c = cache.ValueCache()
        c.set("k", "old")
        c.set("k", "new")
        assert c.get("k") == "new"
        assert len(c) == 1

    def test_legacy_method_names(self) -> None:
        """set_value/get_value behave like set/get."""
        c = cache.ValueCache()
        c.set_value("k", {"x": 1})
        assert c.get_value("k") == {"x": 1}
        assert c.get_value("other") is None

    def test_clear(self) -> None:
        """clear() drops every entry."""
        c = cache.ValueCache()
        c.set("a", 1)
        c.set("b", 2)
        c.clear()
        assert len(c) == 0
        assert "a" not in c


class TestValueCachePresence:
    """Falsy values are entries, not misses."""

    def test_lookup_reports_presence(self) -> None:
        """lookup() distinguishes stored None from absent."""
        c = cache.ValueCache()
        assert c.lookup("k") == (False, None)
        c.set("k", None)
        assert c.lookup("k") == (True, None)

    def test_falsy_values_are_present(self) -> None:
        """0, False and the empty string are found."""
        c = cache.ValueCache()
        for key, value in (("zero", 0), ("false", False), ("empty", "")):
            c.set(key, value)
            assert key in c
            assert c.lookup(key) == (True, value)

    def test_missing_sentinel_is_falsy(self) -> None:
        """The sentinel never looks like a real value."""
        assert not cache.MISSING
        assert repr(cache.MISSING) == "<MISSING>"


class TestDefaultCache:
    """The shared process-wide instance."""

    def test_default_cache_is_value_cache(self) -> None:
        assert isinstance(cache.DEFAULT_CACHE, cache.ValueCache)

    def test_concurrent_writes(self) -> None:
        """Writes from several threads all land."""
        c = cache.ValueCache()

        def write(start: int) -> None:
            for i in range(start, start + 100):
                c.set(str(i), i)

        threads = [_threading.Thread(target=write, args=(n * 100,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(c) == 800
        assert c.get("799") == 799
