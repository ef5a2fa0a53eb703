"""
Tests for the search TTL cache.
"""

from unittest.mock import patch

from culinaria.utils import cache
from culinaria.utils.cache import (
    clear_cache,
    get_cache_size,
    get_cached_search,
    make_search_cache_key,
    set_cached_search,
)


class TestSearchCache:
    """Test cases for cache keys, hits and expiry."""

    def setup_method(self):
        clear_cache()

    def teardown_method(self):
        clear_cache()

    def test_key_is_normalized(self):
        assert make_search_cache_key("  Chicken ") == make_search_cache_key("chicken")
        assert make_search_cache_key("chicken") != make_search_cache_key("chicken", halal_only=False)
        assert make_search_cache_key("") == ("", True)

    def test_miss_then_hit(self):
        key = make_search_cache_key("soup")
        assert get_cached_search(key) is None

        set_cached_search(key, ["lentil soup"])
        assert get_cached_search(key) == ["lentil soup"]
        assert get_cache_size() == 1

    def test_expired_entries_are_evicted(self):
        key = make_search_cache_key("soup")
        with patch.object(cache.time, "time", return_value=1000.0):
            set_cached_search(key, ["lentil soup"])
        with patch.object(cache.time, "time", return_value=1000.0 + cache.SEARCH_CACHE_TTL_SECONDS + 1):
            assert get_cached_search(key) is None
        assert get_cache_size() == 0
