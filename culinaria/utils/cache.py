"""
In-process TTL cache for recipe searches.

Memoizes halal-filtered TheMealDB search results per normalized query so repeat
searches do not hit the third-party API again within the TTL.

The cache is process-local and in-memory, with automatic expiration based on TTL.
"""

import time
from typing import Any, Dict, Hashable, List, Optional, Tuple

# Key -> (timestamp, cached_value)
_SEARCH_CACHE: Dict[Hashable, Tuple[float, List[Any]]] = {}

SEARCH_CACHE_TTL_SECONDS = 300


def make_search_cache_key(query: str, halal_only: bool = True) -> Hashable:
    """
    Create a deterministic cache key for a search request.

    Args:
        query: Search query string
        halal_only: Whether results were filtered through the halal classifier

    Returns:
        Hashable cache key (tuple)
    """
    query_norm = query.strip().lower() if query else ""
    return (query_norm, halal_only)


def get_cached_search(key: Hashable) -> Optional[List[Any]]:
    """
    Retrieve a cached search result if it exists and hasn't expired.

    Returns:
        Cached result list, or None if not found or expired
    """
    entry = _SEARCH_CACHE.get(key)
    if not entry:
        return None

    timestamp, value = entry
    if time.time() - timestamp > SEARCH_CACHE_TTL_SECONDS:
        _SEARCH_CACHE.pop(key, None)
        return None

    return value


def set_cached_search(key: Hashable, value: List[Any]) -> None:
    """Store a search result in the cache."""
    _SEARCH_CACHE[key] = (time.time(), value)


def clear_cache() -> None:
    """Clear all cached search results (useful for testing)."""
    _SEARCH_CACHE.clear()


def get_cache_size() -> int:
    """Get the current number of cached entries."""
    return len(_SEARCH_CACHE)
