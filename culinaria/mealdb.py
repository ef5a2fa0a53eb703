"""
TheMealDB search client with halal filtering.

This module wraps TheMealDB's public search endpoint:
- MealDBClient.search() fetches raw meals for a query
- search_halal_recipes() normalizes them into Recipe models, keeps only the halal
  ones, and memoizes the result per query in the TTL cache

Search flow: GET /api/recipes/search -> search_halal_recipes() -> MealDBClient.search()
-> recipe_from_mealdb() -> is_halal() -> list[Recipe]
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from .adapters import recipe_from_mealdb
from .halal import is_halal
from .models import Recipe
from .utils.cache import get_cached_search, make_search_cache_key, set_cached_search

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.themealdb.com/api/json/v1/1"
DEFAULT_TIMEOUT_SECONDS = 10.0


class SearchUnavailableError(RuntimeError):
    """Raised when TheMealDB cannot be reached or returns an unusable response."""


class MealDBClient:
    """
    Minimal client for TheMealDB's JSON API.

    Attributes:
        base_url: API root (e.g., "https://www.themealdb.com/api/json/v1/1")
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> None:
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_SECONDS

    def search(self, query: str) -> List[Dict[str, Any]]:
        """
        Search meals by name.

        Args:
            query: Search string (e.g., "chicken")

        Returns:
            Raw meal dictionaries; empty list when TheMealDB finds nothing
            (it answers {"meals": null})

        Raises:
            SearchUnavailableError: On network errors, HTTP errors or non-JSON responses
        """
        try:
            response = requests.get(
                f"{self.base_url}/search.php",
                params={"s": query},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"TheMealDB search failed for {query!r}: {e}")
            raise SearchUnavailableError(f"Search failed: {e}") from e
        except ValueError as e:
            logger.error(f"TheMealDB returned invalid JSON for {query!r}: {e}")
            raise SearchUnavailableError("Search failed: invalid response from recipe service") from e

        meals = data.get("meals") if isinstance(data, dict) else None
        if not isinstance(meals, list):
            return []
        return [m for m in meals if isinstance(m, dict)]


def search_halal_recipes(query: str, client: Optional[MealDBClient] = None) -> List[Recipe]:
    """
    Search TheMealDB and return only halal recipes.

    Results are cached per normalized query (see culinaria.utils.cache).

    Args:
        query: Search string
        client: Client to use (defaults to a MealDBClient with default settings)

    Returns:
        Normalized, halal-filtered recipes in TheMealDB order

    Raises:
        SearchUnavailableError: If the upstream search fails (failures are not cached)
    """
    cache_key = make_search_cache_key(query)
    cached = get_cached_search(cache_key)
    if cached is not None:
        logger.debug(f"Search cache hit for {query!r}")
        return list(cached)

    client = client or MealDBClient()
    meals = client.search(query.strip())
    recipes = [recipe_from_mealdb(meal) for meal in meals]
    halal_recipes = [r for r in recipes if is_halal(r)]

    logger.info(
        f"Search {query!r}: {len(halal_recipes)} of {len(recipes)} results passed the halal filter"
    )
    set_cached_search(cache_key, halal_recipes)
    return list(halal_recipes)
