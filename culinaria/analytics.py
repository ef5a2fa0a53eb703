"""
Cooking analytics computed from a user's saved recipes.

This module turns the raw favorites and collections kept in storage into
descriptive statistics and achievements. It makes no network calls and keeps no
state: every call is a fresh projection of what storage holds at that moment.

Pipeline:
- Load favorites and collections (demo profile or per-user keys)
- Flatten into one list keyed by recipe id (favorites win, duplicates dropped)
- Enrich each entry with catalog metadata (cook time, difficulty, rating, ingredients)
- Aggregate: cuisines, difficulty, cook-time buckets, top ingredients, rating, total time
- Award achievements from the totals

Weekly and monthly series are always empty: storage has no "cooked at"
timestamps to build them from.

Percentages use half-up rounding (50.5 -> 51), matching what the browser client
computed before this moved server side.
"""

import logging
import math
import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .catalog import CatalogLookup, get_catalog
from .models import (
    Achievement,
    AnalyticsData,
    Collection,
    CookingGoals,
    CuisineStat,
    DifficultyStat,
    EnrichedRecipe,
    IngredientStat,
    SavedRecipeReference,
    TimeBreakdown,
)
from .storage import KeyValueStore, get_store, load_collections, load_favorites

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = "Medium"
DEFAULT_CATEGORY = "Other"
DEFAULT_NAME = "Unknown"
DIFFICULTY_ORDER = ["Easy", "Medium", "Hard"]

# (label, inclusive upper bound in minutes); the last bucket is open-ended
TIME_BUCKETS = [
    ("0–30 min", 30),
    ("30–60 min", 60),
    ("60+ min", None),
]

TOP_INGREDIENTS_LIMIT = 10

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero for non-negative values (2.5 -> 3, 4.25 -> 4.3 with digits=1)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percentage(count: int, total: int) -> int:
    """Rounded share of count in total; 0 when total is 0."""
    if not total:
        return 0
    return int(round_half_up(count / total * 100))


def parse_cook_time_minutes(value: Any) -> int:
    """
    Parse a cook time into whole minutes.

    Examples:
        >>> parse_cook_time_minutes("35 min")
        35
        >>> parse_cook_time_minutes(42)
        42
        >>> parse_cook_time_minutes("-")
        0
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(0, int(value))

    text = str(value).strip()
    if not text or text == "-":
        return 0
    match = re.search(r"\d+", text)
    return max(0, int(match.group(0))) if match else 0


def parse_rating(value: Any) -> float:
    """Parse a rating (number or numeric string) and clamp it to [0, 5]; unparsable -> 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    if not math.isfinite(number):
        return 0.0
    return min(5.0, max(0.0, number))


def format_earned(today: date) -> str:
    """Achievement earn marker, e.g. 'Oct 2026'."""
    return f"{_MONTH_ABBR[today.month - 1]} {today.year}"


# ---------------------------------------------------------------------------
# Enrichment
# ---------------------------------------------------------------------------

def _enrich_favorite(favorite: SavedRecipeReference, catalog: CatalogLookup) -> EnrichedRecipe:
    featured = catalog.find_by_id(favorite.id)
    if featured and featured.time:
        cook_time = parse_cook_time_minutes(featured.time)
    else:
        cook_time = parse_cook_time_minutes(favorite.cook_time)

    # An explicit rating on the favorite wins over the catalog rating
    rating = parse_rating(favorite.rating) or (featured.rating if featured else 0.0)

    return EnrichedRecipe(
        id=favorite.id,
        name=favorite.title or favorite.name or DEFAULT_NAME,
        category=favorite.category or DEFAULT_CATEGORY,
        cook_time_minutes=cook_time,
        rating=rating,
        difficulty=(featured.difficulty if featured and featured.difficulty else DEFAULT_DIFFICULTY),
        ingredients=list(featured.ingredients or []) if featured else [],
    )


def _enrich_collection_entry(entry: SavedRecipeReference, catalog: CatalogLookup) -> EnrichedRecipe:
    featured = catalog.find_by_id(entry.id)
    return EnrichedRecipe(
        id=entry.id,
        name=entry.name or entry.title or DEFAULT_NAME,
        category=entry.category or DEFAULT_CATEGORY,
        cook_time_minutes=parse_cook_time_minutes(featured.time) if featured and featured.time else 0,
        rating=featured.rating if featured else 0.0,
        difficulty=(featured.difficulty if featured and featured.difficulty else DEFAULT_DIFFICULTY),
        ingredients=list(featured.ingredients or []) if featured else [],
    )


def _enrich_safely(enrich, entry: SavedRecipeReference, catalog: CatalogLookup) -> Optional[EnrichedRecipe]:
    try:
        return enrich(entry, catalog)
    except Exception as e:
        logger.warning(f"Skipping saved recipe {entry.id!r} that could not be enriched: {e}")
        return None


def enrich_recipes(
    favorites: Iterable[SavedRecipeReference],
    collections: Iterable[Collection],
    catalog: Optional[CatalogLookup] = None,
) -> List[EnrichedRecipe]:
    """
    Merge favorites and collection entries into one enriched list.

    Favorites are inserted first; a collection entry whose id is already present
    is skipped, so every id is counted once. Entries with a blank id are dropped.

    Args:
        favorites: Saved favorites in storage order
        collections: Collections in storage order
        catalog: Catalog used for metadata (defaults to the featured catalog)

    Returns:
        Enriched recipes in insertion order
    """
    catalog = catalog or get_catalog()
    by_id: Dict[str, EnrichedRecipe] = {}

    for favorite in favorites:
        if not favorite.id:
            continue
        enriched = _enrich_safely(_enrich_favorite, favorite, catalog)
        if enriched is not None:
            by_id[favorite.id] = enriched

    for collection in collections:
        for entry in collection.recipes:
            if not entry.id or entry.id in by_id:
                continue
            enriched = _enrich_safely(_enrich_collection_entry, entry, catalog)
            if enriched is not None:
                by_id[entry.id] = enriched

    return list(by_id.values())


def get_enriched_recipes(
    user_id: str,
    is_demo_user: bool,
    store: Optional[KeyValueStore] = None,
    catalog: Optional[CatalogLookup] = None,
) -> List[EnrichedRecipe]:
    """Load a user's saved recipes from storage and enrich them."""
    store = store or get_store()
    favorites = load_favorites(store, user_id, is_demo_user)
    collections = load_collections(store, user_id, is_demo_user)
    return enrich_recipes(favorites, collections, catalog)


# ---------------------------------------------------------------------------
# Aggregations
# ---------------------------------------------------------------------------

def build_cuisine_stats(recipes: List[EnrichedRecipe]) -> List[CuisineStat]:
    """Count recipes per category, most common first; empty input -> []."""
    total = len(recipes)
    if total == 0:
        return []

    counts: Dict[str, int] = {}
    for recipe in recipes:
        cuisine = recipe.category or DEFAULT_CATEGORY
        counts[cuisine] = counts.get(cuisine, 0) + 1

    stats = [
        CuisineStat(cuisine=cuisine, count=count, percentage=percentage(count, total))
        for cuisine, count in counts.items()
    ]
    return sorted(stats, key=lambda s: s.count, reverse=True)


def build_difficulty_breakdown(recipes: List[EnrichedRecipe]) -> List[DifficultyStat]:
    """Counts for Easy, Medium and Hard, always all three in that order."""
    total = len(recipes)
    counts: Dict[str, int] = {}
    for recipe in recipes:
        difficulty = recipe.difficulty or DEFAULT_DIFFICULTY
        counts[difficulty] = counts.get(difficulty, 0) + 1

    return [
        DifficultyStat(
            difficulty=difficulty,
            count=counts.get(difficulty, 0),
            percentage=percentage(counts.get(difficulty, 0), total),
        )
        for difficulty in DIFFICULTY_ORDER
    ]


def build_time_breakdown(recipes: List[EnrichedRecipe]) -> List[TimeBreakdown]:
    """Bucket recipes by cook time: <=30, <=60, >60 minutes."""
    total = len(recipes)
    counts = [0] * len(TIME_BUCKETS)
    for recipe in recipes:
        for i, (_, upper) in enumerate(TIME_BUCKETS):
            if upper is None or recipe.cook_time_minutes <= upper:
                counts[i] += 1
                break

    return [
        TimeBreakdown(range=label, count=counts[i], percentage=percentage(counts[i], total))
        for i, (label, _) in enumerate(TIME_BUCKETS)
    ]


def build_top_ingredients(recipes: List[EnrichedRecipe]) -> List[IngredientStat]:
    """
    Most frequent ingredients across all recipes (top 10).

    Names are trimmed and lower-cased for counting and re-capitalized for display.
    Percentages are relative to all ingredient occurrences, not to recipe count.
    """
    counts: Dict[str, int] = {}
    for recipe in recipes:
        for ingredient in recipe.ingredients:
            key = ingredient.strip().lower()
            if not key:
                continue
            counts[key] = counts.get(key, 0) + 1

    total = sum(counts.values())
    if total == 0:
        return []

    stats = [
        IngredientStat(
            ingredient=ingredient[:1].upper() + ingredient[1:],
            count=count,
            percentage=percentage(count, total),
        )
        for ingredient, count in counts.items()
    ]
    return sorted(stats, key=lambda s: s.count, reverse=True)[:TOP_INGREDIENTS_LIMIT]


def build_achievements(total_recipes: int, cuisine_count: int, today: date) -> List[Achievement]:
    """
    Achievements earned by the current totals.

    The earn marker is the date of this computation; there is no stored
    first-earned date, so it moves forward on later calls.
    """
    earned = format_earned(today)
    rules = [
        (total_recipes >= 1, "First Recipe", "Added your first recipe", "🌟"),
        (total_recipes >= 5, "Getting Started", "5 recipes in your kitchen", "📖"),
        (total_recipes >= 10, "Recipe Collector", "10 recipes saved", "📚"),
        (cuisine_count >= 3, "Variety", "Tried 3 or more cuisines", "🌍"),
        (total_recipes >= 20, "Chef in the Making", "20 recipes in your collection", "👨‍🍳"),
    ]
    return [
        Achievement(name=name, description=description, earned=earned, icon=icon)
        for qualifies, name, description, icon in rules
        if qualifies
    ]


def summarize(recipes: List[EnrichedRecipe], today: Optional[date] = None) -> AnalyticsData:
    """Compute AnalyticsData from an already enriched recipe list."""
    today = today or date.today()

    total_recipes = len(recipes)
    total_cooking_time = sum(r.cook_time_minutes for r in recipes)
    rating_sum = sum(r.rating for r in recipes)
    average_rating = round_half_up(rating_sum / total_recipes, 1) if total_recipes else 0

    favorite_cuisines = build_cuisine_stats(recipes)
    cuisine_count = len(favorite_cuisines)

    return AnalyticsData(
        total_recipes=total_recipes,
        total_cooking_time=total_cooking_time,
        average_rating=average_rating,
        favorite_cuisines=favorite_cuisines,
        difficulty_breakdown=build_difficulty_breakdown(recipes),
        cooking_time_breakdown=build_time_breakdown(recipes),
        weekly_progress=[],
        monthly_trends=[],
        top_ingredients=build_top_ingredients(recipes),
        cooking_goals=CookingGoals(current_month_variety=cuisine_count),
        achievements=build_achievements(total_recipes, cuisine_count, today),
    )


def compute_cooking_analytics(
    user_id: str,
    is_demo_user: bool,
    store: Optional[KeyValueStore] = None,
    catalog: Optional[CatalogLookup] = None,
    today: Optional[date] = None,
) -> AnalyticsData:
    """
    Compute cooking analytics for a user from stored favorites and collections.

    Args:
        user_id: User identifier (ignored for the demo account)
        is_demo_user: Read the shared demo profile instead of per-user keys
        store: Key-value store (defaults to the process store)
        catalog: Catalog for enrichment (defaults to the featured catalog)
        today: Date used for achievement earn markers (defaults to today)

    Returns:
        Fully populated AnalyticsData; zeros and empty lists when there is no data.
        Storage problems never propagate to the caller.
    """
    try:
        recipes = get_enriched_recipes(user_id, is_demo_user, store=store, catalog=catalog)
    except Exception as e:
        logger.error(f"Failed to load saved recipes for user {user_id!r}, reporting no data: {e}")
        recipes = []

    analytics = summarize(recipes, today=today)
    logger.debug(
        f"Computed cooking analytics for user {user_id!r} (demo={is_demo_user}): "
        f"{analytics.total_recipes} recipes, {len(analytics.achievements)} achievements"
    )
    return analytics
