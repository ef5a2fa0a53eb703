"""
Featured recipe catalog.

This module contains the small curated catalog of featured recipes. The catalog
is the ground truth for recipe metadata (cook time, difficulty, rating,
ingredients) when the analytics engine enriches a user's saved recipes.

Access goes through the CatalogLookup interface so the static tuple below can be
replaced by a real data source without touching the aggregation code.

Besides lookup by id, the catalog backs a few browsing helpers:
- recipes_for_season(): featured recipes suited to a season
- suggest_for_leftovers(): featured recipes that reuse ingredients you have
- catalog_stats(): recipe and category counts for the about page
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

from .models import FeaturedRecipe

FEATURED_RECIPES: Sequence[FeaturedRecipe] = (
    FeaturedRecipe(
        id="truffle-risotto",
        name="Truffle Risotto",
        description="Creamy Arborio rice with wild mushrooms and shaved black truffle, "
                    "finished with Parmigiano-Reggiano.",
        image="https://images.unsplash.com/photo-1504674900247-0877df9cc836?auto=format&fit=crop&w=800&q=80",
        rating=4.9,
        tags=["Chef's Pick", "30–40 min"],
        ingredients=[
            "arborio rice",
            "wild mushrooms",
            "black truffle",
            "parmigiano-reggiano",
            "vegetable stock",
            "shallot",
            "butter",
        ],
        difficulty="Medium",
        time="35 min",
        category="Main",
        seasons=["autumn", "winter"],
    ),
    FeaturedRecipe(
        id="chicken-tikka-masala",
        name="Chicken Tikka Masala",
        description="Charred yogurt-marinated chicken simmered in a spiced tomato and cream sauce.",
        image="https://images.unsplash.com/photo-1565557623262-b51c2513a641?auto=format&fit=crop&w=800&q=80",
        rating=4.8,
        tags=["Crowd Favorite", "45–55 min"],
        ingredients=[
            "chicken thighs",
            "yogurt",
            "garam masala",
            "tomato",
            "onion",
            "garlic",
            "ginger",
            "cream",
        ],
        difficulty="Medium",
        time="50 min",
        category="Curry",
        seasons=["spring", "summer", "autumn", "winter"],
    ),
    FeaturedRecipe(
        id="mediterranean-quinoa-salad",
        name="Mediterranean Quinoa Salad",
        description="Fluffy quinoa tossed with cucumber, tomatoes, red onion and feta in a lemon dressing.",
        image="https://images.unsplash.com/photo-1512621776951-a57141f2eefd?auto=format&fit=crop&w=800&q=80",
        rating=4.6,
        tags=["Quick", "Vegetarian"],
        ingredients=[
            "quinoa",
            "cucumber",
            "cherry tomatoes",
            "red onion",
            "feta cheese",
            "olive oil",
            "lemon",
            "garlic",
        ],
        difficulty="Easy",
        time="20 min",
        category="Salad",
        seasons=["spring", "summer"],
    ),
    FeaturedRecipe(
        id="slow-braised-lamb-shoulder",
        name="Slow-Braised Lamb Shoulder",
        description="Lamb shoulder braised for hours with garlic, rosemary and root vegetables until it falls apart.",
        image="https://images.unsplash.com/photo-1544025162-d76694265947?auto=format&fit=crop&w=800&q=80",
        rating=4.7,
        tags=["Weekend Project", "3 hours"],
        ingredients=[
            "lamb shoulder",
            "garlic",
            "rosemary",
            "onion",
            "carrot",
            "olive oil",
            "lemon",
        ],
        difficulty="Hard",
        time="180 min",
        category="Main",
        seasons=["autumn", "winter"],
    ),
)


class CatalogLookup(ABC):
    """Read-only access to featured recipe metadata."""

    @abstractmethod
    def find_by_id(self, recipe_id: str) -> Optional[FeaturedRecipe]:
        """Return the featured recipe with this id, or None."""
        pass

    @abstractmethod
    def all(self) -> List[FeaturedRecipe]:
        """Return every featured recipe in catalog order."""
        pass


class StaticCatalog(CatalogLookup):
    """In-memory catalog over a fixed sequence of FeaturedRecipe entries."""

    def __init__(self, recipes: Iterable[FeaturedRecipe] = FEATURED_RECIPES) -> None:
        self._recipes: List[FeaturedRecipe] = list(recipes)
        self._by_id: Dict[str, FeaturedRecipe] = {r.id: r for r in self._recipes}

    def find_by_id(self, recipe_id: str) -> Optional[FeaturedRecipe]:
        return self._by_id.get(recipe_id)

    def all(self) -> List[FeaturedRecipe]:
        return list(self._recipes)


_DEFAULT_CATALOG = StaticCatalog()


def get_catalog() -> CatalogLookup:
    """Return the process-wide default catalog."""
    return _DEFAULT_CATALOG


def recipes_for_season(season: str, catalog: Optional[CatalogLookup] = None) -> List[FeaturedRecipe]:
    """
    Return featured recipes suited to a season.

    Args:
        season: Season name ("spring", "summer", "autumn", "winter"), case-insensitive
        catalog: Catalog to search (defaults to the featured catalog)

    Returns:
        Matching recipes in catalog order; recipes without seasons never match
    """
    catalog = catalog or get_catalog()
    wanted = (season or "").strip().lower()
    if not wanted:
        return []
    return [
        r for r in catalog.all()
        if wanted in [s.lower() for s in (r.seasons or [])]
    ]


def suggest_for_leftovers(
    ingredients: Iterable[str],
    catalog: Optional[CatalogLookup] = None,
) -> List[FeaturedRecipe]:
    """
    Return featured recipes that share at least one ingredient with the leftovers.

    Matching is bidirectional substring overlap on trimmed, lower-cased names, so
    "tomato" matches "cherry tomatoes" and "chicken thighs" matches "chicken".

    Examples:
        >>> [r.id for r in suggest_for_leftovers(["quinoa"])]
        ['mediterranean-quinoa-salad']
    """
    catalog = catalog or get_catalog()
    leftovers = [i.strip().lower() for i in ingredients if i and i.strip()]
    if not leftovers:
        return []

    suggestions: List[FeaturedRecipe] = []
    for recipe in catalog.all():
        recipe_ingredients = [i.strip().lower() for i in (recipe.ingredients or [])]
        has_overlap = any(
            leftover in candidate or candidate in leftover
            for leftover in leftovers
            for candidate in recipe_ingredients
            if candidate
        )
        if has_overlap:
            suggestions.append(recipe)
    return suggestions


def catalog_stats(catalog: Optional[CatalogLookup] = None) -> Dict[str, int]:
    """Count featured recipes and their distinct categories."""
    catalog = catalog or get_catalog()
    recipes = catalog.all()
    categories = {r.category for r in recipes if r.category}
    return {
        "recipes": len(recipes),
        "categories": len(categories),
    }
