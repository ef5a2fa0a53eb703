"""
Halal classification helpers for recipes and ingredients.

This module provides a simple keyword-based classifier that decides whether a
recipe is halal-compatible by scanning its text for pork and alcohol terms. It is
the acceptance filter applied to third-party search results before they reach
the client.

The classification logic:
- Concatenates name, category, area, instructions and all ingredients
  (for raw payloads: every accepted key of those fields, list and slot ingredients)
- Lower-cases the text and checks it against NON_HALAL_TERMS
- Any substring hit marks the recipe as non-halal
- A missing recipe is never reported as halal

Matching is plain substring matching, not word matching. "portobello" contains
"port" and "hamburger" contains "ham", so both are rejected. tests/test_halal.py
pins this behavior.
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

from .adapters import as_recipe, text_field_values
from .models import Recipe

# Pork and pork-derived terms
PORK_TERMS = [
    "pork", "bacon", "ham", "sausage", "prosciutto", "pancetta", "lard", "speck",
]

# Alcohol-related terms
ALCOHOL_TERMS = [
    "alcohol", "wine", "beer", "vodka", "whiskey", "rum", "gin", "tequila",
    "brandy", "sherry", "port", "cognac", "bourbon", "scotch", "liqueur",
    "schnapps", "absinthe",
]

NON_HALAL_TERMS = PORK_TERMS + ALCOHOL_TERMS

RecipeLike = Union[Recipe, Mapping[str, Any]]


def _searchable_text(recipe: Recipe) -> str:
    parts = [
        recipe.name,
        recipe.category,
        recipe.area,
        recipe.instructions,
        *recipe.ingredients,
    ]
    return " ".join(parts).lower()


def is_halal(recipe: Optional[RecipeLike]) -> bool:
    """
    Return True if the recipe appears halal (no pork or alcohol terms).

    Args:
        recipe: Recipe model, raw TheMealDB payload, or None

    Returns:
        False for a missing recipe; otherwise True iff none of NON_HALAL_TERMS
        occurs anywhere in the lower-cased recipe text

    Examples:
        >>> is_halal({"strMeal": "Chicken Curry", "strIngredient1": "chicken"})
        True
        >>> is_halal({"strMeal": "Pasta", "strIngredient1": "Pancetta"})
        False
        >>> is_halal(None)
        False
    """
    normalized = as_recipe(recipe)
    if normalized is None:
        return False

    text = _searchable_text(normalized)
    if isinstance(recipe, Mapping):
        # Raw payloads may carry the same field under several keys
        text = " ".join([text, *text_field_values(recipe)]).lower()
    return not any(term in text for term in NON_HALAL_TERMS)


def is_non_halal_ingredient(ingredient: str) -> bool:
    """
    Return True if an ingredient name looks non-halal.

    Looser than is_halal: the check is bidirectional, so compound names
    ("pork belly", "white wine") and fragments of a term both match. Used to skip
    ingredients when building substitution suggestions.
    """
    lower = (ingredient or "").lower().strip()
    return any(term in lower or lower in term for term in NON_HALAL_TERMS)


def filter_halal(recipes: Iterable[RecipeLike]) -> List[RecipeLike]:
    """Keep only the halal recipes, preserving input order."""
    return [recipe for recipe in recipes if is_halal(recipe)]
