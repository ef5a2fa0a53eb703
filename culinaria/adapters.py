"""
Adapters from raw recipe payloads to the normalized Recipe model.

TheMealDB returns recipes with up to 20 numbered ingredient slots
(strIngredient1..strIngredient20) and str-prefixed field names. The rest of the
core only ever sees Recipe.ingredients as a plain list, so this is the single
place that knows about the numbered-slot layout.

Accepted input shapes:
- TheMealDB: idMeal, strMeal, strCategory, strArea, strInstructions, strMealThumb, strIngredientN
- Flat numbered: id, name, category, area, instructions, ingredient_N
- Already normalized: any mapping with an "ingredients" list
"""

from typing import Any, List, Mapping, Optional, Union

from .models import Recipe

MAX_INGREDIENT_SLOTS = 20

# Recipe field -> accepted payload keys, in priority order
FIELD_KEYS = {
    "id": ("idMeal", "id"),
    "name": ("strMeal", "name", "title"),
    "category": ("strCategory", "category"),
    "area": ("strArea", "area", "cuisine"),
    "instructions": ("strInstructions", "instructions"),
    "thumbnail": ("strMealThumb", "thumbnail", "image"),
}

TEXT_FIELDS = ("name", "category", "area", "instructions")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _first(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = payload.get(key)
        if value not in (None, ""):
            return value
    return None


def extract_ingredient_slots(payload: Mapping[str, Any]) -> List[str]:
    """
    Collect the non-blank numbered ingredient slots of a raw payload.

    Args:
        payload: Raw recipe mapping with strIngredientN and/or ingredient_N keys

    Returns:
        Trimmed ingredient names in slot order, blanks dropped

    Examples:
        >>> extract_ingredient_slots({"strIngredient1": "Chicken", "strIngredient2": " ", "strIngredient3": "Rice"})
        ['Chicken', 'Rice']
    """
    ingredients: List[str] = []
    for i in range(1, MAX_INGREDIENT_SLOTS + 1):
        value = _first(payload, f"strIngredient{i}", f"ingredient_{i}")
        name = _text(value).strip()
        if name:
            ingredients.append(name)
    return ingredients


def recipe_from_mealdb(payload: Mapping[str, Any]) -> Recipe:
    """
    Convert a raw TheMealDB (or flat numbered-slot) payload into a Recipe.

    Missing fields become empty strings; the function never raises for absent keys.
    When several keys map to one field, the first non-empty one wins.
    """
    fields = {field: _text(_first(payload, *keys)) for field, keys in FIELD_KEYS.items()}
    return Recipe(**fields, ingredients=extract_ingredient_slots(payload))


def text_field_values(payload: Mapping[str, Any]) -> List[str]:
    """
    Every non-blank value of the free-text fields, across all accepted keys.

    recipe_from_mealdb keeps one value per field; classifiers that must not
    miss anything scan these instead.
    """
    values: List[str] = []
    for field in TEXT_FIELDS:
        for key in FIELD_KEYS[field]:
            text = _text(payload.get(key)).strip()
            if text:
                values.append(text)
    return values


def as_recipe(value: Union[Recipe, Mapping[str, Any], None]) -> Optional[Recipe]:
    """
    Coerce any accepted recipe shape into a Recipe.

    Returns None for None so callers can keep their own missing-input handling.
    An "ingredients" list is kept and followed by any numbered slots.
    """
    if value is None:
        return None
    if isinstance(value, Recipe):
        return value
    recipe = recipe_from_mealdb(value)
    listed = value.get("ingredients")
    if not isinstance(listed, list):
        return recipe
    ingredients = [_text(i).strip() for i in listed]
    ingredients = [i for i in ingredients if i] + recipe.ingredients
    return recipe.model_copy(update={"ingredients": ingredients})
