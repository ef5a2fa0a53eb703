"""
Tests for the halal classification functionality.

This module tests is_halal, which rejects recipes whose text mentions pork or
alcohol, and is_non_halal_ingredient, the looser bidirectional ingredient check.
"""

import pytest

from culinaria.halal import NON_HALAL_TERMS, filter_halal, is_halal, is_non_halal_ingredient
from culinaria.models import Recipe


class TestIsHalal:
    """Test cases for recipe classification."""

    def test_missing_recipe_is_not_halal(self):
        """Test that None is never reported as halal."""
        assert is_halal(None) is False

    def test_clean_recipe_is_halal(self):
        """Test that a recipe without pork or alcohol terms is halal."""
        recipe = {
            "strMeal": "Chicken Curry",
            "strCategory": "Chicken",
            "strArea": "Indian",
            "strInstructions": "Simmer everything for 30 minutes.",
            "strIngredient1": "chicken",
            "strIngredient2": "rice",
        }
        assert is_halal(recipe) is True

    def test_pork_ingredient_slot_is_rejected(self):
        """Test that a pork term in any ingredient slot rejects the recipe."""
        recipe = {"strMeal": "Breakfast Plate", "strIngredient1": "Eggs", "strIngredient7": "Bacon"}
        assert is_halal(recipe) is False

    def test_alcohol_in_instructions_is_rejected(self):
        """Test that the instructions are scanned too."""
        recipe = {"strMeal": "Beef Stew", "strInstructions": "Deglaze the pan with red wine."}
        assert is_halal(recipe) is False

    def test_matching_is_case_insensitive(self):
        """Test that upper-case terms are found."""
        assert is_halal({"strMeal": "PORK Chops"}) is False
        assert is_halal({"strMeal": "Lamb Chops", "strArea": "ITALIAN"}) is True

    def test_normalized_recipe_model(self):
        """Test that an already normalized Recipe is accepted."""
        assert is_halal(Recipe(name="Lentil Soup", ingredients=["lentils", "carrot"])) is True
        assert is_halal(Recipe(name="Carbonara", ingredients=["spaghetti", "pancetta"])) is False

    def test_normalized_mapping_with_ingredients_list(self):
        """Test that a mapping with an ingredients list is scanned."""
        assert is_halal({"name": "Cocktail", "ingredients": ["lime", "Vodka"]}) is False

    @pytest.mark.parametrize("name", ["Portobello Burger", "Hamburger", "Ginger Beef"])
    def test_substring_false_positives_are_rejected(self, name):
        """Test that matching is substring based (port, ham, gin)."""
        assert is_halal({"strMeal": name}) is False

    def test_filter_halal_preserves_order(self):
        """Test that filter_halal drops non-halal recipes and keeps input order."""
        recipes = [
            {"strMeal": "Falafel"},
            {"strMeal": "Pork Buns"},
            {"strMeal": "Shakshuka"},
        ]
        assert [r["strMeal"] for r in filter_halal(recipes)] == ["Falafel", "Shakshuka"]


class TestIsNonHalalIngredient:
    """Test cases for ingredient classification."""

    @pytest.mark.parametrize("ingredient", ["pork belly", "White Wine", "  Bacon  ", "dark rum"])
    def test_compound_names_match(self, ingredient):
        """Test that an ingredient containing a term matches."""
        assert is_non_halal_ingredient(ingredient) is True

    def test_fragment_of_term_matches(self):
        """Test that the check is bidirectional ('bour' is inside 'bourbon')."""
        assert is_non_halal_ingredient("bour") is True

    @pytest.mark.parametrize("ingredient", ["chicken", "olive oil", "tomato"])
    def test_clean_ingredients_do_not_match(self, ingredient):
        """Test that ordinary ingredients are not flagged."""
        assert is_non_halal_ingredient(ingredient) is False

    def test_empty_string_matches(self):
        """Test that an empty name is contained in every term and is flagged."""
        assert is_non_halal_ingredient("") is True
        assert is_non_halal_ingredient(None) is True

    def test_every_term_is_flagged(self):
        """Test that each listed term is non-halal on its own."""
        assert all(is_non_halal_ingredient(term) for term in NON_HALAL_TERMS)


class TestRawPayloadScanning:
    """Test cases for payloads that carry the same field under several keys."""

    def test_slots_are_scanned_next_to_ingredients_list(self):
        recipe = {"strMeal": "Breakfast", "ingredients": ["egg"], "strIngredient2": "bacon"}
        assert is_halal(recipe) is False

    def test_every_name_key_is_scanned(self):
        assert is_halal({"strMeal": "Roast Dinner", "name": "Pork Roast"}) is False
        assert is_halal({"strArea": "British", "cuisine": "Beer Hall"}) is False

    def test_clean_payload_with_several_keys_is_halal(self):
        recipe = {"strMeal": "Lentil Soup", "name": "Dal", "ingredients": ["lentils"], "strIngredient1": "cumin"}
        assert is_halal(recipe) is True
