"""
Tests for the advanced analytics view.
"""

import json
from datetime import date

from culinaria.advanced import (
    CUISINE_CONFIDENCE,
    GROWTH_CONFIDENCE,
    INGREDIENT_CONFIDENCE,
    LOCKED_ACHIEVEMENTS,
    compute_advanced_analytics,
    minutes_to_hours,
)
from culinaria.storage import InMemoryStore

TODAY = date(2026, 10, 17)


class TestMinutesToHours:
    """Test cases for minute to hour conversion."""

    def test_conversion(self):
        assert minutes_to_hours(90) == 1.5
        assert minutes_to_hours(235) == 3.9
        assert minutes_to_hours(0) == 0


class TestComputeAdvancedAnalytics:
    """Test cases for the advanced analytics view."""

    def test_user_without_data_gets_onboarding(self):
        advanced = compute_advanced_analytics("nobody", False, store=InMemoryStore(), today=TODAY)

        assert advanced.cooking_stats.total_recipes_cooked == 0
        assert advanced.cooking_stats.favorite_cuisine == "—"
        assert advanced.cooking_stats.most_cooked_recipe == "—"
        assert len(advanced.recommendations) == 1
        assert advanced.recommendations[0].type == "onboarding"
        assert advanced.recommendations[0].confidence == 1.0

        assert [a.name for a in advanced.achievements] == [name for name, _ in LOCKED_ACHIEVEMENTS]
        assert [a.id for a in advanced.achievements] == [1, 2, 3]
        assert all(not a.earned and a.progress == 0 for a in advanced.achievements)

    def test_small_collection_recommendations(self):
        store = InMemoryStore({
            "favorites_u1": json.dumps([
                {"id": "truffle-risotto", "category": "Main"},
                {"id": "slow-braised-lamb-shoulder", "category": "Main"},
            ]),
        })

        advanced = compute_advanced_analytics("u1", False, store=store, today=TODAY)

        assert advanced.cooking_stats.total_recipes_cooked == 2
        assert advanced.cooking_stats.total_cooking_time == 3.6
        assert advanced.cooking_stats.favorite_cuisine == "Main"
        assert advanced.preferences.preferred_cuisines == ["Main"]
        assert [r.type for r in advanced.recommendations] == ["cuisine", "growth", "ingredient"]
        assert [r.confidence for r in advanced.recommendations] == [
            CUISINE_CONFIDENCE, GROWTH_CONFIDENCE, INGREDIENT_CONFIDENCE,
        ]
        assert advanced.recommendations[0].title == "Explore more Main recipes"

    def test_earned_achievements_come_before_locked(self):
        store = InMemoryStore({"favorites_u1": json.dumps([{"id": "truffle-risotto"}])})

        advanced = compute_advanced_analytics("u1", False, store=store, today=TODAY)

        first = advanced.achievements[0]
        assert (first.id, first.name, first.earned, first.date) == (1, "First Recipe", True, "Oct 2026")
        assert [a.id for a in advanced.achievements] == [1, 2, 3, 4]
        assert advanced.achievements[-1].name == "Cuisine Explorer"

    def test_growth_recommendation_drops_at_five_recipes(self):
        favorites = [{"id": f"r{i}", "category": "Main"} for i in range(5)]
        store = InMemoryStore({"favorites_u1": json.dumps(favorites)})

        advanced = compute_advanced_analytics("u1", False, store=store, today=TODAY)

        assert [r.type for r in advanced.recommendations] == ["cuisine"]

    def test_camel_case_serialization(self):
        advanced = compute_advanced_analytics("nobody", False, store=InMemoryStore(), today=TODAY)
        body = advanced.model_dump(by_alias=True)
        assert body["cookingStats"]["weeklyGoal"] == 3
        assert body["userBehavior"]["deviceUsage"]["desktop"] == 100
