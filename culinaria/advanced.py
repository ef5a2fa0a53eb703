"""
Advanced analytics view built on top of the cooking analytics.

Reuses compute_cooking_analytics() and reshapes it for the advanced dashboard:
- cooking stats with total time in hours
- earned achievements followed by locked ones this engine cannot complete
  (weekly and streak data are not tracked)
- up to three rule-based recommendations with fixed confidence values
"""

from datetime import date
from typing import List, Optional

from .analytics import compute_cooking_analytics, round_half_up
from .catalog import CatalogLookup
from .models import (
    AdvancedAchievement,
    AdvancedAnalyticsData,
    AnalyticsData,
    CookingStats,
    Preferences,
    Recommendation,
    UserBehavior,
)
from .storage import KeyValueStore

NO_VALUE = "—"

# (name, description); always reported as not earned with zero progress
LOCKED_ACHIEVEMENTS = [
    ("Week Warrior", "Cook 3 recipes in one week"),
    ("Streak Master", "7-day cooking streak"),
    ("Cuisine Explorer", "Try 5 different cuisines"),
]

ONBOARDING_CONFIDENCE = 1.0
CUISINE_CONFIDENCE = 0.85
GROWTH_CONFIDENCE = 0.9
INGREDIENT_CONFIDENCE = 0.8

GROWTH_THRESHOLD = 5


def minutes_to_hours(minutes: int) -> float:
    """Convert minutes to hours rounded to one decimal (90 -> 1.5)."""
    if minutes <= 0:
        return 0
    return round_half_up(minutes / 60, 1)


def build_achievement_list(cooking: AnalyticsData) -> List[AdvancedAchievement]:
    achievements = [
        AdvancedAchievement(
            id=i,
            name=a.name,
            description=a.description,
            earned=True,
            date=a.earned,
        )
        for i, a in enumerate(cooking.achievements, start=1)
    ]
    next_id = len(achievements) + 1
    for offset, (name, description) in enumerate(LOCKED_ACHIEVEMENTS):
        achievements.append(
            AdvancedAchievement(
                id=next_id + offset,
                name=name,
                description=description,
                earned=False,
                progress=0,
            )
        )
    return achievements


def build_recommendations(cooking: AnalyticsData) -> List[Recommendation]:
    """
    Derive recommendations from the analytics.

    With no saved recipes there is exactly one onboarding recommendation.
    Otherwise, in order: explore the top cuisine, grow a small collection
    (fewer than 5 recipes), try more dishes with the top ingredient.
    """
    if cooking.total_recipes == 0:
        return [
            Recommendation(
                type="onboarding",
                title="Add recipes to unlock insights",
                reason="Save recipes from Favorites or Collections to see personalized "
                       "recommendations and achievements.",
                confidence=ONBOARDING_CONFIDENCE,
            )
        ]

    recommendations: List[Recommendation] = []

    if cooking.favorite_cuisines:
        cuisine = cooking.favorite_cuisines[0].cuisine
        recommendations.append(
            Recommendation(
                type="cuisine",
                title=f"Explore more {cuisine} recipes",
                reason=f"You enjoy {cuisine} — try similar dishes to expand your repertoire.",
                confidence=CUISINE_CONFIDENCE,
            )
        )

    if cooking.total_recipes < GROWTH_THRESHOLD:
        recommendations.append(
            Recommendation(
                type="growth",
                title="Build your collection",
                reason="Add a few more recipes to favorites or collections to unlock more "
                       "achievements and insights.",
                confidence=GROWTH_CONFIDENCE,
            )
        )

    if cooking.top_ingredients:
        ingredient = cooking.top_ingredients[0].ingredient
        recommendations.append(
            Recommendation(
                type="ingredient",
                title=f"Recipes with {ingredient}",
                reason=f"{ingredient} appears often in your saved recipes — discover more "
                       f"dishes that use it.",
                confidence=INGREDIENT_CONFIDENCE,
            )
        )

    return recommendations


def compute_advanced_analytics(
    user_id: str,
    is_demo_user: bool,
    store: Optional[KeyValueStore] = None,
    catalog: Optional[CatalogLookup] = None,
    today: Optional[date] = None,
) -> AdvancedAnalyticsData:
    """
    Compute the advanced analytics view for a user.

    Same inputs as compute_cooking_analytics(); always returns a fully populated
    AdvancedAnalyticsData.
    """
    cooking = compute_cooking_analytics(user_id, is_demo_user, store=store, catalog=catalog, today=today)
    has_recipes = cooking.total_recipes > 0

    cooking_stats = CookingStats(
        total_recipes_cooked=cooking.total_recipes,
        total_cooking_time=minutes_to_hours(cooking.total_cooking_time),
        average_rating=cooking.average_rating,
        favorite_cuisine=cooking.favorite_cuisines[0].cuisine if cooking.favorite_cuisines else NO_VALUE,
        most_cooked_recipe="From your collections & favorites" if has_recipes else NO_VALUE,
        weekly_progress=0,
        monthly_trend="Based on your saved recipes" if has_recipes else NO_VALUE,
    )

    return AdvancedAnalyticsData(
        cooking_stats=cooking_stats,
        user_behavior=UserBehavior(),
        preferences=Preferences(preferred_cuisines=[c.cuisine for c in cooking.favorite_cuisines]),
        achievements=build_achievement_list(cooking),
        recommendations=build_recommendations(cooking),
    )
