"""
Recipe, saved-recipe and analytics models for the Culinaria backend.

This module defines the canonical schemas used throughout the core:
- Recipe: normalized recipe record (third-party search results, user recipes)
- FeaturedRecipe: immutable entry of the static featured catalog
- SavedRecipeReference / Collection: what users keep in favorites and collections
- EnrichedRecipe: the unit the analytics engine aggregates over
- AnalyticsData / AdvancedAnalyticsData: the result shapes returned to clients

# NOTE: All models serialize with camelCase aliases (totalRecipes, cookTimeMinutes, ...)
    because the browser client reads and writes that shape. Python code uses the
    snake_case field names; populate_by_name allows both on input.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Difficulty = Literal["Easy", "Medium", "Hard"]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Recipe(CamelModel):
    """
    Normalized recipe record.

    Third-party payloads with numbered ingredient slots are converted into this
    shape by culinaria.adapters.recipe_from_mealdb before reaching the core.
    No field is guaranteed present; missing text fields are empty strings.
    """
    id: str = Field(default="", description="Recipe identifier (TheMealDB idMeal or local id)")
    name: str = Field(default="", description="Recipe name/title")
    category: str = Field(default="", description="Recipe category (e.g., 'Chicken', 'Dessert')")
    area: str = Field(default="", description="Cuisine/area (e.g., 'Indian', 'Italian')")
    instructions: str = Field(default="", description="Free-text cooking instructions")
    thumbnail: str = Field(default="", description="URL to recipe image")
    ingredients: List[str] = Field(default_factory=list, description="Ingredient names in recipe order")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "52772",
                "name": "Teriyaki Chicken Casserole",
                "category": "Chicken",
                "area": "Japanese",
                "instructions": "Preheat oven to 350F...",
                "thumbnail": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
                "ingredients": ["soy sauce", "water", "brown sugar", "chicken breasts"],
            }
        },
    )

    @field_validator("id", "name", "category", "area", "instructions", "thumbnail", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class FeaturedRecipe(CamelModel):
    """Entry of the static featured-recipe catalog. Immutable."""
    id: str = Field(..., description="Stable catalog identifier (e.g., 'truffle-risotto')")
    name: str = Field(..., description="Recipe name")
    description: str = Field(..., description="Short description")
    image: str = Field(..., description="Image URL")
    rating: float = Field(..., ge=0, le=5, description="Average rating (0-5)")
    tags: List[str] = Field(default_factory=list, description="Display tags")
    ingredients: Optional[List[str]] = Field(None, description="Ingredient names")
    difficulty: Optional[Difficulty] = Field(None, description="Easy, Medium or Hard")
    time: Optional[str] = Field(None, description="Human readable cook time (e.g., '35 min')")
    category: Optional[str] = Field(None, description="Recipe category")
    seasons: Optional[List[str]] = Field(None, description="Seasons the recipe suits (e.g., ['autumn'])")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def _optional_text(value: Any) -> Optional[str]:
    # Cached display fields are not authoritative; coerce scalars, drop anything else
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


class SavedRecipeReference(CamelModel):
    """
    A recipe saved in a user's favorites or inside a collection.

    Only the id is authoritative; the cached display fields are reconciled
    against the featured catalog during enrichment.
    """
    id: str = Field(default="", description="Recipe identifier (blank ids are dropped by the analytics engine)")
    title: Optional[str] = Field(None, description="Cached title (favorites)")
    name: Optional[str] = Field(None, description="Cached name (collections, demo favorites)")
    category: Optional[str] = Field(None, description="Cached category")
    area: Optional[str] = Field(None, description="Cached cuisine/area")
    image: Optional[str] = Field(None, description="Cached image URL")
    cook_time: Any = Field(None, description="Cached cook time, minutes or a string like '35 min'")
    rating: Any = Field(None, description="Cached rating, number or numeric string")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("title", "name", "category", "area", "image", mode="before")
    @classmethod
    def _display_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class Collection(CamelModel):
    """A named grouping of saved recipes owned by one user."""
    name: str = Field(default="", description="Collection name")
    description: Optional[str] = Field(None, description="Collection description")
    category: Optional[str] = Field(None, description="Collection category")
    recipes: List[SavedRecipeReference] = Field(default_factory=list, description="Saved recipes in this collection")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("name", mode="before")
    @classmethod
    def _name_or_empty(cls, value: Any) -> str:
        return _optional_text(value) or ""

    @field_validator("description", "category", mode="before")
    @classmethod
    def _display_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class EnrichedRecipe(CamelModel):
    """Saved recipe merged with its catalog metadata. Derived, never persisted."""
    id: str
    name: str
    category: str
    cook_time_minutes: int = Field(..., ge=0)
    rating: float = Field(..., ge=0, le=5)
    difficulty: Difficulty
    ingredients: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Cooking analytics
# ---------------------------------------------------------------------------

class CuisineStat(CamelModel):
    cuisine: str
    count: int
    percentage: int


class DifficultyStat(CamelModel):
    difficulty: str
    count: int
    percentage: int


class TimeBreakdown(CamelModel):
    range: str
    count: int
    percentage: int


class IngredientStat(CamelModel):
    ingredient: str
    count: int
    percentage: int


class WeeklyProgress(CamelModel):
    week: str
    recipes: int
    time: int


class MonthlyTrend(CamelModel):
    month: str
    recipes: int
    time: int


class CookingGoals(CamelModel):
    weekly_recipes: int = 3
    weekly_time: int = 120
    monthly_variety: int = 5
    current_week_recipes: int = 0
    current_week_time: int = 0
    current_month_variety: int = 0


class Achievement(CamelModel):
    """Earned achievement; `earned` is the display date (e.g., 'Oct 2026')."""
    name: str
    description: str
    earned: str
    icon: str


class AnalyticsData(CamelModel):
    """
    Cooking analytics for one user.

    Always fully populated: zero counts and empty lists instead of missing fields.
    """
    total_recipes: int = 0
    total_cooking_time: int = Field(0, description="Total cook time in minutes")
    average_rating: float = 0
    favorite_cuisines: List[CuisineStat] = Field(default_factory=list)
    difficulty_breakdown: List[DifficultyStat] = Field(default_factory=list)
    cooking_time_breakdown: List[TimeBreakdown] = Field(default_factory=list)
    weekly_progress: List[WeeklyProgress] = Field(default_factory=list)
    monthly_trends: List[MonthlyTrend] = Field(default_factory=list)
    top_ingredients: List[IngredientStat] = Field(default_factory=list)
    cooking_goals: CookingGoals = Field(default_factory=CookingGoals)
    achievements: List[Achievement] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Advanced analytics
# ---------------------------------------------------------------------------

class CookingStats(CamelModel):
    total_recipes_cooked: int = 0
    total_cooking_time: float = Field(0, description="Total cook time in hours")
    average_rating: float = 0
    favorite_cuisine: str = "—"
    most_cooked_recipe: str = "—"
    weekly_goal: int = 3
    weekly_progress: int = 0
    monthly_trend: str = "—"
    cooking_streak: int = 0


class SearchPattern(CamelModel):
    query: str
    count: int


class PeakCookingTime(CamelModel):
    hour: int
    count: int


class DeviceUsage(CamelModel):
    mobile: int = 0
    desktop: int = 100
    tablet: int = 0


class UserBehavior(CamelModel):
    search_patterns: List[SearchPattern] = Field(default_factory=list)
    peak_cooking_times: List[PeakCookingTime] = Field(default_factory=list)
    device_usage: DeviceUsage = Field(default_factory=DeviceUsage)
    session_duration: int = 0
    bounce_rate: int = 0


class Preferences(CamelModel):
    dietary_restrictions: List[str] = Field(default_factory=list)
    spice_level: str = "—"
    cooking_skill: str = "—"
    preferred_cuisines: List[str] = Field(default_factory=list)
    meal_types: List[str] = Field(default_factory=list)
    time_constraints: str = "—"


class AdvancedAchievement(CamelModel):
    """Achievement entry of the advanced view; locked entries carry progress instead of a date."""
    id: int
    name: str
    description: str
    earned: bool
    date: Optional[str] = None
    progress: Optional[int] = None


class Recommendation(CamelModel):
    type: str
    title: str
    reason: str
    confidence: float = Field(..., ge=0, le=1)


class AdvancedAnalyticsData(CamelModel):
    cooking_stats: CookingStats = Field(default_factory=CookingStats)
    user_behavior: UserBehavior = Field(default_factory=UserBehavior)
    preferences: Preferences = Field(default_factory=Preferences)
    achievements: List[AdvancedAchievement] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)
