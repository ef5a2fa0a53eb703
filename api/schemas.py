"""
Pydantic schemas for FastAPI request and response models.

This module defines the request/response bodies that are specific to the HTTP
layer. Domain models (Recipe, FeaturedRecipe, AnalyticsData, ...) live in
culinaria.models and are used directly as response models where they fit.

The schemas include:
- SearchResponse: halal-filtered search results
- HalalCheckResponse / IngredientCheckResponse: classifier answers
- LeftoversRequest: ingredients for leftover suggestions
- FavoritesPayload / CollectionsPayload: saved-recipe read/write bodies
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from culinaria.models import Collection, Recipe, SavedRecipeReference


class SearchResponse(BaseModel):
    """
    Response model for the recipe search endpoint.

    Only recipes that passed the halal filter are included.
    """
    query: str = Field(..., description="Search query as received")
    count: int = Field(..., ge=0, description="Number of halal results")
    results: List[Recipe] = Field(default_factory=list, description="Normalized halal recipes")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "query": "chicken",
                "count": 1,
                "results": [
                    {
                        "id": "52772",
                        "name": "Teriyaki Chicken Casserole",
                        "category": "Chicken",
                        "area": "Japanese",
                        "instructions": "Preheat oven to 350F...",
                        "thumbnail": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
                        "ingredients": ["soy sauce", "water", "brown sugar"],
                    }
                ],
            }
        }
    )


class HalalCheckResponse(BaseModel):
    """Classifier answer for one recipe."""
    halal: bool = Field(..., description="True if no pork or alcohol terms were found")


class IngredientCheckResponse(BaseModel):
    """Classifier answer for one ingredient name."""
    term: str = Field(..., description="Ingredient as received")
    non_halal: bool = Field(..., description="True if the ingredient looks like pork or alcohol")


class LeftoversRequest(BaseModel):
    """Ingredients the user has left over."""
    ingredients: List[str] = Field(..., description="Ingredient names (e.g., ['chicken', 'tomato'])")


class FavoritesPayload(BaseModel):
    """A user's favorites list."""
    favorites: List[SavedRecipeReference] = Field(default_factory=list)


class CollectionsPayload(BaseModel):
    """A user's collections."""
    collections: List[Collection] = Field(default_factory=list)


class DemoProfilePayload(BaseModel):
    """The demo account's profile blob; stored as-is under the demoUser key."""
    profile: Dict[str, Any] = Field(..., description="Demo profile with demoData.favorites / demoData.collections")
