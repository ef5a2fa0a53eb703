"""
Analytics router for cooking analytics endpoints.

This router provides endpoints for a user's saved-recipe analytics:
- GET /analytics/{user_id} - Cooking analytics (distributions, achievements)
- GET /analytics/{user_id}/advanced - Advanced view (hours, recommendations)

Both endpoints always answer 200 with a fully populated body. Missing or
malformed storage for the user yields zero counts and empty lists.
"""

from fastapi import APIRouter, Depends, Query

from api.deps import get_featured_catalog, get_kv_store, is_demo_request
from culinaria.advanced import compute_advanced_analytics
from culinaria.analytics import compute_cooking_analytics
from culinaria.catalog import CatalogLookup
from culinaria.models import AdvancedAnalyticsData, AnalyticsData
from culinaria.storage import KeyValueStore

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/{user_id}",
    response_model=AnalyticsData,
    summary="Get cooking analytics",
    description="Compute cuisine, difficulty, cook-time and ingredient statistics plus achievements "
                "from the user's favorites and collections.",
)
def get_cooking_analytics(
    user_id: str,
    demo: bool = Query(False, description="Read the shared demo profile instead of the user's own keys"),
    store: KeyValueStore = Depends(get_kv_store),
    catalog: CatalogLookup = Depends(get_featured_catalog),
) -> AnalyticsData:
    """
    Get cooking analytics for a user.

    Example response (no saved recipes):
    {
        "totalRecipes": 0,
        "totalCookingTime": 0,
        "averageRating": 0.0,
        "favoriteCuisines": [],
        "difficultyBreakdown": [
            {"difficulty": "Easy", "count": 0, "percentage": 0},
            {"difficulty": "Medium", "count": 0, "percentage": 0},
            {"difficulty": "Hard", "count": 0, "percentage": 0}
        ],
        ...
        "achievements": []
    }
    """
    return compute_cooking_analytics(
        user_id,
        is_demo_request(user_id, demo),
        store=store,
        catalog=catalog,
    )


@router.get(
    "/{user_id}/advanced",
    response_model=AdvancedAnalyticsData,
    summary="Get advanced analytics",
    description="Cooking stats in hours, earned and locked achievements, and rule-based recommendations.",
)
def get_advanced_analytics(
    user_id: str,
    demo: bool = Query(False, description="Read the shared demo profile instead of the user's own keys"),
    store: KeyValueStore = Depends(get_kv_store),
    catalog: CatalogLookup = Depends(get_featured_catalog),
) -> AdvancedAnalyticsData:
    """
    Get the advanced analytics view for a user.

    With no saved recipes, recommendations holds exactly one "onboarding" entry.
    """
    return compute_advanced_analytics(
        user_id,
        is_demo_request(user_id, demo),
        store=store,
        catalog=catalog,
    )
