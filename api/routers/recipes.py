"""
Recipes router for catalog, search and halal classification endpoints.

This router provides:
- GET /api/recipes/featured - Featured catalog
- GET /api/recipes/featured/{recipe_id} - One featured recipe
- GET /api/recipes/seasonal - Featured recipes for a season
- POST /api/recipes/leftovers - Featured recipes that reuse leftover ingredients
- GET /api/recipes/search - TheMealDB search, halal-filtered
- POST /api/halal/check - Classify a recipe
- GET /api/halal/ingredient - Classify an ingredient name
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from api.deps import get_featured_catalog, get_mealdb_client
from api.schemas import HalalCheckResponse, IngredientCheckResponse, LeftoversRequest, SearchResponse
from culinaria.catalog import CatalogLookup, recipes_for_season, suggest_for_leftovers
from culinaria.halal import is_halal, is_non_halal_ingredient
from culinaria.mealdb import MealDBClient, SearchUnavailableError, search_halal_recipes
from culinaria.models import FeaturedRecipe

router = APIRouter(prefix="/api", tags=["recipes"])


@router.get(
    "/recipes/featured",
    response_model=List[FeaturedRecipe],
    summary="List featured recipes",
)
def list_featured(catalog: CatalogLookup = Depends(get_featured_catalog)) -> List[FeaturedRecipe]:
    """Return the curated featured recipes in catalog order."""
    return catalog.all()


@router.get(
    "/recipes/featured/{recipe_id}",
    response_model=FeaturedRecipe,
    summary="Get one featured recipe",
)
def get_featured(
    recipe_id: str,
    catalog: CatalogLookup = Depends(get_featured_catalog),
) -> FeaturedRecipe:
    """
    Return a featured recipe by id.

    Raises:
        HTTPException 404: If the id is not in the catalog
    """
    recipe = catalog.find_by_id(recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Featured recipe not found: {recipe_id}",
        )
    return recipe


@router.get(
    "/recipes/seasonal",
    response_model=List[FeaturedRecipe],
    summary="Featured recipes for a season",
)
def list_seasonal(
    season: str = Query(..., min_length=1, description="Season: spring, summer, autumn or winter"),
    catalog: CatalogLookup = Depends(get_featured_catalog),
) -> List[FeaturedRecipe]:
    return recipes_for_season(season, catalog)


@router.post(
    "/recipes/leftovers",
    response_model=List[FeaturedRecipe],
    summary="Suggest featured recipes for leftovers",
)
def leftovers(
    request: LeftoversRequest,
    catalog: CatalogLookup = Depends(get_featured_catalog),
) -> List[FeaturedRecipe]:
    return suggest_for_leftovers(request.ingredients, catalog)


@router.get(
    "/recipes/search",
    response_model=SearchResponse,
    summary="Search recipes (halal only)",
    description="Proxy to TheMealDB search. Results are normalized and only halal recipes are returned.",
)
def search(
    q: Optional[str] = Query(None, description="Search query string (e.g., 'chicken')"),
    client: MealDBClient = Depends(get_mealdb_client),
) -> SearchResponse:
    """
    Search TheMealDB and filter the results through the halal classifier.

    Raises:
        HTTPException 400: If q is missing or blank
        HTTPException 502: If TheMealDB cannot be reached
    """
    query = (q or "").strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing query parameter: q",
        )

    try:
        results = search_halal_recipes(query, client=client)
    except SearchUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return SearchResponse(query=query, count=len(results), results=results)


@router.post(
    "/halal/check",
    response_model=HalalCheckResponse,
    tags=["halal"],
    summary="Classify a recipe",
    description="Accepts a normalized recipe or a raw TheMealDB meal object.",
)
def check_recipe(recipe: Dict[str, Any] = Body(...)) -> HalalCheckResponse:
    return HalalCheckResponse(halal=is_halal(recipe))


@router.get(
    "/halal/ingredient",
    response_model=IngredientCheckResponse,
    tags=["halal"],
    summary="Classify an ingredient name",
)
def check_ingredient(
    term: str = Query(..., min_length=1, description="Ingredient name (e.g., 'pork belly')"),
) -> IngredientCheckResponse:
    return IngredientCheckResponse(term=term, non_halal=is_non_halal_ingredient(term))
