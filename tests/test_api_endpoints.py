"""
Tests for the Culinaria API endpoints.

The process store is replaced by a fresh InMemoryStore for every test and the
TheMealDB client is overridden with a mock, so no network or database is used.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from api.deps import get_mealdb_client
from api.main import app
from culinaria.mealdb import SearchUnavailableError
from culinaria.storage import InMemoryStore, set_store
from culinaria.utils.cache import clear_cache

client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_state():
    set_store(InMemoryStore())
    clear_cache()
    yield
    app.dependency_overrides.clear()
    set_store(None)
    clear_cache()


@pytest.fixture
def mealdb():
    mock_client = Mock()
    app.dependency_overrides[get_mealdb_client] = lambda: mock_client
    return mock_client


class TestServiceEndpoints:
    """Test cases for root and health endpoints."""

    def test_root(self):
        resp = client.get("/")
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "Culinaria API"
        assert data["catalog"] == {"recipes": 4, "categories": 3}

    def test_health(self):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "culinaria-api"
        assert "timestamp" in data
        assert isinstance(data["uptime_seconds"], int)
        assert isinstance(data["db_enabled"], bool)


class TestRecipeEndpoints:
    """Test cases for catalog and search endpoints."""

    def test_featured_list(self):
        resp = client.get("/api/recipes/featured")
        assert resp.status_code == 200
        assert len(resp.json()) == 4

    def test_featured_by_id(self):
        resp = client.get("/api/recipes/featured/chicken-tikka-masala")
        assert resp.status_code == 200
        assert resp.json()["time"] == "50 min"

    def test_featured_unknown_id_is_404(self):
        resp = client.get("/api/recipes/featured/nope")
        assert resp.status_code == 404

    def test_seasonal(self):
        resp = client.get("/api/recipes/seasonal", params={"season": "winter"})
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()] == [
            "truffle-risotto", "chicken-tikka-masala", "slow-braised-lamb-shoulder",
        ]

    def test_seasonal_requires_season(self):
        assert client.get("/api/recipes/seasonal").status_code == 422

    def test_leftovers(self):
        resp = client.post("/api/recipes/leftovers", json={"ingredients": ["lamb shoulder"]})
        assert resp.status_code == 200
        assert [r["id"] for r in resp.json()] == ["slow-braised-lamb-shoulder"]

    def test_search_filters_non_halal(self, mealdb):
        mealdb.search.return_value = [
            {"idMeal": "1", "strMeal": "Chicken Handi", "strIngredient1": "Chicken"},
            {"idMeal": "2", "strMeal": "Pork Belly Buns", "strIngredient1": "Pork"},
        ]

        resp = client.get("/api/recipes/search", params={"q": "  buns "})

        assert resp.status_code == 200
        data = resp.json()
        assert data["query"] == "buns"
        assert data["count"] == 1
        assert data["results"][0]["name"] == "Chicken Handi"
        mealdb.search.assert_called_once_with("buns")

    @pytest.mark.parametrize("params", [{}, {"q": ""}, {"q": "   "}])
    def test_search_requires_query(self, mealdb, params):
        resp = client.get("/api/recipes/search", params=params)
        assert resp.status_code == 400
        mealdb.search.assert_not_called()

    def test_search_upstream_failure_is_502(self, mealdb):
        mealdb.search.side_effect = SearchUnavailableError("Search failed: timeout")
        resp = client.get("/api/recipes/search", params={"q": "chicken"})
        assert resp.status_code == 502


class TestHalalEndpoints:
    """Test cases for halal classification endpoints."""

    def test_check_raw_meal(self):
        resp = client.post("/api/halal/check", json={"strMeal": "Pork Ribs"})
        assert resp.status_code == 200
        assert resp.json() == {"halal": False}

    def test_check_normalized_recipe(self):
        resp = client.post("/api/halal/check", json={"name": "Dal", "ingredients": ["lentils", "cumin"]})
        assert resp.json() == {"halal": True}

    def test_ingredient(self):
        resp = client.get("/api/halal/ingredient", params={"term": "white wine"})
        assert resp.status_code == 200
        assert resp.json() == {"term": "white wine", "non_halal": True}


class TestUserAndAnalyticsEndpoints:
    """Test cases for saved recipes and analytics endpoints."""

    def test_favorites_round_trip(self):
        payload = {"favorites": [{"id": "truffle-risotto", "title": "Truffle Risotto", "cookTime": "35 min"}]}

        resp = client.put("/users/u1/favorites", json=payload)
        assert resp.status_code == 200

        resp = client.get("/users/u1/favorites")
        assert resp.status_code == 200
        favorites = resp.json()["favorites"]
        assert [f["id"] for f in favorites] == ["truffle-risotto"]
        assert favorites[0]["cookTime"] == "35 min"

    def test_collections_round_trip(self):
        payload = {"collections": [{"name": "Weeknight", "recipes": [{"id": "mediterranean-quinoa-salad"}]}]}
        assert client.put("/users/u1/collections", json=payload).status_code == 200

        collections = client.get("/users/u1/collections").json()["collections"]
        assert collections[0]["name"] == "Weeknight"

    def test_analytics_for_new_user(self):
        resp = client.get("/analytics/new-user")
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalRecipes"] == 0
        assert data["achievements"] == []
        assert len(data["difficultyBreakdown"]) == 3

    def test_analytics_after_saving_favorites(self):
        client.put("/users/u1/favorites", json={"favorites": [{"id": "truffle-risotto", "category": "Main"}]})

        data = client.get("/analytics/u1").json()

        assert data["totalRecipes"] == 1
        assert data["totalCookingTime"] == 35
        assert data["favoriteCuisines"] == [{"cuisine": "Main", "count": 1, "percentage": 100}]
        assert data["achievements"][0]["name"] == "First Recipe"

    def test_demo_profile(self):
        profile = {
            "demoData": {
                "favorites": [{"id": "slow-braised-lamb-shoulder", "name": "Lamb", "category": "Main"}],
                "collections": [],
            },
        }
        assert client.put("/users/demo", json={"profile": profile}).status_code == 204

        flagged = client.get("/analytics/anyone", params={"demo": "true"}).json()
        by_id = client.get("/analytics/demo-user-123").json()
        own_keys = client.get("/analytics/anyone").json()

        assert flagged["totalRecipes"] == 1
        assert flagged["totalCookingTime"] == 180
        assert by_id["totalRecipes"] == 1
        assert own_keys["totalRecipes"] == 0

        favorites = client.get("/users/anyone/favorites", params={"demo": "true"}).json()["favorites"]
        assert [f["id"] for f in favorites] == ["slow-braised-lamb-shoulder"]

    def test_advanced_analytics(self):
        data = client.get("/analytics/new-user/advanced").json()
        assert data["cookingStats"]["totalRecipesCooked"] == 0
        assert [r["type"] for r in data["recommendations"]] == ["onboarding"]
        assert len(data["achievements"]) == 3

    def test_demo_user_writes_are_read_back(self):
        payload = {"favorites": [{"id": "chicken-tikka-masala", "name": "Chicken Tikka Masala"}]}

        assert client.put("/users/demo-user-123/favorites", json=payload).status_code == 200

        favorites = client.get("/users/demo-user-123/favorites").json()["favorites"]
        assert [f["id"] for f in favorites] == ["chicken-tikka-masala"]
        assert client.get("/analytics/demo-user-123").json()["totalRecipes"] == 1
