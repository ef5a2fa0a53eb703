"""
Shared FastAPI dependencies.

Routers receive the storage backend and the TheMealDB client through these
functions so tests can swap them with app.dependency_overrides.
"""

from api.config import MealDBConfig, StorageConfig
from culinaria.catalog import CatalogLookup, get_catalog
from culinaria.mealdb import MealDBClient
from culinaria.storage import KeyValueStore, get_store


def get_kv_store() -> KeyValueStore:
    """Process-wide key-value store (SQL when DATABASE_URL is set, else in-memory)."""
    return get_store()


def get_featured_catalog() -> CatalogLookup:
    """Featured recipe catalog."""
    return get_catalog()


def get_mealdb_client() -> MealDBClient:
    """TheMealDB client configured from the environment."""
    return MealDBClient(
        base_url=MealDBConfig.get_base_url(),
        timeout=MealDBConfig.get_timeout_seconds(),
    )


def is_demo_request(user_id: str, demo: bool) -> bool:
    """A request targets the demo profile when flagged or when it names the demo user id."""
    return demo or user_id == StorageConfig.get_demo_user_id()
