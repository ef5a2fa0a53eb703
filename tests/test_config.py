"""
Tests for environment-driven configuration.
"""

from api.config import MealDBConfig, StorageConfig, get_config_summary
from api.deps import get_mealdb_client, is_demo_request


class TestConfig:
    """Test cases for config accessors and the dependencies built on them."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MEALDB_BASE_URL", raising=False)
        monkeypatch.delenv("MEALDB_TIMEOUT_SECONDS", raising=False)
        monkeypatch.delenv("DEMO_USER_ID", raising=False)

        assert MealDBConfig.get_base_url() == "https://www.themealdb.com/api/json/v1/1"
        assert MealDBConfig.get_timeout_seconds() == 10.0
        assert StorageConfig.get_demo_user_id() == "demo-user-123"

    def test_invalid_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("MEALDB_TIMEOUT_SECONDS", "soon")
        assert MealDBConfig.get_timeout_seconds() == 10.0

    def test_client_uses_environment(self, monkeypatch):
        monkeypatch.setenv("MEALDB_BASE_URL", "https://mirror.example/api/")
        monkeypatch.setenv("MEALDB_TIMEOUT_SECONDS", "2.5")

        client = get_mealdb_client()

        assert client.base_url == "https://mirror.example/api"
        assert client.timeout == 2.5

    def test_demo_detection(self, monkeypatch):
        monkeypatch.setenv("DEMO_USER_ID", "guest")
        assert is_demo_request("guest", False) is True
        assert is_demo_request("someone", True) is True
        assert is_demo_request("someone", False) is False

    def test_summary_hides_database_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://user:secret@db/culinaria")
        summary = get_config_summary()
        assert summary["database_configured"] is True
        assert "secret" not in str(summary)
