"""
Configuration management for the Culinaria API.

This module centralizes environment variable loading from the .env file at the
project root. It is imported first by api/main.py so .env is loaded before any
other code reads environment variables.

In production .env usually does not exist; load_dotenv() then no-ops and the
platform's environment variables are used.

Environment Variables:
- MEALDB_BASE_URL: Optional, defaults to "https://www.themealdb.com/api/json/v1/1"
- MEALDB_TIMEOUT_SECONDS: Optional, defaults to 10
- DATABASE_URL: Optional, enables SQL-backed storage of favorites and collections
- DEMO_USER_ID: Optional, user id of the shared demo account (default "demo-user-123")
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take precedence.
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    env_path = project_root / ".env"
    load_dotenv(env_path, override=False)


# Load .env file on module import
load_env_file()


class MealDBConfig:
    """Configuration for the TheMealDB search proxy."""

    @staticmethod
    def get_base_url() -> str:
        """
        Get TheMealDB API root.

        Returns:
            Base URL string (default: "https://www.themealdb.com/api/json/v1/1")
        """
        return os.getenv("MEALDB_BASE_URL", "https://www.themealdb.com/api/json/v1/1")

    @staticmethod
    def get_timeout_seconds() -> float:
        """
        Get the outbound request timeout.

        Returns:
            Timeout in seconds (default: 10.0; invalid values fall back to the default)
        """
        raw = os.getenv("MEALDB_TIMEOUT_SECONDS", "10")
        try:
            return float(raw)
        except ValueError:
            logger.warning(f"Invalid MEALDB_TIMEOUT_SECONDS={raw!r}, using 10 seconds")
            return 10.0


class StorageConfig:
    """Configuration for saved-recipe storage."""

    @staticmethod
    def get_database_url() -> Optional[str]:
        """
        Get the database URL.

        Returns:
            DATABASE_URL or None (in-memory storage is used when unset)
        """
        return os.getenv("DATABASE_URL")

    @staticmethod
    def get_demo_user_id() -> str:
        """
        Get the user id of the shared demo account.

        Requests for this id read the demoUser profile instead of per-user keys.
        """
        return os.getenv("DEMO_USER_ID", "demo-user-123")


def get_config_summary() -> dict:
    """
    Describe the active configuration without exposing secrets.

    Returns:
        Dictionary with keys:
        - mealdb_base_url: str
        - database_configured: bool
        - demo_user_id: str
    """
    return {
        "mealdb_base_url": MealDBConfig.get_base_url(),
        "database_configured": StorageConfig.get_database_url() is not None,
        "demo_user_id": StorageConfig.get_demo_user_id(),
    }
