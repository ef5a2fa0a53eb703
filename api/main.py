"""
FastAPI application for the Culinaria API.

This module wires the REST API for the Culinaria recipe backend:
- /api/recipes/*: Featured catalog, seasonal and leftover suggestions, halal search
- /api/halal/*: Halal classification of recipes and ingredient names
- /users/*: Favorites, collections and the shared demo profile
- /analytics/*: Cooking analytics and the advanced analytics view
- GET /api/health: Health check

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI

from api.config import get_config_summary
from api.routers import analytics, recipes, users
from culinaria.catalog import catalog_stats
from culinaria.db import db_is_enabled, init_db

logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

SERVICE_NAME = "culinaria-api"

app = FastAPI(
    title="Culinaria API",
    description="Backend API for halal recipe discovery, saved recipes and cooking analytics",
    version="1.0.0",
    openapi_tags=[
        {
            "name": "recipes",
            "description": "Featured catalog, seasonal and leftover suggestions, and halal-filtered TheMealDB search.",
        },
        {
            "name": "halal",
            "description": "Keyword-based halal classification for recipes and ingredients.",
        },
        {
            "name": "users",
            "description": "Read and replace a user's favorites and collections.",
        },
        {
            "name": "analytics",
            "description": "Cooking analytics computed from a user's saved recipes.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)

# Initialize database if DATABASE_URL is set
if db_is_enabled():
    try:
        init_db()
    except Exception as e:
        # Keep serving; reads degrade to empty data and writes fail with 500
        logger.warning(f"Database initialization failed: {e}")

app.include_router(recipes.router)
app.include_router(users.router)
app.include_router(analytics.router)


@app.get("/api/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, service name, current timestamp, uptime, database status
        and a secret-free configuration summary.
        Always returns 200 OK if the endpoint is reachable.
    """
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": int(time.time() - _APP_START_TIME),
        "db_enabled": db_is_enabled(),
        "config": get_config_summary(),
    }


@app.get("/")
def root():
    """Root endpoint providing API information."""
    return {
        "name": "Culinaria API",
        "version": "1.0.0",
        "description": "Backend API for halal recipe discovery, saved recipes and cooking analytics",
        "docs": "/docs",
        "catalog": catalog_stats(),
    }
