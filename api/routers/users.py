"""
Users router for reading and replacing saved recipes.

This router provides:
- GET/PUT /users/{user_id}/favorites - A real user's favorites (favorites_<userId>)
- GET/PUT /users/{user_id}/collections - A real user's collections (collections_<userId>)
- PUT /users/demo - Replace the shared demo profile (demoUser)

Every favorites/collections endpoint accepts ?demo=true to use the demo profile
instead; the demo user id (DEMO_USER_ID) always uses it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import get_kv_store, is_demo_request
from api.schemas import CollectionsPayload, DemoProfilePayload, FavoritesPayload
from culinaria.storage import (
    KeyValueStore,
    load_collections,
    load_favorites,
    save_collections,
    save_demo_profile,
    save_favorites,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _write_failed(what: str, user_id: str, e: Exception) -> HTTPException:
    logger.error(f"Failed to save {what} for user {user_id!r}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error saving {what}: {str(e)}",
    )


@router.put(
    "/demo",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace the demo profile",
)
def put_demo_profile(
    payload: DemoProfilePayload,
    store: KeyValueStore = Depends(get_kv_store),
) -> None:
    try:
        save_demo_profile(store, payload.profile)
    except Exception as e:
        raise _write_failed("demo profile", "demo", e) from e


@router.get(
    "/{user_id}/favorites",
    response_model=FavoritesPayload,
    summary="Get a user's favorites",
)
def get_favorites(
    user_id: str,
    demo: bool = Query(False, description="Read the shared demo profile"),
    store: KeyValueStore = Depends(get_kv_store),
) -> FavoritesPayload:
    return FavoritesPayload(favorites=load_favorites(store, user_id, is_demo_request(user_id, demo)))


@router.put(
    "/{user_id}/favorites",
    response_model=FavoritesPayload,
    summary="Replace a user's favorites",
)
def put_favorites(
    user_id: str,
    payload: FavoritesPayload,
    demo: bool = Query(False, description="Write the shared demo profile"),
    store: KeyValueStore = Depends(get_kv_store),
) -> FavoritesPayload:
    """
    Replace the stored favorites list.

    Writes for the demo account go into the demo profile so later reads see them.

    Raises:
        HTTPException 500: If the store rejects the write
    """
    try:
        save_favorites(store, user_id, payload.favorites, is_demo_request(user_id, demo))
    except Exception as e:
        raise _write_failed("favorites", user_id, e) from e
    return payload


@router.get(
    "/{user_id}/collections",
    response_model=CollectionsPayload,
    summary="Get a user's collections",
)
def get_collections(
    user_id: str,
    demo: bool = Query(False, description="Read the shared demo profile"),
    store: KeyValueStore = Depends(get_kv_store),
) -> CollectionsPayload:
    return CollectionsPayload(collections=load_collections(store, user_id, is_demo_request(user_id, demo)))


@router.put(
    "/{user_id}/collections",
    response_model=CollectionsPayload,
    summary="Replace a user's collections",
)
def put_collections(
    user_id: str,
    payload: CollectionsPayload,
    demo: bool = Query(False, description="Write the shared demo profile"),
    store: KeyValueStore = Depends(get_kv_store),
) -> CollectionsPayload:
    try:
        save_collections(store, user_id, payload.collections, is_demo_request(user_id, demo))
    except Exception as e:
        raise _write_failed("collections", user_id, e) from e
    return payload
