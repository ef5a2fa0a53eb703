"""
Key-value storage for users' saved recipes.

The browser client keeps everything under three kinds of keys:
- favorites_<userId>    -> JSON list of saved recipe references (real users)
- collections_<userId>  -> JSON list of collections (real users)
- demoUser              -> one JSON object; the demo account's favorites and
                           collections live under demoData.favorites / demoData.collections

This module provides:
- KeyValueStore: the minimal get/set/delete interface the core depends on
- InMemoryStore: process-local dict store (default, used in development and tests)
- SqlKeyValueStore: table-backed store used when DATABASE_URL is set
- DemoProfile: typed accessors over the demoUser blob
- load_*/save_* helpers that pick the right keys for demo and real users

Reads are tolerant: a missing key, unparsable JSON or an unexpected shape is
logged and treated as "no data". Individual malformed entries are skipped.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from .db import db_delete_value, db_get_value, db_is_enabled, db_set_value
from .models import Collection, SavedRecipeReference

logger = logging.getLogger(__name__)

DEMO_USER_KEY = "demoUser"


def favorites_key(user_id: str) -> str:
    """Storage key of a real user's favorites list."""
    return f"favorites_{user_id}"


def collections_key(user_id: str) -> str:
    """Storage key of a real user's collections list."""
    return f"collections_{user_id}"


class KeyValueStore(ABC):
    """String key-value store. Values are JSON text."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class InMemoryStore(KeyValueStore):
    """
    In-memory store keyed by storage key.

    Process-local and non-persistent: data is lost on restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        """Remove every key (useful for testing)."""
        self._data.clear()


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the kv_entries table (see culinaria.db)."""

    def get(self, key: str) -> Optional[str]:
        return db_get_value(key)

    def set(self, key: str, value: str) -> None:
        db_set_value(key, value)

    def delete(self, key: str) -> None:
        db_delete_value(key)


_STORE: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """
    Return the process-wide store.

    Uses the database when DATABASE_URL is set, otherwise an in-memory store.
    """
    global _STORE
    if _STORE is None:
        _STORE = SqlKeyValueStore() if db_is_enabled() else InMemoryStore()
    return _STORE


def set_store(store: Optional[KeyValueStore]) -> None:
    """Override the process-wide store; None resets to the default on next use."""
    global _STORE
    _STORE = store


def read_json(store: KeyValueStore, key: str, default: Any) -> Any:
    """
    Read and parse a JSON value, degrading to a default.

    Args:
        store: Store to read from
        key: Storage key
        default: Value returned when the key is missing, unreadable or not valid JSON

    Returns:
        Parsed JSON value or default
    """
    try:
        raw = store.get(key)
    except Exception as e:
        logger.warning(f"Failed to read storage key {key!r}: {e}")
        return default

    if not raw:
        return default

    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Storage key {key!r} does not hold valid JSON: {e}")
        return default


def write_json(store: KeyValueStore, key: str, value: Any) -> None:
    """Serialize a value as JSON and store it under key."""
    store.set(key, json.dumps(value, ensure_ascii=False))


def parse_saved_references(raw: Any, source: str) -> List[SavedRecipeReference]:
    """
    Validate a raw list of saved recipe entries.

    Args:
        raw: Parsed JSON value expected to be a list of objects
        source: Description used in log messages (e.g., "favorites_user-1")

    Returns:
        Valid entries in input order; anything malformed is skipped with a warning
    """
    if not isinstance(raw, list):
        logger.warning(f"Expected a list of saved recipes in {source}, got {type(raw).__name__}")
        return []

    references: List[SavedRecipeReference] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning(f"Skipping non-object saved recipe in {source}: {entry!r}")
            continue
        try:
            references.append(SavedRecipeReference.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed saved recipe in {source}: {e}")
    return references


def parse_collections(raw: Any, source: str) -> List[Collection]:
    """
    Validate a raw list of collections.

    Malformed collections are skipped; inside a valid collection, malformed
    recipe entries are skipped individually.
    """
    if not isinstance(raw, list):
        logger.warning(f"Expected a list of collections in {source}, got {type(raw).__name__}")
        return []

    collections: List[Collection] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            logger.warning(f"Skipping non-object collection in {source}: {entry!r}")
            continue
        recipes = parse_saved_references(entry.get("recipes") or [], f"{source} collection recipes")
        try:
            collections.append(Collection.model_validate({**entry, "recipes": recipes}))
        except ValidationError as e:
            logger.warning(f"Skipping malformed collection in {source}: {e}")
    return collections


def _dump_all(models: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    return [m.model_dump(by_alias=True, exclude_none=True) for m in models]


class DemoProfile:
    """
    The demo account's stored profile.

    The whole demo state is one JSON object under DEMO_USER_KEY. This class keeps
    the nested-field parsing (demoData.favorites, demoData.collections) in one
    place so callers only see validated lists.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = data or {}

    @classmethod
    def load(cls, store: KeyValueStore) -> "DemoProfile":
        raw = read_json(store, DEMO_USER_KEY, {})
        if not isinstance(raw, dict):
            logger.warning(f"Storage key {DEMO_USER_KEY!r} is not an object, ignoring it")
            raw = {}
        return cls(raw)

    def _demo_data(self) -> Dict[str, Any]:
        demo_data = self.data.get("demoData")
        if demo_data is None:
            return {}
        if not isinstance(demo_data, dict):
            logger.warning("demoUser.demoData is not an object, ignoring it")
            return {}
        return demo_data

    def get_favorites(self) -> List[SavedRecipeReference]:
        return parse_saved_references(self._demo_data().get("favorites") or [], "demoUser.demoData.favorites")

    def get_collections(self) -> List[Collection]:
        return parse_collections(self._demo_data().get("collections") or [], "demoUser.demoData.collections")

    def set_favorites(self, favorites: List[SavedRecipeReference]) -> None:
        self._writable_demo_data()["favorites"] = _dump_all(favorites)

    def set_collections(self, collections: List[Collection]) -> None:
        self._writable_demo_data()["collections"] = _dump_all(collections)

    def _writable_demo_data(self) -> Dict[str, Any]:
        if not isinstance(self.data.get("demoData"), dict):
            self.data["demoData"] = {}
        return self.data["demoData"]

    def save(self, store: KeyValueStore) -> None:
        write_json(store, DEMO_USER_KEY, self.data)


def load_favorites(store: KeyValueStore, user_id: str, is_demo_user: bool) -> List[SavedRecipeReference]:
    """Load a user's favorites from the demo profile or from favorites_<userId>."""
    if is_demo_user:
        return DemoProfile.load(store).get_favorites()
    key = favorites_key(user_id)
    return parse_saved_references(read_json(store, key, []), key)


def load_collections(store: KeyValueStore, user_id: str, is_demo_user: bool) -> List[Collection]:
    """Load a user's collections from the demo profile or from collections_<userId>."""
    if is_demo_user:
        return DemoProfile.load(store).get_collections()
    key = collections_key(user_id)
    return parse_collections(read_json(store, key, []), key)


def save_favorites(
    store: KeyValueStore,
    user_id: str,
    favorites: List[SavedRecipeReference],
    is_demo_user: bool = False,
) -> None:
    """Replace a user's favorites list (the demo profile's for the demo account)."""
    if is_demo_user:
        demo = DemoProfile.load(store)
        demo.set_favorites(favorites)
        demo.save(store)
        return
    write_json(store, favorites_key(user_id), _dump_all(favorites))


def save_collections(
    store: KeyValueStore,
    user_id: str,
    collections: List[Collection],
    is_demo_user: bool = False,
) -> None:
    """Replace a user's collections (the demo profile's for the demo account)."""
    if is_demo_user:
        demo = DemoProfile.load(store)
        demo.set_collections(collections)
        demo.save(store)
        return
    write_json(store, collections_key(user_id), _dump_all(collections))


def save_demo_profile(store: KeyValueStore, profile: Dict[str, Any]) -> DemoProfile:
    """Replace the demo profile blob and return it wrapped."""
    demo = DemoProfile(profile)
    demo.save(store)
    return demo
