"""
FastAPI dependencies that hand the store and connectors to endpoints.

The application owns one RecipeStore and one connector per provider, kept on
``app.state``. create_app() may inject them up front (tests do); otherwise
each is built from configuration the first time an endpoint needs it, so a
missing API key only breaks the endpoint that needs that key.
"""

import logging
import threading

from fastapi import Request

from api.config import AppConfig, SpoonacularConfig, StoreConfig, UnwrangleConfig
from recipebox.connectors.spoonacular_connector import SpoonacularConnector
from recipebox.connectors.unwrangle_connector import UnwrangleConnector
from recipebox.errors import RecipeBoxError, UpstreamError
from recipebox.stores.base import RecipeStore
from recipebox.stores.memory_store import InMemoryRecipeStore

logger = logging.getLogger(__name__)

_init_lock = threading.Lock()


def create_store() -> RecipeStore:
    """
    Build the RecipeStore selected by RECIPEBOX_STORE.

    Raises:
        UpstreamError: If the Firestore client cannot be created
    """
    backend = StoreConfig.get_backend()
    if backend == "memory":
        logger.warning("Using in-memory recipe store; data is lost on restart")
        return InMemoryRecipeStore()

    # Imported here so the memory backend works without Google credentials
    from recipebox.stores.firestore_store import FirestoreRecipeStore

    store = FirestoreRecipeStore(
        collection=StoreConfig.get_users_collection(),
        project=StoreConfig.get_project(),
        database=StoreConfig.get_database(),
    )
    logger.info("Firestore recipe store initialized (collection=%s)", store.collection)
    return store


def create_spoonacular_connector() -> SpoonacularConnector:
    return SpoonacularConnector(
        api_key=SpoonacularConfig.get_api_key(),
        base_url=SpoonacularConfig.get_base_url(),
        timeout=AppConfig.get_http_timeout(),
    )


def create_unwrangle_connector() -> UnwrangleConnector:
    return UnwrangleConnector(
        api_key=UnwrangleConfig.get_api_key(),
        platform=UnwrangleConfig.get_platform(),
        base_url=UnwrangleConfig.get_base_url(),
        timeout=AppConfig.get_http_timeout(),
    )


def _get_or_create(request: Request, name: str, factory):
    state = request.app.state
    value = getattr(state, name, None)
    if value is None:
        with _init_lock:
            value = getattr(state, name, None)
            if value is None:
                try:
                    value = factory()
                except RecipeBoxError:
                    raise
                except Exception as e:
                    logger.error("Failed to initialize %s: %s", name, e)
                    raise UpstreamError(f"Error initializing {name}: {e}") from e
                setattr(state, name, value)
    return value


def get_store(request: Request) -> RecipeStore:
    return _get_or_create(request, "store", create_store)


def get_spoonacular(request: Request) -> SpoonacularConnector:
    return _get_or_create(request, "spoonacular", create_spoonacular_connector)


def get_unwrangle(request: Request) -> UnwrangleConnector:
    return _get_or_create(request, "unwrangle", create_unwrangle_connector)
