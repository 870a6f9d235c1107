"""
Google Cloud Firestore user/recipe store.

Each user is a document in the users collection (``users/{user_id}``) shaped
like::

    {"name": ..., "uid": ..., "email": ..., "recipes": {recipe_id: {...}}}

Atomicity comes from Firestore itself:

- create_user uses DocumentReference.create(), which fails with AlreadyExists
  instead of overwriting an existing document
- add_recipe and delete_recipe run in a transaction that reads the document,
  checks it, then applies a field-level update (``recipes.<id>``). Deletion
  uses DELETE_FIELD, so two concurrent deletions for the same user never
  rewrite each other's recipe maps.

Recipe identifiers are Firestore auto-ids, re-drawn inside the transaction if
one is already present in the user's map.

Credentials are resolved by the Google client library (application default
credentials or GOOGLE_APPLICATION_CREDENTIALS). Set FIRESTORE_EMULATOR_HOST to
run against the local emulator.
"""

import logging
from typing import Any, Callable, Dict, Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.field_path import FieldPath

from recipebox.errors import RecipeNotFoundError, UpstreamError, UserNotFoundError

from .base import RecipeStore

logger = logging.getLogger(__name__)

DEFAULT_USERS_COLLECTION = "users"


def _recipe_field(recipe_id: str) -> str:
    """Field path for one entry of the recipes map, quoted when needed."""
    return FieldPath("recipes", recipe_id).to_api_repr()


def _snapshot_recipes(snapshot: Any) -> Dict[str, Any]:
    data = snapshot.to_dict() or {}
    return data.get("recipes") or {}


def _unused_recipe_id(recipes: Dict[str, Any], id_factory: Callable[[], str]) -> str:
    recipe_id = id_factory()
    while recipe_id in recipes:
        logger.debug("Recipe id %s already taken, drawing another", recipe_id)
        recipe_id = id_factory()
    return recipe_id


@firestore.transactional
def _add_recipe_txn(
    transaction: Any,
    ref: Any,
    recipe: Dict[str, Any],
    id_factory: Callable[[], str],
) -> str:
    snapshot = ref.get(transaction=transaction)
    if not snapshot.exists:
        raise UserNotFoundError()

    recipe_id = _unused_recipe_id(_snapshot_recipes(snapshot), id_factory)
    transaction.update(ref, {_recipe_field(recipe_id): recipe})
    return recipe_id


@firestore.transactional
def _delete_recipe_txn(transaction: Any, ref: Any, recipe_id: str) -> None:
    snapshot = ref.get(transaction=transaction)
    if not snapshot.exists:
        raise UserNotFoundError()
    if recipe_id not in _snapshot_recipes(snapshot):
        raise RecipeNotFoundError()

    transaction.update(ref, {_recipe_field(recipe_id): firestore.DELETE_FIELD})


class FirestoreRecipeStore(RecipeStore):
    """
    RecipeStore backed by a Firestore collection.

    Args:
        client: Existing firestore.Client (optional, one is created if omitted)
        collection: Name of the users collection (default: "users")
        project: GCP project id used when creating a client
        database: Firestore database id used when creating a client
    """
    backend = "firestore"

    def __init__(
        self,
        client: Optional[firestore.Client] = None,
        collection: str = DEFAULT_USERS_COLLECTION,
        project: Optional[str] = None,
        database: Optional[str] = None,
    ) -> None:
        if client is None:
            try:
                client = firestore.Client(project=project, database=database)
            except Exception as e:
                raise UpstreamError(f"Failed to initialize Firestore client: {e}") from e
        self.client = client
        self.collection = collection

    def _ref(self, user_id: str):
        return self.client.collection(self.collection).document(user_id)

    def _new_recipe_id(self) -> str:
        return self.client.collection(self.collection).document().id

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            snapshot = self._ref(user_id).get()
        except gcp_exceptions.GoogleAPIError as e:
            raise UpstreamError(f"Error reading user {user_id} from Firestore: {e}") from e

        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def create_user(self, user_id: str, record: Dict[str, Any]) -> bool:
        try:
            self._ref(user_id).create(record)
        except gcp_exceptions.AlreadyExists:
            return False
        except gcp_exceptions.GoogleAPIError as e:
            raise UpstreamError(f"Error creating user {user_id} in Firestore: {e}") from e
        return True

    def add_recipe(self, user_id: str, recipe: Dict[str, Any]) -> str:
        try:
            return _add_recipe_txn(
                self.client.transaction(), self._ref(user_id), recipe, self._new_recipe_id
            )
        except gcp_exceptions.GoogleAPIError as e:
            raise UpstreamError(f"Error adding recipe for user {user_id}: {e}") from e

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        try:
            _delete_recipe_txn(self.client.transaction(), self._ref(user_id), recipe_id)
        except gcp_exceptions.GoogleAPIError as e:
            raise UpstreamError(
                f"Error deleting recipe {recipe_id} for user {user_id}: {e}"
            ) from e
