"""
Per-user recipe operations.

Each function takes the RecipeStore to act on as its first argument; the API
layer constructs the store once and injects it. The functions:

- initialize_user: create the user record on first sign-in, idempotently
- get_recipe / list_recipes: read one recipe or the whole recipe map
- add_recipe: validate a payload and store it under a new recipe identifier
- delete_recipe: remove one recipe atomically

Errors are raised from recipebox.errors: ValidationError for bad input,
UserNotFoundError / RecipeNotFoundError for missing records. Store failures
propagate as UpstreamError.
"""

import logging
from typing import Any, Dict, Optional

from .errors import RecipeNotFoundError, UserNotFoundError, ValidationError
from .events import log_recipe_added, log_recipe_deleted, log_user_initialized
from .models import UserRecord, parse_recipe
from .stores.base import RecipeStore

logger = logging.getLogger(__name__)


def _require_user_id(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise ValidationError("User ID not provided")
    return user_id


def initialize_user(
    store: RecipeStore,
    user_id: str,
    display_name: Optional[str],
    uid: Optional[str],
    email: Optional[str],
) -> bool:
    """
    Create the user record if it does not exist yet.

    An existing record is never modified, so recipes saved by earlier sessions
    survive repeated sign-ins.

    Args:
        store: Store holding user records
        user_id: Key of the user document
        display_name: Display name from the identity provider
        uid: Provider-issued user id
        email: User email

    Returns:
        True if the record was created, False if it already existed

    Raises:
        ValidationError: If user_id, display_name, uid or email is missing or blank
    """
    _require_user_id(user_id)
    if any(not value or not value.strip() for value in (display_name, uid, email)):
        raise ValidationError("Required parameters are missing or undefined.")

    record = UserRecord(name=display_name, uid=uid, email=email).model_dump()
    created = store.create_user(user_id, record)
    if created:
        logger.info("Initialized user %s", user_id)
    else:
        logger.debug("User %s already exists, leaving record untouched", user_id)

    log_user_initialized(user_id, created)
    return created


def list_recipes(store: RecipeStore, user_id: str) -> Dict[str, Any]:
    """
    Return the user's full recipe map (possibly empty).

    Raises:
        UserNotFoundError: If the user record does not exist
    """
    _require_user_id(user_id)
    record = store.get_user(user_id)
    if record is None:
        raise UserNotFoundError()
    return record.get("recipes") or {}


def get_recipe(store: RecipeStore, user_id: str, recipe_id: str) -> Dict[str, Any]:
    """
    Return one stored recipe unchanged.

    Raises:
        ValidationError: If recipe_id is missing
        UserNotFoundError: If the user record does not exist
        RecipeNotFoundError: If the recipe is not in the user's map
    """
    if not recipe_id:
        raise ValidationError("User ID or Recipe ID not provided")
    recipes = list_recipes(store, user_id)
    if recipe_id not in recipes:
        raise RecipeNotFoundError()
    return recipes[recipe_id]


def add_recipe(store: RecipeStore, user_id: str, payload: Any) -> str:
    """
    Validate payload and add it to the user's recipes.

    Only the recipe fields (name, ingredients, instructions, shopping, image)
    are stored. Nothing is written when validation fails.

    Returns:
        The new recipe identifier

    Raises:
        ValidationError: If a required field is missing or invalid
        UserNotFoundError: If the user record does not exist
    """
    _require_user_id(user_id)
    recipe = parse_recipe(payload)

    recipe_id = store.add_recipe(user_id, recipe.model_dump())
    logger.info("Added recipe %s for user %s", recipe_id, user_id)
    log_recipe_added(user_id, recipe_id, recipe.name)
    return recipe_id


def delete_recipe(store: RecipeStore, user_id: str, recipe_id: str) -> None:
    """
    Remove one recipe from the user's recipes.

    Raises:
        ValidationError: If user_id or recipe_id is missing
        UserNotFoundError: If the user record does not exist
        RecipeNotFoundError: If the recipe is not in the user's map
    """
    if not user_id or not user_id.strip() or not recipe_id or not recipe_id.strip():
        raise ValidationError("User ID or Recipe ID not provided")

    store.delete_recipe(user_id, recipe_id)
    logger.info("Deleted recipe %s for user %s", recipe_id, user_id)
    log_recipe_deleted(user_id, recipe_id)
