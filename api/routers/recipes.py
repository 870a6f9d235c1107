"""
Recipes router for user initialization and per-user recipe CRUD.

This router provides:
- GET /initialize/{user_id} - Create the user record on first sign-in
- GET /recipes/{user_id}/{recipe_id} - Fetch one recipe
- GET /recipes/{user_id} - Fetch all recipes for a user
- POST /recipes/{user_id} - Add a recipe
- DELETE /recipes/{user_id}/{recipe_id} - Remove a recipe

Errors are raised as recipebox.errors exceptions and rendered as
``{"error": ...}`` by the handlers registered in api.main.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from api.dependencies import get_store
from api.schemas import (
    AddRecipeResponse,
    ErrorResponse,
    InitializeResponse,
    MessageResponse,
    RecipeResponse,
    RecipesResponse,
)
from recipebox.errors import RecipeBoxError, UpstreamError
from recipebox.models import Recipe
from recipebox.recipes import (
    add_recipe,
    delete_recipe,
    get_recipe,
    initialize_user,
    list_recipes,
)
from recipebox.stores.base import RecipeStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    404: {"model": ErrorResponse, "description": "User or recipe not found"},
    500: {"model": ErrorResponse, "description": "Document store failure"},
}


def _unexpected(action: str, e: Exception) -> UpstreamError:
    logger.error("Error %s: %s", action, e)
    return UpstreamError(str(e) or f"Error {action}")


@router.get(
    "/initialize/{user_id}",
    response_model=InitializeResponse,
    responses=ERROR_RESPONSES,
    summary="Create the user record if it does not exist",
    description="Idempotent: an existing user record is never overwritten, so saved recipes survive.",
)
def initialize(
    user_id: str,
    display_name: Optional[str] = Query(None, alias="displayName", description="Display name"),
    uid: Optional[str] = Query(None, description="Identity provider user id"),
    email: Optional[str] = Query(None, description="User email"),
    store: RecipeStore = Depends(get_store),
) -> InitializeResponse:
    """
    Initialize a user record.

    Example:
        ```bash
        GET /initialize/abc123?displayName=Ada&uid=abc123&email=ada@example.com
        ```
    """
    try:
        created = initialize_user(store, user_id, display_name, uid, email)
    except RecipeBoxError:
        raise
    except Exception as e:
        raise _unexpected("initializing user", e) from e

    message = "User initialized" if created else "User already exists"
    return InitializeResponse(message=message, created=created)


@router.get(
    "/recipes/{user_id}/{recipe_id}",
    response_model=RecipeResponse,
    responses=ERROR_RESPONSES,
    summary="Fetch one recipe",
)
def read_recipe(
    user_id: str,
    recipe_id: str,
    store: RecipeStore = Depends(get_store),
) -> RecipeResponse:
    try:
        recipe = get_recipe(store, user_id, recipe_id)
    except RecipeBoxError:
        raise
    except Exception as e:
        raise _unexpected("fetching recipe", e) from e

    return RecipeResponse(recipe=recipe)


@router.get(
    "/recipes/{user_id}",
    response_model=RecipesResponse,
    responses=ERROR_RESPONSES,
    summary="Fetch all recipes for a user",
)
def read_recipes(
    user_id: str,
    store: RecipeStore = Depends(get_store),
) -> RecipesResponse:
    try:
        recipes = list_recipes(store, user_id)
    except RecipeBoxError:
        raise
    except Exception as e:
        raise _unexpected("fetching recipes", e) from e

    return RecipesResponse(recipes=recipes)


@router.post(
    "/recipes/{user_id}",
    response_model=AddRecipeResponse,
    responses=ERROR_RESPONSES,
    summary="Add a recipe for the user",
    description="All of name, ingredients, instructions, shopping and image are required.",
)
def create_recipe(
    user_id: str,
    payload: Dict[str, Any] = Body(
        ...,
        description="Recipe fields",
        examples=[Recipe.model_config["json_schema_extra"]["example"]],
    ),
    store: RecipeStore = Depends(get_store),
) -> AddRecipeResponse:
    """
    Add a recipe.

    Example:
        ```bash
        POST /recipes/abc123
        Body: {
            "name": "Tomato soup",
            "ingredients": ["4 tomatoes", "1 onion"],
            "instructions": "Roast, blend, season.",
            "shopping": ["onion"],
            "image": "https://example.com/soup.jpg"
        }
        ```
    """
    try:
        recipe_id = add_recipe(store, user_id, payload)
    except RecipeBoxError:
        raise
    except Exception as e:
        raise _unexpected("adding recipe", e) from e

    return AddRecipeResponse(message="Recipe added successfully", recipe_id=recipe_id)


@router.delete(
    "/recipes/{user_id}/{recipe_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a recipe for the user",
)
def remove_recipe(
    user_id: str,
    recipe_id: str,
    store: RecipeStore = Depends(get_store),
) -> MessageResponse:
    try:
        delete_recipe(store, user_id, recipe_id)
    except RecipeBoxError:
        raise
    except Exception as e:
        raise _unexpected("deleting recipe", e) from e

    return MessageResponse(message="Recipe deleted successfully")
