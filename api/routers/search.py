"""
Search router proxying the external recipe and product providers.

This router provides:
- GET /search?ingredients= - First Spoonacular recipe for the ingredients, with details
- GET /sam?ingredient= - Raw Sam's Club product search results
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_spoonacular, get_unwrangle
from api.schemas import ErrorResponse, ProductSearchResponse, RecipeSearchResponse
from recipebox.connectors.spoonacular_connector import SpoonacularConnector
from recipebox.connectors.unwrangle_connector import UnwrangleConnector
from recipebox.errors import RecipeBoxError, UpstreamError
from recipebox.search import search_products, search_recipe_by_ingredients

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=RecipeSearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing ingredients"},
        404: {"model": ErrorResponse, "description": "No recipe uses these ingredients"},
        500: {"model": ErrorResponse, "description": "Spoonacular failure"},
    },
    summary="Find a recipe by ingredients",
    description="Returns only the first Spoonacular match, merged with its detailed information.",
)
def search_recipes(
    ingredients: Optional[str] = Query(None, description="Comma-separated ingredients (e.g. 'tomato,basil')"),
    connector: SpoonacularConnector = Depends(get_spoonacular),
) -> RecipeSearchResponse:
    """
    Example:
        ```bash
        GET /search?ingredients=tomato,basil
        ```
    """
    try:
        result = search_recipe_by_ingredients(connector, ingredients)
    except RecipeBoxError:
        raise
    except Exception as e:
        logger.error("Error fetching data from Spoonacular: %s", e)
        raise UpstreamError(f"Error fetching data from Spoonacular: {e}") from e

    return RecipeSearchResponse(recipe=result)


@router.get(
    "/sam",
    response_model=ProductSearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing ingredient"},
        500: {"model": ErrorResponse, "description": "Sam's Club search failure"},
    },
    summary="Search Sam's Club products for an ingredient",
)
def search_sams_club(
    ingredient: Optional[str] = Query(None, description="Ingredient to search for"),
    connector: UnwrangleConnector = Depends(get_unwrangle),
) -> ProductSearchResponse:
    try:
        response = search_products(connector, ingredient)
    except RecipeBoxError:
        raise
    except Exception as e:
        logger.error("Error fetching data from Sam's Club: %s", e)
        raise UpstreamError(f"Error fetching data from Sam's Club: {e}") from e

    return ProductSearchResponse(response=response)
