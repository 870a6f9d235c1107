"""
Recipe and product search through external providers.

- search_recipe_by_ingredients: first Spoonacular match for an ingredient
  list, merged with its detailed information
- search_products: raw Sam's Club search results from Unwrangle

Neither function paginates, aggregates or retries. Connector failures
surface as UpstreamError.
"""

import logging
from typing import Any, Dict, Optional

from .connectors.spoonacular_connector import SpoonacularConnector
from .connectors.unwrangle_connector import UnwrangleConnector
from .errors import NotFoundError, UpstreamError, ValidationError
from .events import log_product_search_performed, log_recipe_search_performed

logger = logging.getLogger(__name__)


def _require_query(value: Optional[str], param: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"Query parameter '{param}' is required")
    return value.strip()


def search_recipe_by_ingredients(
    connector: SpoonacularConnector, ingredients: Optional[str]
) -> Dict[str, Any]:
    """
    Look up the best recipe for an ingredient list.

    Only the first result of the ingredient search is used; its details are
    fetched with a second call.

    Args:
        connector: Spoonacular client
        ingredients: Free-text ingredient list (e.g. "tomato,basil")

    Returns:
        {"recipe": <first search result>, "info": <recipe information>}

    Raises:
        ValidationError: If ingredients is blank
        NotFoundError: If the provider returns no matching recipes
        UpstreamError: If either provider call fails
    """
    query = _require_query(ingredients, "ingredients")

    matches = connector.find_by_ingredients(query)
    if not matches:
        log_recipe_search_performed(query, found=False)
        raise NotFoundError(f"No recipes found for ingredients: {query}")

    recipe = matches[0]
    recipe_id = recipe.get("id") if isinstance(recipe, dict) else None
    if recipe_id is None:
        raise UpstreamError("Unexpected response format from Spoonacular: recipe has no id")

    info = connector.get_recipe_information(recipe_id)
    logger.debug("Ingredient search %r matched recipe %s", query, recipe_id)
    log_recipe_search_performed(query, found=True)
    return {"recipe": recipe, "info": info}


def search_products(connector: UnwrangleConnector, ingredient: Optional[str]) -> Any:
    """
    Search Sam's Club for an ingredient and return the provider's raw response.

    Raises:
        ValidationError: If ingredient is blank
        UpstreamError: If the provider call fails
    """
    query = _require_query(ingredient, "ingredient")
    response = connector.search_products(query)
    log_product_search_performed(query)
    return response
