"""
Spoonacular connector for ingredient-based recipe lookup.

Wraps two Spoonacular endpoints:
- GET /recipes/findByIngredients: recipes that use the given ingredients
- GET /recipes/{id}/information: full details for one recipe

Requires SPOONACULAR_API_KEY (passed in or read from the environment, which
api.config populates from .env for local development).
"""

import os
from typing import Any, Dict, List, Optional

import requests

from recipebox.errors import ConnectorConfigError, UpstreamError

from .base import DEFAULT_TIMEOUT_SECONDS, BaseConnector

DEFAULT_BASE_URL = "https://api.spoonacular.com"


class SpoonacularConnector(BaseConnector):
    """Client for the Spoonacular recipe API."""
    provider = "Spoonacular"

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """
        Args:
            api_key: Spoonacular API key (optional, reads SPOONACULAR_API_KEY if not provided)
            base_url: API root (optional, reads SPOONACULAR_BASE_URL or uses the public API)
            session: requests.Session to use (optional)
            timeout: Per-request timeout in seconds

        Raises:
            ConnectorConfigError: If no API key is available
        """
        key = api_key or os.getenv("SPOONACULAR_API_KEY")
        if not key:
            raise ConnectorConfigError(
                "SPOONACULAR_API_KEY is not set. Please add it to your .env file at the project root:\n"
                "SPOONACULAR_API_KEY=your_spoonacular_key_here"
            )
        self.api_key = key
        super().__init__(
            base_url or os.getenv("SPOONACULAR_BASE_URL", DEFAULT_BASE_URL),
            session=session,
            timeout=timeout,
        )

    def find_by_ingredients(self, ingredients: str) -> List[Dict[str, Any]]:
        """
        Find recipes using the given ingredients.

        Args:
            ingredients: Free-text, comma-separated ingredient list (e.g. "tomato,basil")

        Returns:
            List of recipe summaries as returned by Spoonacular (may be empty)

        Raises:
            UpstreamError: If the request fails or the body is not a list
        """
        data = self._get_json(
            "/recipes/findByIngredients",
            {"ingredients": ingredients, "apiKey": self.api_key},
        )
        if not isinstance(data, list):
            raise UpstreamError(
                f"Unexpected response format from {self.provider}: expected a list of recipes"
            )
        return data

    def get_recipe_information(self, recipe_id: Any) -> Dict[str, Any]:
        """
        Fetch detailed information for one recipe.

        Raises:
            UpstreamError: If the request fails or the body is not an object
        """
        data = self._get_json(f"/recipes/{recipe_id}/information", {"apiKey": self.api_key})
        if not isinstance(data, dict):
            raise UpstreamError(
                f"Unexpected response format from {self.provider}: expected recipe information object"
            )
        return data
