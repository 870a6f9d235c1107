"""
Tests for the search functions using mocked connectors.
"""

from unittest.mock import Mock

import pytest

from recipebox.connectors.spoonacular_connector import SpoonacularConnector
from recipebox.connectors.unwrangle_connector import UnwrangleConnector
from recipebox.errors import NotFoundError, UpstreamError, ValidationError
from recipebox.search import search_products, search_recipe_by_ingredients


@pytest.fixture
def spoonacular():
    return Mock(spec=SpoonacularConnector)


@pytest.fixture
def unwrangle():
    return Mock(spec=UnwrangleConnector)


class TestSearchRecipeByIngredients:
    """Test cases for search_recipe_by_ingredients."""

    def test_first_match_merged_with_info(self, spoonacular):
        first = {"id": 716429, "title": "Pasta with Garlic"}
        spoonacular.find_by_ingredients.return_value = [first, {"id": 2, "title": "Other"}]
        spoonacular.get_recipe_information.return_value = {"id": 716429, "servings": 2}

        result = search_recipe_by_ingredients(spoonacular, "garlic,pasta")

        assert result == {"recipe": first, "info": {"id": 716429, "servings": 2}}
        spoonacular.find_by_ingredients.assert_called_once_with("garlic,pasta")
        spoonacular.get_recipe_information.assert_called_once_with(716429)

    def test_empty_results_is_not_found(self, spoonacular):
        spoonacular.find_by_ingredients.return_value = []

        with pytest.raises(NotFoundError, match="No recipes found for ingredients: tomato"):
            search_recipe_by_ingredients(spoonacular, "tomato")

        spoonacular.get_recipe_information.assert_not_called()

    def test_query_is_trimmed(self, spoonacular):
        spoonacular.find_by_ingredients.return_value = []

        with pytest.raises(NotFoundError):
            search_recipe_by_ingredients(spoonacular, "  tomato  ")

        spoonacular.find_by_ingredients.assert_called_once_with("tomato")

    @pytest.mark.parametrize("ingredients", [None, "", "   "])
    def test_missing_ingredients(self, spoonacular, ingredients):
        with pytest.raises(ValidationError, match="'ingredients' is required"):
            search_recipe_by_ingredients(spoonacular, ingredients)

        spoonacular.find_by_ingredients.assert_not_called()

    def test_result_without_id_is_upstream_error(self, spoonacular):
        spoonacular.find_by_ingredients.return_value = [{"title": "No id"}]

        with pytest.raises(UpstreamError, match="has no id"):
            search_recipe_by_ingredients(spoonacular, "tomato")

    def test_information_failure_propagates(self, spoonacular):
        spoonacular.find_by_ingredients.return_value = [{"id": 1}]
        spoonacular.get_recipe_information.side_effect = UpstreamError("quota exceeded")

        with pytest.raises(UpstreamError, match="quota exceeded"):
            search_recipe_by_ingredients(spoonacular, "tomato")


class TestSearchProducts:
    """Test cases for search_products."""

    def test_relays_raw_response(self, unwrangle):
        body = {"success": True, "results": []}
        unwrangle.search_products.return_value = body

        assert search_products(unwrangle, "tomato") is body
        unwrangle.search_products.assert_called_once_with("tomato")

    @pytest.mark.parametrize("ingredient", [None, ""])
    def test_missing_ingredient(self, unwrangle, ingredient):
        with pytest.raises(ValidationError, match="'ingredient' is required"):
            search_products(unwrangle, ingredient)
