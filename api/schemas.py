"""
Pydantic schemas for FastAPI request and response models.

The schemas include:
- InitializeResponse: result of GET /initialize/{user_id}
- RecipeResponse / RecipesResponse: one recipe, or a user's recipe map
- AddRecipeResponse: identifier of a newly added recipe
- MessageResponse: plain acknowledgement (deletion)
- RecipeSearchResponse: first ingredient-search match plus its details
- ProductSearchResponse: raw retail search payload
- ErrorResponse: body of every 4xx/5xx response

Stored recipes are returned as plain dictionaries rather than
recipebox.models.Recipe so records written by older clients are relayed
unchanged. The request schema for new recipes is recipebox.models.Recipe.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""
    error: str = Field(..., description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Recipe not found"}}
    )


class MessageResponse(BaseModel):
    message: str = Field(..., description="Outcome of the operation")


class InitializeResponse(BaseModel):
    """
    Response model for user initialization.

    ``created`` is False when the user record already existed; the record is
    left untouched in that case.
    """
    message: str = Field(..., description="'User initialized' or 'User already exists'")
    created: bool = Field(..., description="Whether this call created the user record")

    model_config = ConfigDict(
        json_schema_extra={"example": {"message": "User initialized", "created": True}}
    )


class RecipeResponse(BaseModel):
    recipe: Dict[str, Any] = Field(..., description="Stored recipe data")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "recipe": {
                    "name": "Tomato soup",
                    "ingredients": ["4 tomatoes", "1 onion", "500ml stock"],
                    "instructions": "Roast the tomatoes, blend with the stock, season.",
                    "shopping": ["onion"],
                    "image": "https://example.com/tomato-soup.jpg",
                }
            }
        }
    )


class RecipesResponse(BaseModel):
    recipes: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict, description="Recipe identifier -> recipe data"
    )


class AddRecipeResponse(BaseModel):
    """Response model for recipe creation."""
    message: str = Field(..., description="Outcome of the operation")
    recipe_id: str = Field(..., alias="recipeId", description="Identifier of the new recipe")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"message": "Recipe added successfully", "recipeId": "k3J9sQe0ZbT2mLwX8aPq"}
        },
    )


class RecipeSearchResult(BaseModel):
    recipe: Dict[str, Any] = Field(..., description="First findByIngredients match")
    info: Dict[str, Any] = Field(..., description="Detailed information for that recipe")


class RecipeSearchResponse(BaseModel):
    """Response model for GET /search."""
    recipe: RecipeSearchResult


class ProductSearchResponse(BaseModel):
    """Response model for GET /sam; ``response`` is the provider payload, unchanged."""
    response: Any = Field(None, description="Raw retail search response")
