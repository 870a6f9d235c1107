"""
Recipe and user models for RecipeBox.

This module defines the canonical shapes stored in the document store:

- Recipe: one saved recipe, embedded in its owner's user record
- UserRecord: the per-user document holding profile fields and the recipe map

Payload validation for recipe creation lives here too (parse_recipe), so the
same rules apply whether a recipe arrives through the HTTP API or is passed
to the service functions directly.
"""

from typing import Any, Dict, List

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ValidationError

RECIPE_FIELDS = ("name", "ingredients", "instructions", "shopping", "image")


class Recipe(BaseModel):
    """
    A single recipe owned by exactly one user.

    Recipes have no identity outside their parent user record: the recipe
    identifier is the key under which the recipe is stored in the user's
    ``recipes`` map, not a field of the recipe itself.
    """
    name: str = Field(..., min_length=1, description="Recipe title")
    ingredients: List[str] = Field(..., min_length=1, description="Ingredient lines")
    instructions: str = Field(..., min_length=1, description="Preparation steps")
    shopping: List[str] = Field(..., description="Items still to buy")
    image: str = Field(..., min_length=1, description="Image URL")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "name": "Tomato soup",
                "ingredients": ["4 tomatoes", "1 onion", "500ml stock"],
                "instructions": "Roast the tomatoes, blend with the stock, season.",
                "shopping": ["onion"],
                "image": "https://example.com/tomato-soup.jpg",
            }
        },
    )

    @field_validator("name", "instructions", "image")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        # Value is kept as sent, surrounding whitespace included
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class UserRecord(BaseModel):
    """Document stored per user, keyed by the user identifier."""
    name: str
    uid: str
    email: str
    recipes: Dict[str, Recipe] = Field(default_factory=dict)


def parse_recipe(payload: Any) -> Recipe:
    """
    Validate a recipe payload and return a Recipe.

    Args:
        payload: Mapping with the recipe fields (extra keys are dropped)

    Returns:
        Validated Recipe

    Raises:
        ValidationError: If the payload is not an object, or any required
            field is missing, blank or of the wrong type. The message names
            the offending fields.
    """
    if isinstance(payload, Recipe):
        return payload
    if not isinstance(payload, dict):
        raise ValidationError("Recipe payload must be a JSON object")

    try:
        return Recipe.model_validate(payload)
    except pydantic.ValidationError as e:
        missing = []
        invalid = []
        for err in e.errors():
            field = str(err["loc"][0]) if err.get("loc") else "?"
            if err.get("type") == "missing" or _is_blank(payload.get(field)):
                if field not in missing:
                    missing.append(field)
            elif field not in invalid:
                invalid.append(field)

        parts = []
        if missing:
            parts.append(f"Missing required fields: {', '.join(missing)}")
        if invalid:
            parts.append(f"Invalid fields: {', '.join(invalid)}")
        raise ValidationError("; ".join(parts)) from e


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list):
        return len(value) == 0
    return False
