"""
Base document-store interface for user records.

A store holds one document per user, keyed by the user identifier, with the
user's recipes nested under a ``recipes`` map. Implementations must make each
operation atomic per user document:

- create_user is create-if-absent and never overwrites
- add_recipe issues an identifier that is unique within the user's map
- delete_recipe removes a single map entry without rewriting the others

Stores are constructed explicitly and passed to the service functions in
recipebox.recipes; nothing in the package reaches for a global store.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class RecipeStore(ABC):
    """
    Abstract base class for user/recipe document stores.

    Attributes:
        backend: Short identifier for the implementation ("firestore", "memory")
    """
    backend: str

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a user record.

        Returns:
            The stored document as a dictionary, or None if it does not exist
        """
        pass

    @abstractmethod
    def create_user(self, user_id: str, record: Dict[str, Any]) -> bool:
        """
        Create a user record if none exists for user_id.

        Returns:
            True if the record was created, False if it already existed
            (in which case nothing is written)
        """
        pass

    @abstractmethod
    def add_recipe(self, user_id: str, recipe: Dict[str, Any]) -> str:
        """
        Add a recipe to the user's recipe map under a freshly issued identifier.

        Other recipes in the map are left untouched.

        Returns:
            The new recipe identifier

        Raises:
            UserNotFoundError: If the user record does not exist
        """
        pass

    @abstractmethod
    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        """
        Remove one recipe from the user's recipe map.

        Raises:
            UserNotFoundError: If the user record does not exist
            RecipeNotFoundError: If the recipe is not in the user's map
        """
        pass
