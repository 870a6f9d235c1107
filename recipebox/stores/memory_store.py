"""
In-memory user/recipe store.

Process-local and non-persistent: records are lost on restart. Used for local
development (RECIPEBOX_STORE=memory) and in tests. A single lock serialises
all operations so the atomicity guarantees match the Firestore store.
"""

import copy
import threading
import uuid
from typing import Any, Callable, Dict, Optional

from recipebox.errors import RecipeNotFoundError, UserNotFoundError

from .base import RecipeStore


def _new_recipe_id() -> str:
    return uuid.uuid4().hex


class InMemoryRecipeStore(RecipeStore):
    """Dictionary-backed RecipeStore: user_id -> user record."""
    backend = "memory"

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._users: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._id_factory = id_factory or _new_recipe_id

    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._users.get(user_id)
            # Hand out copies so callers cannot mutate stored state
            return copy.deepcopy(record) if record is not None else None

    def create_user(self, user_id: str, record: Dict[str, Any]) -> bool:
        with self._lock:
            if user_id in self._users:
                return False
            self._users[user_id] = copy.deepcopy(record)
            return True

    def add_recipe(self, user_id: str, recipe: Dict[str, Any]) -> str:
        with self._lock:
            record = self._users.get(user_id)
            if record is None:
                raise UserNotFoundError()

            recipes = record.setdefault("recipes", {})
            recipe_id = self._id_factory()
            while recipe_id in recipes:
                recipe_id = self._id_factory()

            recipes[recipe_id] = copy.deepcopy(recipe)
            return recipe_id

    def delete_recipe(self, user_id: str, recipe_id: str) -> None:
        with self._lock:
            record = self._users.get(user_id)
            if record is None:
                raise UserNotFoundError()

            recipes = record.get("recipes") or {}
            if recipe_id not in recipes:
                raise RecipeNotFoundError()
            del recipes[recipe_id]

    def clear(self) -> None:
        """Drop every record."""
        with self._lock:
            self._users.clear()
