"""
Tests for the per-user recipe operations, run against the in-memory store.

This module tests:
- Idempotent user initialization
- Single and collection retrieval, including not-found cases
- Recipe creation, validation and id uniqueness
- Recipe deletion, including repeated deletes
"""

from unittest.mock import Mock

import pytest

from recipebox.errors import (
    NotFoundError,
    RecipeNotFoundError,
    UpstreamError,
    UserNotFoundError,
    ValidationError,
)
from recipebox.recipes import (
    add_recipe,
    delete_recipe,
    get_recipe,
    initialize_user,
    list_recipes,
)
from recipebox.stores.base import RecipeStore
from recipebox.stores.memory_store import InMemoryRecipeStore

SOUP = {
    "name": "Tomato soup",
    "ingredients": ["4 tomatoes", "1 onion"],
    "instructions": "Roast, blend, season.",
    "shopping": ["onion"],
    "image": "https://example.com/soup.jpg",
}

SALAD = {
    "name": "Green salad",
    "ingredients": ["lettuce", "cucumber"],
    "instructions": "Chop and toss.",
    "shopping": [],
    "image": "https://example.com/salad.jpg",
}


@pytest.fixture
def store():
    return InMemoryRecipeStore()


@pytest.fixture
def user(store):
    initialize_user(store, "u1", "Ada", "uid-1", "ada@example.com")
    return "u1"


class TestInitializeUser:
    """Test cases for initialize_user."""

    def test_first_call_creates_second_is_noop(self, store):
        assert initialize_user(store, "u1", "Ada", "uid-1", "ada@example.com") is True
        assert initialize_user(store, "u1", "Someone Else", "uid-2", "other@example.com") is False

        record = store.get_user("u1")
        assert record == {"name": "Ada", "uid": "uid-1", "email": "ada@example.com", "recipes": {}}

    def test_existing_recipes_survive_reinitialization(self, store, user):
        recipe_id = add_recipe(store, user, SOUP)

        initialize_user(store, user, "Ada", "uid-1", "ada@example.com")

        assert list_recipes(store, user) == {recipe_id: SOUP}

    @pytest.mark.parametrize(
        "display_name,uid,email",
        [
            (None, "uid-1", "ada@example.com"),
            ("Ada", None, "ada@example.com"),
            ("Ada", "uid-1", None),
            ("", "uid-1", "ada@example.com"),
            ("   ", "uid-1", "ada@example.com"),
            ("Ada", " ", "ada@example.com"),
            ("Ada", "uid-1", "\t"),
        ],
    )
    def test_missing_parameter_is_rejected(self, store, display_name, uid, email):
        with pytest.raises(ValidationError):
            initialize_user(store, "u1", display_name, uid, email)

        assert store.get_user("u1") is None


class TestRetrieval:
    """Test cases for get_recipe and list_recipes."""

    def test_list_recipes_for_new_user_is_empty(self, store, user):
        assert list_recipes(store, user) == {}

    def test_list_recipes_unknown_user(self, store):
        with pytest.raises(UserNotFoundError, match="User not found"):
            list_recipes(store, "ghost")

    def test_list_recipes_tolerates_record_without_recipes_field(self, store):
        store.create_user("legacy", {"name": "Old", "uid": "x", "email": "old@example.com"})
        assert list_recipes(store, "legacy") == {}

    def test_get_recipe_unknown_user(self, store):
        with pytest.raises(UserNotFoundError):
            get_recipe(store, "ghost", "r1")

    def test_get_recipe_unknown_recipe(self, store, user):
        with pytest.raises(RecipeNotFoundError, match="Recipe not found"):
            get_recipe(store, user, "missing")

    def test_not_found_errors_map_to_404(self, store, user):
        with pytest.raises(NotFoundError) as exc_info:
            get_recipe(store, user, "missing")
        assert exc_info.value.status_code == 404


class TestAddRecipe:
    """Test cases for add_recipe."""

    def test_round_trip(self, store, user):
        recipe_id = add_recipe(store, user, SOUP)

        assert isinstance(recipe_id, str) and recipe_id
        assert get_recipe(store, user, recipe_id) == SOUP

    def test_other_recipes_untouched(self, store, user):
        soup_id = add_recipe(store, user, SOUP)
        salad_id = add_recipe(store, user, SALAD)

        assert soup_id != salad_id
        assert list_recipes(store, user) == {soup_id: SOUP, salad_id: SALAD}

    def test_unknown_user(self, store):
        with pytest.raises(UserNotFoundError):
            add_recipe(store, "ghost", SOUP)

    @pytest.mark.parametrize("field", sorted(SOUP))
    def test_missing_field_writes_nothing(self, field):
        store = Mock(spec=RecipeStore)
        payload = dict(SOUP)
        del payload[field]

        with pytest.raises(ValidationError):
            add_recipe(store, "u1", payload)

        store.add_recipe.assert_not_called()

    def test_id_collision_is_redrawn(self, user):
        ids = iter(["same", "same", "fresh"])
        store = InMemoryRecipeStore(id_factory=lambda: next(ids))
        initialize_user(store, user, "Ada", "uid-1", "ada@example.com")

        first = add_recipe(store, user, SOUP)
        second = add_recipe(store, user, SALAD)

        assert (first, second) == ("same", "fresh")
        assert list_recipes(store, user) == {"same": SOUP, "fresh": SALAD}

    def test_store_failure_propagates(self):
        store = Mock(spec=RecipeStore)
        store.add_recipe.side_effect = UpstreamError("Firestore unavailable")

        with pytest.raises(UpstreamError, match="Firestore unavailable"):
            add_recipe(store, "u1", SOUP)


class TestDeleteRecipe:
    """Test cases for delete_recipe."""

    def test_delete_then_list(self, store, user):
        a = add_recipe(store, user, SOUP)
        b = add_recipe(store, user, SALAD)

        delete_recipe(store, user, a)

        assert list_recipes(store, user) == {b: SALAD}

    def test_repeated_delete_is_not_found(self, store, user):
        recipe_id = add_recipe(store, user, SOUP)
        delete_recipe(store, user, recipe_id)

        with pytest.raises(RecipeNotFoundError):
            delete_recipe(store, user, recipe_id)

    def test_unknown_user(self, store):
        with pytest.raises(UserNotFoundError):
            delete_recipe(store, "ghost", "r1")

    @pytest.mark.parametrize("user_id,recipe_id", [("", "r1"), ("u1", ""), ("u1", "  ")])
    def test_missing_identifiers(self, store, user, user_id, recipe_id):
        with pytest.raises(ValidationError, match="User ID or Recipe ID not provided"):
            delete_recipe(store, user_id, recipe_id)


class TestInMemoryStore:
    """Store-level behaviour the service functions rely on."""

    def test_get_user_returns_copy(self, store, user):
        record = store.get_user(user)
        record["recipes"]["injected"] = SOUP

        assert store.get_user(user)["recipes"] == {}

    def test_clear(self, store, user):
        store.clear()
        assert store.get_user(user) is None
