"""
Tests for environment-driven configuration.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from api.config import (
    PROJECT_ROOT,
    AppConfig,
    StoreConfig,
    get_required_env_vars,
    validate_required_config,
)
from api.dependencies import create_store
from recipebox.stores.memory_store import InMemoryRecipeStore


class TestStoreConfig:
    """Test cases for store backend selection."""

    @patch.dict(os.environ, {}, clear=True)
    def test_default_backend_is_firestore(self):
        assert StoreConfig.get_backend() == "firestore"
        assert StoreConfig.get_users_collection() == "users"

    @patch.dict(os.environ, {"RECIPEBOX_STORE": " Memory "})
    def test_backend_is_normalized(self):
        assert StoreConfig.get_backend() == "memory"

    @patch.dict(os.environ, {"RECIPEBOX_STORE": "postgres"})
    def test_invalid_backend(self):
        with pytest.raises(RuntimeError, match="Invalid RECIPEBOX_STORE"):
            StoreConfig.get_backend()

    @patch.dict(os.environ, {"RECIPEBOX_STORE": "memory"})
    def test_create_memory_store(self):
        assert isinstance(create_store(), InMemoryRecipeStore)

    @patch.dict(os.environ, {"RECIPEBOX_STORE": "firestore", "FIRESTORE_USERS_COLLECTION": "people"})
    @patch("recipebox.stores.firestore_store.firestore.Client")
    def test_create_firestore_store(self, mock_client_class):
        store = create_store()

        assert store.backend == "firestore"
        assert store.collection == "people"
        assert store.client is mock_client_class.return_value


class TestAppConfig:
    """Test cases for HTTP server settings."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        assert AppConfig.get_cors_origins() == ["*"]
        assert AppConfig.get_http_timeout() == 15.0
        assert AppConfig.get_log_level() == "INFO"
        assert AppConfig.get_static_dir() == PROJECT_ROOT / "frontend" / "build"

    @patch.dict(os.environ, {"CORS_ORIGINS": "http://localhost:3000, https://app.example.com ,"})
    def test_cors_origins_list(self):
        assert AppConfig.get_cors_origins() == ["http://localhost:3000", "https://app.example.com"]

    @pytest.mark.parametrize("raw,expected", [("2.5", 2.5), ("abc", 15.0), ("-1", 15.0)])
    def test_http_timeout_parsing(self, raw, expected):
        with patch.dict(os.environ, {"HTTP_TIMEOUT_SECONDS": raw}):
            assert AppConfig.get_http_timeout() == expected

    def test_absolute_static_dir(self, tmp_path):
        with patch.dict(os.environ, {"STATIC_DIR": str(tmp_path)}):
            assert AppConfig.get_static_dir() == Path(tmp_path)


class TestRequiredConfig:
    """Test cases for required secrets reporting."""

    @patch.dict(os.environ, {"SPOONACULAR_API_KEY": "a"}, clear=True)
    def test_required_env_vars_status(self):
        assert get_required_env_vars() == {"spoonacular_api_key": True, "unwrangle_api_key": False}

    @patch.dict(os.environ, {}, clear=True)
    def test_validate_lists_missing(self):
        with pytest.raises(RuntimeError) as exc_info:
            validate_required_config()

        assert "SPOONACULAR_API_KEY" in str(exc_info.value)
        assert "UNWRANGLE_API_KEY" in str(exc_info.value)

    @patch.dict(os.environ, {"SPOONACULAR_API_KEY": "a", "UNWRANGLE_API_KEY": "b"}, clear=True)
    def test_validate_passes(self):
        validate_required_config()
