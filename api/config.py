"""
Configuration management for RecipeBox.

This module centralizes environment variable loading from the .env file at the
project root. It is imported first thing in api/main.py so .env is loaded
before any connector or store reads the environment.

In production .env will not exist; load_dotenv() is then a no-op and platform
environment variables are used instead.

Environment Variables:
- SPOONACULAR_API_KEY: Required for ingredient-based recipe search
- SPOONACULAR_BASE_URL: Optional, defaults to "https://api.spoonacular.com"
- UNWRANGLE_API_KEY: Required for Sam's Club product search
- UNWRANGLE_BASE_URL: Optional, defaults to "https://data.unwrangle.com"
- UNWRANGLE_PLATFORM: Optional, defaults to "samsclub_search"
- RECIPEBOX_STORE: Optional, "firestore" (default) or "memory"
- GOOGLE_CLOUD_PROJECT: Optional, Firestore project (defaults to the credentials' project)
- FIRESTORE_DATABASE: Optional, Firestore database id (defaults to "(default)")
- FIRESTORE_USERS_COLLECTION: Optional, defaults to "users"
- STATIC_DIR: Optional, client build directory, defaults to "frontend/build"
- CORS_ORIGINS: Optional, comma-separated origins, defaults to "*"
- HTTP_TIMEOUT_SECONDS: Optional, outbound request timeout, defaults to 15
- LOG_LEVEL: Optional, defaults to "INFO"
- EVENT_LOG_FILE: Optional, JSONL event log read by recipebox.events, defaults to "events.log"
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent

VALID_STORE_BACKENDS = {"firestore", "memory"}


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take
    precedence over values in .env (override=False).
    """
    load_dotenv(PROJECT_ROOT / ".env", override=False)


# Load .env file on module import
load_env_file()


class SpoonacularConfig:
    """Configuration for the Spoonacular recipe connector."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        """
        Get Spoonacular API key from environment.

        Note:
            This does not raise an error - the connector validates it.
        """
        return os.getenv("SPOONACULAR_API_KEY")

    @staticmethod
    def get_base_url() -> str:
        return os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")


class UnwrangleConfig:
    """Configuration for the Unwrangle (Sam's Club) product connector."""

    @staticmethod
    def get_api_key() -> Optional[str]:
        return os.getenv("UNWRANGLE_API_KEY")

    @staticmethod
    def get_base_url() -> str:
        return os.getenv("UNWRANGLE_BASE_URL", "https://data.unwrangle.com")

    @staticmethod
    def get_platform() -> str:
        return os.getenv("UNWRANGLE_PLATFORM", "samsclub_search")


class StoreConfig:
    """Configuration for the user/recipe document store."""

    @staticmethod
    def get_backend() -> str:
        """
        Get the store backend name.

        Returns:
            "firestore" (default) or "memory"

        Raises:
            RuntimeError: If RECIPEBOX_STORE names an unknown backend
        """
        backend = os.getenv("RECIPEBOX_STORE", "firestore").strip().lower()
        if backend not in VALID_STORE_BACKENDS:
            raise RuntimeError(
                f"Invalid RECIPEBOX_STORE: '{backend}'. "
                f"Valid options: {', '.join(sorted(VALID_STORE_BACKENDS))}"
            )
        return backend

    @staticmethod
    def get_project() -> Optional[str]:
        return os.getenv("GOOGLE_CLOUD_PROJECT")

    @staticmethod
    def get_database() -> Optional[str]:
        return os.getenv("FIRESTORE_DATABASE")

    @staticmethod
    def get_users_collection() -> str:
        return os.getenv("FIRESTORE_USERS_COLLECTION", "users")


class AppConfig:
    """HTTP server settings."""

    @staticmethod
    def get_static_dir() -> Path:
        """
        Get the directory holding the built client application.

        Relative paths are resolved against the project root.
        """
        path = Path(os.getenv("STATIC_DIR", "frontend/build"))
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        return path

    @staticmethod
    def get_cors_origins() -> List[str]:
        raw = os.getenv("CORS_ORIGINS", "*")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @staticmethod
    def get_http_timeout() -> float:
        """
        Get the outbound HTTP timeout in seconds (default: 15).

        Falls back to the default when the variable is not a positive number.
        """
        try:
            timeout = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))
        except ValueError:
            return 15.0
        return timeout if timeout > 0 else 15.0

    @staticmethod
    def get_log_level() -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()


def get_required_env_vars() -> dict:
    """
    Get a dictionary of required environment variables and their status.

    Returns:
        Dictionary with keys:
        - spoonacular_api_key: bool (True if set)
        - unwrangle_api_key: bool (True if set)
    """
    return {
        "spoonacular_api_key": SpoonacularConfig.get_api_key() is not None,
        "unwrangle_api_key": UnwrangleConfig.get_api_key() is not None,
    }


def validate_required_config() -> None:
    """
    Validate that all required environment variables are set.

    Raises:
        RuntimeError: If any required configuration is missing

    Note:
        Connectors also validate their own keys when constructed, so the
        API can still serve recipe CRUD with search keys missing.
    """
    missing = []

    if not SpoonacularConfig.get_api_key():
        missing.append("SPOONACULAR_API_KEY (required for /search)")

    if not UnwrangleConfig.get_api_key():
        missing.append("UNWRANGLE_API_KEY (required for /sam)")

    if missing:
        raise RuntimeError(
            "Missing required environment variables:\n" +
            "\n".join(f"  - {var}" for var in missing) +
            "\n\nPlease create a .env file at the project root with these variables."
        )
