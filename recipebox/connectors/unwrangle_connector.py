"""
Unwrangle connector for retail product search (Sam's Club).

Calls Unwrangle's getter endpoint with the samsclub_search platform and hands
back the raw JSON body; nothing is normalised.

Requires UNWRANGLE_API_KEY. The platform defaults to samsclub_search and can
be overridden via UNWRANGLE_PLATFORM.
"""

import os
from typing import Any, Optional

import requests

from recipebox.errors import ConnectorConfigError

from .base import DEFAULT_TIMEOUT_SECONDS, BaseConnector

DEFAULT_BASE_URL = "https://data.unwrangle.com"
DEFAULT_PLATFORM = "samsclub_search"


class UnwrangleConnector(BaseConnector):
    """Client for Unwrangle's retail search API."""
    provider = "Sam's Club"

    def __init__(
        self,
        api_key: Optional[str] = None,
        platform: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        key = api_key or os.getenv("UNWRANGLE_API_KEY")
        if not key:
            raise ConnectorConfigError(
                "UNWRANGLE_API_KEY is not set. Please add it to your .env file at the project root:\n"
                "UNWRANGLE_API_KEY=your_unwrangle_key_here"
            )
        self.api_key = key
        self.platform = platform or os.getenv("UNWRANGLE_PLATFORM", DEFAULT_PLATFORM)
        super().__init__(
            base_url or os.getenv("UNWRANGLE_BASE_URL", DEFAULT_BASE_URL),
            session=session,
            timeout=timeout,
        )

    def search_products(self, query: str, page: int = 1) -> Any:
        """
        Search retail products matching query.

        Args:
            query: Free-text search (e.g. "tomato")
            page: Result page, 1-indexed

        Returns:
            The provider's JSON body, unchanged
        """
        return self._get_json(
            "/api/getter",
            {
                "platform": self.platform,
                "search": query,
                "page": page,
                "api_key": self.api_key,
            },
        )
