"""
Base HTTP connector for external search providers.

Connectors are thin clients around one provider's REST API. They share:

- a requests.Session (injectable, so tests can pass a mock)
- a per-request timeout
- one error policy: any network failure, non-2xx response or undecodable
  body raises UpstreamError carrying the upstream message

There is no retry or caching; a single failed call fails the request.
"""

import logging
from typing import Any, Dict, Optional

import requests

from recipebox.errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0


class BaseConnector:
    """
    Shared plumbing for provider connectors.

    Attributes:
        provider: Human-readable provider name used in error messages
        base_url: Provider API root, without trailing slash
    """
    provider: str = "upstream"

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        """
        GET ``{base_url}{path}`` and return the decoded JSON body.

        Raises:
            UpstreamError: On connection errors, timeouts, non-2xx status or
                a body that is not valid JSON
        """
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("%s request to %s failed: %s", self.provider, path, e)
            raise UpstreamError(f"Error fetching data from {self.provider}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Unexpected response format from {self.provider}: body is not valid JSON"
            ) from e
