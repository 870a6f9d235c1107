"""
Error taxonomy for RecipeBox.

Every failure that reaches the API layer is one of these exceptions. The API
renders them as ``{"error": <message>}`` using the ``status_code`` carried by
the exception class:

- ValidationError: missing or invalid caller input (400)
- NotFoundError: referenced user or recipe is absent (404)
- UpstreamError: document store or external API failure (500)
"""


class RecipeBoxError(Exception):
    """Base class for all RecipeBox errors."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = "") -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RecipeBoxError):
    """Caller input is missing or malformed."""
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(RecipeBoxError):
    """A referenced resource does not exist."""
    status_code = 404
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class RecipeNotFoundError(NotFoundError):
    default_message = "Recipe not found"


class UpstreamError(RecipeBoxError):
    """
    The document store or an external search provider failed.

    Covers network errors, non-2xx responses and malformed payloads. The
    message carries the upstream error text so callers can see what failed.
    """
    status_code = 500
    default_message = "Upstream service error"


class ConnectorConfigError(UpstreamError):
    """A connector is missing required configuration (e.g. an API key)."""
