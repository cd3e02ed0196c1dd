"""
Error taxonomy for the link shortener.

Every error the service layer raises on purpose derives from ``LinkError`` and
carries the HTTP status and public message it maps to. The API layer turns
them into ``{"error": message}`` responses (see ``links_app.api.errors``).
"""

from fastapi import status


class LinkError(Exception):
    """Base class for expected, client-visible failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidURL(LinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid URL"


class InvalidCodeFormat(LinkError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Code must be 6-8 alphanumeric characters"


class CodeConflict(LinkError):
    status_code = status.HTTP_409_CONFLICT
    message = "Code already exists"


class NotFound(LinkError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Link not found"


class TransientStoreError(LinkError):
    """Store unreachable or too slow (pool exhausted, connect/statement timeout)."""


class InternalError(LinkError):
    """Anything unexpected; details stay in the server log."""
