"""Exceptions raised by triageaccess."""

from typing import Optional


class TriageError(Exception):
    """Base class for every error raised by this library."""


class LoginError(TriageError):
    """Raised when no API key could be found for the client."""


class MalformedInputError(TriageError, ValueError):
    """Raised when a top-level document is not parseable as JSON."""


class PreconditionError(TriageError, ValueError):
    """Raised when caller-supplied arguments violate a precondition.

    Always raised before any network activity takes place.
    """


class TransportError(TriageError):
    """Raised when a request fails or returns a non-success status code."""

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
