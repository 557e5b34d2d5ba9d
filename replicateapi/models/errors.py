"""
Exceptions raised by the Replicate client and the HTTP status classifier.

Every failure surfaces to the caller as a subclass of ReplicateError. The
client performs no retries; callers decide how to react to RateLimitError
and TransportError.
"""

from typing import Optional


class ReplicateError(Exception):
    """Base exception for Replicate client errors."""
    pass


class InvalidModelIdentifierError(ReplicateError, ValueError):
    """Raised when a model name is not in the "owner/model" format."""
    pass


class TransportError(ReplicateError):
    """Raised when the HTTP request could not be completed."""
    pass


class UnauthorizedError(ReplicateError):
    """Raised on HTTP 401. Check the API token and the model's visibility."""
    pass


class RateLimitError(ReplicateError):
    """
    Raised on HTTP 429.

    See https://replicate.com/docs/reference/http#rate-limits for the
    current limits.
    """
    pass


class ServerError(ReplicateError):
    """Raised for any other non-2xx response."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"unexpected response status {status_code}")


class DecodingError(ReplicateError):
    """Raised when a response body is not the expected JSON shape."""
    pass


class EncodingError(ReplicateError):
    """Raised when a request body cannot be serialized to JSON."""
    pass


def check_status(status_code: int) -> Optional[ReplicateError]:
    """
    Map an HTTP status code to the matching error, if any.

    Args:
        status_code: HTTP status code of the response

    Returns:
        An exception instance for the caller to raise, or None when the
        response body should be decoded
    """
    if status_code == 401:
        return UnauthorizedError("unauthorized")
    if status_code == 429:
        return RateLimitError("rate limit reached")
    if status_code >= 400:
        return ServerError(status_code)
    return None
