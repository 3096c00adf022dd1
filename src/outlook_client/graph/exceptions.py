"""Microsoft Graph client exceptions."""

from __future__ import annotations

from datetime import timedelta


class OutlookError(Exception):
    """Base exception for Outlook/Graph client errors."""


class NoAccessTokenError(OutlookError):
    """Raised when an authenticated call is made before a token refresh."""

    def __init__(self, message: str = "no access token for session"):
        super().__init__(message)


class MalformedPathError(OutlookError):
    """Raised when a request path cannot be parsed as a URL."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed request path {path!r}{detail}")


class ConfigurationError(OutlookError):
    """Raised when an OUTLOOK_* environment variable has an invalid value."""


class EncodingError(OutlookError):
    """Raised when a request body doesn't fit the request content type."""


class GraphTransportError(OutlookError):
    """Raised on network-level failures (DNS, connect, read)."""


class RequestTimeoutError(GraphTransportError):
    """Raised when a request exceeds its deadline."""


class DecodeError(OutlookError):
    """Raised when a response body can't be decoded into the requested target."""


class StatusCodeError(OutlookError):
    """Raised when Microsoft Graph responds with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response.
        message: Raw response body (may be empty).
        retry_after: Suggested wait before retrying. Zero unless the
            response was a 429 carrying a numeric Retry-After header.
    """

    def __init__(
        self,
        status_code: int,
        message: str = "",
        retry_after: timedelta | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.retry_after = retry_after or timedelta(0)
        super().__init__(
            f"Call to Microsoft Graph failed with status code {status_code}. "
            f"Reason: {message}"
        )

    @property
    def is_rate_limited(self) -> bool:
        """True for 429 Too Many Requests."""
        return self.status_code == 429
