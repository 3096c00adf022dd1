"""HTTP response classification."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta

from outlook_client.graph.exceptions import StatusCodeError

logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> timedelta:
    """Parse a Retry-After header given in whole seconds.

    Missing or non-numeric values yield a zero duration.
    """
    if not value:
        return timedelta(0)
    try:
        seconds = int(value.strip())
    except ValueError:
        return timedelta(0)
    return timedelta(seconds=max(0, seconds))


def classify(status_code: int, headers: Mapping[str, str], body: bytes | str) -> None:
    """Raise StatusCodeError for any status outside [200, 300).

    Args:
        status_code: HTTP status code.
        headers: Response headers (case-insensitive mapping expected).
        body: Full response body, used verbatim as the error message.

    Raises:
        StatusCodeError: If the response is not a success.
    """
    if 200 <= status_code < 300:
        return

    if isinstance(body, bytes):
        message = body.decode("utf-8", errors="replace")
    else:
        message = body or ""

    retry_after = timedelta(0)
    if status_code == 429:
        retry_after = parse_retry_after(headers.get("Retry-After"))
        logger.warning(f"Rate limited by Microsoft Graph, retry after {retry_after}")

    raise StatusCodeError(status_code, message, retry_after)
