"""Query string helpers for Graph requests and paging links."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import httpx

from outlook_client.graph.constants import QUERY_DATETIME_FORMAT


def encode_query(params: Mapping[str, Any] | None) -> str:
    """Encode parameters as a query string.

    Args:
        params: Parameter names mapped to scalar values. Booleans are
            rendered as ``true``/``false``.

    Returns:
        ``"?key=value&..."`` with every entry percent-encoded, or ``""``
        when there is nothing to encode.
    """
    if not params:
        return ""

    encoded = str(httpx.QueryParams(dict(params)))
    if not encoded:
        return ""
    return f"?{encoded}"


def extract_param(page_link: str, key: str) -> str:
    """Pull one query parameter out of an opaque ``@odata.nextLink``.

    Returns an empty string when the link is malformed or lacks ``key``;
    callers treat that as "no cursor".
    """
    if not page_link:
        return ""

    try:
        url = httpx.URL(page_link)
    except (httpx.InvalidURL, TypeError):
        return ""

    return url.params.get(key, "")


def format_query_datetime(value: datetime) -> str:
    """Format a datetime for startDateTime/endDateTime (UTC, second precision)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(QUERY_DATETIME_FORMAT)


def page_params(max_results: int, next_link: str | None = None) -> dict[str, Any]:
    """Common list parameters: page size, total count and the next skip token."""
    params: dict[str, Any] = {"$top": max_results, "$count": True}
    if next_link:
        params["$skip"] = extract_param(next_link, "$skip")
    return params
