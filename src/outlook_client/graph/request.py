"""Outbound request construction."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from outlook_client.graph.constants import (
    DEFAULT_USER_AGENT,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
)
from outlook_client.graph.exceptions import EncodingError, MalformedPathError

FORM_SCALARS = (str, int, float, bool)


def resolve_url(base_url: str, path: str) -> str:
    """Return ``path`` itself if it names a host, else ``base_url + path``.

    Raises:
        MalformedPathError: If ``path`` can't be parsed as a URL.
    """
    try:
        parsed = httpx.URL(path)
    except (httpx.InvalidURL, TypeError) as e:
        raise MalformedPathError(str(path), str(e)) from e

    if parsed.host:
        return path
    return f"{base_url.rstrip('/')}{path}"


def encode_body(body: Any, content_type: str) -> bytes:
    """Serialize a request body for the given content type.

    JSON bodies may be plain data or objects exposing ``to_dict()``.
    Form bodies must be a flat mapping of scalar values.

    Raises:
        EncodingError: If the body can't be encoded as ``content_type``.
    """
    if content_type == FORM_CONTENT_TYPE:
        if not isinstance(body, Mapping) or not all(
            isinstance(value, FORM_SCALARS) for value in body.values()
        ):
            raise EncodingError(
                "body must be form-encodable when content type is form-urlencoded"
            )
        return str(httpx.QueryParams(dict(body))).encode("utf-8")

    if content_type == JSON_CONTENT_TYPE:
        if hasattr(body, "to_dict"):
            body = body.to_dict()
        try:
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(f"body is not JSON serializable: {e}") from e

    raise EncodingError(f"Unsupported content type: {content_type}")


def build_request(
    base_url: str,
    method: str,
    path: str,
    *,
    content_type: str = JSON_CONTENT_TYPE,
    user_agent: str = DEFAULT_USER_AGENT,
    body: Any = None,
    headers: Mapping[str, str] | None = None,
) -> httpx.Request:
    """Build a fully qualified request with the standard Graph headers.

    Args:
        base_url: Root URL prepended to relative paths.
        method: HTTP method.
        path: Relative path (``/me/calendars?...``) or absolute URL.
        content_type: Media type used to encode ``body`` and sent as Content-Type.
        user_agent: User-Agent header value.
        body: Optional payload; ``None`` sends no body.
        headers: Extra headers, e.g. Authorization.

    Returns:
        An unsent ``httpx.Request``.

    Raises:
        MalformedPathError: If ``path`` is not a valid URL.
        EncodingError: If ``body`` doesn't fit ``content_type``.
    """
    url = resolve_url(base_url, path)
    content = encode_body(body, content_type) if body is not None else b""

    request_headers = {
        "Content-Type": content_type,
        "Accept": JSON_CONTENT_TYPE,
        "User-Agent": user_agent,
    }
    if headers:
        request_headers.update(headers)

    try:
        return httpx.Request(method, url, headers=request_headers, content=content)
    except httpx.InvalidURL as e:
        raise MalformedPathError(url, str(e)) from e
