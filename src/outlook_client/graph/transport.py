"""Request execution, response classification and decoding."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from outlook_client.graph.exceptions import (
    DecodeError,
    GraphTransportError,
    RequestTimeoutError,
)
from outlook_client.graph.response import classify

logger = logging.getLogger(__name__)


@dataclass
class GraphResponse:
    """Outcome of a successful Graph call."""

    status_code: int
    headers: httpx.Headers
    data: Any = None


def decode_body(body: bytes, target: Any) -> Any:
    """Decode a response body into ``target``.

    Targets:
        None: nothing is decoded.
        Writable sink (has ``write``): raw bytes are copied into it.
        Class with ``from_dict``: JSON is parsed and handed to ``from_dict``.
        Any other callable: called with the parsed JSON (e.g. ``dict``).

    Raises:
        DecodeError: If the body isn't JSON or the target rejects it.
    """
    if target is None:
        return None

    if not isinstance(target, type) and hasattr(target, "write"):
        target.write(body)
        return target

    if not body:
        raise DecodeError("Empty response body")

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e

    factory = getattr(target, "from_dict", target)
    try:
        return factory(payload)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"Unexpected response shape: {e}") from e


class Transport:
    """Sends requests over a shared ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def execute(
        self,
        request: httpx.Request,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        """Send ``request`` and decode the response into ``target``.

        Args:
            request: Built request.
            target: Decode target, see ``decode_body``.
            timeout: Per-call deadline in seconds, overriding the client default.

        Returns:
            GraphResponse with the decoded data.

        Raises:
            RequestTimeoutError: If the deadline passes.
            GraphTransportError: On network failures.
            StatusCodeError: On non-2xx responses.
            DecodeError: If the body can't be decoded into ``target`` or its
                Content-Encoding is corrupt.
        """
        # Requests built outside the client carry no timeout of their own
        deadline = httpx.Timeout(timeout) if timeout is not None else self._client.timeout
        request.extensions["timeout"] = deadline.as_dict()

        try:
            response = await self._client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timed out: {request.method} {request.url}") from e
        except httpx.TransportError as e:
            raise GraphTransportError(f"Request failed: {e}") from e
        except httpx.DecodingError as e:
            raise DecodeError(f"Failed decoding response body: {e}") from e

        try:
            try:
                body = await response.aread()
            except httpx.TimeoutException as e:
                raise RequestTimeoutError(
                    f"Timed out reading response: {request.method} {request.url}"
                ) from e
            except httpx.TransportError as e:
                raise GraphTransportError(f"Failed reading response: {e}") from e
            except httpx.DecodingError as e:
                raise DecodeError(f"Failed decoding response body: {e}") from e

            logger.debug(f"{request.method} {request.url} -> {response.status_code}")
            classify(response.status_code, response.headers, body)
            data = decode_body(body, target)
        finally:
            await response.aclose()

        return GraphResponse(
            status_code=response.status_code,
            headers=response.headers,
            data=data,
        )
