"""Microsoft Graph HTTP client.

Holds the immutable client configuration and the shared
``httpx.AsyncClient``, and wires request building to the transport.
Sessions (one per signed-in user) are created from a client.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from outlook_client.graph.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_SCOPE,
    DEFAULT_TIMEOUT,
    DEFAULT_TOKEN_URL,
    DEFAULT_USER_AGENT,
    JSON_CONTENT_TYPE,
)
from outlook_client.graph.exceptions import ConfigurationError
from outlook_client.graph.request import build_request
from outlook_client.graph.transport import GraphResponse, Transport

if TYPE_CHECKING:
    from outlook_client.graph.session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Application registration and endpoint settings.

    Attributes:
        app_id: Azure AD application (client) ID.
        app_secret: Application client secret.
        redirect_uri: Redirect URI registered for the application.
        scope: Space-separated scopes requested on token refresh.
        base_url: Graph API root.
        token_url: OAuth2 token endpoint.
        user_agent: User-Agent header sent on every request.
        content_type: Default media type for request bodies.
        timeout: Default per-request timeout in seconds.
    """

    app_id: str = ""
    app_secret: str = ""
    redirect_uri: str = ""
    scope: str = DEFAULT_SCOPE
    base_url: str = DEFAULT_BASE_URL
    token_url: str = DEFAULT_TOKEN_URL
    user_agent: str = DEFAULT_USER_AGENT
    content_type: str = JSON_CONTENT_TYPE
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Build a config from OUTLOOK_* environment variables.

        Importing ``outlook_client.config`` first loads the repo ``.env``.

        Raises:
            ConfigurationError: If OUTLOOK_TIMEOUT is not a number.
        """
        import outlook_client.config  # noqa: F401

        timeout = os.environ.get("OUTLOOK_TIMEOUT")
        try:
            timeout_seconds = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(
                f"OUTLOOK_TIMEOUT must be a number of seconds, got {timeout!r}"
            ) from e

        return cls(
            app_id=os.environ.get("OUTLOOK_APP_ID", ""),
            app_secret=os.environ.get("OUTLOOK_APP_SECRET", ""),
            redirect_uri=os.environ.get("OUTLOOK_REDIRECT_URI", ""),
            scope=os.environ.get("OUTLOOK_SCOPE", DEFAULT_SCOPE),
            base_url=os.environ.get("OUTLOOK_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout_seconds,
        )


class GraphClient:
    """Client for Microsoft Graph mail and calendar APIs.

    Example:
        >>> config = ClientConfig(app_id="...", app_secret="...", redirect_uri="...")
        >>> async with GraphClient(config) as client:
        ...     session = await client.new_session(refresh_token)
        ...     calendars = await session.calendars().list()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration. Defaults to ``ClientConfig()``.
            http_client: Optional pre-configured ``httpx.AsyncClient``. When
                omitted, the client creates and owns one.
        """
        self.config = config or ClientConfig()
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(timeout=self.config.timeout)
        self._transport = Transport(self._http_client)

    def build_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        content_type: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        """Build a request against the configured base URL.

        ``content_type`` applies to this request only and defaults to the
        configured one.
        """
        return build_request(
            self.config.base_url,
            method,
            path,
            content_type=content_type or self.config.content_type,
            user_agent=self.config.user_agent,
            body=body,
            headers=headers,
        )

    async def execute(
        self,
        request: httpx.Request,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        """Send a built request and decode the response into ``target``."""
        return await self._transport.execute(request, target, timeout=timeout)

    def session(self, refresh_token: str) -> Session:
        """Create an unauthenticated session; call ``refresh()`` before use."""
        from outlook_client.graph.session import Session

        return Session(self, refresh_token)

    async def new_session(self, refresh_token: str) -> Session:
        """Create a session and exchange its refresh token for an access token.

        Raises:
            StatusCodeError: If the token endpoint rejects the refresh token.
            GraphTransportError: On network failures.
        """
        session = self.session(refresh_token)
        await session.refresh()
        logger.info(f"Session created for {self.config.base_url}{session.base_path}")
        return session

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this client created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> GraphClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
