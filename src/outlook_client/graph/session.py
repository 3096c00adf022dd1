"""Authenticated Microsoft Graph session.

A session belongs to one signed-in user. It exchanges the user's refresh
token for an access token and attaches that token to every request made
under ``/me``.

Expired or revoked access tokens are not detected: a 401 surfaces as a
StatusCodeError and the caller decides whether to ``refresh()`` again.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from authlib.oauth2.rfc6749 import OAuth2Token

from outlook_client.graph.constants import FORM_CONTENT_TYPE, SESSION_BASE_PATH
from outlook_client.graph.exceptions import DecodeError, NoAccessTokenError
from outlook_client.graph.query import encode_query
from outlook_client.graph.transport import GraphResponse

if TYPE_CHECKING:
    from outlook_client.calendar.client import CalendarService, EventService
    from outlook_client.graph.client import GraphClient
    from outlook_client.mail.client import FolderService, MessageService

logger = logging.getLogger(__name__)


def mask_token(token: str) -> str:
    """Shorten a token for display, keeping only a short prefix."""
    if not token:
        return ""
    if len(token) <= 8:
        return "****"
    return f"{token[:6]}...({len(token)} chars)"


def _parse_token(payload: Any) -> OAuth2Token:
    """Validate a token endpoint response."""
    if not isinstance(payload, dict):
        raise TypeError("Token response must be a JSON object")
    access_token = payload.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise ValueError("Token response missing access_token")
    return OAuth2Token.from_dict(payload)


class Session:
    """Per-user session over a GraphClient.

    Example:
        >>> session = client.session(refresh_token)
        >>> await session.refresh()
        >>> page = await session.get("/calendars", {"$top": 10}, target=dict)
    """

    def __init__(self, client: GraphClient, refresh_token: str):
        """Initialize the session.

        Args:
            client: Client used to build and send requests.
            refresh_token: Long-lived refresh token for the user.
        """
        self.client = client
        self.base_path = SESSION_BASE_PATH
        self._refresh_token = refresh_token
        self._token: OAuth2Token | None = None
        self.last_refresh: datetime | None = None
        self.refresh_count = 0

    @property
    def refresh_token(self) -> str:
        return self._refresh_token

    @property
    def access_token(self) -> str:
        """Current access token, empty until a refresh succeeds."""
        if not self._token:
            return ""
        return self._token.get("access_token", "")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)

    async def refresh(self, *, timeout: float | None = None) -> OAuth2Token:
        """Exchange the refresh token for a new access token.

        The refresh token itself is kept as is.

        Returns:
            The token endpoint response.

        Raises:
            StatusCodeError: If the token endpoint rejects the request.
            GraphTransportError: On network failures.
            DecodeError: If the response has no access token.
        """
        config = self.client.config
        body = {
            "client_id": config.app_id,
            "client_secret": config.app_secret,
            "refresh_token": self._refresh_token,
            "redirect_uri": config.redirect_uri,
            "scope": config.scope,
            "grant_type": "refresh_token",
        }
        request = self.client.build_request(
            "POST",
            config.token_url,
            body,
            content_type=FORM_CONTENT_TYPE,
        )

        response = await self.client.execute(request, dict, timeout=timeout)
        try:
            token = _parse_token(response.data)
        except (TypeError, ValueError) as e:
            raise DecodeError(str(e)) from e

        self._token = token
        self.last_refresh = datetime.now()
        self.refresh_count += 1
        logger.info(f"Access token refreshed: {mask_token(self.access_token)}")
        return token

    def invalidate(self) -> None:
        """Forget the access token; calls fail until the next refresh."""
        self._token = None

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        """Make an authenticated request under the session base path.

        Args:
            method: HTTP method.
            path: Path relative to ``/me`` (e.g. "/calendars").
            params: Query parameters.
            body: JSON request body.
            target: Decode target for the response.
            timeout: Per-call deadline in seconds.

        Raises:
            NoAccessTokenError: If ``refresh()`` hasn't succeeded. No request is sent.
        """
        if not self.access_token:
            raise NoAccessTokenError()

        full_path = f"{self.base_path}{path}{encode_query(params)}"
        request = self.client.build_request(
            method,
            full_path,
            body,
            headers={"Authorization": f"Bearer {self.access_token}"},
        )
        return await self.client.execute(request, target, timeout=timeout)

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        return await self.request("GET", path, params, None, target, timeout=timeout)

    async def post(
        self,
        path: str,
        body: Any = None,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        return await self.request("POST", path, None, body, target, timeout=timeout)

    async def patch(
        self,
        path: str,
        body: Any = None,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        return await self.request("PATCH", path, None, body, target, timeout=timeout)

    async def delete(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        target: Any = None,
        *,
        timeout: float | None = None,
    ) -> GraphResponse:
        return await self.request("DELETE", path, params, None, target, timeout=timeout)

    def calendars(self) -> CalendarService:
        from outlook_client.calendar.client import CalendarService

        return CalendarService(self)

    def events(self) -> EventService:
        from outlook_client.calendar.client import EventService

        return EventService(self)

    def folders(self) -> FolderService:
        from outlook_client.mail.client import FolderService

        return FolderService(self)

    def messages(self) -> MessageService:
        from outlook_client.mail.client import MessageService

        return MessageService(self)

    def token_info(self) -> dict[str, Any]:
        """Describe the current token without exposing it.

        Returns:
            Dictionary with status, masked token, expiry and refresh stats.
        """
        if not self._token:
            return {"status": "no_token", "refresh_count": self.refresh_count}

        expires_at = self._token.get("expires_at")
        if expires_at:
            expires_in = expires_at - datetime.now().timestamp()
            expires_str = str(timedelta(seconds=int(max(0, expires_in))))
            is_expired = expires_in <= 0
        else:
            expires_str = "unknown"
            is_expired = False

        return {
            "status": "expired" if is_expired else "valid",
            "access_token": mask_token(self.access_token),
            "scopes": self._token.get("scope", "").split(),
            "expires_in": expires_str,
            "refresh_count": self.refresh_count,
            "last_refresh": self.last_refresh.isoformat() if self.last_refresh else None,
        }
