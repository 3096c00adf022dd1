import httpx
import pytest

from outlook_client.graph import ClientConfig, GraphClient

TOKEN_RESPONSE = {
    "access_token": "test-access-token-0123456789",
    "refresh_token": "rotated-refresh-token",
    "token_type": "Bearer",
    "expires_in": 3600,
    "scope": "mail.read calendars.read user.read offline_access",
}


class FakeGraph:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def add(self, status_code: int = 200, **kwargs) -> None:
        self._responses.append(httpx.Response(status_code, **kwargs))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json={})
        return self._responses.pop(0)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_graph() -> FakeGraph:
    return FakeGraph()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        app_id="test-app-id",
        app_secret="test-app-secret",
        redirect_uri="http://localhost:8400/callback",
    )


@pytest.fixture
def client(config, fake_graph) -> GraphClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_graph))
    return GraphClient(config, http_client=http_client)


@pytest.fixture
def session(client):
    return client.session("test-refresh-token")
