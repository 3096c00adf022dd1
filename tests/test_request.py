"""Tests for outbound request construction."""

import json

import httpx
import pytest

from outlook_client.calendar import Calendar
from outlook_client.graph.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TOKEN_URL,
    DEFAULT_USER_AGENT,
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
)
from outlook_client.graph.exceptions import EncodingError, MalformedPathError
from outlook_client.graph.request import build_request


class TestBuildRequestUrl:
    """Test URL resolution."""

    def test_relative_path_joined_to_base(self):
        """Should prefix relative paths with the base URL."""
        request = build_request(DEFAULT_BASE_URL, "GET", "/me/calendars?%24top=10")
        assert str(request.url) == "https://graph.microsoft.com/v1.0/me/calendars?%24top=10"

    def test_absolute_url_used_verbatim(self):
        """Should not prefix paths that carry a host."""
        request = build_request(DEFAULT_BASE_URL, "POST", DEFAULT_TOKEN_URL)
        assert str(request.url) == DEFAULT_TOKEN_URL

    def test_malformed_path(self):
        """Should raise MalformedPathError for unparseable paths."""
        with pytest.raises(MalformedPathError) as exc_info:
            build_request(DEFAULT_BASE_URL, "GET", "/me/calendars\x00")
        assert exc_info.value.path == "/me/calendars\x00"


class TestBuildRequestHeaders:
    """Test standard headers."""

    def test_default_headers(self):
        """Should set Content-Type, Accept and User-Agent."""
        request = build_request(DEFAULT_BASE_URL, "GET", "/me/calendars")
        assert request.headers["Content-Type"] == JSON_CONTENT_TYPE
        assert request.headers["Accept"] == "application/json"
        assert request.headers["User-Agent"] == DEFAULT_USER_AGENT
        assert DEFAULT_USER_AGENT.startswith("outlook-client/")

    def test_extra_headers(self):
        """Should merge caller headers."""
        request = build_request(
            DEFAULT_BASE_URL,
            "GET",
            "/me/calendars",
            headers={"Authorization": "Bearer abc"},
        )
        assert request.headers["Authorization"] == "Bearer abc"

    def test_no_body(self):
        """Should send an empty body when none is given."""
        request = build_request(DEFAULT_BASE_URL, "GET", "/me/calendars")
        assert request.content == b""


class TestBuildRequestBody:
    """Test body encoding per content type."""

    def test_json_body(self):
        """Should JSON-serialize mappings."""
        request = build_request(
            DEFAULT_BASE_URL, "POST", "/me/calendars", body={"name": "Work"}
        )
        assert json.loads(request.content) == {"name": "Work"}

    def test_json_body_from_model(self):
        """Should serialize models through to_dict()."""
        request = build_request(
            DEFAULT_BASE_URL, "POST", "/me/calendars", body=Calendar(name="Work", color="auto")
        )
        assert json.loads(request.content) == {"name": "Work", "color": "auto"}

    def test_json_body_not_serializable(self):
        """Should raise EncodingError for non-JSON bodies."""
        with pytest.raises(EncodingError):
            build_request(DEFAULT_BASE_URL, "POST", "/me/calendars", body={"when": object()})

    def test_form_body(self):
        """Should form-encode flat mappings."""
        request = build_request(
            DEFAULT_BASE_URL,
            "POST",
            DEFAULT_TOKEN_URL,
            content_type=FORM_CONTENT_TYPE,
            body={"grant_type": "refresh_token", "scope": "mail.read user.read"},
        )
        assert request.headers["Content-Type"] == FORM_CONTENT_TYPE
        form = httpx.QueryParams(request.content.decode())
        assert form["grant_type"] == "refresh_token"
        assert form["scope"] == "mail.read user.read"

    @pytest.mark.parametrize(
        "body",
        [
            ["client_id", "abc"],
            "client_id=abc",
            {"nested": {"a": "b"}},
            {"many": ["a", "b"]},
            Calendar(name="Work"),
        ],
    )
    def test_form_body_must_be_flat_mapping(self, body):
        """Should reject bodies that aren't flat key-value mappings."""
        with pytest.raises(EncodingError, match="form-encodable"):
            build_request(
                DEFAULT_BASE_URL,
                "POST",
                DEFAULT_TOKEN_URL,
                content_type=FORM_CONTENT_TYPE,
                body=body,
            )
