"""Tests for environment configuration and the CLI."""

import os
from unittest.mock import patch

import pytest

from outlook_client import cli
from outlook_client.config import _load_env_file, get_credential_status
from outlook_client.graph import ClientConfig, ConfigurationError
from outlook_client.graph.constants import DEFAULT_BASE_URL, DEFAULT_SCOPE, DEFAULT_TIMEOUT

FULL_ENV = {
    "OUTLOOK_APP_ID": "app-id",
    "OUTLOOK_APP_SECRET": "app-secret",
    "OUTLOOK_REDIRECT_URI": "http://localhost:8400/callback",
    "OUTLOOK_REFRESH_TOKEN": "refresh-token",
}


class TestLoadEnvFile:
    """Test .env parsing."""

    def test_missing_file(self, tmp_path):
        """Should return nothing when the file does not exist."""
        assert _load_env_file(tmp_path / ".env") == {}

    def test_parses_values(self, tmp_path):
        """Should skip comments and strip quotes."""
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# Outlook\n"
            "OUTLOOK_APP_ID=abc\n"
            'OUTLOOK_APP_SECRET="s3cr=t"\n'
            "OUTLOOK_SCOPE='mail.read user.read'\n"
            "not a variable\n"
        )

        with patch.dict(os.environ, {}, clear=True):
            loaded = _load_env_file(env_file)
            assert os.environ["OUTLOOK_APP_SECRET"] == "s3cr=t"

        assert loaded == {
            "OUTLOOK_APP_ID": "abc",
            "OUTLOOK_APP_SECRET": "s3cr=t",
            "OUTLOOK_SCOPE": "mail.read user.read",
        }

    def test_environment_takes_precedence(self, tmp_path):
        """Should not override variables already set."""
        env_file = tmp_path / ".env"
        env_file.write_text("OUTLOOK_APP_ID=from-file\n")

        with patch.dict(os.environ, {"OUTLOOK_APP_ID": "from-env"}, clear=True):
            assert _load_env_file(env_file) == {}
            assert os.environ["OUTLOOK_APP_ID"] == "from-env"


class TestClientConfigFromEnv:
    """Test ClientConfig.from_env."""

    def test_reads_variables(self):
        """Should read OUTLOOK_* variables."""
        env = {**FULL_ENV, "OUTLOOK_TIMEOUT": "15"}
        with patch.dict(os.environ, env, clear=True):
            config = ClientConfig.from_env()

        assert config.app_id == "app-id"
        assert config.app_secret == "app-secret"
        assert config.redirect_uri == "http://localhost:8400/callback"
        assert config.timeout == 15.0

    def test_defaults(self):
        """Should fall back to default endpoints and timeout."""
        with patch.dict(os.environ, {}, clear=True):
            config = ClientConfig.from_env()

        assert config.scope == DEFAULT_SCOPE
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT

    def test_invalid_timeout(self):
        """Should name the variable when OUTLOOK_TIMEOUT is not a number."""
        with (
            patch.dict(os.environ, {"OUTLOOK_TIMEOUT": "abc"}, clear=True),
            pytest.raises(ConfigurationError, match="OUTLOOK_TIMEOUT"),
        ):
            ClientConfig.from_env()


class TestCredentialStatus:
    """Test credential status reporting."""

    def test_all_configured(self):
        """Should report every variable as configured."""
        with patch.dict(os.environ, FULL_ENV, clear=True):
            status = get_credential_status()

        assert all(status["app"].values())
        assert status["refresh_token"] is True

    def test_nothing_configured(self):
        """Should report missing variables."""
        with patch.dict(os.environ, {}, clear=True):
            status = get_credential_status()

        assert not any(status["app"].values())
        assert status["refresh_token"] is False


class TestCli:
    """Test the command line entry point."""

    def test_no_command_prints_help(self, capsys):
        """Should print help and succeed without a command."""
        assert cli.main([]) == 0
        assert "outlook-client" in capsys.readouterr().out

    def test_status_configured(self, capsys):
        """Should exit 0 when all credentials are present."""
        with patch.dict(os.environ, FULL_ENV, clear=True):
            assert cli.main(["status"]) == 0
        assert "[x] OUTLOOK_APP_ID" in capsys.readouterr().out

    def test_status_missing(self, capsys):
        """Should exit 1 when credentials are missing."""
        with patch.dict(os.environ, {}, clear=True):
            assert cli.main(["status"]) == 1
        assert "[ ] OUTLOOK_REFRESH_TOKEN" in capsys.readouterr().out

    def test_list_without_refresh_token(self):
        """Should stop before any network call without a refresh token."""
        with patch.dict(os.environ, {}, clear=True), pytest.raises(SystemExit):
            cli.main(["calendars", "list"])

    def test_list_with_invalid_timeout(self, capsys):
        """Should report a bad OUTLOOK_TIMEOUT and exit 1."""
        env = {**FULL_ENV, "OUTLOOK_TIMEOUT": "abc"}
        with patch.dict(os.environ, env, clear=True):
            assert cli.main(["calendars", "list"]) == 1
        assert "OUTLOOK_TIMEOUT" in capsys.readouterr().out
