"""Centralized credential configuration.

Application credentials live in a ``.env`` file at the repo root:
    OUTLOOK_APP_ID          - Azure AD application (client) ID
    OUTLOOK_APP_SECRET      - Application client secret
    OUTLOOK_REDIRECT_URI    - Registered redirect URI
    OUTLOOK_SCOPE           - Optional scope override
    OUTLOOK_REFRESH_TOKEN   - Refresh token of the signed-in user
    OUTLOOK_BASE_URL        - Optional Graph root override
    OUTLOOK_TIMEOUT         - Optional request timeout in seconds

This module auto-loads the .env file on import. Variables already present
in the environment take precedence.
"""

import os
from pathlib import Path

# __file__ is src/outlook_client/config.py, so 3 levels up
REPO_ROOT = Path(__file__).parent.parent.parent
ENV_FILE = REPO_ROOT / ".env"

REQUIRED_VARS = ("OUTLOOK_APP_ID", "OUTLOOK_APP_SECRET", "OUTLOOK_REDIRECT_URI")


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Load environment variables from a file.

    Args:
        env_path: Path to .env file.

    Returns:
        Dictionary of loaded variables.
    """
    loaded = {}
    if not env_path.exists():
        return loaded

    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            if key and key not in os.environ:
                os.environ[key] = value
                loaded[key] = value

    return loaded


def get_refresh_token() -> str:
    """Refresh token from OUTLOOK_REFRESH_TOKEN, empty if unset."""
    return os.environ.get("OUTLOOK_REFRESH_TOKEN", "")


def get_credential_status() -> dict:
    """Get status of the configured Outlook credentials.

    Returns:
        Dictionary with credential status.
    """
    return {
        "repo_root": str(REPO_ROOT),
        "env_file": ENV_FILE.exists(),
        "app": {name: bool(os.environ.get(name)) for name in REQUIRED_VARS},
        "refresh_token": bool(get_refresh_token()),
    }


_loaded = _load_env_file(ENV_FILE)
