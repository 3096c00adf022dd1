"""Microsoft Graph (Outlook mail and calendar) client.

Core pieces live in ``outlook_client.graph``; resource services in
``outlook_client.calendar`` and ``outlook_client.mail``.
"""

from outlook_client.graph import (
    ClientConfig,
    GraphClient,
    NoAccessTokenError,
    OutlookError,
    Session,
    StatusCodeError,
)
from outlook_client.graph.constants import CLIENT_VERSION as __version__

__all__ = [
    "GraphClient",
    "ClientConfig",
    "Session",
    "OutlookError",
    "NoAccessTokenError",
    "StatusCodeError",
    "__version__",
]
