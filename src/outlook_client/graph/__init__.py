"""Microsoft Graph session/request pipeline."""

from outlook_client.graph.client import ClientConfig, GraphClient
from outlook_client.graph.exceptions import (
    ConfigurationError,
    DecodeError,
    EncodingError,
    GraphTransportError,
    MalformedPathError,
    NoAccessTokenError,
    OutlookError,
    RequestTimeoutError,
    StatusCodeError,
)
from outlook_client.graph.models import ListResult
from outlook_client.graph.query import encode_query, extract_param
from outlook_client.graph.session import Session
from outlook_client.graph.transport import GraphResponse

__all__ = [
    "GraphClient",
    "ClientConfig",
    "Session",
    "GraphResponse",
    "ListResult",
    "encode_query",
    "extract_param",
    "OutlookError",
    "ConfigurationError",
    "NoAccessTokenError",
    "MalformedPathError",
    "EncodingError",
    "GraphTransportError",
    "RequestTimeoutError",
    "StatusCodeError",
    "DecodeError",
]
