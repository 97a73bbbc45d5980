"""A small, typed, fetch-like HTTP client.

typed-http sends GET/POST/PUT/DELETE requests through one pipeline that merges
client defaults with per-call options and returns a typed result instead of
raising on HTTP errors.

Key Features:
    - One result variant per call: Ok, Created, BadRequest, Unauthorized,
      NotFound, ServerError, Unknown or ClientError
    - Default headers, query parameters and credentials per client
    - JSON bodies decoded only for ``application/json`` responses
    - Pluggable transport; an httpx-backed one is used by default
    - Full async/await support

Quick Start:
    Basic usage example::

        from typed_http import APIClient, DefaultOptions, Ok

        client = APIClient(
            "https://api.example.com",
            DefaultOptions(headers={"content-type": "application/json"}),
        )

        result = await client.get(path="/users", query={"page": 2})
        if isinstance(result, Ok):
            print(result.data)

See Also:
    - APIClient: The request pipeline
    - DefaultOptions: Client-scoped options
    - Transport: Protocol for custom transports
    - ClientSettings: Building a client from environment variables
"""

from .client import APIClient
from .errors import ConfigurationError, TypedHTTPError
from .results import (
    BadRequest,
    ClientError,
    Created,
    NotFound,
    Ok,
    Result,
    ServerError,
    Unauthorized,
    Unknown,
)
from .settings import ClientSettings
from .transport import HTTPXTransport
from .types import (
    Credentials,
    DefaultOptions,
    RequestDescriptor,
    Transport,
    TransportResponse,
)

__all__ = [
    "APIClient",
    "BadRequest",
    "ClientError",
    "ClientSettings",
    "ConfigurationError",
    "Created",
    "Credentials",
    "DefaultOptions",
    "HTTPXTransport",
    "NotFound",
    "Ok",
    "RequestDescriptor",
    "Result",
    "ServerError",
    "Transport",
    "TransportResponse",
    "TypedHTTPError",
    "Unauthorized",
    "Unknown",
]
