"""Type definitions for typed-http.

This module defines the option types, the request descriptor handed to a
transport, and the protocols a transport and its responses must satisfy.
The request pipeline in :mod:`typed_http.client` depends only on these
definitions, never on a concrete HTTP library.

Classes:
    DefaultOptions: Client-scoped headers, query parameters and credentials
    RequestDescriptor: Everything a transport needs to send one request
    ResponseHeaders: Protocol for case-insensitive header lookup
    TransportResponse: Protocol for the response a transport returns
    Transport: Protocol for the asynchronous send primitive

Type Aliases:
    Method: The four supported request methods, lowercase
    Credentials: Credentials mode, mirroring fetch's accepted values
    HeaderInput: Accepted shapes for a header collection
    Query: Mapping of query keys to scalar values

Example:
    Client defaults applied to every call::

        from typed_http.types import DefaultOptions

        defaults = DefaultOptions(
            headers={"content-type": "application/json"},
            query={"api_key": "abc123"},
            credentials="include",
        )
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal, Optional, Protocol, Union, runtime_checkable

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

Method = Literal["get", "post", "put", "delete"]
"""Request methods stamped by the verb entry points."""

Credentials = Literal["omit", "same-origin", "include"]
"""Credentials mode for a request."""

HeaderInput = Union[httpx.Headers, Mapping[str, str], Sequence[tuple[str, str]]]
"""A header collection: httpx.Headers, a mapping, or ordered (name, value) pairs."""

Query = Mapping[str, Any]
"""Query parameters; insertion order is preserved in the query string."""


def header_items(headers: HeaderInput | None) -> list[tuple[str, str]]:
    """Flatten a header collection into ordered (name, value) pairs.

    Duplicate names in an ``httpx.Headers`` or a pair sequence are kept as
    separate entries.
    """
    if headers is None:
        return []
    if isinstance(headers, httpx.Headers):
        return list(headers.multi_items())
    if isinstance(headers, Mapping):
        return list(headers.items())
    return [(name, value) for name, value in headers]


class DefaultOptions(BaseModel):
    """Options applied to every call made through one client.

    Attributes:
        headers: Headers sent before any per-call headers
        query: Query parameters appended after any per-call parameters
        credentials: Credentials mode used when a call does not set one

    Notes:
        Instances are frozen. ``credentials`` is validated against the three
        accepted modes, so a typo fails at construction rather than on the wire.
    """

    model_config = ConfigDict(frozen=True)

    headers: tuple[tuple[str, str], ...] = ()
    query: Optional[dict[str, Any]] = None
    credentials: Optional[Credentials] = None

    @field_validator("headers", mode="before")
    @classmethod
    def _flatten_headers(cls, value: Any) -> Any:
        # Keep every (name, value) pair in order, duplicates included
        if value is None:
            return ()
        return tuple(header_items(value))


@dataclass(frozen=True)
class RequestDescriptor:
    """A fully merged request, ready for a transport.

    Attributes:
        method: Lowercase request method
        headers: Merged headers, or None when neither defaults nor the call set any
        credentials: Resolved credentials mode, or None
        body: JSON text of the request body, or None when no body was given
    """

    method: Method
    headers: httpx.Headers | None = None
    credentials: Credentials | None = None
    body: str | None = None


@runtime_checkable
class ResponseHeaders(Protocol):
    """Header lookup on a transport response."""

    def get(self, name: str) -> str | None:
        """Return the header value, or None if absent."""
        ...


@runtime_checkable
class TransportResponse(Protocol):
    """The part of a response the request pipeline reads.

    ``json()`` is only awaited when the response declares exactly
    ``application/json`` as its content type.
    """

    status: int
    headers: ResponseHeaders

    async def json(self) -> Any:
        """Parse the response body as JSON."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Asynchronous HTTP send primitive.

    Implementations raise on network failures; the pipeline converts any
    exception into a client error result.

    Example:
        A canned transport for tests::

            class StaticTransport:
                def __init__(self, response):
                    self.response = response

                async def send(self, url, descriptor):
                    return self.response
    """

    async def send(self, url: str, descriptor: RequestDescriptor) -> TransportResponse:
        """Send one request and return its response."""
        ...
