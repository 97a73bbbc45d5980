"""The request pipeline behind every call."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from .results import ClientError, Result, classify_status
from .transport import HTTPXTransport
from .types import (
    Credentials,
    DefaultOptions,
    HeaderInput,
    Method,
    Query,
    RequestDescriptor,
    Transport,
    header_items,
)


class APIClient:
    """A small fetch-like client that returns typed results instead of raising.

    Every verb funnels into one dispatch routine which merges the client
    defaults with the call's options, builds the URL, sends the request
    through the transport and classifies the response.

    Args:
        base_url: Prefix for every request URL. Not validated; "" means no prefix.
        default_options: Headers, query parameters and credentials for every call
        transport: Send primitive. Defaults to an httpx-backed transport created
            on first use.

    Example:
        >>> async with APIClient(
        ...     "https://api.example.com",
        ...     DefaultOptions(headers={"content-type": "application/json"}),
        ... ) as client:
        ...     result = await client.post(path="/pokemon", body={"name": "pikachu"})
        ...     if result.code == 201:
        ...         print(result.data)
    """

    def __init__(
        self,
        base_url: str,
        default_options: DefaultOptions | None = None,
        *,
        transport: Transport | None = None,
    ):
        self._base_url = base_url
        self._default_options = default_options or DefaultOptions()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_options(self) -> DefaultOptions:
        return self._default_options

    @property
    def transport(self) -> Transport:
        """The transport requests are sent through."""
        if self._transport is None:
            self._transport = HTTPXTransport()
        return self._transport

    async def __aenter__(self):
        """Enter async context."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, closing the transport if it can be closed."""
        aclose = getattr(self._transport, "aclose", None)
        if aclose is not None:
            await aclose()

    async def _dispatch(
        self,
        method: Method,
        *,
        path: str | None = None,
        query: Query | None = None,
        headers: HeaderInput | None = None,
        credentials: Credentials | None = None,
        body: Any = None,
        has_body: bool = False,
    ) -> Result[Any]:
        """Send one request and classify its outcome."""
        credentials = credentials or self._default_options.credentials

        try:
            url = f"{self._base_url}{path or ''}{self._build_query_string(query)}"
            descriptor = RequestDescriptor(
                method=method,
                headers=self._merge_headers(headers),
                credentials=credentials,
                body=json.dumps(body) if has_body else None,
            )
            response = await self.transport.send(url, descriptor)

            # JSON is only read when the response declares exactly application/json
            data: Any = {}
            if response.headers.get("Content-Type") == "application/json":
                data = await response.json()

            return classify_status(response.status, data)
        except Exception as e:
            return ClientError(err=e)

    def _merge_headers(self, headers: HeaderInput | None) -> httpx.Headers | None:
        """Combine default and call headers, defaults first."""
        items = [*self._default_options.headers, *header_items(headers)]
        if not items:
            return None
        return httpx.Headers(items)

    def _build_query_string(self, query: Query | None) -> str:
        """Build "?k=v&..." from call pairs followed by default pairs.

        Keys and values are not escaped.
        """
        pairs = [*self._query_pairs(query), *self._query_pairs(self._default_options.query)]
        if not pairs:
            return ""
        return "?" + "&".join(pairs)

    @staticmethod
    def _query_pairs(query: Mapping[str, Any] | None) -> list[str]:
        if not query:
            return []
        return [f"{key}={value}" for key, value in query.items()]

    # Verbs
    async def get(
        self,
        *,
        path: str | None = None,
        query: Query | None = None,
        headers: HeaderInput | None = None,
        credentials: Credentials | None = None,
    ) -> Result[Any]:
        """Make a GET request."""
        return await self._dispatch(
            "get", path=path, query=query, headers=headers, credentials=credentials
        )

    async def post(
        self,
        *,
        body: Any,
        path: str | None = None,
        query: Query | None = None,
        headers: HeaderInput | None = None,
        credentials: Credentials | None = None,
    ) -> Result[Any]:
        """Make a POST request with a JSON body."""
        return await self._dispatch(
            "post",
            path=path,
            query=query,
            headers=headers,
            credentials=credentials,
            body=body,
            has_body=True,
        )

    async def put(
        self,
        *,
        body: Any,
        path: str | None = None,
        query: Query | None = None,
        headers: HeaderInput | None = None,
        credentials: Credentials | None = None,
    ) -> Result[Any]:
        """Make a PUT request with a JSON body."""
        return await self._dispatch(
            "put",
            path=path,
            query=query,
            headers=headers,
            credentials=credentials,
            body=body,
            has_body=True,
        )

    async def delete(
        self,
        *,
        path: str | None = None,
        query: Query | None = None,
        headers: HeaderInput | None = None,
        credentials: Credentials | None = None,
    ) -> Result[Any]:
        """Make a DELETE request."""
        return await self._dispatch(
            "delete", path=path, query=query, headers=headers, credentials=credentials
        )
