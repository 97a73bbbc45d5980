"""Transport implementation backed by httpx."""

from __future__ import annotations

from http.cookiejar import Cookie
from typing import Any

import httpx
from loguru import logger

from .types import Credentials, RequestDescriptor


def _cookie_key(cookie: Cookie) -> tuple[str, str, str]:
    return cookie.domain, cookie.path, cookie.name


class HTTPXResponse:
    """Adapts an ``httpx.Response`` to the transport response protocol."""

    def __init__(self, response: httpx.Response):
        self.raw = response
        self.status = response.status_code
        self.headers = response.headers

    async def json(self) -> Any:
        """Parse the body as JSON, raising on malformed or empty content."""
        return self.raw.json()


class HTTPXTransport:
    """Sends requests with an ``httpx.AsyncClient``.

    The credentials mode decides whether the client's cookie jar is attached:

    - ``"omit"``: never send cookies, and drop any the response sets
    - ``"same-origin"``: send cookies only to the origin host or a relative URL
    - ``"include"`` or unset: always send cookies

    Args:
        client: Client to send with. A new one is created (and owned) if omitted.
        origin: URL whose host counts as same-origin. Defaults to the
            client's base_url.

    Example:
        >>> transport = HTTPXTransport(httpx.AsyncClient(cookies={"session": "abc"}))
        >>> client = APIClient("https://api.example.com", transport=transport)
    """

    def __init__(self, client: httpx.AsyncClient | None = None, *, origin: str | None = None):
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

        if origin is not None:
            self._origin_host = httpx.URL(origin).host
        else:
            self._origin_host = self._client.base_url.host

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def send(self, url: str, descriptor: RequestDescriptor) -> HTTPXResponse:
        """Send the request and read the whole response body."""
        method = descriptor.method.upper()
        request = self._client.build_request(
            method=method,
            url=url,
            headers=descriptor.headers,
            content=descriptor.body,
        )

        if not self._allows_cookies(descriptor.credentials, url, request.url):
            request.headers.pop("Cookie", None)

        jar_before = {_cookie_key(cookie): cookie for cookie in self._client.cookies.jar}
        response = await self._client.send(request)
        logger.debug(f"{method} {request.url} -> {response.status_code}")

        if descriptor.credentials == "omit":
            self._discard_response_cookies(response, jar_before)

        return HTTPXResponse(response)

    def _allows_cookies(
        self, credentials: Credentials | None, url: str, request_url: httpx.URL
    ) -> bool:
        if credentials == "omit":
            return False
        if credentials == "same-origin":
            # httpx has already resolved request_url against base_url
            if httpx.URL(url).is_relative_url:
                return True
            return bool(self._origin_host) and request_url.host == self._origin_host
        return True

    def _discard_response_cookies(self, response: httpx.Response, jar_before: dict) -> None:
        """Undo any Set-Cookie the client stored from an omit response."""
        jar = self._client.cookies.jar
        for cookie in response.cookies.jar:
            key = _cookie_key(cookie)
            if any(_cookie_key(stored) == key for stored in jar):
                jar.clear(*key)
            if key in jar_before:
                jar.set_cookie(jar_before[key])

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
