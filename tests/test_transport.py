"""Tests for the httpx-backed transport."""

import json
from unittest.mock import patch

import httpx
import pytest

from typed_http import APIClient, ClientError, Created, DefaultOptions, HTTPXTransport, Ok
from typed_http.types import RequestDescriptor


def make_transport(handler, **client_kwargs):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), **client_kwargs)
    return HTTPXTransport(client)


@pytest.mark.asyncio
async def test_end_to_end_json_round_trip():
    """Test a POST through httpx is decoded into a Created result."""
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers.get("content-type")
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"id": 25, **seen["body"]})

    client = APIClient(
        "https://pokeapi.test/api",
        DefaultOptions(headers={"content-type": "application/json"}),
        transport=make_transport(handler),
    )

    result = await client.post(path="/pokemon", query={"team": "red"}, body={"name": "pikachu"})

    assert result == Created({"id": 25, "name": "pikachu"})
    assert seen["method"] == "POST"
    assert seen["url"] == "https://pokeapi.test/api/pokemon?team=red"
    assert seen["content_type"] == "application/json"


@pytest.mark.asyncio
async def test_basic_http_methods():
    """Test every verb reaches httpx with the upper-cased method."""
    transport = HTTPXTransport()
    client = APIClient("https://pokeapi.test", transport=transport)

    with patch.object(transport.client, "send") as mock_send:
        mock_send.return_value = httpx.Response(200, json={"success": True})

        assert await client.get(path="/test") == Ok({"success": True})
        assert mock_send.call_args[0][0].method == "GET"

        await client.post(path="/test", body={"data": "value"})
        assert mock_send.call_args[0][0].method == "POST"

        await client.put(path="/test", body={})
        assert mock_send.call_args[0][0].method == "PUT"

        await client.delete(path="/test")
        assert mock_send.call_args[0][0].method == "DELETE"

    await transport.aclose()


@pytest.mark.asyncio
async def test_get_sends_no_body():
    """Test GET requests carry an empty body."""
    seen = {}

    def handler(request):
        seen["content"] = request.content
        return httpx.Response(200, json=[1, 2, 3])

    client = APIClient("https://pokeapi.test", transport=make_transport(handler))

    result = await client.get()

    assert result == Ok([1, 2, 3])
    assert seen["content"] == b""


@pytest.mark.asyncio
async def test_text_response_is_not_decoded():
    """Test a text/plain response gives empty data."""

    def handler(request):
        return httpx.Response(200, text="pong")

    client = APIClient("https://pokeapi.test", transport=make_transport(handler))

    assert await client.get(path="/ping") == Ok({})


@pytest.mark.asyncio
async def test_connection_error_is_returned():
    """Test httpx network errors surface as ClientError."""
    error = httpx.ConnectError("Connection refused")

    def handler(request):
        raise error

    client = APIClient("https://pokeapi.test", transport=make_transport(handler))

    result = await client.get()

    assert isinstance(result, ClientError)
    assert result.err is error


class TestCredentials:
    """Test the credentials mode controls the cookie jar."""

    @staticmethod
    def cookie_handler(seen):
        def handler(request):
            seen.append(request.headers.get("cookie"))
            return httpx.Response(200)

        return handler

    @pytest.mark.asyncio
    async def test_include_sends_cookies(self):
        seen = []
        transport = make_transport(self.cookie_handler(seen), cookies={"session": "abc"})

        await transport.send("https://pokeapi.test/", RequestDescriptor("get", credentials="include"))
        await transport.send("https://pokeapi.test/", RequestDescriptor("get"))

        assert seen == ["session=abc", "session=abc"]

    @pytest.mark.asyncio
    async def test_omit_strips_cookies(self):
        seen = []
        transport = make_transport(self.cookie_handler(seen), cookies={"session": "abc"})

        await transport.send("https://pokeapi.test/", RequestDescriptor("get", credentials="omit"))

        assert seen == [None]

    @pytest.mark.asyncio
    async def test_same_origin_checks_host(self):
        seen = []
        transport = make_transport(
            self.cookie_handler(seen),
            cookies={"session": "abc"},
            base_url="https://pokeapi.test",
        )
        descriptor = RequestDescriptor("get", credentials="same-origin")

        await transport.send("https://pokeapi.test/pokemon", descriptor)
        await transport.send("https://evil.test/pokemon", descriptor)

        assert seen == ["session=abc", None]

    @pytest.mark.asyncio
    async def test_explicit_origin(self):
        seen = []
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(self.cookie_handler(seen)), cookies={"session": "abc"}
        )
        transport = HTTPXTransport(client, origin="https://pokeapi.test")
        descriptor = RequestDescriptor("get", credentials="same-origin")

        await transport.send("https://pokeapi.test/pokemon", descriptor)
        await transport.send("https://other.test/pokemon", descriptor)

        assert seen == ["session=abc", None]

    @pytest.mark.asyncio
    async def test_same_origin_without_origin_only_allows_relative_urls(self):
        seen = []
        transport = make_transport(self.cookie_handler(seen), cookies={"session": "abc"})
        descriptor = RequestDescriptor("get", credentials="same-origin")

        await transport.send("https://evil.test/x", descriptor)

        assert seen == [None]

    @pytest.mark.asyncio
    async def test_same_origin_relative_url_sends_cookies(self):
        seen = []
        transport = make_transport(
            self.cookie_handler(seen),
            cookies={"session": "abc"},
            base_url="https://pokeapi.test",
        )

        await transport.send("/pokemon", RequestDescriptor("get", credentials="same-origin"))

        assert seen == ["session=abc"]

    @staticmethod
    def set_cookie_handler(seen, set_cookie):
        def handler(request):
            seen.append(request.headers.get("cookie"))
            return httpx.Response(200, headers={"Set-Cookie": set_cookie})

        return handler

    @pytest.mark.asyncio
    async def test_omit_ignores_response_cookies(self):
        seen = []
        transport = make_transport(
            self.set_cookie_handler(seen, "session=evil; Path=/"), cookies={"session": "abc"}
        )

        await transport.send("https://pokeapi.test/", RequestDescriptor("get", credentials="omit"))
        await transport.send("https://pokeapi.test/", RequestDescriptor("get", credentials="include"))

        assert seen == [None, "session=abc"]

    @pytest.mark.asyncio
    async def test_include_stores_response_cookies(self):
        seen = []
        transport = make_transport(self.set_cookie_handler(seen, "token=xyz; Path=/"))
        descriptor = RequestDescriptor("get", credentials="include")

        await transport.send("https://pokeapi.test/", descriptor)
        await transport.send("https://pokeapi.test/", descriptor)

        assert seen == [None, "token=xyz"]


@pytest.mark.asyncio
async def test_aclose_only_closes_owned_client():
    """Test a caller-supplied client stays open."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    transport = HTTPXTransport(client)

    await transport.aclose()
    assert not client.is_closed

    owned = HTTPXTransport()
    await owned.aclose()
    assert owned.client.is_closed
    await client.aclose()
