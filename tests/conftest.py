"""Shared test fixtures and utilities."""

import json

import httpx
import pytest


class FakeResponse:
    """Minimal transport response with a canned status, headers and body."""

    def __init__(self, status=200, headers=None, body=None):
        self.status = status
        self.headers = httpx.Headers(headers or {})
        self.body = body
        self.json_calls = 0

    async def json(self):
        self.json_calls += 1
        return json.loads(self.body)


class RecordingTransport:
    """Transport double that records each send and replays a response or error."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else FakeResponse()
        self.error = error
        self.calls = []

    async def send(self, url, descriptor):
        self.calls.append((url, descriptor))
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_url(self):
        return self.calls[-1][0]

    @property
    def last_descriptor(self):
        return self.calls[-1][1]


@pytest.fixture
def make_response():
    """Factory for canned transport responses."""
    return FakeResponse


@pytest.fixture
def make_transport():
    """Factory for recording transports answering with a response or raising an error."""
    return RecordingTransport


@pytest.fixture
def json_response():
    """Factory for responses declaring exactly application/json."""

    def factory(status, payload):
        return FakeResponse(
            status=status,
            headers={"Content-Type": "application/json"},
            body=json.dumps(payload),
        )

    return factory


@pytest.fixture
def transport():
    """A recording transport answering 200 with no JSON body."""
    return RecordingTransport()
