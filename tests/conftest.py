"""Shared test fixtures for twitch_chat_api tests."""

import json

import pytest

from twitch_chat_api.core.settings import TwitchSettings


class FakeResponse:
    def __init__(self, status: int = 200, payload=None, text: str | None = None):
        self.status = status
        self._payload = payload
        self._text = text if text is not None else json.dumps(payload)

    async def json(self):
        if self._payload is None:
            raise json.JSONDecodeError("Expecting value", self._text, 0)
        return self._payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession, answering from a URL table.

    A route value may be a FakeResponse, an exception instance to raise,
    or a list of either, consumed one per request.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests: list[dict] = []
        self.closed = False

    def request(self, method, url, headers=None, data=None):
        self.requests.append({"method": method, "url": url, "headers": headers, "data": data})
        route = self.routes.get(url)
        if isinstance(route, list):
            route = route.pop(0)
        if route is None:
            return FakeResponse(404, text="not found")
        if isinstance(route, Exception):
            raise route
        return route

    async def close(self):
        self.closed = True


@pytest.fixture
def twitch_settings():
    return TwitchSettings(
        client_id="client123",
        client_secret="secret456",
        access_token="token789",
        refresh_token="refresh000",
    )


@pytest.fixture
def fake_session():
    return FakeSession()
