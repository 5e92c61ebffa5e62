"""Shared fixtures: fast settings, a scripted transport and fake aiohttp sessions."""

from __future__ import annotations

import asyncio

import aiohttp
import pytest

from nebula.core.models import AppSettings

WSS = ["wss://tracker.example.test/announce"]
UDP = ["udp://tracker.example.test:1337/announce"]


class FakeTransport:
    """Answers ``direct``/``relayed`` calls from a url -> payload mapping.

    A key matches when it is a substring of the requested url. Payloads that are
    exceptions get raised.
    """

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    async def _lookup(self, url):
        self.calls.append(url)
        for key, payload in self.responses.items():
            if key in url:
                if isinstance(payload, Exception):
                    raise payload
                return payload
        return None

    async def direct(self, url, as_json=True, headers=None):
        return await self._lookup(url)

    async def relayed(self, url, as_json=True):
        return await self._lookup(url)


class FakeResponse:
    def __init__(self, status=200, body=""):
        self.status = status
        self.body = body
        self.reason = "Error" if status >= 400 else "OK"

    async def text(self):
        return self.body


class FakeRequest:
    def __init__(self, outcome):
        self.outcome = outcome

    async def __aenter__(self):
        if self.outcome == "hang":
            await asyncio.sleep(60)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Maps a url prefix to a FakeResponse, an exception, or ``"hang"``."""

    def __init__(self, routes):
        self.routes = routes
        self.requested = []

    def get(self, url, headers=None):
        self.requested.append(url)
        for prefix, outcome in self.routes.items():
            if url.startswith(prefix):
                return FakeRequest(outcome)
        return FakeRequest(aiohttp.ClientConnectionError("no route"))


class EngineResponse:
    def __init__(self, status=200, payload=None, hang=False):
        self.status = status
        self.payload = payload
        self.hang = hang
        self.reason = "Not Found" if status == 404 else "OK"

    async def json(self, content_type=None):
        if self.payload is None:
            raise ValueError("empty body")
        return self.payload

    async def __aenter__(self):
        if self.hang:
            await asyncio.sleep(60)
        return self

    async def __aexit__(self, *exc):
        return False


class EngineSession:
    def __init__(self, response=None, error=None):
        self.response = response or EngineResponse()
        self.error = error
        self.requests = []

    def _request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def delete(self, url, **kwargs):
        return self._request("DELETE", url, **kwargs)


@pytest.fixture
def test_settings():
    return AppSettings(
        _env_file=None,
        RELAY_URLS=["http://relay.local/?"],
        WSS_TRACKERS=WSS,
        UDP_TRACKERS=UDP,
        DIRECT_TIMEOUT=0.5,
        RELAY_TIMEOUT=0.5,
    )


@pytest.fixture
def transport():
    return FakeTransport()
