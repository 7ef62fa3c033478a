"""Pytest configuration shared across the suite."""

from __future__ import annotations

import json
from typing import Callable, Dict, List, Tuple, Union
from urllib.parse import parse_qs

import httpx
import pytest

from strava_proxy.app import create_app
from strava_proxy.core.config import Settings
from strava_proxy.services import InMemorySessionStore

FRONTEND = "http://localhost:5173"

Reply = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeStrava:
    """Records every outbound request and answers from a route table."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Reply] = {}
        self.token_payload = {
            "token_type": "Bearer",
            "access_token": "tok1",
            "refresh_token": "ref1",
            "expires_at": 1_900_000_000,
            "athlete": {"id": 42, "firstname": "Ana"},
        }

    def on(self, method: str, path: str, reply: Reply) -> None:
        self.routes[(method, path)] = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "POST" and request.url.path == "/api/v3/oauth/token":
            reply = self.routes.get(("POST", request.url.path))
            if reply is None:
                return httpx.Response(200, json=self.token_payload)
        else:
            reply = self.routes.get((request.method, request.url.path))
        if reply is None:
            return httpx.Response(404, json={"message": "Record Not Found"})
        if callable(reply):
            return reply(request)
        return reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def api_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path != "/api/v3/oauth/token"]

    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == "/api/v3/oauth/token"]


def form_body(request: httpx.Request) -> Dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def json_body(response: httpx.Response):
    return json.loads(response.content)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        strava_client_id=12345,
        strava_client_secret="client-secret",
        strava_redirect_uri="http://localhost:3000/auth/strava/callback",
        session_secret="test-session-secret",
        frontend_origins=(FRONTEND,),
        strava_access_token="fallback-token",
    )


@pytest.fixture
def strava() -> FakeStrava:
    return FakeStrava()


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def app(settings, strava, store):
    return create_app(settings, session_store=store, transport=strava.transport)


def make_client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://testserver"
    )


async def login(client: httpx.AsyncClient, code: str = "abc123") -> httpx.Response:
    response = await client.get("/auth/strava/callback", params={"code": code})
    assert response.status_code == 302
    return response
