import httpx
import pytest

from conftest import json_body, login, make_client

ACTIVITIES = [
    {"id": 154504250376823, "name": "Morning Run", "type": "Run", "distance": 5012.3},
    {"id": 154504250376824, "name": "Commute", "type": "Ride", "distance": 8120.0},
]


@pytest.mark.anyio
async def test_activities_require_login(app, strava):
    async with make_client(app) as client:
        response = await client.get("/api/athlete/activities")

    assert response.status_code == 401
    assert json_body(response) == {
        "message": "É preciso estar logado para ver suas atividades."
    }
    assert strava.requests == []


@pytest.mark.anyio
async def test_activities_never_use_fallback_token(app, strava):
    strava.on("GET", "/api/v3/athlete/activities", httpx.Response(200, json=ACTIVITIES))

    async with make_client(app) as client:
        response = await client.get("/api/athlete/activities")

    assert response.status_code == 401
    assert strava.api_requests() == []


@pytest.mark.anyio
async def test_activities_forward_session_token(app, strava):
    strava.on("GET", "/api/v3/athlete/activities", httpx.Response(200, json=ACTIVITIES))

    async with make_client(app) as client:
        await login(client)
        response = await client.get("/api/athlete/activities")

    assert response.status_code == 200
    assert json_body(response) == ACTIVITIES

    (request,) = strava.api_requests()
    assert request.url.path == "/api/v3/athlete/activities"
    assert request.headers["authorization"] == "Bearer tok1"
    assert dict(request.url.params) == {"page": "1", "per_page": "30"}


@pytest.mark.anyio
async def test_activities_upstream_failure(app, strava):
    strava.on(
        "GET",
        "/api/v3/athlete/activities",
        httpx.Response(401, json={"message": "Authorization Error"}),
    )

    async with make_client(app) as client:
        await login(client)
        response = await client.get("/api/athlete/activities")

    assert response.status_code == 500
    assert json_body(response) == {"message": "Falha ao buscar as atividades."}


@pytest.mark.anyio
async def test_health(app):
    async with make_client(app) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert json_body(response) == {"ok": True}
