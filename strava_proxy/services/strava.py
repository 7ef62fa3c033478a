"""Strava OAuth and REST API clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from ..core.config import Settings
from ..core.errors import UpstreamError
from ..models import CredentialBundle

logger = logging.getLogger(__name__)

AUTH_BASE = "https://www.strava.com/oauth/authorize"
TOKEN_URL = "https://www.strava.com/api/v3/oauth/token"
API_BASE = "https://www.strava.com/api/v3"
SCOPES = "read,read_all,activity:read_all"

LEADERBOARD_PAGE_SIZE = 10
ACTIVITIES_PAGE_SIZE = 30


@dataclass(frozen=True)
class UpstreamResponse:
    """Successful Strava reply, relayed to the client as-is."""

    status_code: int
    payload: Any


class StravaOAuthClient:
    """Build the authorization URL and exchange codes for tokens."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def authorization_url(self) -> str:
        params = {
            "client_id": self._settings.strava_client_id,
            "redirect_uri": self._settings.strava_redirect_uri,
            "response_type": "code",
            "scope": SCOPES,
        }
        return f"{AUTH_BASE}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> CredentialBundle:
        """Trade an authorization code for a credential bundle."""

        data = {
            "client_id": self._settings.strava_client_id,
            "client_secret": self._settings.strava_client_secret,
            "code": code,
            "grant_type": "authorization_code",
        }
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(TOKEN_URL, data=data)
        except httpx.HTTPError as exc:
            raise UpstreamError(detail=str(exc)) from exc

        if not response.is_success:
            raise UpstreamError(
                detail=response.text, upstream_status=response.status_code
            )

        try:
            return CredentialBundle.from_token_payload(response.json())
        except (ValueError, TypeError, AttributeError) as exc:
            raise UpstreamError(detail=f"Unusable token payload: {exc}") from exc


class StravaGateway:
    """One authenticated GET per call against the Strava REST API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._transport = transport

    async def api_get(
        self,
        access_token: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> UpstreamResponse:
        url = f"{API_BASE}{path}"
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url,
                    headers={"Authorization": f"Bearer {access_token}"},
                    params=params or {},
                )
        except httpx.HTTPError as exc:
            raise UpstreamError(detail=f"GET {path}: {exc}") from exc

        if not response.is_success:
            raise UpstreamError(
                detail=f"GET {path}: {response.text}",
                upstream_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(detail=f"GET {path}: response is not JSON") from exc
        return UpstreamResponse(status_code=response.status_code, payload=payload)

    async def explore_segments(
        self, access_token: str, bounds: str, activity_type: str
    ) -> UpstreamResponse:
        return await self.api_get(
            access_token,
            "/segments/explore",
            params={"bounds": bounds, "activity_type": activity_type},
        )

    async def get_segment(self, access_token: str, segment_id: str) -> UpstreamResponse:
        return await self.api_get(access_token, f"/segments/{segment_id}")

    async def get_segment_leaderboard(
        self, access_token: str, segment_id: str
    ) -> UpstreamResponse:
        return await self.api_get(
            access_token,
            f"/segments/{segment_id}/leaderboard",
            params={"page": 1, "per_page": LEADERBOARD_PAGE_SIZE},
        )

    async def list_athlete_activities(self, access_token: str) -> UpstreamResponse:
        return await self.api_get(
            access_token,
            "/athlete/activities",
            params={"page": 1, "per_page": ACTIVITIES_PAGE_SIZE},
        )


__all__ = [
    "ACTIVITIES_PAGE_SIZE",
    "API_BASE",
    "AUTH_BASE",
    "LEADERBOARD_PAGE_SIZE",
    "SCOPES",
    "StravaGateway",
    "StravaOAuthClient",
    "TOKEN_URL",
    "UpstreamResponse",
]
