"""Segment explore, detail and leaderboard routes."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.errors import UpstreamError, ValidationError
from ...models import CredentialBundle
from ...services import StravaGateway, UpstreamResponse
from ..deps import get_gateway, require_credentials, token_or_fallback

router = APIRouter(prefix="/api/segments", tags=["segments"])

EXPLORE_FAILED = "Falha ao buscar dados do Strava."
DETAIL_FAILED = "Falha ao buscar detalhes do segmento."
LEADERBOARD_FAILED = "Falha ao buscar o leaderboard."
LEADERBOARD_LOGIN_REQUIRED = "É preciso estar logado para ver o leaderboard."


def _relay(upstream: UpstreamResponse) -> JSONResponse:
    return JSONResponse(upstream.payload, status_code=upstream.status_code)


def _ensure_token(token: Optional[str], failure_message: str) -> str:
    if not token:
        raise UpstreamError(
            failure_message, detail="no session token and no STRAVA_ACCESS_TOKEN"
        )
    return token


@router.get("")
async def explore_segments(
    bounds: Optional[str] = None,
    activity_type: Optional[str] = None,
    token: Optional[str] = Depends(token_or_fallback),
    gateway: StravaGateway = Depends(get_gateway),
):
    """Segments inside a ``sw_lat,sw_lng,ne_lat,ne_lng`` box."""

    if not bounds or not activity_type:
        raise ValidationError()

    try:
        upstream = await gateway.explore_segments(
            _ensure_token(token, EXPLORE_FAILED), bounds, activity_type
        )
    except UpstreamError as exc:
        raise UpstreamError(
            EXPLORE_FAILED, detail=exc.detail, upstream_status=exc.upstream_status
        ) from exc
    return _relay(upstream)


@router.get("/{segment_id}")
async def segment_detail(
    segment_id: str,
    token: Optional[str] = Depends(token_or_fallback),
    gateway: StravaGateway = Depends(get_gateway),
):
    try:
        upstream = await gateway.get_segment(
            _ensure_token(token, DETAIL_FAILED), segment_id
        )
    except UpstreamError as exc:
        raise UpstreamError(
            DETAIL_FAILED, detail=exc.detail, upstream_status=exc.upstream_status
        ) from exc
    return _relay(upstream)


@router.get("/{segment_id}/leaderboard")
async def segment_leaderboard(
    segment_id: str,
    credentials: CredentialBundle = Depends(
        require_credentials(LEADERBOARD_LOGIN_REQUIRED)
    ),
    gateway: StravaGateway = Depends(get_gateway),
):
    """First page (10 entries) of the segment leaderboard; login required."""

    try:
        upstream = await gateway.get_segment_leaderboard(
            credentials.access_token, segment_id
        )
    except UpstreamError as exc:
        raise UpstreamError(
            LEADERBOARD_FAILED, detail=exc.detail, upstream_status=exc.upstream_status
        ) from exc
    return _relay(upstream)


__all__ = ["router"]
