"""Routes for the logged-in athlete's own data."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.errors import UpstreamError
from ...models import CredentialBundle
from ...services import StravaGateway
from ..deps import get_gateway, require_credentials

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/athlete", tags=["athlete"])

ACTIVITIES_FAILED = "Falha ao buscar as atividades."
ACTIVITIES_LOGIN_REQUIRED = "É preciso estar logado para ver suas atividades."


@router.get("/activities")
async def athlete_activities(
    credentials: CredentialBundle = Depends(
        require_credentials(ACTIVITIES_LOGIN_REQUIRED)
    ),
    gateway: StravaGateway = Depends(get_gateway),
):
    """The 30 most recent activities of the logged-in athlete."""

    logger.info("Fetching athlete activities")
    try:
        upstream = await gateway.list_athlete_activities(credentials.access_token)
    except UpstreamError as exc:
        raise UpstreamError(
            ACTIVITIES_FAILED, detail=exc.detail, upstream_status=exc.upstream_status
        ) from exc

    logger.info("Athlete activities received")
    return JSONResponse(upstream.payload, status_code=upstream.status_code)


__all__ = ["router"]
