"""Strava OAuth login, current user and logout routes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from ...core.config import Settings
from ...core.errors import SessionStoreError, UpstreamError
from ...models import CredentialBundle
from ...services import SessionStore, StravaOAuthClient, new_session_id
from ..deps import (
    SESSION_KEY,
    current_credentials,
    current_session_id,
    get_app_settings,
    get_oauth_client,
    get_session_store,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LOGIN_FAILED_MESSAGE = "Falha na autenticação com o Strava."
LOGOUT_FAILED_MESSAGE = "Não foi possível fazer logout."
LOGOUT_MESSAGE = "Logout bem-sucedido"


@router.get("/auth/strava")
def strava_authorize(oauth: StravaOAuthClient = Depends(get_oauth_client)):
    """Send the browser to Strava's consent page."""

    logger.info("Redirecting user to Strava authorization")
    return RedirectResponse(oauth.authorization_url(), status_code=302)


@router.get("/auth/strava/callback")
async def strava_callback(
    request: Request,
    code: Optional[str] = None,
    error: Optional[str] = None,
    oauth: StravaOAuthClient = Depends(get_oauth_client),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings),
):
    """Exchange the authorization code and bind the tokens to this session."""

    if error or not code:
        logger.warning("Strava callback without code (error=%s)", error)
        return PlainTextResponse(LOGIN_FAILED_MESSAGE, status_code=500)

    session_id = request.session.get(SESSION_KEY) or new_session_id()
    store.mark_pending(session_id)
    try:
        bundle = await oauth.exchange_code(code)
        store.put(session_id, bundle)
    except UpstreamError as exc:
        logger.error(
            "Error exchanging code for token (status %s): %s",
            exc.upstream_status,
            exc.detail,
        )
        return PlainTextResponse(LOGIN_FAILED_MESSAGE, status_code=500)
    except Exception:
        logger.exception("Could not complete Strava login")
        return PlainTextResponse(LOGIN_FAILED_MESSAGE, status_code=500)
    finally:
        store.clear_pending(session_id)

    request.session[SESSION_KEY] = session_id
    athlete_id = (bundle.athlete or {}).get("id")
    logger.info("Strava login completed for athlete %s", athlete_id)
    return RedirectResponse(settings.frontend_origin, status_code=302)


@router.get("/api/user")
def current_user(
    credentials: Optional[CredentialBundle] = Depends(current_credentials),
):
    athlete = credentials.athlete if credentials is not None else None
    return JSONResponse({"user": athlete})


@router.post("/auth/logout")
def logout(
    request: Request,
    session_id: Optional[str] = Depends(current_session_id),
    store: SessionStore = Depends(get_session_store),
):
    """Drop the stored credentials and expire the session cookie."""

    try:
        store.destroy(session_id)
    except SessionStoreError:
        logger.exception("Could not destroy session")
        return PlainTextResponse(LOGOUT_FAILED_MESSAGE, status_code=500)

    request.session.clear()
    logger.info("Session logged out")
    return JSONResponse({"message": LOGOUT_MESSAGE})


__all__ = ["router"]
