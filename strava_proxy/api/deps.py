"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Request

from ..core.config import Settings
from ..core.errors import AuthRequiredError
from ..models import CredentialBundle
from ..services import SessionStore, StravaGateway, StravaOAuthClient

# Key inside the signed session cookie; the cookie holds nothing else.
SESSION_KEY = "session_id"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_oauth_client(request: Request) -> StravaOAuthClient:
    return request.app.state.oauth_client


def get_gateway(request: Request) -> StravaGateway:
    return request.app.state.gateway


def current_session_id(request: Request) -> Optional[str]:
    return request.session.get(SESSION_KEY)


def current_credentials(
    session_id: Optional[str] = Depends(current_session_id),
    store: SessionStore = Depends(get_session_store),
) -> Optional[CredentialBundle]:
    """Credential bundle of the calling session, if it completed OAuth."""

    return store.get(session_id)


def require_credentials(message: str) -> Callable[..., CredentialBundle]:
    """Build a dependency that rejects sessions without credentials with 401."""

    def dependency(
        credentials: Optional[CredentialBundle] = Depends(current_credentials),
    ) -> CredentialBundle:
        if credentials is None:
            raise AuthRequiredError(message)
        return credentials

    return dependency


def token_or_fallback(
    credentials: Optional[CredentialBundle] = Depends(current_credentials),
    settings: Settings = Depends(get_app_settings),
) -> Optional[str]:
    """Session token when logged in, otherwise the configured service token."""

    if credentials is not None:
        return credentials.access_token
    return settings.strava_access_token


__all__ = [
    "SESSION_KEY",
    "current_credentials",
    "current_session_id",
    "get_app_settings",
    "get_gateway",
    "get_oauth_client",
    "get_session_store",
    "require_credentials",
    "token_or_fallback",
]
