"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .api import register_exception_handlers, register_routes
from .core import Settings, configure_logging, get_settings
from .services import InMemorySessionStore, SessionStore, StravaGateway, StravaOAuthClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    session_store: Optional[SessionStore] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the proxy app.

    ``transport`` replaces the network for every Strava call (used by tests).
    """

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Strava Segments Proxy", version="0.1.0")
    app.state.settings = settings
    if session_store is None:
        session_store = InMemorySessionStore(max_age=settings.session_max_age)
    app.state.session_store = session_store
    app.state.oauth_client = StravaOAuthClient(settings, transport=transport)
    app.state.gateway = StravaGateway(transport=transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        https_only=settings.cookie_secure,
        same_site=settings.cookie_samesite,
        domain=settings.cookie_domain,
    )

    register_exception_handlers(app)
    register_routes(app)
    logger.debug("CORS origins: %s", settings.allowed_cors_origins)
    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "strava_proxy.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
