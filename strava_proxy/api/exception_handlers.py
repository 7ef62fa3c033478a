"""Convert application errors into JSON responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import ProxyError, UpstreamError

logger = logging.getLogger(__name__)


async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    if isinstance(exc, UpstreamError):
        logger.error(
            "Strava call failed for %s %s (upstream status %s): %s",
            request.method,
            request.url.path,
            exc.upstream_status,
            exc.detail,
        )
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"message": ProxyError.default_message}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
