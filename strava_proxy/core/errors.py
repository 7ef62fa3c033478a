"""Error taxonomy translated to HTTP responses at the route boundary."""

from __future__ import annotations

from fastapi import status


class ProxyError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Erro interno do servidor."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ProxyError):
    """A required query or path parameter is missing."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Parâmetros obrigatórios faltando."


class AuthRequiredError(ProxyError):
    """The route needs a session credential and none is stored."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "É preciso estar logado."


class UpstreamError(ProxyError):
    """Calling Strava failed: network error, non-2xx status or bad payload.

    ``detail`` is kept for logging only and never sent to the client.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Falha ao buscar dados do Strava."

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: str | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.detail = detail
        self.upstream_status = upstream_status


class SessionStoreError(ProxyError):
    """Persisting or destroying session state failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Falha ao gravar a sessão."


__all__ = [
    "AuthRequiredError",
    "ProxyError",
    "SessionStoreError",
    "UpstreamError",
    "ValidationError",
]
