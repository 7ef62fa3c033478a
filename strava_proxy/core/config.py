"""Application settings and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_FRONTEND_ORIGIN = "http://localhost:5173"
DEFAULT_SESSION_MAX_AGE = 14 * 24 * 60 * 60


class ConfigError(RuntimeError):
    """Raised when the environment does not describe a runnable service."""


def _require_env(env: Mapping[str, str], *names: str) -> str:
    """Return the first non-empty variable among ``names`` or raise an error."""

    for name in names:
        value = env.get(name)
        if value:
            return value
    raise ConfigError(f"Missing required environment variable: {names[0]}")


def _env_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer") from exc


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration shared by the OAuth flow and gateway."""

    strava_client_id: int
    strava_client_secret: str
    strava_redirect_uri: str
    session_secret: str
    frontend_origins: Tuple[str, ...] = (DEFAULT_FRONTEND_ORIGIN,)
    additional_origins: Tuple[str, ...] = ()
    strava_access_token: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 3000
    session_cookie: str = "sid"
    session_max_age: int = DEFAULT_SESSION_MAX_AGE
    cookie_secure: bool = False
    cookie_samesite: str = "lax"
    cookie_domain: Optional[str] = None
    log_level: str = "INFO"

    @property
    def frontend_origin(self) -> str:
        """Post-login redirect target."""

        return self.frontend_origins[0] if self.frontend_origins else ""

    @property
    def allowed_cors_origins(self) -> List[str]:
        return _unique([*self.frontend_origins, *self.additional_origins])

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``env`` (defaults to ``os.environ``)."""

        if env is None:
            load_dotenv(override=False)
            env = os.environ

        client_id_raw = _require_env(env, "STRAVA_CLIENT_ID")
        try:
            client_id = int(client_id_raw)
        except ValueError as exc:
            raise ConfigError("STRAVA_CLIENT_ID must be an integer") from exc

        # FRONTEND_ORIGIN can contain a comma-separated list for multi-domain deploys.
        frontend_origins = _split_csv(env.get("FRONTEND_ORIGIN")) or [
            DEFAULT_FRONTEND_ORIGIN
        ]

        return cls(
            strava_client_id=client_id,
            strava_client_secret=_require_env(env, "STRAVA_CLIENT_SECRET"),
            strava_redirect_uri=_require_env(env, "STRAVA_REDIRECT_URI", "REDIRECT_URI"),
            session_secret=_require_env(env, "SESSION_SECRET", "SECRET_KEY"),
            frontend_origins=tuple(frontend_origins),
            additional_origins=tuple(_split_csv(env.get("ADDITIONAL_ALLOWED_ORIGINS"))),
            strava_access_token=env.get("STRAVA_ACCESS_TOKEN") or None,
            host=env.get("HOST", "127.0.0.1"),
            port=_env_int(env, "PORT", 3000),
            session_cookie=env.get("SESSION_COOKIE") or "sid",
            session_max_age=_env_int(env, "SESSION_MAX_AGE", DEFAULT_SESSION_MAX_AGE),
            cookie_secure=_env_bool(env, "COOKIE_SECURE", False),
            cookie_samesite=env.get("COOKIE_SAMESITE", "lax"),
            cookie_domain=env.get("COOKIE_DOMAIN") or None,
            log_level=env.get("LOG_LEVEL", "INFO"),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""

    return Settings.from_env()


__all__ = [
    "ConfigError",
    "DEFAULT_FRONTEND_ORIGIN",
    "DEFAULT_SESSION_MAX_AGE",
    "Settings",
    "get_settings",
]
