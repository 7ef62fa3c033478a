"""Session-scoped Strava credentials."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from sqlmodel import Field, SQLModel


class AuthState(str, Enum):
    """Where a session stands in the OAuth exchange."""

    UNAUTHENTICATED = "unauthenticated"
    PENDING_CALLBACK = "pending_callback"
    AUTHENTICATED = "authenticated"


class CredentialBundle(SQLModel):
    """Token bundle returned by Strava's token endpoint, held per session.

    ``refresh_token`` and ``expires_at`` are kept but never acted upon;
    ``athlete`` is passed through to the client untouched.
    """

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    athlete: Optional[Dict[str, Any]] = Field(default=None)

    @classmethod
    def from_token_payload(cls, payload: Mapping[str, Any]) -> "CredentialBundle":
        access_token = payload.get("access_token")
        if not access_token:
            raise ValueError("token payload has no access_token")
        expires_at = payload.get("expires_at")
        return cls(
            access_token=access_token,
            refresh_token=payload.get("refresh_token"),
            expires_at=int(expires_at) if expires_at is not None else None,
            athlete=payload.get("athlete"),
        )


__all__ = ["AuthState", "CredentialBundle"]
