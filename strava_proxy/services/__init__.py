"""Service layer helpers."""

from .sessions import InMemorySessionStore, SessionStore, new_session_id
from .strava import StravaGateway, StravaOAuthClient, UpstreamResponse

__all__ = [
    "InMemorySessionStore",
    "SessionStore",
    "StravaGateway",
    "StravaOAuthClient",
    "UpstreamResponse",
    "new_session_id",
]
