"""Server-side storage of per-session Strava credentials.

The browser only ever holds an opaque session id inside the signed session
cookie; the credential bundle it refers to stays in this store.
"""

from __future__ import annotations

import logging
import secrets
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..models import AuthState, CredentialBundle

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionStore(ABC):
    """Keyed store: session id -> credential bundle."""

    @abstractmethod
    def put(self, session_id: str, bundle: CredentialBundle) -> None:
        """Store ``bundle`` for ``session_id``, replacing any previous one."""

    @abstractmethod
    def get(self, session_id: Optional[str]) -> Optional[CredentialBundle]:
        """Return the stored bundle, or ``None``. Never raises."""

    @abstractmethod
    def destroy(self, session_id: Optional[str]) -> None:
        """Forget everything known about ``session_id``.

        Raises ``SessionStoreError`` when the backend cannot complete it.
        """

    @abstractmethod
    def mark_pending(self, session_id: str) -> None:
        """Record that a code exchange is in flight for ``session_id``."""

    @abstractmethod
    def clear_pending(self, session_id: str) -> None:
        """Drop the in-flight marker once the exchange finished or failed."""

    @abstractmethod
    def is_pending(self, session_id: Optional[str]) -> bool:
        """Whether a code exchange is in flight for ``session_id``."""

    def state(self, session_id: Optional[str]) -> AuthState:
        if self.get(session_id) is not None:
            return AuthState.AUTHENTICATED
        if self.is_pending(session_id):
            return AuthState.PENDING_CALLBACK
        return AuthState.UNAUTHENTICATED


@dataclass
class _Entry:
    bundle: Optional[CredentialBundle]
    pending: bool
    touched_at: float


class InMemorySessionStore(SessionStore):
    """Process-lifetime store; entries idle for ``max_age`` seconds expire."""

    def __init__(
        self,
        max_age: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_age = max_age
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _expired(self, entry: _Entry, now: float) -> bool:
        return self._max_age is not None and now - entry.touched_at > self._max_age

    def _live_entry(self, session_id: Optional[str]) -> Optional[_Entry]:
        if not session_id:
            return None
        entry = self._entries.get(session_id)
        if entry is None:
            return None
        if self._expired(entry, self._clock()):
            logger.info("Session expired; dropping stored credentials")
            del self._entries[session_id]
            return None
        return entry

    def _sweep(self) -> None:
        """Drop every expired entry. Caller holds the lock."""
        if self._max_age is None:
            return
        now = self._clock()
        expired = [sid for sid, entry in self._entries.items() if self._expired(entry, now)]
        for sid in expired:
            del self._entries[sid]
        if expired:
            logger.info("Dropped %d expired sessions", len(expired))

    def put(self, session_id: str, bundle: CredentialBundle) -> None:
        with self._lock:
            self._sweep()
            self._entries[session_id] = _Entry(
                bundle=bundle, pending=False, touched_at=self._clock()
            )

    def get(self, session_id: Optional[str]) -> Optional[CredentialBundle]:
        with self._lock:
            entry = self._live_entry(session_id)
            if entry is None:
                return None
            entry.touched_at = self._clock()
            return entry.bundle

    def destroy(self, session_id: Optional[str]) -> None:
        if not session_id:
            return
        with self._lock:
            self._entries.pop(session_id, None)

    def mark_pending(self, session_id: str) -> None:
        with self._lock:
            self._sweep()
            entry = self._live_entry(session_id)
            if entry is None:
                self._entries[session_id] = _Entry(
                    bundle=None, pending=True, touched_at=self._clock()
                )
            else:
                entry.pending = True

    def clear_pending(self, session_id: str) -> None:
        with self._lock:
            entry = self._live_entry(session_id)
            if entry is None:
                return
            if entry.bundle is None:
                del self._entries[session_id]
            else:
                entry.pending = False

    def is_pending(self, session_id: Optional[str]) -> bool:
        with self._lock:
            entry = self._live_entry(session_id)
            return bool(entry and entry.pending)


__all__ = ["InMemorySessionStore", "SessionStore", "new_session_id"]
