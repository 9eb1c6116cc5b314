"""Server-side login sessions.

The browser only holds an opaque session id (inside the signed cookie); the
zone it maps to lives here, so `/logout` ends the session for every copy of
the cookie.
"""

from __future__ import annotations

import secrets
import threading
import time
from typing import Callable, Dict, Optional, Tuple


class SessionStore:
    def __init__(self, ttl_seconds: int, *, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # session id -> (zone, expires_at)
        self._sessions: Dict[str, Tuple[str, float]] = {}

    def create(self, zone: str) -> str:
        sid = secrets.token_hex(32)
        with self._lock:
            self._purge_expired()
            self._sessions[sid] = (zone, self._clock() + self.ttl_seconds)
        return sid

    def get_zone(self, sid: Optional[str]) -> Optional[str]:
        if not sid:
            return None
        with self._lock:
            entry = self._sessions.get(sid)
            if entry is None:
                return None
            zone, expires_at = entry
            if self._clock() >= expires_at:
                self._sessions.pop(sid, None)
                return None
            return zone

    def destroy(self, sid: Optional[str]) -> None:
        if not sid:
            return
        with self._lock:
            self._sessions.pop(sid, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge_expired(self) -> None:
        now = self._clock()
        for sid in [k for k, (_, expires_at) in self._sessions.items() if now >= expires_at]:
            del self._sessions[sid]
