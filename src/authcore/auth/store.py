"""
authcore.auth.store

Refresh-token persistence contract and the in-memory implementation.

Responsibilities:
- Define the `RefreshTokenStore` protocol shared by all backends.
- Provide a process-local, thread-safe store guarded by a single lock.

The store never evicts on read: expiry is the caller's decision.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol

from authcore.auth.models import RefreshTokenRecord


class RefreshTokenStore(Protocol):
    async def store(self, token: str, username: str, expires_at_utc: datetime) -> None:
        """Insert or overwrite the entry for `token`."""

    async def get(self, token: str) -> RefreshTokenRecord | None:
        """Pure lookup; no side effects."""

    async def revoke(self, token: str) -> bool:
        """Idempotent removal. Returns True only for the call that removed the entry."""

    async def purge_expired(self, now: datetime) -> int:
        """Drop entries with `expires_at_utc <= now`; returns how many were removed."""


class InMemoryRefreshTokenStore:
    """
    Dict + one lock. Critical sections contain no awaits, so they are bounded and
    safe from both threads and concurrent coroutines.
    """

    def __init__(self) -> None:
        self._entries: dict[str, RefreshTokenRecord] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    async def store(self, token: str, username: str, expires_at_utc: datetime) -> None:
        record = RefreshTokenRecord(username=username, expires_at_utc=expires_at_utc)
        with self._lock:
            self._entries[token] = record

    async def get(self, token: str) -> RefreshTokenRecord | None:
        with self._lock:
            return self._entries.get(token)

    async def revoke(self, token: str) -> bool:
        with self._lock:
            return self._entries.pop(token, None) is not None

    async def purge_expired(self, now: datetime) -> int:
        with self._lock:
            dead = [t for t, r in self._entries.items() if r.expires_at_utc <= now]
            for t in dead:
                del self._entries[t]
        return len(dead)


# --- Module Notes -----------------------------------------------------------
# A durable backend lives in `authcore.db.repositories.refresh_tokens`; it honors the
# same contract via a conditional DELETE.
