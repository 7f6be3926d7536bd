"""
authcore.auth.models

Auth domain models.

Responsibilities:
- `Principal`: an entry of the fixed credential list.
- `Caller`: identity recovered from a verified access token.
- `RefreshTokenRecord` / `TokenPair`: values exchanged between orchestrator and store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticatable identity loaded at startup. Immutable for the process lifetime.
    """

    username: str
    secret: str = field(repr=False)
    roles: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class Caller:
    """
    Authenticated caller identity (from access-token claims).
    """

    subject: str
    roles: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


@dataclass(frozen=True, slots=True)
class RefreshTokenRecord:
    username: str
    # Absolute, tz-aware UTC.
    expires_at_utc: datetime


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str = field(repr=False)
    # Expiry of the access token.
    expires_at_utc: datetime


# --- Module Notes -----------------------------------------------------------
# Keep these models minimal; they cross the service, store and API boundaries.
