"""
authcore.auth.credentials

Read-only credential store built once from settings.

Responsibilities:
- Case-insensitive username lookup, case-sensitive secret comparison.
- Re-resolve a principal by username during refresh-token rotation.
"""

from __future__ import annotations

import hmac
import secrets
from collections.abc import Iterable
from types import MappingProxyType

from authcore.auth.models import Principal
from authcore.observability.logging import get_logger
from authcore.settings import Settings

log = get_logger(__name__)

# Compared against on unknown usernames so both failure paths do the same work.
_MISS_SECRET = secrets.token_urlsafe(32).encode("utf-8")


def _key(username: str) -> str:
    return username.casefold()


class CredentialStore:
    def __init__(self, principals: Iterable[Principal]) -> None:
        table: dict[str, Principal] = {}
        for p in principals:
            k = _key(p.username)
            if k in table:
                # First entry wins, matching lookup order of the configured list.
                log.warning("duplicate_principal_ignored", username=p.username)
                continue
            table[k] = p
        self._principals = MappingProxyType(table)

    @classmethod
    def from_settings(cls, settings: Settings) -> CredentialStore:
        return cls(
            Principal(username=p.username, secret=p.secret, roles=frozenset(p.roles))
            for p in settings.principals
        )

    def __len__(self) -> int:
        return len(self._principals)

    def get(self, username: str) -> Principal | None:
        return self._principals.get(_key(username))

    def find(self, username: str, secret: str) -> Principal | None:
        principal = self.get(username)
        expected = principal.secret.encode("utf-8") if principal is not None else _MISS_SECRET
        matched = hmac.compare_digest(expected, secret.encode("utf-8"))
        if principal is None or not matched:
            return None
        return principal
