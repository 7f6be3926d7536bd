"""
authcore.services.auth_service

Session-chain orchestrator: login, refresh-token rotation and revocation.

Responsibilities:
- Authenticate against the credential store and mint an access/refresh pair.
- Rotate refresh tokens single-use: validate, retire, then issue the successor.
- Revoke refresh tokens idempotently.

The orchestrator holds no token state; the store is the only source of truth.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from authcore.auth.credentials import CredentialStore
from authcore.auth.errors import (
    CredentialDriftError,
    InvalidCredentials,
    InvalidOrExpiredRefreshToken,
)
from authcore.auth.models import Principal, TokenPair
from authcore.auth.signer import TokenSigner
from authcore.auth.store import RefreshTokenStore
from authcore.observability.logging import get_logger
from authcore.settings import Settings

log = get_logger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def username_digest(username: str) -> str:
    # Raw submitted usernames never reach the logs.
    return hashlib.sha256(username.casefold().encode("utf-8")).hexdigest()[:16]


class AuthService:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        signer: TokenSigner,
        store: RefreshTokenStore,
        refresh_ttl: timedelta = timedelta(days=7),
        clock: Clock = utcnow,
    ) -> None:
        self._credentials = credentials
        self._signer = signer
        self._store = store
        self._refresh_ttl = refresh_ttl
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        store: RefreshTokenStore,
        clock: Clock = utcnow,
    ) -> AuthService:
        return cls(
            credentials=CredentialStore.from_settings(settings),
            signer=TokenSigner.from_settings(settings),
            store=store,
            refresh_ttl=timedelta(days=settings.refresh_token_days),
            clock=clock,
        )

    @property
    def signer(self) -> TokenSigner:
        return self._signer

    async def login(self, username: str, secret: str) -> TokenPair:
        principal = self._credentials.find(username, secret)
        if principal is None:
            log.info("login_failed", username_digest=username_digest(username))
            raise InvalidCredentials()

        pair = await self._issue(principal)
        log.info("login_succeeded", username=principal.username)
        return pair

    async def refresh(self, refresh_token: str) -> TokenPair:
        record = await self._store.get(refresh_token)
        if record is None:
            log.info("refresh_rejected", reason="unknown")
            raise InvalidOrExpiredRefreshToken()
        if record.expires_at_utc <= self._clock():
            # Left in place; purge_expired() is the housekeeping path.
            log.info("refresh_rejected", reason="expired", username=record.username)
            raise InvalidOrExpiredRefreshToken()

        # Conditional delete: of N concurrent presenters only one removes the entry.
        if not await self._store.revoke(refresh_token):
            log.info("refresh_rejected", reason="consumed", username=record.username)
            raise InvalidOrExpiredRefreshToken()

        principal = self._credentials.get(record.username)
        if principal is None:
            log.error("credential_drift", username=record.username)
            raise CredentialDriftError(
                f"refresh token owner {record.username!r} is no longer a known principal"
            )

        pair = await self._issue(principal)
        log.info("refresh_rotated", username=principal.username)
        return pair

    async def revoke(self, refresh_token: str) -> None:
        removed = await self._store.revoke(refresh_token)
        log.info("refresh_token_revoked", removed=removed)

    async def purge_expired(self) -> int:
        purged = await self._store.purge_expired(self._clock())
        if purged:
            log.info("refresh_tokens_purged", count=purged)
        return purged

    async def _issue(self, principal: Principal) -> TokenPair:
        now = self._clock()
        access_token, expires_at = self._signer.issue_access_token(
            subject=principal.username,
            roles=principal.roles,
            issued_at=now,
        )
        refresh_token = self._signer.issue_refresh_token()
        await self._store.store(refresh_token, principal.username, now + self._refresh_ttl)
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at_utc=expires_at,
        )


# --- Module Notes -----------------------------------------------------------
# Ordering in `refresh` matters: the predecessor is gone before its successor exists,
# so a crash mid-rotation can lose a session but never duplicate one.
