"""
authcore.auth.signer

JWT access-token signing/verification and refresh-token generation.

Responsibilities:
- Issue self-contained access tokens (iss/aud/sub/roles/iat/exp/jti) with a
  deterministic expiry derived from the configured lifetime.
- Verify access tokens with strict claim requirements, without any store lookup.
- Generate opaque, URL-safe random refresh tokens.

Note:
- HS256 with a shared symmetric key; RS256 + JWKS would slot in behind the same API.
"""

from __future__ import annotations

import secrets
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from authcore.auth.errors import JwtValidationError, SignerConfigError
from authcore.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str


class TokenSigner:
    def __init__(
        self,
        *,
        cfg: JwtConfig,
        access_ttl: timedelta = timedelta(minutes=30),
        refresh_token_bytes: int = 64,
    ) -> None:
        if not cfg.secret.strip():
            raise SignerConfigError("JWT signing key is not configured")
        if access_ttl <= timedelta(0):
            raise SignerConfigError("access token lifetime must be positive")
        if refresh_token_bytes < 32:
            raise SignerConfigError("refresh tokens need at least 32 random bytes")
        self._cfg = cfg
        self._access_ttl = access_ttl
        self._refresh_token_bytes = refresh_token_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenSigner:
        return cls(
            cfg=JwtConfig(
                alg=settings.jwt_alg,
                issuer=settings.jwt_issuer,
                audience=settings.jwt_audience,
                secret=settings.jwt_secret,
            ),
            access_ttl=timedelta(minutes=settings.access_token_minutes),
            refresh_token_bytes=settings.refresh_token_bytes,
        )

    @property
    def access_ttl(self) -> timedelta:
        return self._access_ttl

    def issue_access_token(
        self,
        *,
        subject: str,
        roles: Iterable[str],
        issued_at: datetime,
    ) -> tuple[str, datetime]:
        expires_at = issued_at + self._access_ttl
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "aud": self._cfg.audience,
            "sub": subject,
            "roles": sorted(roles),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg), expires_at

    def issue_refresh_token(self) -> str:
        return secrets.token_urlsafe(self._refresh_token_bytes)

    def verify_access_token(self, token: str) -> dict[str, Any]:
        try:
            # jwt.decode enforces signature + registered claims (issuer/audience/exp, etc.).
            return jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                audience=self._cfg.audience,
                options={
                    "require": ["exp", "iat", "iss", "aud", "sub"],
                },
            )
        except InvalidTokenError as e:
            raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# Access tokens are never persisted; only refresh tokens reach a store.
