"""
tests.test_signer

Access-token claims, verification failures and startup misconfiguration.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from authcore.auth.errors import JwtValidationError, SignerConfigError
from authcore.auth.signer import JwtConfig, TokenSigner
from authcore.settings import Settings

TEST_SECRET = "test-signing-key-that-is-long-enough-for-hs256"

CFG = JwtConfig(alg="HS256", issuer="authcore", audience="authcore-api", secret=TEST_SECRET)


def test_access_token_expiry_is_issued_at_plus_lifetime() -> None:
    signer = TokenSigner(cfg=CFG, access_ttl=timedelta(minutes=15))
    issued_at = datetime.now(tz=UTC)

    token, expires_at = signer.issue_access_token(
        subject="alice", roles=["writer", "admin"], issued_at=issued_at
    )

    assert expires_at == issued_at + timedelta(minutes=15)
    claims = signer.verify_access_token(token)
    assert claims["sub"] == "alice"
    assert claims["roles"] == ["admin", "writer"]
    assert claims["iss"] == "authcore"
    assert claims["aud"] == "authcore-api"
    assert claims["exp"] == int(expires_at.timestamp())
    assert claims["jti"]


def test_default_lifetime_from_settings() -> None:
    signer = TokenSigner.from_settings(Settings(jwt_secret=TEST_SECRET))
    assert signer.access_ttl == timedelta(minutes=30)


def test_verification_is_stateless_across_instances() -> None:
    token, _ = TokenSigner(cfg=CFG).issue_access_token(
        subject="bob", roles=[], issued_at=datetime.now(tz=UTC)
    )
    assert TokenSigner(cfg=CFG).verify_access_token(token)["sub"] == "bob"


def test_expired_access_token_is_rejected() -> None:
    signer = TokenSigner(cfg=CFG)
    token, _ = signer.issue_access_token(
        subject="alice", roles=[], issued_at=datetime.now(tz=UTC) - timedelta(hours=2)
    )
    with pytest.raises(JwtValidationError):
        signer.verify_access_token(token)


@pytest.mark.parametrize(
    "other",
    [
        JwtConfig(alg="HS256", issuer="authcore", audience="authcore-api", secret=TEST_SECRET + "x"),
        JwtConfig(alg="HS256", issuer="someone-else", audience="authcore-api", secret=TEST_SECRET),
        JwtConfig(alg="HS256", issuer="authcore", audience="other-api", secret=TEST_SECRET),
    ],
)
def test_foreign_tokens_are_rejected(other: JwtConfig) -> None:
    token, _ = TokenSigner(cfg=other).issue_access_token(
        subject="alice", roles=[], issued_at=datetime.now(tz=UTC)
    )
    with pytest.raises(JwtValidationError):
        TokenSigner(cfg=CFG).verify_access_token(token)


def test_token_without_subject_is_rejected() -> None:
    now = datetime.now(tz=UTC)
    token = jwt.encode(
        {
            "iss": CFG.issuer,
            "aud": CFG.audience,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=5)).timestamp()),
        },
        TEST_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(JwtValidationError):
        TokenSigner(cfg=CFG).verify_access_token(token)


def test_refresh_tokens_are_long_and_distinct() -> None:
    signer = TokenSigner(cfg=CFG)
    tokens = {signer.issue_refresh_token() for _ in range(500)}

    assert len(tokens) == 500
    assert all(len(t) >= 64 for t in tokens)


def test_missing_key_material_fails_at_construction() -> None:
    with pytest.raises(SignerConfigError):
        TokenSigner.from_settings(Settings(jwt_secret=""))


def test_whitespace_only_key_fails_at_construction() -> None:
    with pytest.raises(SignerConfigError):
        TokenSigner.from_settings(Settings(jwt_secret="   \t "))


def test_nonpositive_lifetime_fails_at_construction() -> None:
    with pytest.raises(SignerConfigError):
        TokenSigner(cfg=CFG, access_ttl=timedelta(0))
