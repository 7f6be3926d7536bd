"""
authcore.auth.errors

Error taxonomy for login, rotation and revocation.

Messages are fixed per class: callers must not be able to tell which field was
wrong at login, or why a refresh token was rejected.
"""

from __future__ import annotations


class AuthError(Exception):
    pass


class InvalidCredentials(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InvalidOrExpiredRefreshToken(AuthError):
    def __init__(self) -> None:
        super().__init__("Invalid or expired refresh token")


class CredentialDriftError(AuthError):
    """
    A live refresh token points at a username that is no longer in the credential list.
    Non-recoverable for the request; surfaced as an internal error.
    """


class RefreshTokenStoreUnavailable(AuthError):
    """Transient backing-store failure. Retryable by the caller; never retried here."""


class SignerConfigError(AuthError):
    pass


class JwtValidationError(AuthError):
    pass
