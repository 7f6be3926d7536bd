"""
authcore.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (service, signer, store).
"""

from __future__ import annotations

from fastapi import Request

from authcore.auth.signer import TokenSigner
from authcore.auth.store import RefreshTokenStore
from authcore.services.auth_service import AuthService


def auth_service_from_app(request: Request) -> AuthService:
    # Built once in `authcore.api.app.create_app`.
    return request.app.state.auth_service  # type: ignore[attr-defined]


def signer_from_app(request: Request) -> TokenSigner:
    return request.app.state.signer  # type: ignore[attr-defined]


def refresh_store_from_app(request: Request) -> RefreshTokenStore:
    return request.app.state.refresh_store  # type: ignore[attr-defined]
