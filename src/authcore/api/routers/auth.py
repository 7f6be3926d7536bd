from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field
from starlette.status import (
    HTTP_204_NO_CONTENT,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from authcore.api.deps import auth_service_from_app
from authcore.auth.deps import get_caller
from authcore.auth.errors import (
    CredentialDriftError,
    InvalidCredentials,
    InvalidOrExpiredRefreshToken,
    RefreshTokenStoreUnavailable,
)
from authcore.auth.models import Caller, TokenPair
from authcore.services.auth_service import AuthService

router = APIRouter(prefix="/v1/auth", tags=["auth"])

_RETRY_AFTER_SECONDS = "1"


class LoginRequest(BaseModel):
    username: str = Field(max_length=256)
    password: str = Field(max_length=1024)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(max_length=1024)


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    expires_at_utc: datetime
    token_type: str = "bearer"

    @classmethod
    def from_pair(cls, pair: TokenPair) -> TokenResponse:
        return cls(
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
            expires_at_utc=pair.expires_at_utc,
        )


class CallerResponse(BaseModel):
    subject: str
    roles: list[str]


def _unavailable() -> HTTPException:
    return HTTPException(
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        detail="Token store unavailable",
        headers={"Retry-After": _RETRY_AFTER_SECONDS},
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    svc: AuthService = Depends(auth_service_from_app),
) -> TokenResponse:
    try:
        pair = await svc.login(body.username, body.password)
    except InvalidCredentials as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    except RefreshTokenStoreUnavailable as e:
        raise _unavailable() from e
    return TokenResponse.from_pair(pair)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshRequest,
    svc: AuthService = Depends(auth_service_from_app),
) -> TokenResponse:
    try:
        pair = await svc.refresh(body.refresh_token)
    except InvalidOrExpiredRefreshToken as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    except CredentialDriftError as e:
        # Already logged by the service; callers only see a generic fault.
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error"
        ) from e
    except RefreshTokenStoreUnavailable as e:
        raise _unavailable() from e
    return TokenResponse.from_pair(pair)


@router.post("/revoke", status_code=HTTP_204_NO_CONTENT)
async def revoke(
    body: RefreshRequest,
    svc: AuthService = Depends(auth_service_from_app),
) -> Response:
    try:
        await svc.revoke(body.refresh_token)
    except RefreshTokenStoreUnavailable as e:
        raise _unavailable() from e
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.get("/me", response_model=CallerResponse)
async def me(caller: Caller = Depends(get_caller)) -> CallerResponse:
    return CallerResponse(subject=caller.subject, roles=sorted(caller.roles))
