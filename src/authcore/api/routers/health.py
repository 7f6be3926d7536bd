"""
authcore.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`); pings the durable store when one is configured.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from authcore.api.deps import refresh_store_from_app
from authcore.auth.errors import RefreshTokenStoreUnavailable
from authcore.auth.store import RefreshTokenStore

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(store: RefreshTokenStore = Depends(refresh_store_from_app)) -> dict[str, str]:
    ping = getattr(store, "ping", None)
    if ping is not None:
        try:
            await ping()
        except RefreshTokenStoreUnavailable as e:
            raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Not ready") from e
    return {"status": "ready"}
