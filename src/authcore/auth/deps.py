"""
authcore.auth.deps

FastAPI dependency functions for access-token authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Caller` (stateless verification).
- Enforce RBAC via reusable dependency factories; the surrounding CRUD layer
  gates create/update/delete with these and leaves reads open.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from authcore.api.deps import signer_from_app
from authcore.auth.errors import JwtValidationError
from authcore.auth.models import Caller
from authcore.auth.signer import TokenSigner

_bearer = HTTPBearer(auto_error=False)


def get_caller(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    signer: TokenSigner = Depends(signer_from_app),
) -> Caller:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = signer.verify_access_token(creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token") from e

    subject = str(payload.get("sub", ""))
    roles_raw = payload.get("roles", [])
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(roles_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token roles")

    return Caller(subject=subject, roles=frozenset(str(r) for r in roles_raw))


def require_roles(*required: str):
    required_set = frozenset(required)

    def _dep(caller: Caller = Depends(get_caller)) -> Caller:
        # admin bypasses role checks.
        if caller.is_admin:
            return caller
        if not required_set.issubset(caller.roles):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient role")
        return caller

    return _dep
