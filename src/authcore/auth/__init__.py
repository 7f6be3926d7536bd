"""
authcore.auth

Authentication package.

Responsibilities:
- Credential lookup against the fixed principal list.
- Access-token signing/verification and refresh-token generation.
- Refresh-token persistence contract and the in-memory implementation.
- FastAPI dependencies for bearer verification + RBAC.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package depends on the HTTP layer except `deps.py`.
