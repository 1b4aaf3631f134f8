from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from househunt.auth import security
from househunt.auth.schemas import Identity
from househunt.utils import AuthenticationError

# auto_error is off so a missing header gets our own 401 body instead of 403
bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    """
    Dependency that verifies the bearer token and returns its claims.

    The claims are trusted as-is: no database read happens per request,
    so a role change only shows up once the client gets a new access token.
    """
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Missing or invalid authorization header")
    try:
        payload = security.decode_access_token(credentials.credentials)
        return Identity(
            id=int(payload["id"]),
            email=payload.get("email", ""),
            role=payload.get("role"),
        )
    except (AuthenticationError, ValueError, TypeError, KeyError):
        raise _unauthorized("Invalid or expired token")
