"""Password hashing and token signing."""

from __future__ import annotations

import datetime
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from househunt.settings import settings
from househunt.utils import AuthenticationError

SECRET_KEY = settings.jwt_secret
REFRESH_SECRET_KEY = settings.jwt_refresh_secret
ALGORITHM = settings.jwt_algorithm

ACCESS_TOKEN_EXPIRE = datetime.timedelta(days=settings.access_token_expire_days)
REFRESH_TOKEN_EXPIRE = datetime.timedelta(days=settings.refresh_token_expire_days)

# bcrypt refuses longer passwords
MAX_PASSWORD_BYTES = 72

ACCESS = "access"
REFRESH = "refresh"


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(rounds=settings.bcrypt_rounds),
    ).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash or over-long password
        return False


def _encode(
    data: Dict[str, Any],
    *,
    token_type: str,
    secret: str,
    expires_delta: datetime.timedelta,
) -> str:
    to_encode = data.copy()
    now = datetime.datetime.now(tz=datetime.UTC)
    to_encode.update({"iat": now, "exp": now + expires_delta, "type": token_type})
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[datetime.timedelta] = None,
) -> str:
    """Access token, claims {id, email, role}."""
    return _encode(
        data,
        token_type=ACCESS,
        secret=SECRET_KEY,
        expires_delta=expires_delta or ACCESS_TOKEN_EXPIRE,
    )


def create_refresh_token(
    data: Dict[str, Any], expires_delta: Optional[datetime.timedelta] = None,
) -> str:
    """Refresh token, claims {id, email}. Role is never put in here."""
    claims = {k: v for k, v in data.items() if k != "role"}
    return _encode(
        claims,
        token_type=REFRESH,
        secret=REFRESH_SECRET_KEY,
        expires_delta=expires_delta or REFRESH_TOKEN_EXPIRE,
    )


def _decode(token: str, *, token_type: str, secret: str) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError("Invalid or expired token") from exc
    if payload.get("type") != token_type or payload.get("id") is None:
        raise AuthenticationError("Invalid or expired token")
    return payload


def decode_access_token(token: str) -> Dict[str, Any]:
    return _decode(token, token_type=ACCESS, secret=SECRET_KEY)


def decode_refresh_token(token: str) -> Dict[str, Any]:
    return _decode(token, token_type=REFRESH, secret=REFRESH_SECRET_KEY)
