from __future__ import annotations

from typing import Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.accounts import services as accounts
from househunt.accounts.enums import UserRole
from househunt.accounts.models import User
from househunt.accounts.schemas import UserOut
from househunt.auth import security
from househunt.auth.schemas import AuthOut, Identity
from househunt.utils import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

# Same message for unknown email and wrong password.
INVALID_CREDENTIALS = "Invalid email or password"
INVALID_REFRESH_TOKEN = "Invalid refresh token"

SELF_SERVICE_ROLES = (UserRole.TENANT, UserRole.LANDLORD)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def issue_tokens(user: User) -> AuthOut:
    """Fresh access/refresh pair for a user."""
    claims = {"id": user.id, "email": user.email, "role": user.role.value}
    return AuthOut(
        user=UserOut.model_validate(user),
        token=security.create_access_token(claims),
        refresh_token=security.create_refresh_token(claims),
    )


async def signup(
    session: AsyncSession,
    *,
    role: UserRole,
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
    phone: Optional[str],
    password: Optional[str],
) -> AuthOut:
    """
    Register a tenant or a landlord and log them in.

    Raises ValidationError when a field is empty and ConflictError when
    the email is taken.
    """
    if role not in SELF_SERVICE_ROLES:
        raise ValidationError(f"Cannot sign up with role {role.value}")
    if any(_is_blank(v) for v in (first_name, last_name, email, phone, password)):
        raise ValidationError("Missing required fields")
    if len(password.encode("utf-8")) > security.MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {security.MAX_PASSWORD_BYTES} bytes long",
        )

    if await accounts.get_user_by_email(session, email) is not None:
        raise ConflictError("Email already registered")

    user = await accounts.create_user(
        session,
        email=email,
        password=password,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        phone=phone.strip(),
        role=role,
    )
    logger.info("New {} account id={}", role.value.lower(), user.id)
    return issue_tokens(user)


async def login(
    session: AsyncSession, *, email: Optional[str], password: Optional[str],
) -> AuthOut:
    if _is_blank(email) or _is_blank(password):
        raise ValidationError("Email and password required")

    user = await accounts.get_user_by_email(session, email)
    if user is None or user.deleted_at is not None:
        raise AuthenticationError(INVALID_CREDENTIALS)
    if not security.verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)
    return issue_tokens(user)


async def get_current_user(
    session: AsyncSession, identity: Optional[Identity],
) -> User:
    if identity is None:
        raise AuthenticationError("Not authenticated")
    user = await accounts.get_user(session, identity.id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def refresh(session: AsyncSession, refresh_token: Optional[str]) -> str:
    """
    Mint a new access token from a refresh token.

    The role is read from the database, the refresh token carries none.
    The refresh token itself is not rotated.
    """
    if _is_blank(refresh_token):
        raise ValidationError("Refresh token required")
    try:
        claims = security.decode_refresh_token(refresh_token)
    except AuthenticationError as exc:
        raise AuthenticationError(INVALID_REFRESH_TOKEN) from exc

    user = await accounts.get_user(session, int(claims["id"]))
    if user is None:
        raise AuthenticationError(INVALID_REFRESH_TOKEN)
    return security.create_access_token(
        {"id": user.id, "email": user.email, "role": user.role.value},
    )


async def logout() -> None:
    """
    Nothing to do server side: there is no deny-list, so an access token
    stays valid until it expires.
    """
    return None
