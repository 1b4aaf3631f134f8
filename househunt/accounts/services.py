from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.accounts.enums import UserRole
from househunt.accounts.models import LandlordProfile, User
from househunt.auth import security
from househunt.utils import AuthorizationError, ConflictError, NotFoundError


# ---- Users ----
async def create_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: str,
    role: UserRole = UserRole.TENANT,
) -> User:
    """Creates a new user with a hashed password."""
    user = User(
        email=email,
        password_hash=security.get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=role,
    )
    session.add(user)
    try:
        await session.flush()  # push so integrity errors surface
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError("Email already registered") from exc
    await session.refresh(user)
    return user


async def get_user(session: AsyncSession, user_id: int) -> Optional[User]:
    """Live (not soft-deleted) user by id."""
    q = select(User).where(User.id == user_id, User.deleted_at.is_(None))
    result = await session.execute(q)
    return result.scalars().first()


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    q = select(User).where(User.email == email)
    result = await session.execute(q)
    return result.scalars().first()


# ---- Landlord profiles ----
async def get_landlord_profile_for_user(
    session: AsyncSession, user_id: int,
) -> Optional[LandlordProfile]:
    q = select(LandlordProfile).where(LandlordProfile.user_id == user_id)
    result = await session.execute(q)
    return result.scalars().first()


async def get_landlord_profile(
    session: AsyncSession, user_id: int,
) -> LandlordProfile:
    profile = await get_landlord_profile_for_user(session, user_id)
    if profile is None:
        raise NotFoundError("Landlord profile not found")
    return profile


async def create_landlord_profile(
    session: AsyncSession,
    *,
    user_id: int,
    role: UserRole,
    bio: Optional[str] = None,
    id_type=None,
    id_number: Optional[str] = None,
    id_photo_url: Optional[str] = None,
) -> LandlordProfile:
    """
    Create the profile a landlord needs before listing houses.
    Verification starts as PENDING; approving it is an admin concern.
    """
    if role != UserRole.LANDLORD:
        raise AuthorizationError("Only landlords can create a landlord profile")
    if await get_landlord_profile_for_user(session, user_id) is not None:
        raise ConflictError("Landlord profile already exists")

    profile = LandlordProfile(
        user_id=user_id,
        bio=bio,
        id_type=id_type,
        id_number=id_number,
        id_photo_url=id_photo_url,
    )
    session.add(profile)
    await session.flush()
    await session.refresh(profile)
    return profile
