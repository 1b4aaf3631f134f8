from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from househunt.accounts import services as accounts
from househunt.accounts.enums import UserRole
from househunt.auth import services as auth
from househunt.auth.schemas import AuthOut, Identity

PASSWORD = "secret1"


async def make_account(
    session: AsyncSession,
    role: UserRole,
    email: str,
    first_name: str = "Jane",
) -> AuthOut:
    return await auth.signup(
        session,
        role=role,
        first_name=first_name,
        last_name="Doe",
        email=email,
        phone="+254700000001",
        password=PASSWORD,
    )


async def make_landlord(session: AsyncSession, email: str) -> AuthOut:
    """Landlord account with a profile, ready to list houses."""
    result = await make_account(session, UserRole.LANDLORD, email, first_name="Larry")
    await accounts.create_landlord_profile(
        session, user_id=result.user.id, role=UserRole.LANDLORD, bio="Landlord",
    )
    return result


def identity_of(result: AuthOut) -> Identity:
    return Identity(id=result.user.id, email=result.user.email, role=result.user.role)


def bearer(result: AuthOut) -> Dict[str, str]:
    return {"Authorization": f"Bearer {result.token}"}
