from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from househunt.accounts.enums import UserRole
from househunt.auth.schemas import Identity
from househunt.listings.models import House
from househunt.utils import AuthorizationError, NotFoundError


class ListingPermissionChecker:
    """Role and ownership checks for listing mutations"""

    @staticmethod
    def is_landlord(identity: Identity) -> bool:
        return identity.role == UserRole.LANDLORD

    @staticmethod
    def owns(identity: Identity, house: House) -> bool:
        """Ownership goes through the landlord profile, not the house row."""
        return house.landlord.user_id == identity.id

    @staticmethod
    def check_landlord(identity: Identity, detail: str) -> None:
        if not ListingPermissionChecker.is_landlord(identity):
            raise AuthorizationError(detail)

    @staticmethod
    async def get_live_house(
        session: AsyncSession,
        house_id: int,
    ) -> Optional[House]:
        stmt = (
            select(House)
            .where(House.id == house_id, House.deleted_at.is_(None))
            .options(selectinload(House.landlord))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def check_house_owner(
        session: AsyncSession,
        identity: Identity,
        house_id: int,
        detail: str,
    ) -> House:
        """
        Load a non-deleted house and make sure `identity` owns it.
        Raises NotFoundError or AuthorizationError.
        """
        house = await ListingPermissionChecker.get_live_house(session, house_id)
        if house is None:
            raise NotFoundError("House not found")
        if not ListingPermissionChecker.owns(identity, house):
            raise AuthorizationError(detail)
        return house

