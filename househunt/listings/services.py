from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, List, Optional, Sequence, Type, TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, with_expression

from househunt.accounts import services as accounts
from househunt.accounts.models import LandlordProfile
from househunt.auth.schemas import Identity
from househunt.listings.enums import HouseStatus
from househunt.listings.models import (
    Comment,
    Favorite,
    House,
    HouseAmenity,
    HousePhoto,
    HouseRule,
    Review,
)
from househunt.listings.permissions import ListingPermissionChecker
from househunt.listings.schemas import (
    REQUIRED_HOUSE_FIELDS,
    HouseCreate,
    HouseFilters,
    HouseListItemOut,
    HouseStatusUpdate,
    HouseUpdate,
    LandlordHouseOut,
    MyHouseOut,
)
from househunt.schemas import Page
from househunt.utils import (
    DEFAULT_PAGE_SIZE,
    NotFoundError,
    PreconditionError,
    ValidationError,
    clamp_pagination,
    total_pages,
)

M = TypeVar("M", bound=BaseModel)

# loader options per view
_PRIMARY_PHOTO = selectinload(House.photos.and_(HousePhoto.is_primary.is_(True)))
_LANDLORD_USER = selectinload(House.landlord).selectinload(LandlordProfile.user)

LIST_OPTIONS = (_PRIMARY_PHOTO, selectinload(House.amenities), _LANDLORD_USER)
DASHBOARD_OPTIONS = (_PRIMARY_PHOTO, selectinload(House.amenities))
FULL_OPTIONS = (
    selectinload(House.photos),
    selectinload(House.amenities),
    selectinload(House.rules),
)
DETAIL_OPTIONS = FULL_OPTIONS + (_LANDLORD_USER,)

NEWEST_FIRST = (House.created_at.desc(), House.id.desc())


def _parse(schema: Type[M], payload: Any) -> M:
    """Validate a raw request body, reporting the offending fields."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        if not fields:
            raise ValidationError("Invalid request body") from exc
        raise ValidationError(f"Invalid value for: {', '.join(fields)}") from exc


def _house_query(*options):
    # populate_existing: the same house may already sit in the session
    # with a differently filtered photos collection.
    return (
        select(House)
        .options(*options)
        .execution_options(populate_existing=True)
    )


async def _load_house(session: AsyncSession, house_id: int, *options) -> House:
    result = await session.execute(_house_query(*options).where(House.id == house_id))
    return result.scalars().one()


def _count_of(model) -> Any:
    return (
        select(func.count(model.id))
        .where(model.house_id == House.id)
        .correlate(House)
        .scalar_subquery()
    )


async def _paginate(
    session: AsyncSession,
    schema: Type[M],
    conditions: List[Any],
    options: Sequence[Any],
    page: int,
    page_size: int,
) -> Page[M]:
    page, page_size, offset = clamp_pagination(page, page_size)

    total = await session.scalar(
        select(func.count()).select_from(House).where(*conditions),
    ) or 0
    houses: Sequence[House] = []
    # past the last page; huge offsets would overflow the driver
    if offset < total:
        stmt = (
            _house_query(*options)
            .where(*conditions)
            .order_by(*NEWEST_FIRST)
            .offset(offset)
            .limit(page_size)
        )
        result = await session.execute(stmt)
        houses = result.scalars().all()

    return Page[schema](
        data=[schema.model_validate(house) for house in houses],
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages(total, page_size),
    )


# -----------------------
# Public reads
# -----------------------
async def list_houses(
    session: AsyncSession,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    filters: Optional[HouseFilters] = None,
) -> Page[HouseListItemOut]:
    """
    Available, non-deleted houses, newest first.

    City and estate match exactly, the rent bounds are inclusive.
    """
    filters = filters or HouseFilters()
    conditions: List[Any] = [
        House.status == HouseStatus.AVAILABLE,
        House.deleted_at.is_(None),
    ]
    if filters.city:
        conditions.append(House.city == filters.city)
    if filters.estate:
        conditions.append(House.estate == filters.estate)
    if filters.min_rent is not None:
        conditions.append(House.monthly_rent >= filters.min_rent)
    if filters.max_rent is not None:
        conditions.append(House.monthly_rent <= filters.max_rent)
    if filters.amenity is not None:
        conditions.append(House.amenities.any(HouseAmenity.amenity == filters.amenity))

    return await _paginate(
        session, HouseListItemOut, conditions, LIST_OPTIONS, page, page_size,
    )


async def get_house_by_id(session: AsyncSession, house_id: int) -> House:
    """Full listing detail. Soft-deleted houses are not found."""
    stmt = _house_query(*DETAIL_OPTIONS).where(
        House.id == house_id, House.deleted_at.is_(None),
    )
    result = await session.execute(stmt)
    house = result.scalars().first()
    if house is None:
        raise NotFoundError("House not found")
    return house


async def list_landlord_houses(
    session: AsyncSession,
    landlord_id: int,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page[LandlordHouseOut]:
    """Non-deleted houses of one landlord profile, whatever their status."""
    if await session.get(LandlordProfile, landlord_id) is None:
        raise NotFoundError("Landlord not found")
    conditions = [House.landlord_id == landlord_id, House.deleted_at.is_(None)]
    return await _paginate(
        session, LandlordHouseOut, conditions, DASHBOARD_OPTIONS, page, page_size,
    )


async def list_my_houses(
    session: AsyncSession,
    identity: Identity,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Page[MyHouseOut]:
    """The caller's own listings with review, comment and favorite counts."""
    ListingPermissionChecker.check_landlord(
        identity, "Only landlords can view their listings",
    )
    profile = await accounts.get_landlord_profile_for_user(session, identity.id)
    if profile is None:
        raise PreconditionError("Landlord profile not found")

    options = DASHBOARD_OPTIONS + (
        with_expression(House.reviews_total, _count_of(Review)),
        with_expression(House.comments_total, _count_of(Comment)),
        with_expression(House.favorites_total, _count_of(Favorite)),
    )
    conditions = [House.landlord_id == profile.id, House.deleted_at.is_(None)]
    return await _paginate(session, MyHouseOut, conditions, options, page, page_size)


# -----------------------
# Landlord mutations
# -----------------------
async def create_house(
    session: AsyncSession,
    identity: Identity,
    payload: Any,
) -> House:
    """
    Create a listing with its amenities and rules in one flush.

    Raises AuthorizationError for non-landlords, ValidationError for a
    missing or malformed field, and PreconditionError when the landlord
    has no profile yet.
    """
    ListingPermissionChecker.check_landlord(
        identity, "Only landlords can create listings",
    )
    data = _parse(HouseCreate, payload)

    missing = [name for name in REQUIRED_HOUSE_FIELDS if getattr(data, name) is None]
    if missing:
        raise ValidationError(
            "Missing required fields: " + ", ".join(to_camel(name) for name in missing),
        )

    profile = await accounts.get_landlord_profile_for_user(session, identity.id)
    if profile is None:
        raise PreconditionError("Complete your landlord profile first")

    house = House(
        landlord_id=profile.id,
        status=HouseStatus.AVAILABLE,
        **data.model_dump(exclude={"amenities", "rules"}),
    )
    # duplicates would trip the (house_id, amenity) constraint
    house.amenities = [HouseAmenity(amenity=a) for a in dict.fromkeys(data.amenities)]
    house.rules = [HouseRule(rule=rule.strip()) for rule in data.rules if rule.strip()]
    session.add(house)
    await session.flush()

    logger.info("Landlord {} listed house {}", profile.id, house.id)
    return await _load_house(session, house.id, *FULL_OPTIONS)


async def update_house(
    session: AsyncSession,
    identity: Identity,
    house_id: int,
    payload: Any,
) -> House:
    """
    Partial update of the listing's own columns.

    Amenities, rules, counters, status and timestamps are not writable
    here. A required column can't be cleared.
    """
    ListingPermissionChecker.check_landlord(
        identity, "Only landlords can update listings",
    )
    house = await ListingPermissionChecker.check_house_owner(
        session, identity, house_id, "You do not have permission to update this listing",
    )
    data = _parse(HouseUpdate, payload)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in REQUIRED_HOUSE_FIELDS:
            continue
        setattr(house, field, value)
    await session.flush()

    return await _load_house(session, house.id, *FULL_OPTIONS)


async def delete_house(
    session: AsyncSession,
    identity: Identity,
    house_id: int,
) -> House:
    """Soft delete. The status column is left alone."""
    ListingPermissionChecker.check_landlord(
        identity, "Only landlords can delete listings",
    )
    house = await ListingPermissionChecker.check_house_owner(
        session, identity, house_id, "You do not have permission to delete this listing",
    )
    house.deleted_at = datetime.now(UTC)
    await session.flush()

    logger.info("House {} soft-deleted", house.id)
    return await _load_house(session, house.id, *FULL_OPTIONS)


async def update_house_status(
    session: AsyncSession,
    identity: Identity,
    house_id: int,
    payload: Any,
) -> House:
    """Any status can move to any other."""
    ListingPermissionChecker.check_landlord(
        identity, "Only landlords can update house status",
    )
    try:
        new_status = HouseStatusUpdate.model_validate(payload).status
    except PydanticValidationError as exc:
        raise ValidationError("Invalid status") from exc

    house = await ListingPermissionChecker.check_house_owner(
        session, identity, house_id, "You do not have permission to update this listing",
    )
    house.status = new_status
    await session.flush()

    return await _load_house(session, house.id, *FULL_OPTIONS)


# -----------------------
# Background
# -----------------------
async def increment_view_count(session: AsyncSession, house_id: int) -> None:
    """Atomic +1 on the view counter; a view is not an edit."""
    stmt = (
        update(House)
        .where(House.id == house_id)
        .values(view_count=House.view_count + 1, updated_at=House.updated_at)
        .execution_options(synchronize_session=False)
    )
    await session.execute(stmt)
