from typing import Any, Dict

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.accounts.enums import UserRole
from househunt.auth.schemas import AuthOut, Identity
from househunt.listings import services
from househunt.listings.enums import AmenityType, HouseStatus
from househunt.listings.models import HousePhoto
from househunt.listings.permissions import ListingPermissionChecker
from househunt.listings.schemas import HouseFilters
from househunt.utils import (
    AuthorizationError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from tests.helpers import identity_of


@pytest.mark.anyio
async def test_create_then_read(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    house = await services.create_house(dbsession, identity_of(landlord), house_payload)

    fetched = await services.get_house_by_id(dbsession, house.id)

    assert fetched.id == house.id
    assert fetched.landlord.user.email == "larry@x.com"
    assert {a.amenity for a in fetched.amenities} == {AmenityType.WIFI, AmenityType.PARKING}
    assert fetched.status == HouseStatus.AVAILABLE


@pytest.mark.anyio
async def test_role_is_checked_before_the_payload(
    dbsession: AsyncSession,
    tenant: AuthOut,
) -> None:
    with pytest.raises(AuthorizationError):
        await services.create_house(dbsession, identity_of(tenant), {})


@pytest.mark.anyio
async def test_payload_is_checked_before_the_profile(dbsession: AsyncSession) -> None:
    # a landlord identity with no profile and an empty body
    identity = Identity(id=999, email="ghost@x.com", role=UserRole.LANDLORD)

    with pytest.raises(ValidationError, match="Missing required fields"):
        await services.create_house(dbsession, identity, {})


@pytest.mark.anyio
async def test_profile_is_required(
    dbsession: AsyncSession,
    house_payload: Dict[str, Any],
) -> None:
    identity = Identity(id=999, email="ghost@x.com", role=UserRole.LANDLORD)

    with pytest.raises(PreconditionError, match="Complete your landlord profile first"):
        await services.create_house(dbsession, identity, house_payload)


@pytest.mark.anyio
async def test_create_rejects_non_object_body(
    dbsession: AsyncSession,
    landlord: AuthOut,
) -> None:
    with pytest.raises(ValidationError):
        await services.create_house(dbsession, identity_of(landlord), ["not", "a", "dict"])


@pytest.mark.anyio
async def test_list_service_clamps(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    for _ in range(3):
        await services.create_house(dbsession, identity_of(landlord), house_payload)

    page = await services.list_houses(dbsession, page=0, page_size=-5)

    assert page.page == 1
    assert page.page_size == 1
    assert page.total == 3
    assert page.total_pages == 3
    assert len(page.data) == 1


@pytest.mark.anyio
async def test_list_service_rent_bounds_are_inclusive(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    await services.create_house(dbsession, identity_of(landlord), house_payload)

    hit = await services.list_houses(
        dbsession, filters=HouseFilters(min_rent=45000, max_rent=45000),
    )
    miss = await services.list_houses(
        dbsession, filters=HouseFilters(min_rent=45000.01),
    )

    assert hit.total == 1
    assert miss.total == 0


@pytest.mark.anyio
async def test_list_service_shows_primary_photo_only(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    house = await services.create_house(dbsession, identity_of(landlord), house_payload)
    dbsession.add_all(
        [
            HousePhoto(house_id=house.id, photo_url="https://img/1.jpg", display_order=1),
            HousePhoto(
                house_id=house.id,
                photo_url="https://img/0.jpg",
                display_order=0,
                is_primary=True,
            ),
        ],
    )
    await dbsession.flush()

    listed = await services.list_houses(dbsession)
    detail = await services.get_house_by_id(dbsession, house.id)

    assert [p.photo_url for p in listed.data[0].photos] == ["https://img/0.jpg"]
    assert [p.photo_url for p in detail.photos] == [
        "https://img/0.jpg",
        "https://img/1.jpg",
    ]


@pytest.mark.anyio
async def test_list_service_keeps_one_primary_photo(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    owner = identity_of(landlord)
    house = await services.create_house(dbsession, owner, house_payload)
    dbsession.add_all(
        [
            HousePhoto(
                house_id=house.id,
                photo_url="https://img/b.jpg",
                display_order=2,
                is_primary=True,
            ),
            HousePhoto(
                house_id=house.id,
                photo_url="https://img/a.jpg",
                display_order=1,
                is_primary=True,
            ),
        ],
    )
    await dbsession.flush()

    listed = await services.list_houses(dbsession)
    by_landlord = await services.list_landlord_houses(dbsession, house.landlord_id)
    mine = await services.list_my_houses(dbsession, owner)

    for page in (listed, by_landlord, mine):
        assert [p.photo_url for p in page.data[0].photos] == ["https://img/a.jpg"]


@pytest.mark.anyio
async def test_status_is_validated_before_ownership(
    dbsession: AsyncSession,
    landlord: AuthOut,
    other_landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    house = await services.create_house(dbsession, identity_of(landlord), house_payload)

    with pytest.raises(ValidationError, match="Invalid status"):
        await services.update_house_status(
            dbsession, identity_of(other_landlord), house.id, {"status": "GONE"},
        )
    with pytest.raises(AuthorizationError):
        await services.update_house_status(
            dbsession, identity_of(other_landlord), house.id, {"status": "OCCUPIED"},
        )


@pytest.mark.anyio
async def test_every_status_is_reachable(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    owner = identity_of(landlord)
    house = await services.create_house(dbsession, owner, house_payload)

    for target in [
        HouseStatus.DELISTED,
        HouseStatus.MAINTENANCE,
        HouseStatus.OCCUPIED,
        HouseStatus.AVAILABLE,
        HouseStatus.DELISTED,
    ]:
        house = await services.update_house_status(
            dbsession, owner, house.id, {"status": target.value},
        )
        assert house.status == target


@pytest.mark.anyio
async def test_deleted_house_cannot_be_updated(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    owner = identity_of(landlord)
    house = await services.create_house(dbsession, owner, house_payload)
    await services.delete_house(dbsession, owner, house.id)

    with pytest.raises(NotFoundError):
        await services.update_house(dbsession, owner, house.id, {"title": "Back"})
    with pytest.raises(NotFoundError):
        await services.get_house_by_id(dbsession, house.id)


@pytest.mark.anyio
async def test_my_houses_hides_deleted(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    owner = identity_of(landlord)
    kept = await services.create_house(dbsession, owner, house_payload)
    gone = await services.create_house(dbsession, owner, house_payload)
    await services.delete_house(dbsession, owner, gone.id)

    page = await services.list_my_houses(dbsession, owner)

    assert [row.id for row in page.data] == [kept.id]


@pytest.mark.anyio
async def test_increment_view_count(
    dbsession: AsyncSession,
    landlord: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    house = await services.create_house(dbsession, identity_of(landlord), house_payload)

    await services.increment_view_count(dbsession, house.id)
    await services.increment_view_count(dbsession, house.id)
    await dbsession.refresh(house)

    assert house.view_count == 2


@pytest.mark.anyio
async def test_permission_checker(
    dbsession: AsyncSession,
    landlord: AuthOut,
    other_landlord: AuthOut,
    tenant: AuthOut,
    house_payload: Dict[str, Any],
) -> None:
    house = await services.create_house(dbsession, identity_of(landlord), house_payload)
    house = await ListingPermissionChecker.get_live_house(dbsession, house.id)

    assert ListingPermissionChecker.is_landlord(identity_of(landlord))
    assert not ListingPermissionChecker.is_landlord(identity_of(tenant))
    assert ListingPermissionChecker.owns(identity_of(landlord), house)
    assert not ListingPermissionChecker.owns(identity_of(other_landlord), house)

    with pytest.raises(NotFoundError):
        await ListingPermissionChecker.check_house_owner(
            dbsession, identity_of(landlord), house.id + 100, "nope",
        )
    with pytest.raises(AuthorizationError, match="nope"):
        await ListingPermissionChecker.check_house_owner(
            dbsession, identity_of(other_landlord), house.id, "nope",
        )
