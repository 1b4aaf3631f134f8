from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.auth.dependencies import get_identity
from househunt.auth.schemas import Identity
from househunt.db.dependencies import get_db_session
from househunt.listings import services
from househunt.listings.enums import AmenityType
from househunt.listings.schemas import (
    HouseDetailOut,
    HouseFilters,
    HouseListItemOut,
    HouseOut,
    LandlordHouseOut,
    MyHouseOut,
)
from househunt.listings.tasks import increment_house_views
from househunt.schemas import Envelope, Page
from househunt.utils import DEFAULT_PAGE_SIZE, translate_service_errors

router = APIRouter()


# -----------------------
# Public
# -----------------------
@router.get("/houses", response_model=Envelope[Page[HouseListItemOut]])
@translate_service_errors
async def list_houses(
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    city: Optional[str] = Query(None),
    estate: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    amenity: Optional[AmenityType] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """Search available listings. Out of range pages come back empty."""
    filters = HouseFilters(
        city=city,
        estate=estate,
        min_rent=min_price,
        max_rent=max_price,
        amenity=amenity,
    )
    result = await services.list_houses(
        session, page=page, page_size=page_size, filters=filters,
    )
    return Envelope[Page[HouseListItemOut]](data=result)


@router.get("/houses/{house_id}", response_model=Envelope[HouseDetailOut])
@translate_service_errors
async def get_house(
    house_id: int,
    session: AsyncSession = Depends(get_db_session),
):
    house = await services.get_house_by_id(session, house_id)
    data = HouseDetailOut.model_validate(house)
    try:
        await increment_house_views.kiq(house_id)
    except Exception:
        logger.exception("Could not queue view count for house {}", house_id)
    return Envelope[HouseDetailOut](data=data)


@router.get(
    "/landlords/{landlord_id}/houses",
    response_model=Envelope[Page[LandlordHouseOut]],
)
@translate_service_errors
async def list_landlord_houses(
    landlord_id: int,
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    session: AsyncSession = Depends(get_db_session),
):
    result = await services.list_landlord_houses(
        session, landlord_id, page=page, page_size=page_size,
    )
    return Envelope[Page[LandlordHouseOut]](data=result)


# -----------------------
# Landlord
# -----------------------
@router.get("/my-houses", response_model=Envelope[Page[MyHouseOut]])
@translate_service_errors
async def list_my_houses(
    page: int = Query(1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
):
    """The caller's listings, including the review, comment and favorite counts."""
    result = await services.list_my_houses(
        session, identity, page=page, page_size=page_size,
    )
    return Envelope[Page[MyHouseOut]](data=result)


# Bodies are validated inside the services, after the role and
# ownership checks.
@router.post(
    "/houses",
    response_model=Envelope[HouseOut],
    status_code=status.HTTP_201_CREATED,
)
@translate_service_errors
async def create_house(
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
):
    house = await services.create_house(session, identity, payload)
    return Envelope[HouseOut](
        data=HouseOut.model_validate(house),
        message="House listing created successfully",
    )


@router.put("/houses/{house_id}", response_model=Envelope[HouseOut])
@translate_service_errors
async def update_house(
    house_id: int,
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
):
    house = await services.update_house(session, identity, house_id, payload)
    return Envelope[HouseOut](
        data=HouseOut.model_validate(house),
        message="House listing updated successfully",
    )


@router.delete("/houses/{house_id}", response_model=Envelope[HouseOut])
@translate_service_errors
async def delete_house(
    house_id: int,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
):
    house = await services.delete_house(session, identity, house_id)
    return Envelope[HouseOut](
        data=HouseOut.model_validate(house),
        message="House listing deleted successfully",
    )


@router.patch("/houses/{house_id}/status", response_model=Envelope[HouseOut])
@translate_service_errors
async def update_house_status(
    house_id: int,
    payload: Dict[str, Any] = Body(...),
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
):
    house = await services.update_house_status(session, identity, house_id, payload)
    return Envelope[HouseOut](data=HouseOut.model_validate(house))
