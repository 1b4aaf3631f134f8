from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.accounts import services
from househunt.accounts.schemas import LandlordProfileCreate, LandlordProfileOut
from househunt.auth.permissions import require_landlord
from househunt.auth.schemas import Identity
from househunt.db.dependencies import get_db_session
from househunt.schemas import Envelope
from househunt.utils import translate_service_errors

router = APIRouter()


@router.post(
    "/profile",
    response_model=Envelope[LandlordProfileOut],
    status_code=status.HTTP_201_CREATED,
)
@translate_service_errors
async def create_landlord_profile(
    payload: LandlordProfileCreate,
    identity: Identity = Depends(require_landlord),
    session: AsyncSession = Depends(get_db_session),
):
    """Set up the profile a landlord needs before creating listings."""
    profile = await services.create_landlord_profile(
        session,
        user_id=identity.id,
        role=identity.role,
        **payload.model_dump(),
    )
    return Envelope[LandlordProfileOut](
        data=LandlordProfileOut.model_validate(profile),
        message="Landlord profile created. Verification is pending.",
    )


@router.get("/profile", response_model=Envelope[LandlordProfileOut])
@translate_service_errors
async def read_landlord_profile(
    identity: Identity = Depends(require_landlord),
    session: AsyncSession = Depends(get_db_session),
):
    profile = await services.get_landlord_profile(session, identity.id)
    return Envelope[LandlordProfileOut](data=LandlordProfileOut.model_validate(profile))
