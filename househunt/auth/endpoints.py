from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from househunt.accounts.enums import UserRole
from househunt.accounts.schemas import UserOut
from househunt.auth import services
from househunt.auth.dependencies import get_identity
from househunt.auth.schemas import AccessTokenOut, AuthOut, Identity, LoginIn, RefreshIn, SignupIn
from househunt.db.dependencies import get_db_session
from househunt.schemas import Envelope
from househunt.utils import translate_service_errors

router = APIRouter()


# -----------------------
# Signup
# -----------------------
@router.post(
    "/signup/tenant",
    response_model=Envelope[AuthOut],
    status_code=status.HTTP_201_CREATED,
)
@translate_service_errors
async def signup_tenant(
    payload: SignupIn,
    session: AsyncSession = Depends(get_db_session),
):
    result = await services.signup(
        session, role=UserRole.TENANT, **payload.model_dump(),
    )
    return Envelope[AuthOut](data=result, message="Tenant account created successfully")


@router.post(
    "/signup/landlord",
    response_model=Envelope[AuthOut],
    status_code=status.HTTP_201_CREATED,
)
@translate_service_errors
async def signup_landlord(
    payload: SignupIn,
    session: AsyncSession = Depends(get_db_session),
):
    """ID verification is still required before a landlord can do everything."""
    result = await services.signup(
        session, role=UserRole.LANDLORD, **payload.model_dump(),
    )
    return Envelope[AuthOut](
        data=result,
        message="Landlord account created successfully. Please complete ID verification.",
    )


# -----------------------
# Tokens
# -----------------------
@router.post("/login", response_model=Envelope[AuthOut])
@translate_service_errors
async def login(
    payload: LoginIn,
    session: AsyncSession = Depends(get_db_session),
):
    result = await services.login(session, email=payload.email, password=payload.password)
    return Envelope[AuthOut](data=result)


@router.post("/refresh", response_model=Envelope[AccessTokenOut])
@translate_service_errors
async def refresh_access_token(
    payload: RefreshIn,
    session: AsyncSession = Depends(get_db_session),
):
    """Issues a new access token. The refresh token is not rotated."""
    token = await services.refresh(session, payload.refresh_token)
    return Envelope[AccessTokenOut](data=AccessTokenOut(token=token))


@router.post("/logout", response_model=Envelope[None])
@translate_service_errors
async def logout(identity: Identity = Depends(get_identity)):
    await services.logout()
    return Envelope[None](message="Logged out successfully")


# -----------------------
# Current user
# -----------------------
@router.get("/me", response_model=Envelope[UserOut])
@translate_service_errors
async def read_current_user(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(get_db_session),
):
    user = await services.get_current_user(session, identity)
    return Envelope[UserOut](data=UserOut.model_validate(user))
