from fastapi.routing import APIRouter

from househunt.accounts import endpoints as accounts
from househunt.auth import endpoints as auth
from househunt.listings import endpoints as listings

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(accounts.router, prefix="/landlords", tags=["landlords"])
api_router.include_router(listings.router, tags=["houses"])
