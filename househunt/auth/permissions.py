from typing import Callable

from fastapi import Depends, HTTPException, status

from househunt.accounts.enums import UserRole
from househunt.auth.dependencies import get_identity
from househunt.auth.schemas import Identity

ROLE_LABELS = {
    UserRole.TENANT: "tenants",
    UserRole.LANDLORD: "landlords",
    UserRole.ADMIN: "admins",
}


def require_role(*roles: UserRole) -> Callable[..., Identity]:
    """Dependency factory: the identity's role must be one of `roles`."""
    allowed = ", ".join(ROLE_LABELS[role] for role in roles)

    def role_checker(identity: Identity = Depends(get_identity)) -> Identity:
        if identity.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Only {allowed} can access this resource",
            )
        return identity

    return role_checker


require_landlord = require_role(UserRole.LANDLORD)
require_tenant = require_role(UserRole.TENANT)
require_admin = require_role(UserRole.ADMIN)
