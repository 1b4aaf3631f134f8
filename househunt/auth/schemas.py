from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from househunt.accounts.enums import UserRole
from househunt.accounts.schemas import UserOut
from househunt.schemas import CamelModel


class SignupIn(CamelModel):
    # Presence is checked by the service, so an empty field gets the same
    # "Missing required fields" answer as a missing one.
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    password: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LoginIn(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RefreshIn(CamelModel):
    refresh_token: Optional[str] = None


class AuthOut(CamelModel):
    user: UserOut
    token: str
    refresh_token: str


class AccessTokenOut(CamelModel):
    token: str


class Identity(BaseModel):
    """Claims of a verified access token, attached to the request."""

    id: int
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)
