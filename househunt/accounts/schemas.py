from __future__ import annotations

from datetime import datetime
from typing import Optional

from househunt.accounts.enums import IdType, UserRole, VerificationStatus
from househunt.schemas import CamelModel


class UserOut(CamelModel):
    """Public projection of a user. Never carries the password hash."""

    id: int
    email: str
    first_name: str
    last_name: str
    phone: str
    role: UserRole
    is_verified: bool
    profile_photo_url: Optional[str] = None
    created_at: Optional[datetime] = None


class LandlordProfileCreate(CamelModel):
    bio: Optional[str] = None
    id_type: Optional[IdType] = None
    id_number: Optional[str] = None
    id_photo_url: Optional[str] = None


class LandlordProfileOut(CamelModel):
    id: int
    user_id: int
    bio: Optional[str]
    id_type: Optional[IdType]
    id_number: Optional[str]
    id_photo_url: Optional[str]
    verification_status: VerificationStatus
    verification_date: Optional[datetime]
    average_rating: float
    total_reviews: int
    response_time_hours: int
    is_active: bool
