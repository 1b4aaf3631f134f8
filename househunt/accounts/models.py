from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from househunt.accounts.enums import IdType, UserRole, VerificationStatus
from househunt.db.base import Base

if TYPE_CHECKING:
    from househunt.listings.models import House


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True,
    )
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole), default=UserRole.TENANT, nullable=False, index=True
    )
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    profile_photo_url: Mapped[Optional[str]] = mapped_column(String(500))

    # soft delete only, users are never removed
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    landlord_profile: Mapped[Optional[LandlordProfile]] = relationship(
        "LandlordProfile", back_populates="user", uselist=False,
    )


class LandlordProfile(Base):
    """Verification and rating extension of a LANDLORD user."""

    __tablename__ = "landlord_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), unique=True, nullable=False, index=True,
    )
    bio: Mapped[Optional[str]] = mapped_column(Text)
    id_type: Mapped[Optional[IdType]] = mapped_column(SQLEnum(IdType))
    id_number: Mapped[Optional[str]] = mapped_column(String(100))
    id_photo_url: Mapped[Optional[str]] = mapped_column(String(500))

    verification_status: Mapped[VerificationStatus] = mapped_column(
        SQLEnum(VerificationStatus),
        default=VerificationStatus.PENDING,
        nullable=False,
    )
    verification_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
    )
    average_rating: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_reviews: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    response_time_hours: Mapped[int] = mapped_column(
        Integer, default=24, nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    user: Mapped[User] = relationship("User", back_populates="landlord_profile")
    houses: Mapped[List[House]] = relationship("House", back_populates="landlord")
