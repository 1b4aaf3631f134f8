from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, query_expression, relationship

from househunt.accounts.models import LandlordProfile, User
from househunt.db.base import Base
from househunt.listings.enums import AmenityType, HouseStatus, HouseType


# --- house ---
class House(Base):
    __tablename__ = "houses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    landlord_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("landlord_profiles.id"), nullable=False, index=True,
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    house_type: Mapped[HouseType] = mapped_column(SQLEnum(HouseType), nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    sqft: Mapped[Optional[int]] = mapped_column(Integer)

    # Pricing
    monthly_rent: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    deposit: Mapped[float] = mapped_column(Float, nullable=False)
    water_charge: Mapped[Optional[float]] = mapped_column(Float)
    electricity_charge: Mapped[Optional[float]] = mapped_column(Float)
    parking_charge: Mapped[Optional[float]] = mapped_column(Float)

    # Location
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    estate: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    street: Mapped[str] = mapped_column(String(200), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    availability_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[HouseStatus] = mapped_column(
        SQLEnum(HouseStatus), default=HouseStatus.AVAILABLE, nullable=False, index=True,
    )

    # Engagement
    view_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    favorite_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_reviews: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # filled only by the landlord dashboard query
    reviews_total: Mapped[Optional[int]] = query_expression()
    comments_total: Mapped[Optional[int]] = query_expression()
    favorites_total: Mapped[Optional[int]] = query_expression()

    # relationships
    landlord: Mapped[LandlordProfile] = relationship(
        "LandlordProfile", back_populates="houses",
    )
    photos: Mapped[List[HousePhoto]] = relationship(
        "HousePhoto",
        back_populates="house",
        cascade="all,delete-orphan",
        order_by="HousePhoto.display_order",
    )
    amenities: Mapped[List[HouseAmenity]] = relationship(
        "HouseAmenity", back_populates="house", cascade="all,delete-orphan",
    )
    rules: Mapped[List[HouseRule]] = relationship(
        "HouseRule", back_populates="house", cascade="all,delete-orphan",
    )


class HouseAmenity(Base):
    __tablename__ = "house_amenities"
    __table_args__ = (UniqueConstraint("house_id", "amenity"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    house_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("houses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    amenity: Mapped[AmenityType] = mapped_column(SQLEnum(AmenityType), nullable=False)

    house: Mapped[House] = relationship("House", back_populates="amenities")


class HouseRule(Base):
    __tablename__ = "house_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    house_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("houses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    rule: Mapped[str] = mapped_column(Text, nullable=False)

    house: Mapped[House] = relationship("House", back_populates="rules")


class HousePhoto(Base):
    __tablename__ = "house_photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    house_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("houses.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    photo_url: Mapped[str] = mapped_column(String(500), nullable=False)
    caption: Mapped[Optional[str]] = mapped_column(String(200))
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    house: Mapped[House] = relationship("House", back_populates="photos")


# --- tenant feedback (no API yet, counted on the landlord dashboard) ---
class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    house_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("houses.id"), nullable=False, index=True,
    )
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    review_text: Mapped[str] = mapped_column(Text, nullable=False)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    tenant: Mapped[User] = relationship("User")


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    house_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("houses.id"), nullable=False, index=True,
    )
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    comment_text: Mapped[str] = mapped_column(Text, nullable=False)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    tenant: Mapped[User] = relationship("User")


class Favorite(Base):
    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("tenant_id", "house_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    house_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("houses.id"), nullable=False, index=True,
    )

    tenant: Mapped[User] = relationship("User")
