from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator

from househunt.accounts.enums import VerificationStatus
from househunt.listings.enums import AmenityType, HouseStatus, HouseType
from househunt.schemas import CamelModel

# Fields a landlord must send to create a listing.
REQUIRED_HOUSE_FIELDS = (
    "title",
    "description",
    "house_type",
    "bedrooms",
    "bathrooms",
    "monthly_rent",
    "deposit",
    "address",
    "city",
    "estate",
    "street",
    "latitude",
    "longitude",
    "availability_date",
)


# -----------------------
# Input
# -----------------------
class HouseFields(CamelModel):
    """
    Everything a landlord may set on a listing. Numbers and dates are
    accepted in their textual form ("1500", "2026-01-31") and coerced.
    """

    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    house_type: Optional[HouseType] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    sqft: Optional[int] = Field(None, ge=0)
    monthly_rent: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    water_charge: Optional[float] = Field(None, ge=0)
    electricity_charge: Optional[float] = Field(None, ge=0)
    parking_charge: Optional[float] = Field(None, ge=0)
    address: Optional[str] = None
    city: Optional[str] = None
    estate: Optional[str] = None
    street: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    availability_date: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: None if isinstance(value, str) and not value.strip() else value
                for key, value in data.items()
            }
        return data


class HouseCreate(HouseFields):
    amenities: List[AmenityType] = []
    rules: List[str] = []


class HouseUpdate(HouseFields):
    """Child collections can't be replaced through an update."""


class HouseStatusUpdate(CamelModel):
    status: HouseStatus


class HouseFilters(CamelModel):
    city: Optional[str] = None
    estate: Optional[str] = None
    min_rent: Optional[float] = None
    max_rent: Optional[float] = None
    amenity: Optional[AmenityType] = None


# -----------------------
# Output
# -----------------------
class HousePhotoOut(CamelModel):
    id: int
    photo_url: str
    caption: Optional[str]
    display_order: int
    is_primary: bool


class HouseAmenityOut(CamelModel):
    id: int
    amenity: AmenityType


class HouseRuleOut(CamelModel):
    id: int
    rule: str


class LandlordUserOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    profile_photo_url: Optional[str]


class LandlordContactOut(LandlordUserOut):
    email: str
    phone: str


class LandlordSummaryOut(CamelModel):
    id: int
    user: LandlordUserOut


class LandlordDetailOut(CamelModel):
    id: int
    user_id: int
    bio: Optional[str]
    verification_status: VerificationStatus
    average_rating: float
    total_reviews: int
    response_time_hours: int
    is_active: bool
    user: LandlordContactOut


class HouseBase(CamelModel):
    id: int
    landlord_id: int
    title: str
    description: str
    house_type: HouseType
    bedrooms: int
    bathrooms: int
    sqft: Optional[int]
    monthly_rent: float
    deposit: float
    water_charge: Optional[float]
    electricity_charge: Optional[float]
    parking_charge: Optional[float]
    address: str
    city: str
    estate: str
    street: str
    latitude: float
    longitude: float
    availability_date: date
    status: HouseStatus
    view_count: int
    favorite_count: int
    average_rating: float
    total_reviews: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime]


class HouseOut(HouseBase):
    """A listing with all of its child rows, returned from mutations."""

    photos: List[HousePhotoOut] = []
    amenities: List[HouseAmenityOut] = []
    rules: List[HouseRuleOut] = []


class PrimaryPhotoMixin(CamelModel):
    """Keeps a single photo even when several are flagged primary."""

    photos: List[HousePhotoOut] = []

    @field_validator("photos", mode="before")
    @classmethod
    def _first_photo(cls, value: Any) -> Any:
        if value is None:
            return []
        return list(value)[:1]


class HouseListItemOut(PrimaryPhotoMixin, HouseBase):
    """Search result: primary photo only, no rules."""

    landlord: LandlordSummaryOut
    amenities: List[HouseAmenityOut] = []


class HouseDetailOut(HouseOut):
    landlord: LandlordDetailOut


class LandlordHouseOut(PrimaryPhotoMixin, HouseBase):
    amenities: List[HouseAmenityOut] = []


class MyHouseOut(LandlordHouseOut):
    """Landlord dashboard row, with engagement counts."""

    reviews_total: int = 0
    comments_total: int = 0
    favorites_total: int = 0
