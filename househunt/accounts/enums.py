import enum

from househunt.utils import CaseInsensitiveEnum


class UserRole(CaseInsensitiveEnum, str, enum.Enum):
    """Global user roles. Immutable once the account exists."""

    TENANT = "TENANT"
    LANDLORD = "LANDLORD"
    ADMIN = "ADMIN"


class IdType(CaseInsensitiveEnum, str, enum.Enum):
    PASSPORT = "PASSPORT"
    DRIVER_LICENSE = "DRIVER_LICENSE"
    NATIONAL_ID = "NATIONAL_ID"


class VerificationStatus(CaseInsensitiveEnum, str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
