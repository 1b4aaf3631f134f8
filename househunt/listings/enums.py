import enum

from househunt.utils import CaseInsensitiveEnum


class HouseType(CaseInsensitiveEnum, str, enum.Enum):
    BEDSITTER = "BEDSITTER"
    ONE_BR = "1BR"
    TWO_BR = "2BR"
    THREE_BR = "3BR"
    FOUR_BR_PLUS = "4BR_PLUS"


class HouseStatus(str, enum.Enum):
    """Any status can move to any other. Values are matched exactly."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    DELISTED = "DELISTED"


class AmenityType(CaseInsensitiveEnum, str, enum.Enum):
    WIFI = "WIFI"
    PARKING = "PARKING"
    WATER_24H = "WATER_24H"
    SECURITY = "SECURITY"
    GATE = "GATE"
    SHOPPING_NEARBY = "SHOPPING_NEARBY"
    SCHOOL_NEARBY = "SCHOOL_NEARBY"
    PUBLIC_TRANSPORT = "PUBLIC_TRANSPORT"
    FURNISHED = "FURNISHED"
    KITCHEN_EQUIPPED = "KITCHEN_EQUIPPED"
    BALCONY = "BALCONY"
    GARDEN = "GARDEN"
    PET_FRIENDLY = "PET_FRIENDLY"
    CCTV = "CCTV"
    BACKUP_POWER = "BACKUP_POWER"
