from enum import Enum
from typing import List

from .errors import ValidationError


class _Choice(str, Enum):
    """Base for the fixed option sets offered by the player form."""

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, raw, field: str = None):
        if isinstance(raw, cls):
            return raw
        field = field or cls.__name__.lower()
        if isinstance(raw, str):
            wanted = raw.strip().lower()
            for member in cls:
                if member.value.lower() == wanted:
                    return member
        raise ValidationError(
            f"Invalid {field}: expected one of {', '.join(cls.values())}",
            fields=[field]
        )


class Role(_Choice):
    TOP = "Top"
    JUNGLE = "Jungle"
    MID = "Mid"
    CARRY = "Carry"
    SUPPORT = "Support"


class Rank(_Choice):
    IRON = "Iron"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    DIAMOND = "Diamond"
    MASTER = "Master"
    GRANDMASTER = "Grandmaster"
    CHALLENGER = "Challenger"


class Gender(_Choice):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    UNDISCLOSED = "Undisclosed"
