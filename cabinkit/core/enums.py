"""
CabinKit Core Enumerations

Selection and classification enums shared by the store, the cost
estimator and the phase classifier.
"""

from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class FoundationType(str, Enum):
    """Foundation options offered by the properties panel."""
    CONCRETE_SLAB = "concrete-slab"
    PIER_FOUNDATION = "pier-foundation"
    CRAWL_SPACE = "crawl-space"


class WallMaterial(str, Enum):
    """Wall construction options."""
    WOOD_2X6 = "2x6-wood"
    WOOD_2X8 = "2x8-wood"
    LOG = "log"
    STEEL = "steel"


class RoofMaterial(str, Enum):
    """Roofing options."""
    METAL = "metal"
    ASPHALT = "asphalt"
    CEDAR = "cedar"


class TemplateStyle(str, Enum):
    """Template gallery styles."""
    A_FRAME = "a-frame"
    TINY_HOUSE = "tiny-house"
    LOG_CABIN = "log-cabin"
    MODERN = "modern"


class PhaseStatus(str, Enum):
    """
    Readiness classification of a construction phase.

    Drives both the UI affordance and the skill gate.
    """
    READY = "ready"
    MODERATE = "moderate"
    PENDING = "pending"
    PROFESSIONAL = "professional"


class SkillLevel(str, Enum):
    """Minimum builder skill required for a phase."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    PROFESSIONAL = "professional"


def enum_from_value(enum_cls: Type[E], value: object) -> Optional[E]:
    """
    Resolve a raw value to a member of enum_cls.

    Accepts a member, its value, or its name (case-insensitive).
    Returns None when nothing matches.
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    for member in enum_cls:
        if member.value == text or member.value == text.lower():
            return member
        if member.name == text.upper():
            return member
    return None
