"""
phases/schema.py - Timeline data structures.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from cabinkit.core.enums import PhaseStatus, SkillLevel


@dataclass(frozen=True)
class BuildStep:
    """One instruction in a phase's build guide."""
    title: str
    description: str
    tools: Optional[str] = None
    safety: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "tools": self.tools,
            "safety": self.safety,
        }


@dataclass(frozen=True)
class PhaseAffordance:
    """Presentation hint attached to a status."""
    icon: str
    color: str
    label: str


@dataclass(frozen=True)
class ConstructionPhase:
    """A classified phase on the build timeline. Derived, never stored."""
    name: str
    position: int
    status: PhaseStatus
    duration_days: str
    skill_level: SkillLevel
    description: str = ""
    affordance: Optional[PhaseAffordance] = None
    missing_fields: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_professional_only(self) -> bool:
        return self.skill_level == SkillLevel.PROFESSIONAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": self.position,
            "status": self.status.value,
            "duration_days": self.duration_days,
            "skill_level": self.skill_level.value,
            "description": self.description,
            "icon": self.affordance.icon if self.affordance else None,
            "color": self.affordance.color if self.affordance else None,
            "label": self.affordance.label if self.affordance else self.status.value.title(),
            "missing_fields": list(self.missing_fields),
        }
