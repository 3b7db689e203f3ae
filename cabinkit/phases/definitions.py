"""
phases/definitions.py - Phase set, build order and guide content.

Four phases for the current scope. `depends_on` encodes the build
sequence; `requires` lists the project fields a phase needs before it can
be classified from configuration.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from cabinkit.core.enums import PhaseStatus, SkillLevel
from .schema import BuildStep, PhaseAffordance


@dataclass(frozen=True)
class PhaseDefinition:
    """Static description of a construction phase."""
    name: str
    position: int
    duration_days: str
    description: str
    reference_status: PhaseStatus
    configured_status: PhaseStatus
    depends_on: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    steps: Tuple[BuildStep, ...] = field(default_factory=tuple)


PHASE_DEFINITIONS: List[PhaseDefinition] = [
    PhaseDefinition(
        name="Foundation",
        position=1,
        duration_days="3-5",
        description="Prepare site & pour concrete",
        reference_status=PhaseStatus.READY,
        configured_status=PhaseStatus.READY,
        requires=("width", "length", "foundation_type"),
        steps=(
            BuildStep(
                title="Site Preparation",
                description="Clear and level the building site. Mark the foundation "
                            "perimeter using stakes and string.",
                tools="Shovel, level, measuring tape, stakes, string line",
            ),
            BuildStep(
                title="Excavation",
                description="Dig foundation to required depth (typically 6-8 inches for "
                            "slab). Ensure proper drainage.",
                safety="Call 811 before digging to mark underground utilities",
            ),
            BuildStep(
                title="Concrete Pour",
                description="Pour and level concrete slab. Allow proper curing time "
                            "(minimum 48 hours).",
                tools="Concrete mixer, trowel, float, level",
            ),
        ),
    ),
    PhaseDefinition(
        name="Framing",
        position=2,
        duration_days="5-7",
        description="Build wall frames",
        reference_status=PhaseStatus.MODERATE,
        configured_status=PhaseStatus.MODERATE,
        depends_on=("Foundation",),
        requires=("width", "length", "height", "wall_material"),
        steps=(
            BuildStep(
                title="Floor Platform",
                description="Construct the floor platform using pressure-treated lumber "
                            "and plywood subfloor.",
                tools="Circular saw, drill, level, measuring tape",
            ),
            BuildStep(
                title="Wall Framing",
                description="Frame exterior and interior walls according to plans. "
                            "Include rough openings for doors and windows.",
                tools="Framing hammer, circular saw, speed square",
            ),
        ),
    ),
    PhaseDefinition(
        name="Roofing",
        position=3,
        duration_days="3-4",
        description="Install roof structure",
        reference_status=PhaseStatus.PENDING,
        configured_status=PhaseStatus.MODERATE,
        depends_on=("Framing",),
        requires=("roof_material",),
    ),
    PhaseDefinition(
        name="Electrical",
        position=4,
        duration_days="2-3",
        description="Wiring & outlets",
        reference_status=PhaseStatus.PROFESSIONAL,
        configured_status=PhaseStatus.PROFESSIONAL,
        depends_on=("Framing",),
    ),
]

PHASES_BY_NAME: Dict[str, PhaseDefinition] = {p.name: p for p in PHASE_DEFINITIONS}

# Skill floor implied by each status
STATUS_SKILL: Dict[PhaseStatus, SkillLevel] = {
    PhaseStatus.READY: SkillLevel.BEGINNER,
    PhaseStatus.MODERATE: SkillLevel.INTERMEDIATE,
    PhaseStatus.PENDING: SkillLevel.INTERMEDIATE,
    PhaseStatus.PROFESSIONAL: SkillLevel.PROFESSIONAL,
}

STATUS_AFFORDANCE: Dict[PhaseStatus, PhaseAffordance] = {
    PhaseStatus.READY: PhaseAffordance(icon="✓", color="cabin-green", label="Ready"),
    PhaseStatus.MODERATE: PhaseAffordance(icon="⚠", color="cabin-gold", label="Moderate"),
    PhaseStatus.PENDING: PhaseAffordance(icon="⏳", color="gray", label="Pending"),
    PhaseStatus.PROFESSIONAL: PhaseAffordance(icon="\U0001f527", color="red", label="Professional"),
}
