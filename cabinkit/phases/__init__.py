"""
phases/ - Construction Phase Timeline.

Foundation -> Framing -> Roofing -> Electrical, each classified as
ready / moderate / pending / professional with a duration range and a
minimum skill level, plus checked-off build-guide progress.
"""

from .schema import (
    BuildStep,
    ConstructionPhase,
    PhaseAffordance,
)

from .definitions import (
    PhaseDefinition,
    PHASE_DEFINITIONS,
    PHASES_BY_NAME,
    STATUS_SKILL,
    STATUS_AFFORDANCE,
)

from .rules import (
    StatusPolicy,
    is_field_set,
    missing_fields,
)

from .classifier import PhaseClassifier, resolve_policy
from .progress import BuildProgress, PhaseProgress


__all__ = [
    # Schema
    "BuildStep",
    "ConstructionPhase",
    "PhaseAffordance",
    # Definitions
    "PhaseDefinition",
    "PHASE_DEFINITIONS",
    "PHASES_BY_NAME",
    "STATUS_SKILL",
    "STATUS_AFFORDANCE",
    # Rules
    "StatusPolicy",
    "is_field_set",
    "missing_fields",
    # Classifier
    "PhaseClassifier",
    "resolve_policy",
    # Progress
    "BuildProgress",
    "PhaseProgress",
]
