"""
phases/rules.py - Status policies.

Two policies decide a phase's status:

- "static": the fixed status per phase the designer UI shows
  (Foundation ready, Framing moderate, Roofing pending, Electrical
  professional), independent of the project.
- "configuration": status follows configuration completeness. A phase
  earns its configured status once every field it requires is set;
  otherwise it is pending. A later phase is capped to pending while an
  earlier phase it depends on is pending.

Professional phases are a skill gate, not a readiness level, so they keep
their status under both policies.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Tuple

from cabinkit.core.enums import PhaseStatus
from .definitions import PhaseDefinition


class StatusPolicy(str, Enum):
    """Which rule table classifies phases."""
    STATIC = "static"
    CONFIGURATION = "configuration"


def is_field_set(project: Any, name: str) -> bool:
    """A numeric field counts once positive; anything else once not None/empty."""
    value = getattr(project, name, None)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value > 0
    if isinstance(value, str):
        return len(value.strip()) > 0
    return True


def missing_fields(project: Any, definition: PhaseDefinition) -> Tuple[str, ...]:
    """Required fields of a phase the project has not set yet."""
    return tuple(name for name in definition.requires if not is_field_set(project, name))


def static_status(definition: PhaseDefinition, project: Any = None) -> PhaseStatus:
    """Reference status, ignoring the project."""
    return definition.reference_status


def configured_status(
    definition: PhaseDefinition,
    project: Any,
    upstream: Dict[str, PhaseStatus],
) -> PhaseStatus:
    """
    Status from configuration completeness.

    Args:
        definition: Phase being classified
        project: Project to read required fields from
        upstream: Statuses already assigned to earlier phases
    """
    if definition.configured_status == PhaseStatus.PROFESSIONAL:
        return PhaseStatus.PROFESSIONAL

    if missing_fields(project, definition):
        return PhaseStatus.PENDING

    for name in definition.depends_on:
        if upstream.get(name) == PhaseStatus.PENDING:
            return PhaseStatus.PENDING

    return definition.configured_status
