"""
CabinKit Core Module

Contains the foundation layer:
- Project model and field enums
- Numeric coercion and field aliases
- Dimension/area derivation

The ProjectStore lives in cabinkit.core.project_store and is imported
from there, since it depends on the cost estimator.
"""

from cabinkit.core.enums import (
    FoundationType,
    WallMaterial,
    RoofMaterial,
    TemplateStyle,
    PhaseStatus,
    SkillLevel,
)
from cabinkit.core.project import Project, new_project_id
from cabinkit.core.coercion import parse_number, coerce_number
from cabinkit.core.dimensions import compute_area, derive_area
from cabinkit.core.field_aliases import normalize_field

__all__ = [
    "FoundationType",
    "WallMaterial",
    "RoofMaterial",
    "TemplateStyle",
    "PhaseStatus",
    "SkillLevel",
    "Project",
    "new_project_id",
    "parse_number",
    "coerce_number",
    "compute_area",
    "derive_area",
    "normalize_field",
]
