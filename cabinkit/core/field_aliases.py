"""
CabinKit Field Aliases

Maps the names the web client uses to canonical project fields.
"""

import re
from typing import Dict

# ==================== Field Alias Mapping ====================
# Format: "alias" -> "canonical_field"

FIELD_ALIASES: Dict[str, str] = {
    # Identity
    "id": "project_id",
    "projectId": "project_id",
    "templateId": "template_id",
    "template": "template_id",

    # Dimensions
    "w": "width",
    "l": "length",
    "h": "height",
    "floor_area": "area",
    "floorArea": "area",

    # Selections
    "foundationType": "foundation_type",
    "foundation": "foundation_type",
    "wallMaterial": "wall_material",
    "walls": "wall_material",
    "roofMaterial": "roof_material",
    "roofing": "roof_material",
    "roof": "roof_material",

    # Derived / timestamps
    "estimatedCost": "estimated_cost",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_field(name: str) -> str:
    """
    Normalize a field name to its canonical form.

    Explicit aliases win; otherwise camelCase is folded to snake_case.

    Args:
        name: Field name as sent by the caller

    Returns:
        Canonical field name
    """
    name = name.strip()
    if name in FIELD_ALIASES:
        return FIELD_ALIASES[name]
    return _CAMEL_BOUNDARY.sub("_", name).lower()

