"""
CabinKit Constants

Field groups and defaults used across the core.
"""

from typing import FrozenSet

PROJECT_SCHEMA_VERSION = "1.0.0"

# Raw numeric inputs, entered as text in the UI
NUMERIC_FIELDS: FrozenSet[str] = frozenset(["width", "length", "height"])

# Single-choice selections
CHOICE_FIELDS: FrozenSet[str] = frozenset([
    "foundation_type",
    "wall_material",
    "roof_material",
])

# Free text
TEXT_FIELDS: FrozenSet[str] = frozenset(["name", "description"])

# Optional reference to the seeding template
REFERENCE_FIELDS: FrozenSet[str] = frozenset(["template_id"])

# Computed by the store, never written by callers
DERIVED_FIELDS: FrozenSet[str] = frozenset(["area", "estimated_cost"])

# Owned by the store
READ_ONLY_FIELDS: FrozenSet[str] = frozenset([
    "project_id",
    "created_at",
    "updated_at",
    "version",
]) | DERIVED_FIELDS

UPDATABLE_FIELDS: FrozenSet[str] = (
    NUMERIC_FIELDS | CHOICE_FIELDS | TEXT_FIELDS | REFERENCE_FIELDS
)

# Fallback for unparseable numeric text
NUMERIC_FALLBACK = 0.0

DEFAULT_HISTORY_LIMIT = 500
