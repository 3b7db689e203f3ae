"""
materials/ - Material Library.

Categorized materials with unit prices, and per-project material lists
priced as quantity x unit price.
"""

from .enums import MaterialCategory

from .models import (
    Material,
    MaterialRecord,
    MaterialLineItem,
    MaterialTakeoffResult,
)

from .catalog import MaterialCatalog, BUILTIN_MATERIALS
from .takeoff import MaterialTakeoff


__all__ = [
    # Enums
    "MaterialCategory",
    # Models
    "Material",
    "MaterialRecord",
    "MaterialLineItem",
    "MaterialTakeoffResult",
    # Library
    "MaterialCatalog",
    "BUILTIN_MATERIALS",
    "MaterialTakeoff",
]
