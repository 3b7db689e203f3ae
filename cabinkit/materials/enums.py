"""
materials/enums.py - Material library enumerations.
"""

from enum import Enum


class MaterialCategory(str, Enum):
    """Material library categories, in display order."""
    STRUCTURAL = "structural"
    ROOFING = "roofing"
    SIDING = "siding"
    INSULATION = "insulation"
    WINDOWS = "windows"
    DOORS = "doors"
    INTERIOR = "interior"

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def description(self) -> str:
        return _CATEGORY_DESCRIPTIONS[self]


_CATEGORY_DESCRIPTIONS = {
    MaterialCategory.STRUCTURAL: "Framing and foundation materials",
    MaterialCategory.ROOFING: "Roof materials and components",
    MaterialCategory.SIDING: "Exterior wall materials",
    MaterialCategory.INSULATION: "Thermal insulation materials",
    MaterialCategory.WINDOWS: "Windows and glazing",
    MaterialCategory.DOORS: "Doors and hardware",
    MaterialCategory.INTERIOR: "Interior finishing materials",
}
