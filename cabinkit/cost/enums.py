"""
cost/enums.py - Cost estimation enumerations.
"""

from enum import Enum


class CostCategory(Enum):
    """Estimate categories, in display order."""
    FOUNDATION = "Foundation"
    FRAMING = "Framing"
    ROOFING = "Roofing"
    SIDING = "Siding"
    WINDOWS_DOORS = "Windows/Doors"
    INTERIOR = "Interior"

    @property
    def label(self) -> str:
        return self.value


class CostConfidence(Enum):
    """How much of the estimate is keyed by real selections."""
    PLACEHOLDER = "placeholder"  # at least one category priced from its default
    SELECTED = "selected"        # every selection-keyed category resolved
