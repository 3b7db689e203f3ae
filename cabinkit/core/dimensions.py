"""
CabinKit Dimension/Area Deriver

Floor area from the footprint dimensions.
"""

from typing import Any, Mapping


def compute_area(width: float, length: float) -> float:
    """
    Floor area of a rectangular footprint.

    Negative dimensions are clamped to 0 before multiplying, so a stray
    minus sign never produces a negative area.
    """
    return max(0.0, float(width)) * max(0.0, float(length))


def derive_area(fields: Mapping[str, Any]) -> float:
    """Derive area from a mapping holding post-merge width and length."""
    return compute_area(fields.get("width") or 0.0, fields.get("length") or 0.0)
