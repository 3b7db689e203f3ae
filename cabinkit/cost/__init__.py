"""
cost/ - Cost Estimation.

Six-category estimate (Foundation, Framing, Roofing, Siding,
Windows/Doors, Interior) keyed by the project's foundation, wall and
roof selections.

Reads:
    - foundation_type
    - wall_material
    - roof_material
"""

from .enums import (
    CostCategory,
    CostConfidence,
)

from .schema import (
    CostLineItem,
    CostEstimate,
)

from .rates import (
    RateTable,
    CATEGORY_SELECTORS,
    DEFAULT_RATES,
    DEFAULT_KEY,
)

from .estimator import CostEstimator


__all__ = [
    # Enums
    "CostCategory",
    "CostConfidence",
    # Schema
    "CostLineItem",
    "CostEstimate",
    # Rates
    "RateTable",
    "CATEGORY_SELECTORS",
    "DEFAULT_RATES",
    "DEFAULT_KEY",
    # Estimator
    "CostEstimator",
]
