"""
cost/estimator.py - Cost estimation engine.
"""

from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, TYPE_CHECKING
import logging

from cabinkit.errors.taxonomy import create_missing_selection_issue
from .enums import CostCategory
from .rates import RateTable
from .schema import CostEstimate, CostLineItem

if TYPE_CHECKING:
    from cabinkit.core.project import Project

logger = logging.getLogger(__name__)


class CostEstimator:
    """
    Maps a project's selections to the six-category estimate.

    Categories keyed by a selection fall back to their default figure
    when the selection is missing; the estimate records an issue for each
    such line instead of failing.
    """

    def __init__(self, rates: Optional[RateTable] = None, currency: str = "USD"):
        self.rates = rates if rates is not None else RateTable()
        self.currency = currency

    def estimate(self, project: "Project") -> CostEstimate:
        """
        Generate the itemized estimate.

        Reads:
        - foundation_type (Foundation)
        - wall_material (Framing, Siding)
        - roof_material (Roofing)

        Returns:
            CostEstimate whose total is the sum of its line items
        """
        estimate = CostEstimate(
            project_id=project.project_id,
            project_name=project.name,
            estimate_date=datetime.now(timezone.utc),
            currency=self.currency,
        )

        for category in CostCategory:
            selector = self.rates.selector_for(category)
            selection = _selection_key(project.get(selector)) if selector else None

            amount, key = self.rates.lookup(category, selection)
            estimate.add_item(CostLineItem(category=category, amount=amount, selection=key))

            if selector and key is None:
                issue = create_missing_selection_issue(selector, category.label, amount)
                estimate.issues.append(issue)
                logger.debug(issue.message)

        return estimate

    def total_for(self, project: "Project") -> float:
        """Estimate total only."""
        return self.estimate(project).total


def _selection_key(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    return str(value)
