"""
cost/schema.py - Cost data structures.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from cabinkit.errors.taxonomy import CabinIssue
from .enums import CostCategory, CostConfidence
from .rates import CATEGORY_SELECTORS


@dataclass
class CostLineItem:
    """One category of the estimate."""
    category: CostCategory
    amount: float
    selection: Optional[str] = None  # rate key used; None when the default applied
    running_total: float = 0.0

    @property
    def label(self) -> str:
        return self.category.label

    @property
    def used_default(self) -> bool:
        return self.selection is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "amount": round(self.amount, 2),
            "selection": self.selection,
            "running_total": round(self.running_total, 2),
        }


@dataclass
class CostEstimate:
    """Itemized estimate for one project."""
    project_id: str
    project_name: str = ""
    estimate_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    currency: str = "USD"

    line_items: List[CostLineItem] = field(default_factory=list)
    issues: List[CabinIssue] = field(default_factory=list)

    @property
    def total(self) -> float:
        """Sum of line item amounts, recomputed on every access."""
        return sum(item.amount for item in self.line_items)

    @property
    def confidence(self) -> CostConfidence:
        if any(item.used_default and CATEGORY_SELECTORS[item.category] is not None for item in self.line_items):
            return CostConfidence.PLACEHOLDER
        return CostConfidence.SELECTED

    def add_item(self, item: CostLineItem) -> None:
        """Append a line item and stamp its running total."""
        self.line_items.append(item)
        item.running_total = self.total

    def get_item(self, category: CostCategory) -> Optional[CostLineItem]:
        for item in self.line_items:
            if item.category == category:
                return item
        return None

    def by_category(self) -> Dict[str, float]:
        return {item.label: item.amount for item in self.line_items}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project_id": self.project_id,
            "project_name": self.project_name,
            "estimate_date": self.estimate_date.isoformat(),
            "currency": self.currency,
            "confidence": self.confidence.value,
            "line_items": [item.to_dict() for item in self.line_items],
            "total": round(self.total, 2),
            "issues": [issue.to_dict() for issue in self.issues],
        }
