"""
materials/models.py - Material library data structures.

Library records from a JSON file go through pydantic; everything the
library hands out is a plain dataclass.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cabinkit.core.enums import enum_from_value
from cabinkit.errors.taxonomy import CabinIssue
from .enums import MaterialCategory


@dataclass(frozen=True)
class Material:
    """A purchasable material."""
    material_id: str
    name: str
    category: MaterialCategory
    unit: str  # 'board', 'sq ft', 'bag', 'sheet', ...
    price_per_unit: Optional[float] = None
    description: str = ""
    image_url: Optional[str] = None
    suggested_quantity: Optional[float] = None
    is_active: bool = True

    @property
    def is_priced(self) -> bool:
        return self.price_per_unit is not None

    def matches(self, search: str) -> bool:
        """Case-insensitive match on name or description."""
        needle = search.strip().lower()
        return needle in self.name.lower() or needle in self.description.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "material_id": self.material_id,
            "name": self.name,
            "category": self.category.value,
            "unit": self.unit,
            "price_per_unit": self.price_per_unit,
            "description": self.description,
            "image_url": self.image_url,
            "suggested_quantity": self.suggested_quantity,
            "is_active": self.is_active,
        }


class MaterialRecord(BaseModel):
    """Material library file record. Accepts camelCase keys and decimal strings."""

    model_config = ConfigDict(populate_by_name=True)

    material_id: str = Field(alias="id")
    name: str
    category: MaterialCategory = Field(alias="categoryId")
    unit: str
    price_per_unit: Optional[float] = Field(None, alias="pricePerUnit")
    description: Optional[str] = ""
    image_url: Optional[str] = Field(None, alias="imageUrl")
    suggested_quantity: Optional[float] = Field(None, alias="quantityNeeded")
    is_active: bool = Field(True, alias="isActive")

    @field_validator("material_id", "name", "unit")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v):
        member = enum_from_value(MaterialCategory, v)
        if member is None:
            raise ValueError(f"Invalid category: {v}. Valid: {[c.value for c in MaterialCategory]}")
        return member

    @field_validator("price_per_unit", "suggested_quantity")
    @classmethod
    def validate_non_negative(cls, v):
        if v is None:
            return v
        if not math.isfinite(v) or v < 0:
            raise ValueError("must be a finite, non-negative number")
        return v

    def to_material(self) -> Material:
        return Material(
            material_id=self.material_id,
            name=self.name,
            category=self.category,
            unit=self.unit,
            price_per_unit=self.price_per_unit,
            description=self.description or "",
            image_url=self.image_url,
            suggested_quantity=self.suggested_quantity,
            is_active=self.is_active,
        )


@dataclass
class MaterialLineItem:
    """One material on a project's takeoff."""
    material: Material
    quantity: float

    @property
    def line_cost(self) -> float:
        """Price times quantity; an unpriced material costs nothing yet."""
        if self.material.price_per_unit is None:
            return 0.0
        return self.material.price_per_unit * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "material_id": self.material.material_id,
            "name": self.material.name,
            "category": self.material.category.value,
            "unit": self.material.unit,
            "price_per_unit": self.material.price_per_unit,
            "quantity": round(self.quantity, 2),
            "line_cost": round(self.line_cost, 2),
        }


@dataclass
class MaterialTakeoffResult:
    """Priced material list for one project."""
    items: List[MaterialLineItem] = field(default_factory=list)
    issues: List[CabinIssue] = field(default_factory=list)
    currency: str = "USD"

    @property
    def total(self) -> float:
        """Sum of line costs, recomputed on every access."""
        return sum(item.line_cost for item in self.items)

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def unpriced(self) -> List[str]:
        """Ids of materials on the list that have no price."""
        return [i.material.material_id for i in self.items if not i.material.is_priced]

    def get_item(self, material_id: str) -> Optional[MaterialLineItem]:
        for item in self.items:
            if item.material.material_id == material_id:
                return item
        return None

    def by_category(self) -> Dict[str, float]:
        totals: Dict[str, float] = {}
        for item in self.items:
            key = item.material.category.value
            totals[key] = totals.get(key, 0.0) + item.line_cost
        return totals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [i.to_dict() for i in self.items],
            "summary": {
                "total": round(self.total, 2),
                "currency": self.currency,
                "by_category": {k: round(v, 2) for k, v in self.by_category().items()},
                "unpriced": self.unpriced,
            },
            "item_count": self.item_count,
            "issues": [i.to_dict() for i in self.issues],
        }
