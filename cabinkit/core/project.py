"""
CabinKit Project

The typed design document the store mutates. Raw inputs live next to the
derived fields; the derived ones are only ever written by the store.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import uuid

from cabinkit.core.coercion import parse_number
from cabinkit.core.constants import NUMERIC_FIELDS, PROJECT_SCHEMA_VERSION
from cabinkit.core.enums import (
    FoundationType,
    WallMaterial,
    RoofMaterial,
    enum_from_value,
)


def new_project_id() -> str:
    """Opaque project identity."""
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass
class Project:
    """
    A user's in-progress building design.

    Identity is assigned at creation and never changes. `area` and
    `estimated_cost` are derived and must be reproducible from the raw
    fields at any time.
    """

    # ==================== Identity ====================
    project_id: str = field(default_factory=new_project_id)
    version: str = PROJECT_SCHEMA_VERSION

    # ==================== Descriptive ====================
    name: str = ""
    description: str = ""
    template_id: Optional[str] = None

    # ==================== Dimensions (ft) ====================
    width: float = 0.0
    length: float = 0.0
    height: float = 0.0

    # ==================== Selections ====================
    foundation_type: Optional[FoundationType] = None
    wall_material: Optional[WallMaterial] = None
    roof_material: Optional[RoofMaterial] = None

    # ==================== Derived ====================
    area: float = 0.0
    estimated_cost: Optional[float] = None

    # ==================== Timestamps ====================
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def cost_label(self) -> str:
        """Estimated cost as display text; 'TBD' until computed."""
        if self.estimated_cost is None:
            return "TBD"
        return f"${self.estimated_cost:,.0f}"

    def get(self, name: str, default: Any = None) -> Any:
        """Field access by name, mirroring a mapping."""
        value = getattr(self, name, default)
        return default if value is None else value

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for hand-off to a persistence collaborator."""
        return {
            "project_id": self.project_id,
            "version": self.version,
            "name": self.name,
            "description": self.description,
            "template_id": self.template_id,
            "width": self.width,
            "length": self.length,
            "height": self.height,
            "foundation_type": self.foundation_type.value if self.foundation_type else None,
            "wall_material": self.wall_material.value if self.wall_material else None,
            "roof_material": self.roof_material.value if self.roof_material else None,
            "area": self.area,
            "estimated_cost": self.estimated_cost,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """
        Rebuild a project from to_dict() output.

        Numeric columns may come back as decimal text ("24.00"); they are
        parsed the same way UI input is. Stored derived values are not
        re-derived; run the project through a ProjectStore for that.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}

        kwargs["foundation_type"] = enum_from_value(FoundationType, data.get("foundation_type"))
        kwargs["wall_material"] = enum_from_value(WallMaterial, data.get("wall_material"))
        kwargs["roof_material"] = enum_from_value(RoofMaterial, data.get("roof_material"))

        for name in NUMERIC_FIELDS | {"area"}:
            if name in kwargs:
                kwargs[name] = parse_number(kwargs[name])
        if kwargs.get("estimated_cost") is not None:
            kwargs["estimated_cost"] = parse_number(kwargs["estimated_cost"])

        for ts in ("created_at", "updated_at"):
            if ts in kwargs:
                parsed = _parse_timestamp(kwargs[ts])
                if parsed is None:
                    del kwargs[ts]
                else:
                    kwargs[ts] = parsed

        return cls(**kwargs)

    def summary(self) -> str:
        """One-line summary for logs."""
        return (
            f"Project({self.name or 'Untitled'}: {self.width:g}x{self.length:g} ft, "
            f"{self.area:g} sq ft, cost {self.cost_label})"
        )
