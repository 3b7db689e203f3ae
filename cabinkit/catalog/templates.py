"""
catalog/templates.py - Template gallery.

Starter designs a new project can be seeded from. Records coming from a
JSON file are validated with pydantic before they become Templates.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import json
import logging
import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cabinkit.core.enums import TemplateStyle, enum_from_value
from cabinkit.errors.exceptions import CatalogLoadError, TemplateNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Template:
    """A starter design."""
    template_id: str
    name: str
    description: str
    style: TemplateStyle
    default_width: float
    default_length: float
    default_height: Optional[float] = None
    image_url: Optional[str] = None

    @property
    def project_name(self) -> str:
        """Name given to projects seeded from this template."""
        return f"{self.name} Project"

    def seed_fields(self) -> Dict[str, float]:
        """Dimension update applied once when a project is seeded."""
        seed = {"width": self.default_width, "length": self.default_length}
        if self.default_height is not None:
            seed["height"] = self.default_height
        return seed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template_id": self.template_id,
            "name": self.name,
            "description": self.description,
            "style": self.style.value,
            "default_width": self.default_width,
            "default_length": self.default_length,
            "default_height": self.default_height,
            "image_url": self.image_url,
        }


class TemplateRecord(BaseModel):
    """Catalog file record. Accepts camelCase keys and decimal strings."""

    model_config = ConfigDict(populate_by_name=True)

    template_id: str = Field(alias="id")
    name: str
    description: str = ""
    style: TemplateStyle = Field(alias="type")
    default_width: float = Field(alias="defaultWidth")
    default_length: float = Field(alias="defaultLength")
    default_height: Optional[float] = Field(None, alias="defaultHeight")
    image_url: Optional[str] = Field(None, alias="imageUrl")

    @field_validator("template_id", "name")
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("style", mode="before")
    @classmethod
    def validate_style(cls, v):
        member = enum_from_value(TemplateStyle, v)
        if member is None:
            raise ValueError(f"Invalid style: {v}. Valid: {[s.value for s in TemplateStyle]}")
        return member

    @field_validator("default_width", "default_length", "default_height")
    @classmethod
    def validate_positive(cls, v):
        if v is None:
            return v
        if not math.isfinite(v) or v <= 0:
            raise ValueError("default dimensions must be positive and finite")
        return v

    def to_template(self) -> Template:
        return Template(
            template_id=self.template_id,
            name=self.name,
            description=self.description,
            style=self.style,
            default_width=self.default_width,
            default_length=self.default_length,
            default_height=self.default_height,
            image_url=self.image_url,
        )


BUILTIN_TEMPLATES: List[Template] = [
    Template(
        template_id="a-frame",
        name="A-Frame Cabin",
        description="Classic steep-roofed cabin with a lofted interior",
        style=TemplateStyle.A_FRAME,
        default_width=24.0,
        default_length=16.0,
        default_height=20.0,
    ),
    Template(
        template_id="tiny-house",
        name="Tiny House",
        description="Compact footprint sized for a trailer or small lot",
        style=TemplateStyle.TINY_HOUSE,
        default_width=8.5,
        default_length=24.0,
        default_height=13.5,
    ),
    Template(
        template_id="log-cabin",
        name="Log Cabin",
        description="Traditional log walls with a covered porch",
        style=TemplateStyle.LOG_CABIN,
        default_width=20.0,
        default_length=30.0,
        default_height=14.0,
    ),
    Template(
        template_id="modern",
        name="Modern Cabin",
        description="Shed roof and large glazing on a simple rectangle",
        style=TemplateStyle.MODERN,
        default_width=28.0,
        default_length=20.0,
        default_height=12.0,
    ),
]


class TemplateCatalog:
    """
    Read-only template lookup.

    Usage:
        catalog = TemplateCatalog()
        template = catalog.get("a-frame")
    """

    def __init__(self, templates: Optional[Iterable[Template]] = None):
        source = BUILTIN_TEMPLATES if templates is None else templates
        self._templates: Dict[str, Template] = {}
        for template in source:
            if template.template_id in self._templates:
                raise CatalogLoadError(f"Duplicate template id: {template.template_id}")
            self._templates[template.template_id] = template

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def list_templates(self) -> List[Template]:
        """All templates, ordered by name."""
        return sorted(self._templates.values(), key=lambda t: t.name.lower())

    def get(self, template_id: str) -> Template:
        """
        Look up a template.

        Raises:
            TemplateNotFoundError: If the id is not in the catalog
        """
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id) from None

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "TemplateCatalog":
        """
        Build a catalog from raw records.

        Raises:
            CatalogLoadError: If any record fails validation
        """
        templates = []
        for index, record in enumerate(records):
            try:
                templates.append(TemplateRecord.model_validate(record).to_template())
            except ValidationError as e:
                raise CatalogLoadError(f"Invalid template record at index {index}: {e}") from e
        return cls(templates)

    @classmethod
    def from_file(cls, filepath: str) -> "TemplateCatalog":
        """
        Load a catalog from a JSON file.

        The file holds either a list of records or an object with a
        "templates" list.

        Raises:
            CatalogLoadError: If the file is missing, unreadable or invalid
        """
        path = Path(filepath)
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Cannot read template catalog {filepath}: {e}") from e

        if isinstance(data, dict):
            data = data.get("templates")
        if not isinstance(data, list):
            raise CatalogLoadError(f"Template catalog {filepath} must contain a list of templates")

        catalog = cls.from_records(data)
        logger.info(f"Loaded {len(catalog)} templates from {filepath}")
        return catalog
