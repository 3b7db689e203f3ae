"""
materials/catalog.py - Material library.

Browsable list of materials with category filtering and text search.
Inactive materials can still be looked up by id but are not listed.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import json
import logging

from pydantic import ValidationError

from cabinkit.core.enums import enum_from_value
from cabinkit.errors.exceptions import CatalogLoadError, MaterialNotFoundError
from .enums import MaterialCategory
from .models import Material, MaterialRecord

logger = logging.getLogger(__name__)


BUILTIN_MATERIALS: List[Material] = [
    Material(
        material_id="pt-2x6",
        name="Pressure Treated 2x6",
        category=MaterialCategory.STRUCTURAL,
        unit="board",
        price_per_unit=8.50,
        description="High-quality lumber for framing",
        suggested_quantity=24,
    ),
    Material(
        material_id="2x8-joist",
        name="2x8 Floor Joists",
        category=MaterialCategory.STRUCTURAL,
        unit="board",
        price_per_unit=12.75,
        description="Strong support for flooring",
        suggested_quantity=16,
    ),
    Material(
        material_id="osb-sheathing",
        name="OSB Sheathing",
        category=MaterialCategory.SIDING,
        unit="sheet",
        price_per_unit=32.00,
        description="Structural wall sheathing",
        suggested_quantity=18,
    ),
    Material(
        material_id="concrete-mix",
        name="Concrete Mix",
        category=MaterialCategory.STRUCTURAL,
        unit="bag",
        price_per_unit=4.25,
        description="Foundation concrete",
        suggested_quantity=45,
    ),
    Material(
        material_id="metal-roofing",
        name="Metal Roofing",
        category=MaterialCategory.ROOFING,
        unit="sq ft",
        price_per_unit=3.85,
        description="Corrugated steel panels",
        suggested_quantity=520,
    ),
    Material(
        material_id="fastener-kit",
        name="Fastener Kit",
        category=MaterialCategory.STRUCTURAL,
        unit="kit",
        price_per_unit=285.00,
        description="Screws, nails & hardware",
        suggested_quantity=1,
    ),
]


class MaterialCatalog:
    """
    Read-only material lookup.

    Usage:
        catalog = MaterialCatalog()
        lumber = catalog.list_materials(category="structural", search="2x")
        joist = catalog.get("2x8-joist")
    """

    def __init__(self, materials: Optional[Iterable[Material]] = None):
        source = BUILTIN_MATERIALS if materials is None else materials
        self._materials: Dict[str, Material] = {}
        for material in source:
            if material.material_id in self._materials:
                raise CatalogLoadError(f"Duplicate material id: {material.material_id}")
            self._materials[material.material_id] = material

    def __len__(self) -> int:
        return len(self._materials)

    def __contains__(self, material_id: object) -> bool:
        return material_id in self._materials

    def categories(self) -> List[MaterialCategory]:
        """Every category, in display order."""
        return list(MaterialCategory)

    def list_materials(
        self,
        category: Optional[Union[str, MaterialCategory]] = None,
        search: Optional[str] = None,
    ) -> List[Material]:
        """
        Active materials, ordered by name.

        Args:
            category: Only materials in this category. An unknown category
                matches nothing.
            search: Case-insensitive text matched against name and
                description. Blank means no filter.
        """
        materials = [m for m in self._materials.values() if m.is_active]

        if category is not None:
            wanted = enum_from_value(MaterialCategory, category)
            if wanted is None:
                logger.debug(f"Unknown material category '{category}'; nothing listed")
                return []
            materials = [m for m in materials if m.category == wanted]

        if search and search.strip():
            materials = [m for m in materials if m.matches(search)]

        return sorted(materials, key=lambda m: m.name.lower())

    def get(self, material_id: str) -> Material:
        """
        Look up a material.

        Raises:
            MaterialNotFoundError: If the id is not in the library
        """
        try:
            return self._materials[material_id]
        except KeyError:
            raise MaterialNotFoundError(material_id) from None

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "MaterialCatalog":
        """
        Build a library from raw records.

        Raises:
            CatalogLoadError: If any record fails validation
        """
        materials = []
        for index, record in enumerate(records):
            try:
                materials.append(MaterialRecord.model_validate(record).to_material())
            except ValidationError as e:
                raise CatalogLoadError(f"Invalid material record at index {index}: {e}") from e
        return cls(materials)

    @classmethod
    def from_file(cls, filepath: str) -> "MaterialCatalog":
        """
        Load a library from a JSON file holding a list of records or an
        object with a "materials" list.

        Raises:
            CatalogLoadError: If the file is missing, unreadable or invalid
        """
        path = Path(filepath)
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Cannot read material library {filepath}: {e}") from e

        if isinstance(data, dict):
            data = data.get("materials")
        if not isinstance(data, list):
            raise CatalogLoadError(f"Material library {filepath} must contain a list of materials")

        catalog = cls.from_records(data)
        logger.info(f"Loaded {len(catalog)} materials from {filepath}")
        return catalog
