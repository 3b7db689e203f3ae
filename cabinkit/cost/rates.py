"""
cost/rates.py - Category rate table.

Figures are keyed by (category, selection). Every category has a
"default" entry used when the project has no selection for it, so a
half-configured project still gets a full estimate.

The default figures are the placeholder table the designer UI shows
(Foundation $2,800 ... Interior $2,700, total $18,500).
"""

from __future__ import annotations
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Type
import copy
import json
import logging

from cabinkit.core.enums import (
    FoundationType,
    WallMaterial,
    RoofMaterial,
    enum_from_value,
)
from cabinkit.errors.exceptions import ConfigurationError
from .enums import CostCategory

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"

# Project field (and its enum) that keys each category; None = flat figure
CATEGORY_SELECTORS: Dict[CostCategory, Optional[Tuple[str, Type[Enum]]]] = {
    CostCategory.FOUNDATION: ("foundation_type", FoundationType),
    CostCategory.FRAMING: ("wall_material", WallMaterial),
    CostCategory.ROOFING: ("roof_material", RoofMaterial),
    CostCategory.SIDING: ("wall_material", WallMaterial),
    CostCategory.WINDOWS_DOORS: None,
    CostCategory.INTERIOR: None,
}

# USD per project
DEFAULT_RATES: Dict[CostCategory, Dict[str, float]] = {
    CostCategory.FOUNDATION: {
        DEFAULT_KEY: 2800.0,
        FoundationType.CONCRETE_SLAB.value: 2800.0,
        FoundationType.PIER_FOUNDATION.value: 2200.0,
        FoundationType.CRAWL_SPACE.value: 3600.0,
    },
    CostCategory.FRAMING: {
        DEFAULT_KEY: 4200.0,
        WallMaterial.WOOD_2X6.value: 4200.0,
        WallMaterial.WOOD_2X8.value: 4900.0,
        WallMaterial.LOG.value: 7600.0,
        WallMaterial.STEEL.value: 6300.0,
    },
    CostCategory.ROOFING: {
        DEFAULT_KEY: 3100.0,
        RoofMaterial.METAL.value: 3100.0,
        RoofMaterial.ASPHALT.value: 2400.0,
        RoofMaterial.CEDAR.value: 4300.0,
    },
    CostCategory.SIDING: {
        DEFAULT_KEY: 2900.0,
        WallMaterial.WOOD_2X6.value: 2900.0,
        WallMaterial.WOOD_2X8.value: 2900.0,
        WallMaterial.LOG.value: 900.0,  # chinking and sealant only
        WallMaterial.STEEL.value: 3400.0,
    },
    CostCategory.WINDOWS_DOORS: {
        DEFAULT_KEY: 2800.0,
    },
    CostCategory.INTERIOR: {
        DEFAULT_KEY: 2700.0,
    },
}


class RateTable:
    """Lookup of category figures by selection."""

    def __init__(self, rates: Optional[Mapping[CostCategory, Mapping[str, float]]] = None):
        self._rates: Dict[CostCategory, Dict[str, float]] = copy.deepcopy(DEFAULT_RATES)
        if rates:
            for category, entries in rates.items():
                self._rates.setdefault(category, {}).update(entries)

        for category in CostCategory:
            if DEFAULT_KEY not in self._rates.get(category, {}):
                raise ConfigurationError(f"Rate table has no default for {category.label}")

    def selector_for(self, category: CostCategory) -> Optional[str]:
        """Project field that keys a category, or None for flat figures."""
        selector = CATEGORY_SELECTORS.get(category)
        return selector[0] if selector else None

    def default_for(self, category: CostCategory) -> float:
        return self._rates[category][DEFAULT_KEY]

    def lookup(self, category: CostCategory, selection: Optional[str]) -> Tuple[float, Optional[str]]:
        """
        Figure for a category given the project's selection.

        Returns:
            Tuple of (amount, key used). The key is None when the
            category default applied.
        """
        entries = self._rates[category]
        if selection is not None and selection in entries:
            return entries[selection], selection
        return entries[DEFAULT_KEY], None

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            category.label: dict(self._rates[category])
            for category in CostCategory
        }

    # ==================== Loading ====================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RateTable":
        """
        Build a table from overrides keyed by category label or name.

        Example:
            {"Foundation": {"crawl-space": 3900}, "interior": {"default": 3100}}

        Raises:
            ConfigurationError: on unknown categories or selections, or
                amounts that are not non-negative numbers.
        """
        overrides: Dict[CostCategory, Dict[str, float]] = {}

        for raw_category, entries in data.items():
            category = enum_from_value(CostCategory, raw_category)
            if category is None:
                raise ConfigurationError(f"Unknown cost category: '{raw_category}'")
            if not isinstance(entries, Mapping):
                raise ConfigurationError(f"Rates for {category.label} must be an object")

            selector = CATEGORY_SELECTORS.get(category)
            parsed: Dict[str, float] = {}
            for key, amount in entries.items():
                if key != DEFAULT_KEY:
                    member = enum_from_value(selector[1], key) if selector else None
                    if member is None:
                        raise ConfigurationError(
                            f"'{key}' is not a valid selection for {category.label}"
                        )
                    key = member.value

                if isinstance(amount, bool) or not isinstance(amount, (int, float)):
                    raise ConfigurationError(f"Rate {category.label}/{key} must be a number")
                if amount < 0:
                    raise ConfigurationError(f"Rate {category.label}/{key} must be non-negative")
                parsed[key] = float(amount)

            overrides[category] = parsed

        return cls(overrides)

    @classmethod
    def from_file(cls, filepath: str) -> "RateTable":
        """Load overrides from a JSON file."""
        path = Path(filepath)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read rate file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Rate file {filepath} must hold a JSON object")

        table = cls.from_dict(data)
        logger.info(f"Loaded cost rates from: {filepath}")
        return table
