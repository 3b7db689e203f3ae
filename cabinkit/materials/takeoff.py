"""
materials/takeoff.py - Per-project material list pricing.

Quantities arrive keyed by material id, from the same kind of input boxes
as the dimensions, so they are coerced rather than rejected.
"""

from __future__ import annotations
from typing import Any, Mapping, Optional
import logging

from cabinkit.core.coercion import coerce_number
from cabinkit.errors.taxonomy import ErrorCode, create_coercion_issue
from .catalog import MaterialCatalog
from .models import MaterialLineItem, MaterialTakeoffResult

logger = logging.getLogger(__name__)


class MaterialTakeoff:
    """
    Prices a project's material quantities against the library.

    Every line costs price_per_unit x quantity and the total is the sum
    of the lines.
    """

    def __init__(self, catalog: Optional[MaterialCatalog] = None, currency: str = "USD"):
        self.catalog = catalog if catalog is not None else MaterialCatalog()
        self.currency = currency

    def calculate(self, quantities: Mapping[str, Any]) -> MaterialTakeoffResult:
        """
        Price a material list.

        Args:
            quantities: Mapping of material id -> quantity. Zero quantities
                are left off the list; negative ones are read as zero.

        Returns:
            MaterialTakeoffResult with one line per listed material, in
            input order.

        Raises:
            MaterialNotFoundError: If a material id is not in the library
        """
        result = MaterialTakeoffResult(currency=self.currency)

        for material_id, raw in quantities.items():
            material = self.catalog.get(material_id)
            label = f"quantity[{material_id}]"
            quantity, issue = coerce_number(label, raw, source="material_takeoff")
            if issue is not None:
                result.issues.append(issue)

            if quantity < 0:
                issue = create_coercion_issue(
                    label, raw, 0.0, source="material_takeoff", code=ErrorCode.INP_NEGATIVE
                )
                logger.debug(issue.message)
                result.issues.append(issue)
                quantity = 0.0

            if quantity == 0:
                continue
            result.items.append(MaterialLineItem(material=material, quantity=quantity))

        logger.debug(
            f"Material takeoff: {result.item_count} lines, total {result.total:.2f} "
            f"{self.currency}, issues={len(result.issues)}"
        )
        return result

    def suggested(self) -> MaterialTakeoffResult:
        """Starter list from each active material's suggested quantity."""
        quantities = {
            m.material_id: m.suggested_quantity
            for m in self.catalog.list_materials()
            if m.suggested_quantity
        }
        return self.calculate(quantities)
