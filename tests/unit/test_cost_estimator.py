"""
Unit tests for cost/estimator.py.
"""

import pytest

from cabinkit.core.enums import FoundationType, RoofMaterial, WallMaterial
from cabinkit.core.project import Project
from cabinkit.cost.enums import CostCategory, CostConfidence
from cabinkit.cost.estimator import CostEstimator
from cabinkit.cost.rates import RateTable
from cabinkit.errors.taxonomy import ErrorCode


class TestEstimateStructure:
    """Test the shape of an estimate."""

    def test_six_categories_in_order(self):
        """Test every category appears once, in display order."""
        estimate = CostEstimator().estimate(Project())
        assert [item.label for item in estimate.line_items] == [
            "Foundation", "Framing", "Roofing", "Siding", "Windows/Doors", "Interior",
        ]

    def test_total_is_sum(self, configured_project):
        """Test total equals the sum of line items."""
        estimate = CostEstimator().estimate(configured_project)
        assert estimate.total == sum(item.amount for item in estimate.line_items)

    def test_running_totals(self):
        """Test running totals accumulate to the total."""
        estimate = CostEstimator().estimate(Project())
        running = [item.running_total for item in estimate.line_items]
        assert running == [2800.0, 7000.0, 10100.0, 13000.0, 15800.0, 18500.0]

    def test_identifies_project(self, configured_project):
        """Test the estimate carries the project identity."""
        estimate = CostEstimator(currency="CAD").estimate(configured_project)
        assert estimate.project_id == configured_project.project_id
        assert estimate.project_name == "Lakeside Retreat"
        assert estimate.currency == "CAD"


class TestEstimateAmounts:
    """Test selection-keyed figures."""

    def test_blank_project_uses_defaults(self):
        """Test an unconfigured project gets the placeholder total."""
        estimate = CostEstimator().estimate(Project())
        assert estimate.total == 18500.0
        assert estimate.confidence == CostConfidence.PLACEHOLDER

    def test_missing_selections_reported(self):
        """Test each defaulted selection-keyed line records an issue."""
        estimate = CostEstimator().estimate(Project())
        assert len(estimate.issues) == 4
        assert all(i.code == ErrorCode.SEL_MISSING for i in estimate.issues)

    def test_fully_selected(self, configured_project):
        """Test a fully configured project resolves every keyed line."""
        estimate = CostEstimator().estimate(configured_project)
        assert estimate.total == 18500.0
        assert estimate.confidence == CostConfidence.SELECTED
        assert estimate.issues == []

    def test_selection_changes_figures(self):
        """Test selections change category figures."""
        project = Project(
            foundation_type=FoundationType.PIER_FOUNDATION,
            wall_material=WallMaterial.LOG,
            roof_material=RoofMaterial.CEDAR,
        )
        estimate = CostEstimator().estimate(project)
        assert estimate.by_category() == {
            "Foundation": 2200.0,
            "Framing": 7600.0,
            "Roofing": 4300.0,
            "Siding": 900.0,
            "Windows/Doors": 2800.0,
            "Interior": 2700.0,
        }
        assert estimate.total == 20500.0

    def test_custom_rates(self):
        """Test the estimator reads its rate table."""
        rates = RateTable.from_dict({"Interior": {"default": 5000}})
        assert CostEstimator(rates=rates).total_for(Project()) == 20800.0

    def test_get_item(self):
        """Test looking up one line."""
        estimate = CostEstimator().estimate(Project(roof_material=RoofMaterial.ASPHALT))
        item = estimate.get_item(CostCategory.ROOFING)
        assert item.amount == 2400.0
        assert item.selection == "asphalt"
        assert not item.used_default


class TestEstimateSerialization:
    """Test to_dict."""

    def test_to_dict(self):
        """Test serialized estimate fields."""
        data = CostEstimator().estimate(Project()).to_dict()
        assert data["total"] == pytest.approx(18500.0)
        assert data["confidence"] == "placeholder"
        assert len(data["line_items"]) == 6
        assert data["line_items"][0]["category"] == "Foundation"
        assert len(data["issues"]) == 4
