"""
Unit tests for core/project_store.py.

Tests partial updates, coercion, derived-field consistency and history.
"""

import threading

import pytest

from cabinkit.core.enums import FoundationType, RoofMaterial, WallMaterial
from cabinkit.core.project import Project
from cabinkit.core.project_store import ProjectStore
from cabinkit.cost.estimator import CostEstimator
from cabinkit.dependencies.graph import DerivedFieldGraph
from cabinkit.errors.exceptions import ConfigurationError
from cabinkit.errors.taxonomy import ErrorCode


class TestDimensionUpdates:
    """Test width/length updates and the area invariant."""

    def test_area_from_dimensions(self, store):
        """Test area follows width and length."""
        project = store.apply_update({"width": 24, "length": 16})
        assert project.width == 24.0
        assert project.length == 16.0
        assert project.area == 384.0

    def test_numeric_text(self, store):
        """Test text dimensions are parsed."""
        store.apply_update({"length": 20})
        project = store.apply_update({"width": "30"})
        assert project.width == 30.0
        assert project.area == 600.0

    def test_unparseable_text_is_zero(self, store):
        """Test malformed text becomes 0 without raising."""
        store.apply_update({"width": 30, "length": 20})
        result = store.apply_update_detailed({"width": "notanumber"})
        assert result.project.width == 0.0
        assert result.project.area == 0.0
        assert [i.code for i in result.issues] == [ErrorCode.INP_UNPARSEABLE]

    def test_empty_text_is_zero(self, store):
        """Test clearing the input box sets 0."""
        store.apply_update({"width": 12, "length": 10})
        project = store.apply_update({"width": ""})
        assert project.width == 0.0
        assert project.area == 0.0

    def test_negative_width_stored_area_clamped(self, store):
        """Test negative input is kept but area never goes negative."""
        project = store.apply_update({"width": -10, "length": 20})
        assert project.width == -10.0
        assert project.area == 0.0

    @pytest.mark.parametrize("width,length", [(0, 0), (8.5, 24), (30, 20), (12.5, 7.25)])
    def test_update_order_does_not_matter(self, clock, width, length):
        """Test width-then-length and length-then-width agree."""
        first = ProjectStore(clock=clock)
        first.apply_update({"width": width})
        a = first.apply_update({"length": length})

        second = ProjectStore(clock=clock)
        second.apply_update({"length": length})
        b = second.apply_update({"width": width})

        assert a.area == b.area == pytest.approx(width * length)

    def test_height_does_not_touch_area(self, store):
        """Test height is stored without recomputing area."""
        store.apply_update({"width": 10, "length": 10})
        result = store.apply_update_detailed({"height": "14"})
        assert result.project.height == 14.0
        assert result.recomputed_fields == []
        assert result.project.area == 100.0

    def test_other_fields_preserved(self, store):
        """Test a partial update leaves other fields alone."""
        store.apply_update({"name": "Hunting Cabin", "roof_material": "cedar"})
        project = store.apply_update({"width": 18})
        assert project.name == "Hunting Cabin"
        assert project.roof_material == RoofMaterial.CEDAR


class TestFieldRouting:
    """Test key normalization and ignored keys."""

    def test_camel_case_keys(self, store):
        """Test web client keys are accepted."""
        project = store.apply_update({
            "foundationType": "crawl-space",
            "wallMaterial": "log",
            "roofMaterial": "metal",
        })
        assert project.foundation_type == FoundationType.CRAWL_SPACE
        assert project.wall_material == WallMaterial.LOG
        assert project.roof_material == RoofMaterial.METAL

    def test_last_write_wins(self, store):
        """Test later keys override earlier keys for the same field."""
        project = store.apply_update({"w": 10, "width": 12})
        assert project.width == 12.0

    def test_derived_field_ignored(self, store):
        """Test writes to area are ignored and reported."""
        store.apply_update({"width": 10, "length": 10})
        result = store.apply_update_detailed({"area": 999})
        assert result.project.area == 100.0
        assert result.issues[0].code == ErrorCode.FLD_READ_ONLY
        assert result.is_noop

    def test_read_only_identity_ignored(self, store):
        """Test project_id cannot be overwritten."""
        original = store.project_id
        result = store.apply_update_detailed({"id": "other"})
        assert result.project.project_id == original
        assert result.issues[0].code == ErrorCode.FLD_READ_ONLY

    def test_unknown_field_ignored(self, store):
        """Test unrecognized keys are reported, not applied."""
        result = store.apply_update_detailed({"color": "red", "width": 5})
        assert result.applied_fields == ["width"]
        assert result.issues[0].code == ErrorCode.FLD_UNRECOGNIZED
        assert not hasattr(result.project, "color")

    def test_text_fields(self, store):
        """Test text fields are stored as strings."""
        project = store.apply_update({"name": 42, "description": None})
        assert project.name == "42"
        assert project.description == ""

    def test_template_reference(self, store):
        """Test template_id is stored and can be cleared."""
        assert store.apply_update({"templateId": "a-frame"}).template_id == "a-frame"
        assert store.apply_update({"template_id": ""}).template_id is None


class TestSelections:
    """Test choice fields and estimated_cost."""

    def test_cost_tbd_until_selection(self, store):
        """Test dimension edits leave estimated_cost unset."""
        project = store.apply_update({"width": 24, "length": 16})
        assert project.estimated_cost is None
        assert project.cost_label == "TBD"

    def test_selection_derives_cost(self, store):
        """Test estimated_cost is the estimator total after a selection."""
        project = store.apply_update({"foundation_type": "crawl-space"})
        assert project.estimated_cost == 19300.0
        assert project.estimated_cost == CostEstimator().total_for(project)

    def test_selection_change_updates_cost(self, store):
        """Test cost follows later selection changes."""
        store.apply_update({"foundation_type": "concrete-slab", "wall_material": "2x6-wood",
                            "roof_material": "metal"})
        assert store.project.estimated_cost == 18500.0
        project = store.apply_update({"roof_material": "cedar"})
        assert project.estimated_cost == 19700.0

    def test_unknown_choice_left_unchanged(self, store, clock):
        """Test an unknown option keeps the previous selection."""
        store.apply_update({"roof_material": "asphalt"})
        before = store.project
        clock.advance(60)

        result = store.apply_update_detailed({"roof_material": "thatch"})
        assert result.project.roof_material == RoofMaterial.ASPHALT
        assert result.issues[0].code == ErrorCode.SEL_UNKNOWN_CHOICE
        assert result.project.updated_at == before.updated_at

    def test_empty_choice_clears(self, store):
        """Test an empty option clears the selection."""
        store.apply_update({"wall_material": "steel"})
        project = store.apply_update({"wall_material": ""})
        assert project.wall_material is None
        assert project.estimated_cost is None
        assert project.cost_label == "TBD"

    def test_cleared_matches_fresh(self, store, clock):
        """Test set-then-clear leaves the same derived values as a fresh project."""
        fresh = ProjectStore(clock=clock).apply_update({"width": 12, "length": 10})
        store.apply_update({"width": 12, "length": 10, "roof_material": "cedar"})
        cleared = store.apply_update({"roof_material": None})
        assert cleared.estimated_cost == fresh.estimated_cost
        assert cleared.area == fresh.area

    def test_one_of_several_cleared(self, store):
        """Test cost stays derived while any selection remains."""
        store.apply_update({"foundation_type": "pier-foundation", "roof_material": "cedar"})
        project = store.apply_update({"roof_material": ""})
        assert project.estimated_cost == CostEstimator().total_for(project)

    def test_choice_by_enum_member(self, store):
        """Test enum members are accepted directly."""
        project = store.apply_update({"foundation_type": FoundationType.PIER_FOUNDATION})
        assert project.foundation_type == FoundationType.PIER_FOUNDATION


class TestUpdateSemantics:
    """Test copies, timestamps, idempotence and no-ops."""

    def test_returns_copy(self, store):
        """Test callers cannot mutate store state through the result."""
        project = store.apply_update({"width": 10})
        project.width = 99.0
        assert store.project.width == 10.0

    def test_initial_project_copied(self, clock):
        """Test the store does not alias the project it was given."""
        original = Project(width=5.0)
        store = ProjectStore(original, clock=clock)
        store.apply_update({"width": 6})
        assert original.width == 5.0

    def test_updated_at_set_on_change(self, store, clock):
        """Test updated_at comes from the clock."""
        clock.advance(30)
        project = store.apply_update({"width": 10})
        assert project.updated_at == clock.now

    def test_noop_keeps_updated_at(self, store, clock):
        """Test an update with no recognized fields changes nothing."""
        before = store.project
        clock.advance(30)
        result = store.apply_update_detailed({"bogus": 1})
        assert result.is_noop
        assert result.project.updated_at == before.updated_at

    def test_idempotent(self, store):
        """Test applying the same partial twice gives the same project."""
        partial = {"width": "24", "length": 16, "roof_material": "metal"}
        first = store.apply_update(partial)
        second = store.apply_update(partial)
        assert first.to_dict() == second.to_dict()

    def test_changed_and_recomputed_fields(self, store):
        """Test the detailed result reports what moved."""
        store.apply_update({"width": 10})
        result = store.apply_update_detailed({"width": 10, "length": 4})
        assert result.applied_fields == ["width", "length"]
        assert result.changed_fields == ["length"]
        assert result.recomputed_fields == ["area"]

    def test_result_to_dict(self, store):
        """Test the result serializes."""
        data = store.apply_update_detailed({"width": "abc"}).to_dict()
        assert data["project"]["width"] == 0.0
        assert data["issues"][0]["code"] == ErrorCode.INP_UNPARSEABLE.value


class TestHistory:
    """Test change history."""

    def test_records_raw_and_derived(self, store):
        """Test raw and derived writes are both recorded."""
        store.apply_update({"width": 10, "length": 3}, source="panel")
        history = store.get_history()
        assert [(c.field, c.derived) for c in history] == [
            ("width", False), ("length", False), ("area", True),
        ]
        assert history[0].source == "panel"

    def test_filter_by_alias(self, store):
        """Test history can be filtered by alias."""
        store.apply_update({"width": 10})
        store.apply_update({"length": 3})
        assert [c.new_value for c in store.get_history("w")] == [10.0]

    def test_unchanged_value_not_recorded(self, store):
        """Test rewriting the same value records nothing new."""
        store.apply_update({"width": 10})
        count = len(store.get_history())
        store.apply_update({"width": "10"})
        assert len(store.get_history()) == count

    def test_history_bounded(self, clock):
        """Test history keeps only the newest entries."""
        store = ProjectStore(clock=clock, history_limit=3)
        for width in range(1, 6):
            store.apply_update({"width": width})
        history = store.get_history()
        assert [c.new_value for c in history] == [3.0, 4.0, 5.0]

    def test_clear_history(self, store):
        """Test history can be cleared."""
        store.apply_update({"width": 10})
        store.clear_history()
        assert store.get_history() == []

    def test_change_to_dict(self, store):
        """Test history entries serialize enum values."""
        store.apply_update({"roof_material": "metal"})
        data = store.get_history("roof_material")[0].to_dict()
        assert data["new_value"] == "metal"
        assert data["old_value"] is None


class TestRecompute:
    """Test recompute_derived."""

    def test_stale_loaded_project(self, clock):
        """Test stale derived values are corrected."""
        stale = Project(width=10.0, length=10.0, area=5.0)
        store = ProjectStore(stale, clock=clock)
        changed = store.recompute_derived()
        assert "area" in changed
        assert store.project.area == 100.0
        assert store.project.updated_at == stale.updated_at

    def test_blank_project_cost_unset(self, clock):
        """Test recomputing a blank project keeps estimated_cost unset."""
        store = ProjectStore(clock=clock)
        assert store.recompute_derived() == []
        assert store.project.estimated_cost is None

    def test_stale_cost_without_selection(self, clock):
        """Test a stored cost with no selections is reset to unset."""
        store = ProjectStore(Project(estimated_cost=18500.0), clock=clock)
        assert store.recompute_derived() == ["estimated_cost"]
        assert store.project.estimated_cost is None

    def test_missing_deriver_rejected(self, clock):
        """Test a graph with an unknown derived field is refused."""
        graph = DerivedFieldGraph({"volume": ["width", "length", "height"]})
        with pytest.raises(ConfigurationError):
            ProjectStore(graph=graph, clock=clock)


class TestConcurrency:
    """Test updates are serialized."""

    def test_concurrent_updates_keep_invariant(self, clock):
        """Test area matches width*length after racing updates."""
        store = ProjectStore(clock=clock)

        def worker(n):
            for _ in range(50):
                store.apply_update({"width": n, "length": n + 1})

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 9)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        project = store.project
        assert project.area == project.width * project.length
        assert project.length == project.width + 1


class TestRepr:
    """Test the store's log representation."""

    def test_repr_of_loaded_project(self, clock):
        """Test a project loaded from decimal text can be summarized."""
        project = Project.from_dict({"name": "Shed", "width": "10.00", "length": "8.00"})
        assert repr(ProjectStore(project, clock=clock)) == (
            "ProjectStore(Project(Shed: 10x8 ft, 0 sq ft, cost TBD))"
        )
