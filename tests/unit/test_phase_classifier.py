"""
Unit tests for phases/ (definitions, rules, classifier).
"""

import pytest

from cabinkit.core.enums import PhaseStatus, RoofMaterial, SkillLevel, WallMaterial
from cabinkit.core.project import Project
from cabinkit.errors.exceptions import ConfigurationError, CyclicDependencyError
from cabinkit.phases import (
    PhaseClassifier,
    PhaseDefinition,
    StatusPolicy,
    is_field_set,
    resolve_policy,
)


class TestStaticPolicy:
    """Test the default timeline."""

    def test_phase_order(self):
        """Test phases come back in build order."""
        timeline = PhaseClassifier().classify(Project())
        assert [p.name for p in timeline] == ["Foundation", "Framing", "Roofing", "Electrical"]
        assert [p.position for p in timeline] == [1, 2, 3, 4]

    def test_statuses(self):
        """Test the fixed status of each phase."""
        timeline = PhaseClassifier().classify(Project())
        assert timeline[0].status == "ready"
        assert timeline[1].status == PhaseStatus.MODERATE
        assert timeline[2].status == PhaseStatus.PENDING
        assert timeline[3].status == "professional"

    def test_durations(self):
        """Test duration ranges."""
        timeline = PhaseClassifier().classify(Project())
        assert [p.duration_days for p in timeline] == ["3-5", "5-7", "3-4", "2-3"]

    def test_skill_levels(self):
        """Test skill gate follows status."""
        timeline = PhaseClassifier().classify(Project())
        assert [p.skill_level for p in timeline] == [
            SkillLevel.BEGINNER,
            SkillLevel.INTERMEDIATE,
            SkillLevel.INTERMEDIATE,
            SkillLevel.PROFESSIONAL,
        ]
        assert timeline[3].is_professional_only
        assert not timeline[0].is_professional_only

    def test_independent_of_project(self, configured_project):
        """Test the static policy ignores configuration."""
        classifier = PhaseClassifier()
        blank = [p.status for p in classifier.classify(Project())]
        full = [p.status for p in classifier.classify(configured_project)]
        assert blank == full

    def test_affordances(self):
        """Test each phase carries its display hint."""
        timeline = PhaseClassifier().classify(Project())
        assert timeline[0].affordance.color == "cabin-green"
        assert timeline[3].affordance.label == "Professional"

    def test_to_dict(self):
        """Test phase serialization."""
        data = PhaseClassifier().classify(Project())[0].to_dict()
        assert data["name"] == "Foundation"
        assert data["status"] == "ready"
        assert data["skill_level"] == "beginner"
        assert data["icon"] == "✓"
        assert data["missing_fields"] == []


class TestConfigurationPolicy:
    """Test status from configuration completeness."""

    def test_blank_project_pending(self):
        """Test phases wait on missing configuration."""
        classifier = PhaseClassifier(policy="configuration")
        statuses = [p.status for p in classifier.classify(Project())]
        assert statuses == [
            PhaseStatus.PENDING,
            PhaseStatus.PENDING,
            PhaseStatus.PENDING,
            PhaseStatus.PROFESSIONAL,
        ]

    def test_configured_project(self, configured_project):
        """Test a complete project earns configured statuses."""
        classifier = PhaseClassifier(policy=StatusPolicy.CONFIGURATION)
        statuses = [p.status for p in classifier.classify(configured_project)]
        assert statuses == [
            PhaseStatus.READY,
            PhaseStatus.MODERATE,
            PhaseStatus.MODERATE,
            PhaseStatus.PROFESSIONAL,
        ]

    def test_downstream_capped(self, configured_project):
        """Test a pending phase holds back the phases after it."""
        configured_project.wall_material = None
        timeline = PhaseClassifier(policy="configuration").classify(configured_project)
        assert timeline[0].status == PhaseStatus.READY
        assert timeline[1].status == PhaseStatus.PENDING
        assert timeline[1].missing_fields == ("wall_material",)
        assert timeline[2].status == PhaseStatus.PENDING
        assert timeline[2].missing_fields == ()

    def test_electrical_always_professional(self):
        """Test the professional gate does not depend on readiness."""
        project = Project(roof_material=RoofMaterial.METAL, wall_material=WallMaterial.STEEL)
        timeline = PhaseClassifier(policy="configuration").classify(project)
        assert timeline[3].status == PhaseStatus.PROFESSIONAL

    def test_loaded_zero_width_pending(self, configured_project):
        """Test a zero width loaded as text still counts as unset."""
        data = configured_project.to_dict()
        data["width"] = "0"
        timeline = PhaseClassifier(policy="configuration").classify(Project.from_dict(data))
        assert timeline[0].status == PhaseStatus.PENDING
        assert timeline[0].missing_fields == ("width",)


class TestPolicyResolution:
    """Test resolve_policy."""

    def test_names(self):
        """Test names resolve case-insensitively."""
        assert resolve_policy("STATIC") == StatusPolicy.STATIC
        assert resolve_policy(" configuration ") == StatusPolicy.CONFIGURATION
        assert resolve_policy(StatusPolicy.STATIC) == StatusPolicy.STATIC

    def test_unknown(self):
        """Test unknown names raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            resolve_policy("optimistic")
        with pytest.raises(ConfigurationError):
            PhaseClassifier(policy="optimistic")


class TestIsFieldSet:
    """Test is_field_set."""

    def test_values(self):
        """Test what counts as set."""
        project = Project(width=10.0, length=0.0, name="  ", roof_material=RoofMaterial.METAL)
        assert is_field_set(project, "width")
        assert not is_field_set(project, "length")
        assert not is_field_set(project, "name")
        assert is_field_set(project, "roof_material")
        assert not is_field_set(project, "wall_material")
        assert not is_field_set(project, "unknown")


class TestBuildGuide:
    """Test build guide lookup."""

    def test_foundation_steps(self):
        """Test foundation guide content."""
        steps = PhaseClassifier().build_guide("foundation")
        assert [s.title for s in steps] == ["Site Preparation", "Excavation", "Concrete Pour"]
        assert "811" in steps[1].safety
        assert steps[0].tools is not None

    def test_framing_steps(self):
        """Test framing guide content."""
        steps = PhaseClassifier().build_guide("Framing")
        assert [s.title for s in steps] == ["Floor Platform", "Wall Framing"]

    def test_no_guide(self):
        """Test phases without content and unknown names give no steps."""
        classifier = PhaseClassifier()
        assert classifier.build_guide("Electrical") == []
        assert classifier.build_guide("Plumbing") == []


def _definition(name, position, depends_on=()):
    return PhaseDefinition(
        name=name,
        position=position,
        duration_days="1-2",
        description="",
        reference_status=PhaseStatus.READY,
        configured_status=PhaseStatus.READY,
        depends_on=depends_on,
    )


class TestCustomDefinitions:
    """Test classifier construction from custom phase sets."""

    def test_order_follows_dependencies(self):
        """Test dependencies win over position."""
        classifier = PhaseClassifier(definitions=[
            _definition("Finish", 1, depends_on=("Shell",)),
            _definition("Shell", 2),
        ])
        assert classifier.phase_names == ["Shell", "Finish"]

    def test_ties_broken_by_position(self):
        """Test independent phases sort by position."""
        classifier = PhaseClassifier(definitions=[
            _definition("B", 2),
            _definition("A", 1),
            _definition("C", 3),
        ])
        assert classifier.phase_names == ["A", "B", "C"]

    def test_unknown_dependency(self):
        """Test a dependency on a missing phase is rejected."""
        with pytest.raises(ConfigurationError):
            PhaseClassifier(definitions=[_definition("A", 1, depends_on=("Ghost",))])

    def test_cycle(self):
        """Test cyclic phase dependencies are rejected."""
        with pytest.raises(CyclicDependencyError):
            PhaseClassifier(definitions=[
                _definition("A", 1, depends_on=("B",)),
                _definition("B", 2, depends_on=("A",)),
            ])
