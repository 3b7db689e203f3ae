"""
service.py - UI-facing facade.

Wires the store, cost estimator, phase classifier, template catalog and
material library together behind the calls the designer UI makes. Every call takes and
returns plain Project values; persistence stays with the caller.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import logging

from cabinkit.bootstrap.config import CabinKitConfig, get_config, load_config
from cabinkit.catalog.templates import Template, TemplateCatalog
from cabinkit.core.constants import DEFAULT_HISTORY_LIMIT
from cabinkit.core.project import Project
from cabinkit.core.project_store import ProjectStore, UpdateResult
from cabinkit.cost.estimator import CostEstimator
from cabinkit.cost.rates import RateTable
from cabinkit.cost.schema import CostEstimate
from cabinkit.dependencies.graph import DerivedFieldGraph, get_default_graph
from cabinkit.materials.catalog import MaterialCatalog
from cabinkit.materials.enums import MaterialCategory
from cabinkit.materials.models import Material, MaterialTakeoffResult
from cabinkit.materials.takeoff import MaterialTakeoff
from cabinkit.phases.classifier import PhaseClassifier
from cabinkit.phases.progress import BuildProgress
from cabinkit.phases.rules import StatusPolicy
from cabinkit.phases.schema import BuildStep, ConstructionPhase

logger = logging.getLogger(__name__)


class DesignService:
    """
    Entry point for the designer UI.

    Usage:
        service = DesignService()
        project = service.create_project("a-frame")
        project = service.apply_update(project, {"width": "30"})
        estimate = service.request_estimate(project)
        timeline = service.request_timeline(project)
    """

    def __init__(
        self,
        estimator: Optional[CostEstimator] = None,
        classifier: Optional[PhaseClassifier] = None,
        catalog: Optional[TemplateCatalog] = None,
        materials: Optional[MaterialCatalog] = None,
        graph: Optional[DerivedFieldGraph] = None,
        clock: Optional[Callable[[], datetime]] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.estimator = estimator or CostEstimator()
        self.classifier = classifier or PhaseClassifier()
        self.catalog = catalog if catalog is not None else TemplateCatalog()
        self.materials = materials if materials is not None else MaterialCatalog()
        self.graph = graph or get_default_graph()
        self.clock = clock
        self.history_limit = history_limit

    @classmethod
    def from_config(
        cls,
        config: CabinKitConfig,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "DesignService":
        """
        Build a service from configuration.

        Raises:
            ConfigurationError: If the rate file or status policy is invalid
            CatalogLoadError: If the templates or materials file cannot be loaded
        """
        rates = RateTable.from_file(config.pricing.rates_file) if config.pricing.rates_file else None
        catalog = (
            TemplateCatalog.from_file(config.catalog.templates_file)
            if config.catalog.templates_file else None
        )
        materials = (
            MaterialCatalog.from_file(config.catalog.materials_file)
            if config.catalog.materials_file else None
        )
        service = cls(
            estimator=CostEstimator(rates=rates, currency=config.pricing.currency),
            classifier=PhaseClassifier(policy=config.timeline.status_policy),
            catalog=catalog,
            materials=materials,
            clock=clock,
            history_limit=config.store.history_limit,
        )
        logger.info(
            f"Design service ready: policy={service.classifier.policy.value}, "
            f"templates={len(service.catalog)}, materials={len(service.materials)}, "
            f"currency={config.pricing.currency}"
        )
        return service

    # ==================== Projects ====================

    def open_store(self, project: Optional[Project] = None) -> ProjectStore:
        """ProjectStore wired to this service's estimator and graph."""
        return ProjectStore(
            project=project,
            estimator=self.estimator,
            graph=self.graph,
            clock=self.clock,
            history_limit=self.history_limit,
        )

    def create_project(self, template_id: Optional[str] = None, name: Optional[str] = None) -> Project:
        """
        Create a project, optionally seeded from a template.

        A seeded project is named "<Template> Project" unless a name is
        given, and gets the template's dimensions applied once so its
        area is derived.

        Raises:
            TemplateNotFoundError: If template_id is not in the catalog
        """
        store = self.open_store()
        seed: Dict[str, Any] = {}

        if template_id is not None:
            template = self.catalog.get(template_id)
            seed.update(template.seed_fields())
            seed["template_id"] = template.template_id
            seed["name"] = template.project_name
        if name is not None:
            seed["name"] = name

        project = store.apply_update(seed, source="template") if seed else store.project
        logger.info(f"Created {project.summary()}")
        return project

    def apply_update(self, project: Project, partial: Mapping[str, Any], source: str = "ui") -> Project:
        """Apply a partial update; the passed-in project is not modified."""
        return self.open_store(project).apply_update(partial, source)

    def apply_update_detailed(
        self,
        project: Project,
        partial: Mapping[str, Any],
        source: str = "ui",
    ) -> UpdateResult:
        return self.open_store(project).apply_update_detailed(partial, source)

    # ==================== Derived views ====================

    def request_estimate(self, project: Project) -> CostEstimate:
        """Itemized six-category estimate."""
        return self.estimator.estimate(project)

    def request_timeline(self, project: Project) -> List[ConstructionPhase]:
        """Construction phases in build order."""
        return self.classifier.classify(project)

    def build_guide(self, phase_name: str) -> List[BuildStep]:
        """Step-by-step guide for one phase."""
        return self.classifier.build_guide(phase_name)

    def request_view(self, project: Project) -> Dict[str, Any]:
        """
        Everything the designer page renders for a project.

        The estimate total is reported next to the stored estimated_cost,
        which is None ("TBD") while no selection is made.
        """
        estimate = self.request_estimate(project)
        timeline = self.request_timeline(project)
        return {
            "project": project.to_dict(),
            "area": project.area,
            "cost_label": project.cost_label,
            "estimate": estimate.to_dict(),
            "timeline": [phase.to_dict() for phase in timeline],
        }

    # ==================== Catalog ====================

    def list_templates(self) -> List[Template]:
        return self.catalog.list_templates()

    def get_template(self, template_id: str) -> Template:
        return self.catalog.get(template_id)

    # ==================== Materials ====================

    def list_material_categories(self) -> List[MaterialCategory]:
        return self.materials.categories()

    def list_materials(
        self,
        category: Optional[Union[str, MaterialCategory]] = None,
        search: Optional[str] = None,
    ) -> List[Material]:
        """Active materials, optionally filtered by category and search text."""
        return self.materials.list_materials(category=category, search=search)

    def get_material(self, material_id: str) -> Material:
        return self.materials.get(material_id)

    def request_material_takeoff(
        self,
        quantities: Optional[Mapping[str, Any]] = None,
    ) -> MaterialTakeoffResult:
        """
        Priced material list. Without quantities, the library's suggested
        starter list is priced.

        Raises:
            MaterialNotFoundError: If a material id is not in the library
        """
        takeoff = MaterialTakeoff(self.materials, currency=self.estimator.currency)
        if quantities is None:
            return takeoff.suggested()
        return takeoff.calculate(quantities)

    # ==================== Build progress ====================

    def build_progress(self, stored: Optional[Mapping[str, Any]] = None) -> BuildProgress:
        """
        Build progress over this service's timeline, restored from a
        project's stored progress mapping when given.
        """
        return BuildProgress.from_dict(stored, classifier=self.classifier)

    @property
    def status_policy(self) -> StatusPolicy:
        return self.classifier.policy


def create_service(config: Optional[Union[CabinKitConfig, str]] = None) -> DesignService:
    """
    Build a DesignService from a config object, a config file path, or
    the globally loaded configuration.
    """
    if config is None:
        config = get_config()
    elif isinstance(config, str):
        config = load_config(config)
    return DesignService.from_config(config)
