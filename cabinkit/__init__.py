"""
CabinKit - project configuration and derived-metrics engine for a
DIY cabin designer.

Holds a project's dimensions and material selections, keeps floor area
and estimated cost consistent with them, produces the itemized cost
estimate, classifies the construction phase timeline, prices material
lists from the material library and tracks build-guide progress.
"""

from cabinkit.core.project import Project
from cabinkit.core.project_store import ProjectStore, UpdateResult
from cabinkit.cost.estimator import CostEstimator
from cabinkit.cost.schema import CostEstimate, CostLineItem
from cabinkit.phases.classifier import PhaseClassifier
from cabinkit.phases.progress import BuildProgress
from cabinkit.phases.schema import ConstructionPhase
from cabinkit.catalog.templates import Template, TemplateCatalog
from cabinkit.materials.catalog import MaterialCatalog
from cabinkit.materials.takeoff import MaterialTakeoff
from cabinkit.service import DesignService, create_service

__version__ = "1.0.0"

__all__ = [
    "Project",
    "ProjectStore",
    "UpdateResult",
    "CostEstimator",
    "CostEstimate",
    "CostLineItem",
    "PhaseClassifier",
    "ConstructionPhase",
    "BuildProgress",
    "Template",
    "TemplateCatalog",
    "MaterialCatalog",
    "MaterialTakeoff",
    "DesignService",
    "create_service",
    "__version__",
]
