"""
errors/exceptions.py - Raised exceptions

The core itself never raises on user input. These cover the boundary:
catalog lookups, build progress, configuration files and programming errors in the
dependency table.
"""

from typing import List


class CabinKitError(Exception):
    """Base class for all CabinKit exceptions."""
    pass


class TemplateNotFoundError(CabinKitError, KeyError):
    """Raised when a template id is not in the catalog."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Unknown template: '{template_id}'")

    def __str__(self) -> str:
        return self.args[0]


class MaterialNotFoundError(CabinKitError, KeyError):
    """Raised when a material id is not in the material library."""

    def __init__(self, material_id: str):
        self.material_id = material_id
        super().__init__(f"Unknown material: '{material_id}'")

    def __str__(self) -> str:
        return self.args[0]


class PhaseNotFoundError(CabinKitError, KeyError):
    """Raised when build progress names a phase the timeline does not have."""

    def __init__(self, phase_name: str):
        self.phase_name = phase_name
        super().__init__(f"Unknown phase: '{phase_name}'")

    def __str__(self) -> str:
        return self.args[0]


class StepIndexError(CabinKitError, IndexError):
    """Raised when a build step index is outside a phase's guide."""

    def __init__(self, phase_name: str, index: int, step_count: int):
        self.phase_name = phase_name
        self.index = index
        self.step_count = step_count
        super().__init__(
            f"Phase '{phase_name}' has {step_count} steps; no step at index {index}"
        )


class CatalogLoadError(CabinKitError):
    """Raised when a template or material catalog file cannot be read or validated."""
    pass


class ConfigurationError(CabinKitError):
    """Raised for invalid configuration or rate files."""
    pass


class CyclicDependencyError(CabinKitError):
    """Raised when the derived-field table contains a cycle."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__(f"Cyclic dependency detected: {' -> '.join(cycle)}")
