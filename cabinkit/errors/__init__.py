"""
errors/ - Issue Taxonomy & Exceptions

Recovered input problems are CabinIssue records; boundary failures are
CabinKitError subclasses.
"""

from .taxonomy import (
    ErrorSeverity,
    ErrorCategory,
    ErrorCode,
    CabinIssue,
    create_coercion_issue,
    create_unknown_choice_issue,
    create_missing_selection_issue,
    create_field_issue,
)

from .exceptions import (
    CabinKitError,
    TemplateNotFoundError,
    MaterialNotFoundError,
    PhaseNotFoundError,
    StepIndexError,
    CatalogLoadError,
    ConfigurationError,
    CyclicDependencyError,
)

__all__ = [
    # Taxonomy
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorCode",
    "CabinIssue",
    "create_coercion_issue",
    "create_unknown_choice_issue",
    "create_missing_selection_issue",
    "create_field_issue",
    # Exceptions
    "CabinKitError",
    "TemplateNotFoundError",
    "MaterialNotFoundError",
    "PhaseNotFoundError",
    "StepIndexError",
    "CatalogLoadError",
    "ConfigurationError",
    "CyclicDependencyError",
]
