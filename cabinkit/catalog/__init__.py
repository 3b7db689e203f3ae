"""
catalog/ - Template gallery used to seed new projects.
"""

from .templates import (
    Template,
    TemplateRecord,
    TemplateCatalog,
    BUILTIN_TEMPLATES,
)


__all__ = [
    "Template",
    "TemplateRecord",
    "TemplateCatalog",
    "BUILTIN_TEMPLATES",
]
