"""
CabinKit Dependency Map

Declarative {derived field -> source fields} table used by the project
store to decide what to recompute after an update.
"""

from .graph import (
    DerivedFieldGraph,
    EdgeType,
    DERIVED_FIELD_SOURCES,
    get_default_graph,
)

__all__ = [
    "DerivedFieldGraph",
    "EdgeType",
    "DERIVED_FIELD_SOURCES",
    "get_default_graph",
]
