"""
CabinKit Derived-Field Dependency Graph

Declares which raw fields every derived field is computed from and
answers the store's one question: given the fields an update changed,
which derived fields must be recomputed, and in what order.

Edges run source -> derived, so a topological walk always computes a
derived field after everything it reads.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set
import logging

import networkx as nx

from cabinkit.errors.exceptions import CyclicDependencyError

logger = logging.getLogger(__name__)


class EdgeType(Enum):
    """Type of dependency relationship."""
    DATA_FLOW = "data_flow"      # derived value is computed from the source value
    SELECTION = "selection"      # derived value is looked up by the source selection


# =============================================================================
# DERIVED FIELD DEFINITIONS
# =============================================================================

DERIVED_FIELD_SOURCES: Dict[str, Dict[str, EdgeType]] = {
    "area": {
        "width": EdgeType.DATA_FLOW,
        "length": EdgeType.DATA_FLOW,
    },
    "estimated_cost": {
        "foundation_type": EdgeType.SELECTION,
        "wall_material": EdgeType.SELECTION,
        "roof_material": EdgeType.SELECTION,
    },
}


class DerivedFieldGraph:
    """
    DAG of derived fields and the fields they read.

    Derived fields may read other derived fields; recalculation order is
    topological with ties broken alphabetically so it is stable across runs.
    """

    def __init__(self, definitions: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._graph = nx.DiGraph()
        self._derived: Set[str] = set()

        for derived, sources in (definitions or DERIVED_FIELD_SOURCES).items():
            self.add_derived_field(derived, sources)

        self._check_acyclic()
        logger.debug(
            f"Derived-field graph built: {self._graph.number_of_nodes()} fields, "
            f"{self._graph.number_of_edges()} edges"
        )

    def add_derived_field(self, derived: str, sources: Iterable[str]) -> None:
        """
        Declare `derived` as computed from `sources`.

        `sources` may be a mapping of source -> EdgeType or a plain iterable.
        """
        self._derived.add(derived)
        self._graph.add_node(derived, derived=True)

        if isinstance(sources, Mapping):
            items = sources.items()
        else:
            items = ((s, EdgeType.DATA_FLOW) for s in sources)

        for source, edge_type in items:
            if source not in self._graph:
                self._graph.add_node(source, derived=False)
            self._graph.add_edge(source, derived, edge_type=edge_type)

    def _check_acyclic(self) -> None:
        if nx.is_directed_acyclic_graph(self._graph):
            return
        cycle_edges = nx.find_cycle(self._graph)
        cycle = [edge[0] for edge in cycle_edges] + [cycle_edges[0][0]]
        raise CyclicDependencyError(cycle)

    # ==================== Queries ====================

    def is_derived(self, name: str) -> bool:
        """Check if a field is computed by the store."""
        return name in self._derived

    def derived_fields(self) -> List[str]:
        """All derived fields in computation order."""
        return self.get_computation_order(self._derived)

    def get_sources(self, derived: str) -> Set[str]:
        """Fields a derived field reads directly."""
        if derived not in self._graph:
            return set()
        return set(self._graph.predecessors(derived))

    def get_edge_type(self, source: str, derived: str) -> Optional[EdgeType]:
        """Relationship between a source and a derived field."""
        data = self._graph.get_edge_data(source, derived)
        return data["edge_type"] if data else None

    def get_affected(self, name: str) -> Set[str]:
        """All derived fields downstream of a field (transitive)."""
        if name not in self._graph:
            return set()
        return {n for n in nx.descendants(self._graph, name) if n in self._derived}

    def get_computation_order(self, names: Iterable[str]) -> List[str]:
        """Order a set of fields so dependencies come first."""
        wanted = set(names)
        order = nx.lexicographical_topological_sort(self._graph)
        return [n for n in order if n in wanted]

    def get_recalculation_order(self, changed: Iterable[str]) -> List[str]:
        """
        Derived fields to recompute after `changed` fields were written.

        Returns:
            Derived field names in topological order.
        """
        affected: Set[str] = set()
        for name in changed:
            affected.update(self.get_affected(name))
        return self.get_computation_order(affected)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the table for diagnostics."""
        return {
            derived: {
                source: self._graph.edges[source, derived]["edge_type"].value
                for source in sorted(self._graph.predecessors(derived))
            }
            for derived in self.derived_fields()
        }


# =============================================================================
# MODULE-LEVEL INSTANCE
# =============================================================================

_default_graph: Optional[DerivedFieldGraph] = None


def get_default_graph() -> DerivedFieldGraph:
    """Get or create the default derived-field graph."""
    global _default_graph
    if _default_graph is None:
        _default_graph = DerivedFieldGraph()
    return _default_graph
