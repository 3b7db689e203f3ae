"""
phases/classifier.py - Build timeline classifier.

Turns the fixed phase set into an ordered, status-labeled, skill-gated
timeline for a project.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Union, TYPE_CHECKING
import logging

import networkx as nx

from cabinkit.core.enums import PhaseStatus
from cabinkit.errors.exceptions import ConfigurationError, CyclicDependencyError
from .definitions import (
    PHASE_DEFINITIONS,
    STATUS_AFFORDANCE,
    STATUS_SKILL,
    PhaseDefinition,
)
from .rules import StatusPolicy, configured_status, missing_fields, static_status
from .schema import BuildStep, ConstructionPhase

if TYPE_CHECKING:
    from cabinkit.core.project import Project

logger = logging.getLogger(__name__)


def resolve_policy(policy: Union[str, StatusPolicy]) -> StatusPolicy:
    """Resolve a policy name, raising ConfigurationError if unknown."""
    if isinstance(policy, StatusPolicy):
        return policy
    try:
        return StatusPolicy(str(policy).strip().lower())
    except ValueError:
        allowed = [p.value for p in StatusPolicy]
        raise ConfigurationError(f"Unknown status policy '{policy}'. Valid: {allowed}") from None


class PhaseClassifier:
    """
    Classifies construction phases for a project.

    Usage:
        classifier = PhaseClassifier()
        for phase in classifier.classify(project):
            print(phase.name, phase.status.value, phase.skill_level.value)
    """

    def __init__(
        self,
        policy: Union[str, StatusPolicy] = StatusPolicy.STATIC,
        definitions: Optional[Sequence[PhaseDefinition]] = None,
    ):
        self.policy = resolve_policy(policy)
        self._definitions: Dict[str, PhaseDefinition] = {
            d.name: d for d in (definitions or PHASE_DEFINITIONS)
        }
        self._sequence = self._build_sequence()

    def _build_sequence(self) -> List[PhaseDefinition]:
        """Topological build order, ties broken by position."""
        graph = nx.DiGraph()
        for definition in self._definitions.values():
            graph.add_node(definition.name)
            for upstream in definition.depends_on:
                if upstream not in self._definitions:
                    raise ConfigurationError(
                        f"Phase '{definition.name}' depends on unknown phase '{upstream}'"
                    )
                graph.add_edge(upstream, definition.name)

        if not nx.is_directed_acyclic_graph(graph):
            cycle = [edge[0] for edge in nx.find_cycle(graph)]
            raise CyclicDependencyError(cycle + cycle[:1])

        order = nx.lexicographical_topological_sort(
            graph, key=lambda name: self._definitions[name].position
        )
        return [self._definitions[name] for name in order]

    @property
    def phase_names(self) -> List[str]:
        return [d.name for d in self._sequence]

    def classify(self, project: "Project") -> List[ConstructionPhase]:
        """
        Classify every phase for a project.

        Returns:
            Phases in build order.
        """
        statuses: Dict[str, PhaseStatus] = {}
        timeline: List[ConstructionPhase] = []

        for definition in self._sequence:
            if self.policy == StatusPolicy.CONFIGURATION:
                status = configured_status(definition, project, statuses)
                missing = missing_fields(project, definition)
            else:
                status = static_status(definition, project)
                missing = ()

            statuses[definition.name] = status
            timeline.append(ConstructionPhase(
                name=definition.name,
                position=definition.position,
                status=status,
                duration_days=definition.duration_days,
                skill_level=STATUS_SKILL[status],
                description=definition.description,
                affordance=STATUS_AFFORDANCE[status],
                missing_fields=missing,
            ))

        logger.debug(
            f"Timeline ({self.policy.value}): "
            + ", ".join(f"{p.name}={p.status.value}" for p in timeline)
        )
        return timeline

    def get_definition(self, name: str) -> Optional[PhaseDefinition]:
        """Look up a phase definition by name (case-insensitive)."""
        for definition in self._sequence:
            if definition.name.lower() == name.strip().lower():
                return definition
        return None

    def build_guide(self, name: str) -> List[BuildStep]:
        """
        Ordered build steps for a phase.

        Returns an empty list for phases without guide content or for
        unknown names.
        """
        definition = self.get_definition(name)
        return list(definition.steps) if definition else []
