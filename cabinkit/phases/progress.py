"""
phases/progress.py - Build progress tracking.

Records which build-guide steps the builder has checked off, per phase,
and reports per-phase and overall completion. The stored form is the
to_dict() mapping of phase name -> completed step indices.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set
import logging

from cabinkit.errors.exceptions import PhaseNotFoundError, StepIndexError
from .classifier import PhaseClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseProgress:
    """Completion of one phase's build guide."""
    name: str
    completed_steps: int
    total_steps: int

    @property
    def ratio(self) -> float:
        """Completed fraction in [0, 1]; 0 for a phase without steps."""
        if self.total_steps == 0:
            return 0.0
        return self.completed_steps / self.total_steps

    @property
    def percent(self) -> float:
        return self.ratio * 100

    @property
    def is_complete(self) -> bool:
        return self.total_steps > 0 and self.completed_steps == self.total_steps

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "completed_steps": self.completed_steps,
            "total_steps": self.total_steps,
            "ratio": round(self.ratio, 4),
            "is_complete": self.is_complete,
        }


class BuildProgress:
    """
    Checked-off build steps for one project.

    Usage:
        progress = BuildProgress()
        progress.complete_step("Foundation", 0)
        progress.phase_progress("Foundation").ratio   # 1/3
    """

    def __init__(
        self,
        classifier: Optional[PhaseClassifier] = None,
        completed: Optional[Mapping[str, Iterable[int]]] = None,
    ):
        self.classifier = classifier if classifier is not None else PhaseClassifier()
        self._completed: Dict[str, Set[int]] = {}
        for phase_name, indices in (completed or {}).items():
            for index in indices:
                self.complete_step(phase_name, index)

    def _resolve(self, phase_name: str) -> str:
        definition = self.classifier.get_definition(phase_name)
        if definition is None:
            raise PhaseNotFoundError(phase_name)
        return definition.name

    def _check_index(self, name: str, index: int) -> None:
        step_count = len(self.classifier.build_guide(name))
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < step_count:
            raise StepIndexError(name, index, step_count)

    def complete_step(self, phase_name: str, index: int) -> None:
        """
        Mark a step done. Marking it again changes nothing.

        Raises:
            PhaseNotFoundError: If the phase is not on the timeline
            StepIndexError: If the phase has no step at that index
        """
        name = self._resolve(phase_name)
        self._check_index(name, index)
        self._completed.setdefault(name, set()).add(index)
        logger.debug(f"Step {index} of {name} completed")

    def uncomplete_step(self, phase_name: str, index: int) -> None:
        """Clear a step's done mark. Clearing an open step changes nothing."""
        name = self._resolve(phase_name)
        self._check_index(name, index)
        done = self._completed.get(name)
        if done is not None:
            done.discard(index)
            if not done:
                del self._completed[name]

    def is_step_complete(self, phase_name: str, index: int) -> bool:
        name = self._resolve(phase_name)
        return index in self._completed.get(name, set())

    def phase_progress(self, phase_name: str) -> PhaseProgress:
        name = self._resolve(phase_name)
        return PhaseProgress(
            name=name,
            completed_steps=len(self._completed.get(name, ())),
            total_steps=len(self.classifier.build_guide(name)),
        )

    def summary(self) -> List[PhaseProgress]:
        """Progress of every phase, in build order."""
        return [self.phase_progress(name) for name in self.classifier.phase_names]

    @property
    def overall_ratio(self) -> float:
        """Completed steps over all guide steps."""
        phases = self.summary()
        total = sum(p.total_steps for p in phases)
        if total == 0:
            return 0.0
        return sum(p.completed_steps for p in phases) / total

    @property
    def current_phase(self) -> Optional[str]:
        """First phase with guide steps that is not finished, if any."""
        for phase in self.summary():
            if phase.total_steps and not phase.is_complete:
                return phase.name
        return None

    def to_dict(self) -> Dict[str, List[int]]:
        """Phase name -> sorted completed step indices, in build order."""
        return {
            name: sorted(self._completed[name])
            for name in self.classifier.phase_names
            if name in self._completed
        }

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Iterable[int]]],
        classifier: Optional[PhaseClassifier] = None,
    ) -> "BuildProgress":
        """
        Rebuild progress from to_dict() output.

        Raises:
            PhaseNotFoundError: If a stored phase is not on the timeline
            StepIndexError: If a stored index is out of range
        """
        return cls(classifier=classifier, completed=data or {})
