"""
CabinKit ProjectStore

Single entry point for mutating a Project. Partial updates are coerced,
merged field by field and then every derived field whose sources were
part of the update is recomputed from the post-merge values, so the
area/cost invariants hold at every visible state.
"""

import copy
import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Tuple

from cabinkit.core.constants import (
    CHOICE_FIELDS,
    DEFAULT_HISTORY_LIMIT,
    NUMERIC_FIELDS,
    READ_ONLY_FIELDS,
    TEXT_FIELDS,
    UPDATABLE_FIELDS,
)
from cabinkit.core.coercion import coerce_number
from cabinkit.core.dimensions import derive_area
from cabinkit.core.enums import FoundationType, RoofMaterial, WallMaterial, enum_from_value
from cabinkit.core.field_aliases import normalize_field
from cabinkit.core.project import Project
from cabinkit.cost.estimator import CostEstimator
from cabinkit.dependencies.graph import DerivedFieldGraph, get_default_graph
from cabinkit.errors.exceptions import ConfigurationError
from cabinkit.errors.taxonomy import (
    CabinIssue,
    create_field_issue,
    create_unknown_choice_issue,
)

logger = logging.getLogger(__name__)

_CHOICE_ENUMS = {
    "foundation_type": FoundationType,
    "wall_material": WallMaterial,
    "roof_material": RoofMaterial,
}

_MISSING = object()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class FieldChange:
    """One recorded field write."""
    field: str
    old_value: Any
    new_value: Any
    source: str
    timestamp: datetime
    derived: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "old_value": _serialize_value(self.old_value),
            "new_value": _serialize_value(self.new_value),
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "derived": self.derived,
        }


@dataclass
class UpdateResult:
    """Outcome of one apply_update call."""
    project: Project
    applied_fields: List[str] = field(default_factory=list)
    changed_fields: List[str] = field(default_factory=list)
    recomputed_fields: List[str] = field(default_factory=list)
    issues: List[CabinIssue] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        """True when no recognized field was accepted."""
        return not self.applied_fields

    def to_dict(self) -> Dict[str, Any]:
        return {
            "project": self.project.to_dict(),
            "applied_fields": list(self.applied_fields),
            "changed_fields": list(self.changed_fields),
            "recomputed_fields": list(self.recomputed_fields),
            "issues": [i.to_dict() for i in self.issues],
        }


def _serialize_value(value: Any) -> Any:
    if hasattr(value, "value"):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class ProjectStore:
    """
    Owns one project for an editing session.

    Features:
    - Partial updates with camelCase or snake_case keys
    - Numeric text coerced, never rejected
    - Derived fields recomputed through the dependency graph
    - Updates serialized under a lock; each one completes before the next
    - Bounded change history
    """

    def __init__(
        self,
        project: Optional[Project] = None,
        estimator: Optional[CostEstimator] = None,
        graph: Optional[DerivedFieldGraph] = None,
        clock: Optional[Callable[[], datetime]] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        """
        Initialize the store.

        Args:
            project: Project to manage. Creates a blank one if not provided.
            estimator: Cost estimator used to derive estimated_cost.
            graph: Derived-field graph. Defaults to the module graph.
            clock: Callable returning the current time (UTC).
            history_limit: Maximum number of FieldChange records kept.
        """
        self._clock = clock or _utcnow
        self._project = copy.deepcopy(project) if project is not None else Project(
            created_at=self._clock(), updated_at=self._clock()
        )
        self.estimator = estimator if estimator is not None else CostEstimator()
        self.graph = graph if graph is not None else get_default_graph()
        self._lock = threading.Lock()
        self._history: Deque[FieldChange] = deque(maxlen=history_limit)

        self._derivers: Dict[str, Callable[[Project], Any]] = {
            "area": derive_area_of,
            "estimated_cost": self._derive_cost,
        }
        missing = [f for f in self.graph.derived_fields() if f not in self._derivers]
        if missing:
            raise ConfigurationError(f"No deriver registered for derived fields: {missing}")

    def _derive_cost(self, project: Project) -> Optional[float]:
        """Estimator total, or None while no selection is made."""
        if not any(getattr(project, name) is not None for name in CHOICE_FIELDS):
            return None
        return self.estimator.total_for(project)

    # ==================== Access ====================

    @property
    def project(self) -> Project:
        """A copy of the current project."""
        with self._lock:
            return copy.deepcopy(self._project)

    @property
    def project_id(self) -> str:
        return self._project.project_id

    def get(self, name: str, default: Any = None) -> Any:
        """Current value of a field, by canonical name or alias."""
        with self._lock:
            return self._project.get(normalize_field(name), default)

    # ==================== Updates ====================

    def apply_update(self, partial: Mapping[str, Any], source: str = "ui") -> Project:
        """
        Merge a partial update and re-derive dependent fields.

        Args:
            partial: Mapping of field name -> new value.
            source: Identifier of who is making the change.

        Returns:
            Copy of the updated project.
        """
        return self.apply_update_detailed(partial, source).project

    def apply_update_detailed(self, partial: Mapping[str, Any], source: str = "ui") -> UpdateResult:
        """
        Same as apply_update, but also reports what happened.

        Returns:
            UpdateResult with accepted, changed and recomputed fields plus
            any recovered issues.
        """
        with self._lock:
            staged, issues = self._stage(partial)

            if not staged:
                logger.debug(f"No recognized fields in update from '{source}'; nothing applied")
                return UpdateResult(project=copy.deepcopy(self._project), issues=issues)

            working = copy.deepcopy(self._project)
            now = self._clock()
            changes: List[FieldChange] = []

            for name, value in staged.items():
                old_value = getattr(working, name)
                if old_value != value:
                    setattr(working, name, value)
                    changes.append(FieldChange(name, old_value, value, source, now))

            recomputed = self.graph.get_recalculation_order(staged.keys())
            for name in recomputed:
                old_value = getattr(working, name)
                new_value = self._derivers[name](working)
                setattr(working, name, new_value)
                if old_value != new_value:
                    changes.append(FieldChange(name, old_value, new_value, source, now, derived=True))

            working.updated_at = now
            self._project = working
            self._history.extend(changes)

            logger.debug(
                f"Update from '{source}': applied={list(staged)}, recomputed={recomputed}, "
                f"issues={len(issues)}"
            )

            return UpdateResult(
                project=copy.deepcopy(working),
                applied_fields=list(staged),
                changed_fields=[c.field for c in changes if not c.derived],
                recomputed_fields=recomputed,
                issues=issues,
            )

    def _stage(self, partial: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[CabinIssue]]:
        """Coerce and route every key of a partial update."""
        staged: Dict[str, Any] = {}
        issues: List[CabinIssue] = []

        for raw_name, raw_value in partial.items():
            name = normalize_field(str(raw_name))

            if name in READ_ONLY_FIELDS or self.graph.is_derived(name):
                issue = create_field_issue(name, raw_value, read_only=True)
                logger.debug(issue.message)
                issues.append(issue)
                continue
            if name not in UPDATABLE_FIELDS:
                issue = create_field_issue(str(raw_name), raw_value)
                logger.debug(issue.message)
                issues.append(issue)
                continue

            value, issue = self._coerce(name, raw_value)
            if issue is not None:
                issues.append(issue)
            if value is not _MISSING:
                staged[name] = value

        return staged, issues

    def _coerce(self, name: str, value: Any) -> Tuple[Any, Optional[CabinIssue]]:
        if name in NUMERIC_FIELDS:
            return coerce_number(name, value, source="project_store")

        if name in CHOICE_FIELDS:
            if value is None or (isinstance(value, str) and not value.strip()):
                return None, None
            enum_cls = _CHOICE_ENUMS[name]
            member = enum_from_value(enum_cls, value)
            if member is None:
                issue = create_unknown_choice_issue(name, value, [m.value for m in enum_cls])
                logger.debug(issue.message)
                return _MISSING, issue
            return member, None

        if name in TEXT_FIELDS:
            return ("" if value is None else str(value)), None

        # template_id
        return (None if value in (None, "") else str(value)), None

    def recompute_derived(self, source: str = "recompute") -> List[str]:
        """
        Re-derive every derived field from the current raw fields.

        Useful after loading a project whose stored derived values may be
        stale. Does not touch updated_at.

        Returns:
            Derived fields whose value changed.
        """
        with self._lock:
            now = self._clock()
            changed = []
            for name in self.graph.derived_fields():
                old_value = getattr(self._project, name)
                new_value = self._derivers[name](self._project)
                if old_value != new_value:
                    setattr(self._project, name, new_value)
                    self._history.append(
                        FieldChange(name, old_value, new_value, source, now, derived=True)
                    )
                    changed.append(name)
            return changed

    # ==================== History ====================

    def get_history(self, field_name: Optional[str] = None) -> List[FieldChange]:
        """
        Recorded field writes, oldest first.

        Args:
            field_name: Optional canonical field name or alias to filter by.
        """
        with self._lock:
            if field_name is None:
                return list(self._history)
            name = normalize_field(field_name)
            return [c for c in self._history if c.field == name]

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    def __repr__(self) -> str:
        return f"ProjectStore({self._project.summary()})"


def derive_area_of(project: Project) -> float:
    """Area deriver bound to a Project."""
    return derive_area({"width": project.width, "length": project.length})
