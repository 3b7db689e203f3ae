"""
errors/taxonomy.py - Issue classification system

Every input problem the core recovers from is recorded as a CabinIssue
instead of being raised. Issues ride along on UpdateResult and
CostEstimate so the UI can hint at them without blocking the user.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from enum import Enum
import uuid


class ErrorSeverity(Enum):
    """Issue severity levels."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ErrorCategory(Enum):
    """Issue categories."""
    # Input coercion (1xxx)
    INPUT = "input"

    # Selections (2xxx)
    SELECTION = "selection"

    # Field routing (3xxx)
    FIELD = "field"


class ErrorCode(Enum):
    """Specific issue codes."""

    # Input (1xxx)
    INP_UNPARSEABLE = 1001
    INP_NON_FINITE = 1002
    INP_PARTIAL_PARSE = 1003
    INP_NEGATIVE = 1004

    # Selection (2xxx)
    SEL_UNKNOWN_CHOICE = 2001
    SEL_MISSING = 2002

    # Field (3xxx)
    FLD_UNRECOGNIZED = 3001
    FLD_READ_ONLY = 3002


@dataclass
class CabinIssue:
    """Structured record of a recovered problem."""

    issue_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    code: ErrorCode = ErrorCode.INP_UNPARSEABLE
    category: ErrorCategory = ErrorCategory.INPUT
    severity: ErrorSeverity = ErrorSeverity.WARNING

    message: str = ""

    # Context
    source: str = ""
    field_name: Optional[str] = None

    # Values
    actual_value: Any = None
    resolved_value: Any = None

    recoverable: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issue_id": self.issue_id,
            "code": self.code.value,
            "category": self.category.value,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
            "field_name": self.field_name,
            "actual_value": self.actual_value,
            "resolved_value": self.resolved_value,
            "recoverable": self.recoverable,
        }


def create_coercion_issue(
    field_name: str,
    actual: Any,
    resolved: float,
    source: str = "coercion",
    code: ErrorCode = ErrorCode.INP_UNPARSEABLE,
) -> CabinIssue:
    """Factory for numeric text that could not be parsed as-is."""
    return CabinIssue(
        code=code,
        category=ErrorCategory.INPUT,
        severity=ErrorSeverity.INFO if code == ErrorCode.INP_PARTIAL_PARSE else ErrorSeverity.WARNING,
        message=f"'{field_name}' value {actual!r} read as {resolved}",
        source=source,
        field_name=field_name,
        actual_value=actual,
        resolved_value=resolved,
    )


def create_unknown_choice_issue(
    field_name: str,
    actual: Any,
    allowed: List[str],
    source: str = "project_store",
) -> CabinIssue:
    """Factory for a selection value outside the allowed set."""
    return CabinIssue(
        code=ErrorCode.SEL_UNKNOWN_CHOICE,
        category=ErrorCategory.SELECTION,
        severity=ErrorSeverity.WARNING,
        message=f"'{field_name}' does not accept {actual!r}; expected one of {allowed}",
        source=source,
        field_name=field_name,
        actual_value=actual,
    )


def create_missing_selection_issue(
    field_name: str,
    category: str,
    default_amount: float,
    source: str = "cost_estimator",
) -> CabinIssue:
    """Factory for an estimate line priced from its category default."""
    return CabinIssue(
        code=ErrorCode.SEL_MISSING,
        category=ErrorCategory.SELECTION,
        severity=ErrorSeverity.INFO,
        message=f"No {field_name} selected; {category} priced at default {default_amount:.2f}",
        source=source,
        field_name=field_name,
        resolved_value=default_amount,
    )


def create_field_issue(
    field_name: str,
    actual: Any,
    read_only: bool = False,
    source: str = "project_store",
) -> CabinIssue:
    """Factory for an ignored update key."""
    if read_only:
        code = ErrorCode.FLD_READ_ONLY
        message = f"'{field_name}' is managed by the store and cannot be set"
    else:
        code = ErrorCode.FLD_UNRECOGNIZED
        message = f"'{field_name}' is not a project field"

    return CabinIssue(
        code=code,
        category=ErrorCategory.FIELD,
        severity=ErrorSeverity.DEBUG,
        message=message,
        source=source,
        field_name=field_name,
        actual_value=actual,
    )
