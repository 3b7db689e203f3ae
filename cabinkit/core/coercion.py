"""
CabinKit Input Coercion

Numeric fields arrive from the UI as whatever the input box holds at the
moment of the keystroke. Parsing reads the leading numeric prefix, the
way the browser's parseFloat does, and falls back to 0 for anything else.
Nothing here raises.
"""

import math
import re
import logging
from decimal import Decimal
from typing import Any, Optional, Tuple

from cabinkit.core.constants import NUMERIC_FALLBACK
from cabinkit.errors.taxonomy import (
    CabinIssue,
    ErrorCode,
    create_coercion_issue,
)

logger = logging.getLogger(__name__)

_NUMBER_PREFIX = re.compile(
    r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)


def _parse(value: Any) -> Tuple[float, Optional[ErrorCode]]:
    # bool is an int subclass; a checkbox value is not a dimension
    if isinstance(value, bool) or value is None:
        return NUMERIC_FALLBACK, ErrorCode.INP_UNPARSEABLE

    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        if not math.isfinite(number):
            return NUMERIC_FALLBACK, ErrorCode.INP_NON_FINITE
        return number, None

    if not isinstance(value, str):
        return NUMERIC_FALLBACK, ErrorCode.INP_UNPARSEABLE

    match = _NUMBER_PREFIX.match(value)
    if match is None:
        return NUMERIC_FALLBACK, ErrorCode.INP_UNPARSEABLE

    number = float(match.group(1))
    if not math.isfinite(number):
        return NUMERIC_FALLBACK, ErrorCode.INP_NON_FINITE

    if match.group(0) != value.rstrip():
        return number, ErrorCode.INP_PARTIAL_PARSE
    return number, None


def parse_number(value: Any) -> float:
    """
    Parse a numeric input value.

    Args:
        value: Text, number or anything else the UI sent.

    Returns:
        The parsed float, or 0.0 when the value has no numeric prefix
        or is not finite.
    """
    number, _ = _parse(value)
    return number


def coerce_number(
    field_name: str,
    value: Any,
    source: str = "coercion",
) -> Tuple[float, Optional[CabinIssue]]:
    """
    Parse a numeric field and describe any recovery that happened.

    Returns:
        Tuple of (parsed value, issue or None)
    """
    number, code = _parse(value)
    if code is None:
        return number, None

    issue = create_coercion_issue(field_name, value, number, source=source, code=code)
    logger.debug(issue.message)
    return number, issue
