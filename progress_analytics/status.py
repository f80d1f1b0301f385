"""Pass/fail resolution and the two grade rules."""

from __future__ import annotations

import math
from typing import Optional

from progress_analytics.schema import FAILED, PASSED, PENDING, ProgressRecord

DEFAULT_THRESHOLD = 1.0


def _as_number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def status_grade(record: ProgressRecord) -> Optional[float]:
    """Direct grade, falling back to the best attempt only when the direct grade is missing."""

    if record.grade is not None:
        return record.grade
    return record.results_max_grade


def total_grade(record: ProgressRecord) -> float:
    """Lenient grade used for totals and rankings: the larger of direct and best attempt."""

    return max(_as_number(record.grade), _as_number(record.results_max_grade))


def resolve_status(record: ProgressRecord, threshold: float = DEFAULT_THRESHOLD) -> str:
    """Return Pending, Passed or Failed for a progress record."""

    effective = status_grade(record)
    if not record.is_done or effective is None:
        return PENDING
    return PASSED if float(effective) >= threshold else FAILED
