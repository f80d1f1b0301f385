"""Level, course progress and audit ratio from cumulative XP."""

from __future__ import annotations

import math

DEFAULT_XP_PER_LEVEL = 40000
DEFAULT_LEVEL_CAP = 50


def estimate_level(xp: float, xp_per_level: float = DEFAULT_XP_PER_LEVEL) -> int:
    if xp_per_level <= 0:
        raise ValueError(f"xp_per_level must be positive, got {xp_per_level}")
    return math.floor((xp or 0) / xp_per_level)


def completion_percent(level: int, level_cap: int = DEFAULT_LEVEL_CAP) -> int:
    """Share of ``level_cap`` reached, rounded half-up and clamped to 0..100."""

    if level_cap <= 0:
        raise ValueError(f"level_cap must be positive, got {level_cap}")
    percent = math.floor(level / level_cap * 100 + 0.5)
    return max(0, min(100, percent))


def audit_ratio(xp_up: float, xp_down: float) -> float:
    if not xp_down or xp_down <= 0:
        return 0.0
    return (xp_up or 0) / xp_down


def format_ratio(ratio: float, digits: int = 2) -> str:
    return f"{ratio:.{digits}f}"


def level_xp(total_up: float | None, transaction_sum: float = 0.0) -> float:
    """XP the level is computed from.

    The account's ``total_up`` is authoritative; the summed XP transactions
    are only used when the account reports no positive total.
    """

    if total_up is not None and math.isfinite(total_up) and total_up > 0:
        return float(total_up)
    return float(transaction_sum or 0)
