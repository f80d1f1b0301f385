"""
Configuration for the progress analytics engine.

Values default from environment variables so a deployment can tune the
grading policy without code changes:

- PROGRESS_PASS_THRESHOLD   minimum effective grade for a finished record to pass
- PROGRESS_XP_PER_LEVEL     XP needed per level
- PROGRESS_LEVEL_CAP        level treated as 100% course progress
- PROGRESS_TOP_N            entries in the top grades ranking
- PROGRESS_RECENT_XP_LIMIT  entries in the recent XP sources list
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from progress_analytics.level import DEFAULT_LEVEL_CAP, DEFAULT_XP_PER_LEVEL
from progress_analytics.status import DEFAULT_THRESHOLD
from progress_analytics.summarizer import DEFAULT_RECENT_XP_LIMIT, DEFAULT_TOP_N


def _env_number(name: str, default: float, cast=float):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return cast(default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass
class AnalyticsConfig:
    """Grading and summary settings applied uniformly to every aggregation."""

    threshold: float = field(default_factory=lambda: _env_number("PROGRESS_PASS_THRESHOLD", DEFAULT_THRESHOLD))
    xp_per_level: float = field(default_factory=lambda: _env_number("PROGRESS_XP_PER_LEVEL", DEFAULT_XP_PER_LEVEL))
    level_cap: int = field(default_factory=lambda: _env_number("PROGRESS_LEVEL_CAP", DEFAULT_LEVEL_CAP, int))
    top_n: int = field(default_factory=lambda: _env_number("PROGRESS_TOP_N", DEFAULT_TOP_N, int))
    recent_xp_limit: int = field(
        default_factory=lambda: _env_number("PROGRESS_RECENT_XP_LIMIT", DEFAULT_RECENT_XP_LIMIT, int)
    )

    def __post_init__(self):
        if self.xp_per_level <= 0:
            raise ValueError(f"xp_per_level must be positive, got {self.xp_per_level}")
        if self.level_cap <= 0:
            raise ValueError(f"level_cap must be positive, got {self.level_cap}")
        if self.top_n < 0:
            raise ValueError(f"top_n must not be negative, got {self.top_n}")
        if self.recent_xp_limit < 0:
            raise ValueError(f"recent_xp_limit must not be negative, got {self.recent_xp_limit}")
