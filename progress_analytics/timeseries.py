"""Cumulative per-day series for line charts."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import numpy as np

from progress_analytics.schema import OVERALL, PASSED, EnrichedRecord, EnrichedTransaction

logger = logging.getLogger(__name__)

DayKey = Callable[[datetime], str]


def utc_day(timestamp: datetime) -> str:
    """Calendar day of a timestamp; aware values are converted to UTC, naive ones taken as-is."""

    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.date().isoformat()


def _running_total(daily: dict[str, float], days: list[str]) -> list:
    return np.cumsum(np.asarray([daily.get(day, 0) for day in days])).tolist()


@dataclass
class CumulativeSeries:
    """Running totals for every group and for the overall sum, aligned on ``days``."""

    days: list[str] = field(default_factory=list)
    by_group: dict[str, list] = field(default_factory=dict)
    overall: list = field(default_factory=list)

    @property
    def groups(self) -> list[str]:
        return sorted(self.by_group)

    def rows(self, selected: Optional[Iterable[str]] = None, overall_label: str = OVERALL) -> list[dict[str, Any]]:
        """Chart rows holding only the selected series.

        ``selected`` defaults to ``{"Overall"}``. The overall column is named
        ``overall_label``; group columns keep their group key.
        """

        chosen = {OVERALL} if selected is None else set(selected)
        show_overall = OVERALL in chosen
        groups = [group for group in self.groups if group in chosen]

        result = []
        for index, day in enumerate(self.days):
            row: dict[str, Any] = {"date": day}
            if show_overall:
                row[overall_label] = self.overall[index]
            for group in groups:
                row[group] = self.by_group[group][index]
            result.append(row)
        return result


def build_cumulative_series(
    records: Iterable,
    group_key: Callable[[Any], str],
    value: Callable[[Any], float],
    day_key: DayKey = utc_day,
) -> CumulativeSeries:
    """Bucket records by day and group, then accumulate each series over the shared day axis."""

    by_group_day: dict[str, dict[str, float]] = defaultdict(lambda: defaultdict(int))
    overall_day: dict[str, float] = defaultdict(int)

    for record in records:
        day = day_key(record.created_at)
        amount = value(record)
        by_group_day[group_key(record)][day] += amount
        overall_day[day] += amount

    days = sorted(set(overall_day).union(*(daily.keys() for daily in by_group_day.values())))

    series = CumulativeSeries(
        days=days,
        by_group={group: _running_total(daily, days) for group, daily in by_group_day.items()},
        overall=_running_total(overall_day, days),
    )
    logger.debug("Built cumulative series: %d days, %d groups", len(days), len(series.by_group))
    return series


def _count(_record) -> int:
    return 1


def _language(record) -> str:
    return record.language or "Other"


def completion_series(records: Iterable[EnrichedRecord], day_key: DayKey = utc_day) -> CumulativeSeries:
    """Cumulative count of passed projects per language."""

    passed = [r for r in records if r.category == "Project" and r.status == PASSED]
    return build_cumulative_series(passed, _language, _count, day_key)


def xp_series(transactions: Iterable[EnrichedTransaction], day_key: DayKey = utc_day) -> CumulativeSeries:
    """Cumulative XP per language; negative amounts are kept."""

    return build_cumulative_series(transactions, _language, lambda t: t.amount or 0, day_key)
