"""Grade totals, rankings and listings for bar and pie charts."""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Optional

from progress_analytics.schema import (
    OVERALL,
    PASSED,
    CategoryTotal,
    EnrichedRecord,
    EnrichedTransaction,
    LanguageTotal,
    RankedEntry,
)
from progress_analytics.status import status_grade, total_grade

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10
DEFAULT_RECENT_XP_LIMIT = 80


def round2(value: float) -> float:
    """Round half-up to two decimals."""

    return math.floor(value * 100 + 0.5) / 100


def _sum_by(records: Iterable[EnrichedRecord], key: Callable[[EnrichedRecord], str]) -> list[tuple[str, float]]:
    totals: dict[str, float] = {}
    for record in records:
        grade = total_grade(record)
        if grade <= 0:
            continue
        bucket = key(record)
        totals[bucket] = totals.get(bucket, 0.0) + grade
    rounded = [(bucket, round2(total)) for bucket, total in totals.items()]
    return [(bucket, total) for bucket, total in rounded if total > 0]


def sum_by_category(records: Iterable[EnrichedRecord]) -> list[CategoryTotal]:
    """Total lenient grade per category, in order of first appearance."""

    return [CategoryTotal(category, total) for category, total in _sum_by(records, lambda r: r.category)]


def sum_by_language(records: Iterable[EnrichedRecord]) -> list[LanguageTotal]:
    """Total lenient grade per language, in order of first appearance."""

    return [LanguageTotal(language, total) for language, total in _sum_by(records, lambda r: r.language or "Other")]


def top_n(records: Iterable[EnrichedRecord], n: int = DEFAULT_TOP_N, language: Optional[str] = None) -> list[RankedEntry]:
    """Highest-graded records, optionally for one language.

    Equal grades keep their input order.
    """

    entries = [
        RankedEntry(
            name=record.name or "(unnamed)",
            language=record.language,
            category=record.kind,
            grade=total_grade(record),
        )
        for record in records
    ]
    entries = [entry for entry in entries if entry.grade > 0]
    if language and language != OVERALL:
        entries = [entry for entry in entries if entry.language == language]

    ranked = sorted(entries, key=lambda entry: entry.grade, reverse=True)
    return ranked[: max(0, n)]


def ranking_languages(records: Iterable[EnrichedRecord]) -> list[str]:
    """Filter options for the ranking chart: Overall followed by every language seen."""

    return [OVERALL, *sorted({record.language for record in records if record.language})]


def grade_sum(records: Iterable[EnrichedRecord]) -> float:
    return sum(total_grade(record) for record in records)


def project_grade_sum(records: Iterable[EnrichedRecord]) -> float:
    """Sum of status grades over finished records whose raw type is ``project``."""

    grades = [
        float(status_grade(record) or 0)
        for record in records
        if record.raw_type == "project" and record.is_done
    ]
    return round2(sum(grades)) if grades else 0.0


def passed_by_language(records: Iterable[EnrichedRecord]) -> list[dict]:
    """Pie data: number of passed records per language, most first."""

    counts = Counter(record.language or "Other" for record in records if record.status == PASSED)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{"name": language, "value": count} for language, count in ranked]


def _instant(timestamp: datetime) -> datetime:
    """Comparable key for naive and aware timestamps; naive ones are read as UTC."""

    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def _language_filter(selected: Optional[Iterable[str]]) -> set[str]:
    return {value for value in (selected or ()) if value != OVERALL}


def solved_listing(records: Iterable[EnrichedRecord], selected: Optional[Iterable[str]] = None) -> list[dict]:
    """Passed records, newest first, restricted to the selected languages when any are selected."""

    languages = _language_filter(selected)
    solved = [
        record
        for record in records
        if record.status == PASSED and (not languages or (record.language or "Other") in languages)
    ]
    solved.sort(key=lambda record: _instant(record.created_at), reverse=True)
    return [
        {
            "id": record.id,
            "name": record.name or "(unnamed project)",
            "language": record.language or "Other",
            "at": record.created_at.isoformat(),
        }
        for record in solved
    ]


def recent_xp(
    transactions: Iterable[EnrichedTransaction],
    selected: Optional[Iterable[str]] = None,
    limit: int = DEFAULT_RECENT_XP_LIMIT,
) -> list[dict]:
    """XP sources, newest first, restricted to the selected languages when any are selected."""

    languages = _language_filter(selected)
    items = [t for t in transactions if not languages or (t.language or "Other") in languages]
    items.sort(key=lambda t: _instant(t.created_at), reverse=True)
    logger.debug("Listing %d of %d XP sources", min(len(items), limit), len(items))
    return [
        {
            "amount": t.amount or 0,
            "language": t.language or "Other",
            "kind": t.kind,
            "name": t.name or "(unnamed)",
            "at": t.created_at.isoformat(),
        }
        for t in items[: max(0, limit)]
    ]
