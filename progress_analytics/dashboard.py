"""Assemble every dashboard view model from one activity payload."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from progress_analytics.adapters.graphql_adapter import ActivityPayload
from progress_analytics.config import AnalyticsConfig
from progress_analytics.level import audit_ratio, completion_percent, estimate_level, format_ratio, level_xp
from progress_analytics.normalizer import normalize, normalize_transactions
from progress_analytics.schema import OVERALL, CategoryTotal, EnrichedRecord, LanguageTotal, RankedEntry
from progress_analytics.summarizer import (
    grade_sum,
    passed_by_language,
    project_grade_sum,
    ranking_languages,
    recent_xp,
    solved_listing,
    sum_by_category,
    sum_by_language,
    top_n,
)
from progress_analytics.timeseries import DayKey, completion_series, utc_day, xp_series

logger = logging.getLogger(__name__)

ALL_PROJECTS = "All Projects"
ALL_XP = "All XP"


@dataclass(frozen=True)
class DashboardSelection:
    """Caller-held chart toggles."""

    xp_groups: frozenset[str] = frozenset({OVERALL})
    project_groups: frozenset[str] = frozenset({OVERALL})
    top_language: str = OVERALL


@dataclass
class ProfileSummary:
    user_id: Optional[int]
    login: str
    display_name: str
    level: int
    completion_percent: int
    audit_ratio: float
    audit_ratio_text: str
    xp_up: float
    xp_down: float
    total_grade: float
    total_project_grade: float


@dataclass
class DashboardView:
    summary: ProfileSummary
    records: list[EnrichedRecord] = field(default_factory=list)
    xp_languages: list[str] = field(default_factory=list)
    xp_series: list[dict[str, Any]] = field(default_factory=list)
    recent_xp: list[dict] = field(default_factory=list)
    project_languages: list[str] = field(default_factory=list)
    project_series: list[dict[str, Any]] = field(default_factory=list)
    solved_projects: list[dict] = field(default_factory=list)
    quests_passed: list[dict] = field(default_factory=list)
    grades_by_category: list[CategoryTotal] = field(default_factory=list)
    grades_by_language: list[LanguageTotal] = field(default_factory=list)
    ranking_languages: list[str] = field(default_factory=list)
    top_grades: list[RankedEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-ready view; enriched records are left out."""

        data = asdict(self)
        data.pop("records")
        return data


def build_dashboard(
    payload: ActivityPayload,
    config: Optional[AnalyticsConfig] = None,
    selection: Optional[DashboardSelection] = None,
    day_key: DayKey = utc_day,
) -> DashboardView:
    """Run every aggregation for one payload and one set of selections."""

    config = config or AnalyticsConfig()
    selection = selection or DashboardSelection()

    records = normalize(payload.progress, config.threshold)
    transactions = normalize_transactions(payload.transactions)

    projects = [record for record in records if record.category == "Project"]
    quests = [record for record in records if record.category == "Quest"]

    xp = xp_series(transactions, day_key)
    completions = completion_series(projects, day_key)

    user = payload.user
    xp_total = level_xp(user.total_up, sum(t.amount for t in transactions))
    level = estimate_level(xp_total, config.xp_per_level)
    ratio = audit_ratio(user.total_up, user.total_down)

    summary = ProfileSummary(
        user_id=user.id,
        login=user.login,
        display_name=user.first_name or user.login,
        level=level,
        completion_percent=completion_percent(level, config.level_cap),
        audit_ratio=ratio,
        audit_ratio_text=format_ratio(ratio),
        xp_up=user.total_up,
        xp_down=user.total_down,
        total_grade=grade_sum(records),
        total_project_grade=project_grade_sum(records),
    )

    view = DashboardView(
        summary=summary,
        records=records,
        xp_languages=xp.groups,
        xp_series=xp.rows(selection.xp_groups, overall_label=ALL_XP),
        recent_xp=recent_xp(transactions, selection.xp_groups, config.recent_xp_limit),
        project_languages=completions.groups,
        project_series=completions.rows(selection.project_groups, overall_label=ALL_PROJECTS),
        solved_projects=solved_listing(projects, selection.project_groups),
        quests_passed=passed_by_language(quests),
        grades_by_category=sum_by_category(records),
        grades_by_language=sum_by_language(records),
        ranking_languages=ranking_languages(records),
        top_grades=top_n(records, config.top_n, selection.top_language),
    )
    logger.info(
        "Dashboard for %s: level %d, %d XP days, %d project days, %d ranked",
        user.login,
        level,
        len(view.xp_series),
        len(view.project_series),
        len(view.top_grades),
    )
    return view
