import json
from datetime import datetime

from progress_analytics.adapters.graphql_adapter import ActivityPayload, parse_payload
from progress_analytics.config import AnalyticsConfig
from progress_analytics.dashboard import DashboardSelection, build_dashboard
from progress_analytics.schema import ActivityObject, ProgressRecord, UserTotals, XPTransaction


def sample_payload():
    go = ActivityObject(1, "lem-in", "project", "go")
    js = ActivityObject(2, "make-your-game", "project", "js")
    quest = ActivityObject(3, "quest-01", "exercise", "go")
    return ActivityPayload(
        user=UserTotals(id=7, login="jdoe", total_up=1_043_646, total_down=812_300),
        progress=(
            ProgressRecord(1, datetime(2025, 1, 1, 9), True, 1, 1, quest),
            ProgressRecord(2, datetime(2025, 1, 2, 9), True, None, 1.4, go),
            ProgressRecord(3, datetime(2025, 1, 4, 9), True, 2, 2, js),
            ProgressRecord(4, datetime(2025, 1, 5, 9), False, None, None, go),
        ),
        transactions=(
            XPTransaction(10, datetime(2025, 1, 1, 9), quest),
            XPTransaction(-5, datetime(2025, 1, 1, 10), None),
            XPTransaction(20, datetime(2025, 1, 2, 9), go),
            XPTransaction(40, datetime(2025, 1, 4, 9), js),
        ),
    )


def test_build_dashboard_summary():
    view = build_dashboard(sample_payload(), AnalyticsConfig(threshold=1, xp_per_level=40000, level_cap=50))
    summary = view.summary
    assert summary.level == 26
    assert summary.completion_percent == 52
    assert summary.audit_ratio_text == "1.28"
    assert summary.total_project_grade == 3.4
    assert abs(summary.total_grade - 4.4) < 1e-9


def test_build_dashboard_default_selection_shows_overall_only():
    view = build_dashboard(sample_payload(), AnalyticsConfig(threshold=1))
    assert view.xp_series == [
        {"date": "2025-01-01", "All XP": 5},
        {"date": "2025-01-02", "All XP": 25},
        {"date": "2025-01-04", "All XP": 65},
    ]
    assert view.project_series == [
        {"date": "2025-01-02", "All Projects": 1},
        {"date": "2025-01-04", "All Projects": 2},
    ]
    assert view.xp_languages == ["Go", "JavaScript", "Other"]
    assert view.project_languages == ["Go", "JavaScript"]
    assert view.quests_passed == [{"name": "Go", "value": 1}]
    assert [entry.name for entry in view.top_grades] == ["make-your-game", "lem-in", "quest-01"]


def test_build_dashboard_with_selection():
    selection = DashboardSelection(
        xp_groups=frozenset({"Go"}),
        project_groups=frozenset({"Overall", "JavaScript"}),
        top_language="Go",
    )
    view = build_dashboard(sample_payload(), AnalyticsConfig(threshold=1), selection)

    assert view.xp_series[-1] == {"date": "2025-01-04", "Go": 30}
    assert view.project_series[0] == {"date": "2025-01-02", "All Projects": 1, "JavaScript": 0}
    assert [item["name"] for item in view.solved_projects] == ["make-your-game"]
    assert [item["language"] for item in view.recent_xp] == ["Go", "Go"]
    assert [entry.name for entry in view.top_grades] == ["lem-in", "quest-01"]


def test_dashboard_inputs_are_not_mutated():
    payload = sample_payload()
    before = (payload.progress, payload.transactions)
    build_dashboard(payload, AnalyticsConfig(threshold=1))
    assert (payload.progress, payload.transactions) == before


def test_empty_payload_gives_empty_views():
    view = build_dashboard(ActivityPayload(), AnalyticsConfig(threshold=1))
    assert view.records == []
    assert view.xp_series == []
    assert view.project_series == []
    assert view.top_grades == []
    assert view.grades_by_category == []
    assert view.grades_by_language == []
    assert view.ranking_languages == ["Overall"]
    assert view.summary.level == 0
    assert view.summary.audit_ratio_text == "0.00"


def test_to_dict_is_json_ready():
    payload = parse_payload(
        {
            "user": [{"login": "jdoe", "totalUp": 50000, "totalDown": 0}],
            "progress": [
                {
                    "id": 1,
                    "grade": 1,
                    "isDone": True,
                    "createdAt": "2025-01-01T09:00:00Z",
                    "object": {"name": "quest", "type": "exercise", "attrs": {"language": "py"}},
                }
            ],
            "transaction": [],
        }
    )
    data = build_dashboard(payload, AnalyticsConfig(threshold=1)).to_dict()
    assert "records" not in data
    assert data["summary"]["level"] == 1
    assert data["grades_by_language"] == [{"language": "Python", "total": 1.0}]
    json.dumps(data)


def test_mixed_timestamp_forms_are_listed_newest_first():
    obj = {"name": "lem-in", "type": "project", "attrs": {"language": "go"}}
    payload = parse_payload(
        {
            "user": [{"id": 7, "login": "jdoe", "firstName": "Jo", "totalUp": 1000, "totalDown": 500}],
            "progress": [
                {"id": 1, "grade": 1, "isDone": True, "createdAt": "2025-01-01T09:00:00Z", "object": obj},
                {"id": 2, "grade": 1, "isDone": True, "createdAt": "2025-01-02T09:00:00", "object": obj},
            ],
            "transaction": [
                {"amount": 10, "createdAt": "2025-01-01T09:00:00+00:00", "object": obj},
                {"amount": 20, "createdAt": "2025-01-03T09:00:00", "object": obj},
            ],
        }
    )
    view = build_dashboard(payload, AnalyticsConfig(threshold=1))

    assert [item["id"] for item in view.solved_projects] == [2, 1]
    assert [item["amount"] for item in view.recent_xp] == [20, 10]
    assert [row["date"] for row in view.project_series] == ["2025-01-01", "2025-01-02"]


def test_summary_names_the_user():
    view = build_dashboard(sample_payload(), AnalyticsConfig(threshold=1))
    assert view.summary.user_id == 7
    assert view.summary.display_name == "jdoe"

    payload = parse_payload({"user": [{"id": 9, "login": "jdoe", "firstName": "Jo"}]})
    assert build_dashboard(payload, AnalyticsConfig(threshold=1)).summary.display_name == "Jo"
