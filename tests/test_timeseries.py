from datetime import datetime, timedelta, timezone

from progress_analytics.normalizer import normalize, normalize_transactions
from progress_analytics.schema import ActivityObject, ProgressRecord, XPTransaction
from progress_analytics.timeseries import build_cumulative_series, completion_series, utc_day, xp_series


def tx(amount, when, language=None):
    obj = ActivityObject(1, "task", "project", language) if language else None
    return XPTransaction(amount, datetime.fromisoformat(when), obj)


def project(record_id, when, language, grade=1, record_type="project"):
    return ProgressRecord(
        record_id, datetime.fromisoformat(when), True, grade, grade, ActivityObject(record_id, f"p{record_id}", record_type, language)
    )


def test_negative_amounts_are_summed_on_the_same_day():
    transactions = normalize_transactions(
        [
            tx(10, "2025-01-01T08:00:00", "go"),
            tx(-5, "2025-01-01T12:00:00", "go"),
            tx(20, "2025-01-01T18:00:00", "go"),
        ]
    )
    series = xp_series(transactions)
    assert series.rows() == [{"date": "2025-01-01", "Overall": 25}]


def test_series_are_zero_filled_and_aligned():
    transactions = normalize_transactions(
        [
            tx(10, "2025-01-01T08:00:00", "go"),
            tx(5, "2025-01-02T08:00:00", "js"),
            tx(7, "2025-01-04T08:00:00", "go"),
        ]
    )
    series = xp_series(transactions)

    assert series.days == ["2025-01-01", "2025-01-02", "2025-01-04"]
    assert series.groups == ["Go", "JavaScript"]
    assert series.by_group["Go"] == [10, 10, 17]
    assert series.by_group["JavaScript"] == [0, 5, 5]
    assert series.overall == [10, 15, 22]

    rows = series.rows({"Overall", "Go", "JavaScript"}, overall_label="All XP")
    assert rows[0] == {"date": "2025-01-01", "All XP": 10, "Go": 10, "JavaScript": 0}
    assert all(set(row) == {"date", "All XP", "Go", "JavaScript"} for row in rows)


def test_rows_only_emit_selected_series():
    transactions = normalize_transactions([tx(10, "2025-01-01T08:00:00", "go"), tx(3, "2025-01-02T08:00:00", "py")])
    series = xp_series(transactions)

    assert series.rows({"Python"}) == [
        {"date": "2025-01-01", "Python": 0},
        {"date": "2025-01-02", "Python": 3},
    ]
    assert series.rows(set()) == [{"date": "2025-01-01"}, {"date": "2025-01-02"}]
    assert series.rows({"Ruby"}) == [{"date": "2025-01-01"}, {"date": "2025-01-02"}]
    assert series.by_group["Go"] == [10, 10]
    assert series.overall == [10, 13]


def test_completion_series_counts_passed_projects_only():
    records = normalize(
        [
            project(1, "2025-01-01T10:00:00", "go"),
            project(2, "2025-01-01T11:00:00", "go", grade=0.5),
            project(3, "2025-01-03T11:00:00", "js"),
            project(4, "2025-01-02T11:00:00", "go", record_type="exercise"),
            project(5, "2025-01-05T11:00:00", "go"),
        ]
    )
    series = completion_series(records)
    assert series.days == ["2025-01-01", "2025-01-03", "2025-01-05"]
    assert series.overall == [1, 2, 3]
    assert series.by_group == {"Go": [1, 1, 2], "JavaScript": [0, 1, 1]}


def test_counts_are_non_decreasing_without_gaps():
    base = datetime(2025, 3, 1, 12)
    languages = ["go", "js", "py", "sh"]
    records = normalize(
        [
            ProgressRecord(i, base + timedelta(days=(i * 7) % 11), True, 1, 1, ActivityObject(i, f"p{i}", "project", languages[i % 4]))
            for i in range(40)
        ]
    )
    series = completion_series(records)
    rows = series.rows({"Overall", *series.groups})

    assert len(rows) == len(series.days)
    for name in ["Overall", *series.groups]:
        values = [row[name] for row in rows]
        assert values == sorted(values)
    assert rows[-1]["Overall"] == 40


def test_day_key_is_injectable():
    transactions = normalize_transactions(
        [tx(1, "2025-01-01T23:30:00", "go"), tx(2, "2025-01-02T00:30:00", "go")]
    )
    series = build_cumulative_series(transactions, lambda t: t.language, lambda t: t.amount, day_key=lambda ts: ts.strftime("%Y-%m"))
    assert series.days == ["2025-01"]
    assert series.overall == [3]


def test_utc_day_converts_aware_timestamps():
    aware = datetime(2025, 1, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert utc_day(aware) == "2025-01-02"
    assert utc_day(datetime(2025, 1, 1, 23, 30)) == "2025-01-01"


def test_empty_input_gives_empty_series():
    series = xp_series([])
    assert series.days == []
    assert series.groups == []
    assert series.rows({"Overall"}) == []
    assert completion_series([]).rows() == []
