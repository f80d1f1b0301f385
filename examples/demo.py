"""Demo script for progress-analytics."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from progress_analytics.adapters.graphql_adapter import parse
from progress_analytics.dashboard import DashboardSelection, build_dashboard
from progress_analytics.logging_config import configure_logging


def main() -> None:
    configure_logging()
    payload = parse("examples/sample_payload.json")
    view = build_dashboard(payload, selection=DashboardSelection(xp_groups=frozenset({"Overall", "Go"})))
    print("Summary:", view.summary)
    print("XP series:", view.xp_series)
    print("Projects:", view.project_series)
    print("Grades by category:", view.grades_by_category)
    print("Top grades:", view.top_grades)


if __name__ == "__main__":
    main()
