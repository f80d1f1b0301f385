"""Build a dashboard report from a saved GraphQL payload."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from progress_analytics.adapters import graphql_adapter
from progress_analytics.config import AnalyticsConfig
from progress_analytics.dashboard import DashboardSelection, build_dashboard
from progress_analytics.logging_config import configure_logging
from progress_analytics.schema import OVERALL


def main() -> None:
    parser = argparse.ArgumentParser(description="Build a progress & XP dashboard report")
    parser.add_argument("--data", required=True, help="Path to a JSON GraphQL response")
    parser.add_argument("--threshold", type=float, default=None, help="Pass threshold (default from env or 1)")
    parser.add_argument("--xp-per-level", type=float, default=None, help="XP per level (default from env or 40000)")
    parser.add_argument("--top", type=int, default=None, help="Entries in the top grades ranking")
    parser.add_argument("--language", default=OVERALL, help="Restrict the ranking to one language")
    parser.add_argument("--log-level", default=None, help="Logging level (default from PROGRESS_LOG_LEVEL)")
    args = parser.parse_args()

    configure_logging(args.log_level)

    try:
        overrides = {
            "threshold": args.threshold,
            "xp_per_level": args.xp_per_level,
            "top_n": args.top,
        }
        config = AnalyticsConfig(**{key: value for key, value in overrides.items() if value is not None})

        payload = graphql_adapter.parse(args.data)
    except ValueError as exc:
        parser.error(str(exc))

    view = build_dashboard(payload, config, DashboardSelection(top_language=args.language))
    report = view.to_dict()

    print(json.dumps(report, indent=2))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "dashboard_report.json"
    out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved dashboard report to {out_path}")


if __name__ == "__main__":
    main()
