"""Streamlit demo UI for progress-analytics."""

from __future__ import annotations

import json
from typing import Any

from progress_analytics.adapters import graphql_adapter
from progress_analytics.config import AnalyticsConfig
from progress_analytics.dashboard import DashboardSelection, DashboardView, build_dashboard
from progress_analytics.logging_config import configure_logging
from progress_analytics.schema import OVERALL

DEMO_PAYLOAD = "examples/sample_payload.json"


def _load_payload(uploaded_file, use_demo: bool) -> tuple[graphql_adapter.ActivityPayload, str]:
    if use_demo:
        return graphql_adapter.parse(DEMO_PAYLOAD), f"demo payload ({DEMO_PAYLOAD})"
    if uploaded_file is None:
        raise ValueError("Please upload a JSON payload or enable 'Load demo payload'.")
    try:
        data = json.loads(uploaded_file.getvalue().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"{uploaded_file.name} is not valid JSON") from exc
    return graphql_adapter.parse_payload(data), f"uploaded file ({uploaded_file.name})"


def _series_frame(rows: list[dict[str, Any]]):
    import pandas as pd

    return pd.DataFrame(rows).set_index("date")


def _records_frame(items: list) -> Any:
    import pandas as pd

    return pd.DataFrame([item if isinstance(item, dict) else vars(item) for item in items])


def render(view: DashboardView) -> None:
    import streamlit as st

    summary = view.summary
    st.subheader(f"Welcome to your dashboard, {summary.display_name}!")
    st.caption(f"User name: {summary.login} • User ID: {summary.user_id}")
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Level", summary.level)
    c2.metric("Course progress", f"{summary.completion_percent}%")
    c3.metric("Audit ratio", summary.audit_ratio_text)
    c4.metric("XP up", f"{summary.xp_up:,.0f}")
    c5.metric("XP down", f"{summary.xp_down:,.0f}")
    st.progress(summary.completion_percent / 100)

    st.subheader("Skills progression (cumulative XP)")
    if view.xp_series:
        st.line_chart(_series_frame(view.xp_series))
    else:
        st.info("No XP to plot.")
    with st.expander("Recent XP sources"):
        st.dataframe(_records_frame(view.recent_xp))

    left, right = st.columns([2, 1])
    with left:
        st.subheader("Projects (cumulative completions)")
        if view.project_series:
            st.line_chart(_series_frame(view.project_series))
        else:
            st.info("No data to plot.")
        st.dataframe(_records_frame(view.solved_projects))
    with right:
        st.subheader("Quests passed by language")
        if view.quests_passed:
            st.bar_chart(_records_frame(view.quests_passed).set_index("name"))
        else:
            st.info("No passed quests yet.")

    st.subheader("Top grades")
    if view.top_grades:
        st.bar_chart(_records_frame(view.top_grades).set_index("name")["grade"])
    else:
        st.info("No graded tasks found.")

    g1, g2 = st.columns(2)
    with g1:
        st.subheader("Grades by category")
        if view.grades_by_category:
            st.bar_chart(_records_frame(view.grades_by_category).set_index("category"))
        else:
            st.info("No grade data available.")
    with g2:
        st.subheader("Grades by language")
        if view.grades_by_language:
            st.bar_chart(_records_frame(view.grades_by_language).set_index("language"))
        else:
            st.info("No grade data available.")


def main() -> None:
    import streamlit as st

    configure_logging()
    st.set_page_config(page_title="Progress Analytics Demo", layout="wide")
    st.title("Progress Analytics — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload GraphQL response", type=["json"])
        use_demo = st.checkbox("Load demo payload", value=True)
        threshold = st.number_input("Pass threshold", min_value=0.0, max_value=10.0, value=1.0, step=0.1)
        xp_per_level = st.number_input("XP per level", min_value=1000, max_value=200000, value=40000, step=1000)

    try:
        payload, data_source = _load_payload(uploaded, use_demo)
        config = AnalyticsConfig(threshold=float(threshold), xp_per_level=float(xp_per_level))

        overview = build_dashboard(payload, config)
        with st.sidebar:
            xp_groups = st.multiselect("XP series", [OVERALL, *overview.xp_languages], default=[OVERALL])
            project_groups = st.multiselect(
                "Project series", [OVERALL, *overview.project_languages], default=[OVERALL]
            )
            top_language = st.selectbox("Top grades language", overview.ranking_languages)

        selection = DashboardSelection(
            xp_groups=frozenset(xp_groups),
            project_groups=frozenset(project_groups),
            top_language=top_language or OVERALL,
        )
        view = build_dashboard(payload, config, selection)

        st.success(f"Loaded {len(view.records)} progress rows from {data_source}.")
        render(view)

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
