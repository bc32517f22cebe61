"""Streamlit timeline viewer for timeline-engine."""

from __future__ import annotations

import tempfile
from collections import Counter
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt

from timeline_engine.adapters import csv_adapter, json_adapter
from timeline_engine.layout import compute_layout
from timeline_engine.records import filter_for_granularity
from timeline_engine.render import bar_frame, grid_min_width, plot_timeline
from timeline_engine.schema import Granularity


DEMO_DATASETS = {
    "task": "examples/sample_tasks.csv",
    "project": "examples/sample_projects.json",
}


def _parse_items_from_path(file_path: str, kind: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path, kind=kind)
    if suffix == ".json":
        return json_adapter.parse(file_path, kind=kind)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file, kind: str) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_items_from_path(temp_path, kind)


def _build_summary(items: list, visible: list) -> dict[str, Any]:
    progress_bands = Counter("done" if item.progress >= 100 else "started" if item.progress > 0 else "not started" for item in items)
    return {
        "total_items": len(items),
        "visible_items": len(visible),
        "progress_bands": {band: progress_bands.get(band, 0) for band in ("not started", "started", "done")},
    }


def _show_chart(st, layout, items: list, read_only: bool) -> None:
    """Render the chart into the page and release the pyplot figure."""

    fig = plot_timeline(layout, items, read_only=read_only)
    try:
        st.pyplot(fig)
    finally:
        plt.close(fig)


def run_engine(items: list, granularity: Granularity) -> dict[str, Any]:
    """Filter, lay out and tabulate items for the UI."""

    visible = filter_for_granularity(items, granularity)
    layout = compute_layout(visible, granularity)
    frame = bar_frame(layout, visible)

    bars = [
        {
            "item": label,
            "left %": round(left * 100.0, 2),
            "width %": round(width * 100.0, 2),
            "progress %": float(progress),
        }
        for label, left, width, progress in zip(frame["labels"], frame["left"], frame["width"], frame["progress"])
    ]
    buckets = [
        {"label": bucket.label, "start": bucket.start.isoformat(sep=" "), "end": bucket.end.isoformat(sep=" ")}
        for bucket in layout.buckets
    ]

    return {
        "summary": _build_summary(items, visible),
        "visible": visible,
        "layout": layout,
        "bars": bars,
        "buckets": buckets,
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Project Timeline", layout="wide")
    st.title("Project Timeline")

    with st.sidebar:
        st.header("Controls")
        kind = st.selectbox("Records", options=["task", "project"], index=0)
        uploaded = st.file_uploader("Upload records", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        granularity = st.selectbox(
            "View",
            options=[g.value for g in Granularity],
            index=1 if kind == "task" else 2,
            format_func=lambda value: f"{value.title()} View",
        )
        read_only = st.checkbox("Read-only", value=False)
        run = st.button("Show timeline", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Show timeline**.")
        return

    try:
        if use_demo:
            items = _parse_items_from_path(DEMO_DATASETS[kind], kind)
            data_source = f"demo dataset ({DEMO_DATASETS[kind]})"
        elif uploaded is not None:
            items = _parse_uploaded(uploaded, kind)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        if not items:
            st.error(f"No {kind}s with valid dates were found in the selected input.")
            return

        view = Granularity(granularity)
        result = run_engine(items, view)
        if not result["visible"]:
            st.warning("No tasks suitable for Day view. Tasks need at least 1 day duration.")
            return

        st.success(f"Loaded {len(items)} {kind}s from {data_source}.")

        summary = result["summary"]
        c1, c2, c3 = st.columns(3)
        c1.metric("Visible", f"{summary['visible_items']} of {summary['total_items']}")
        c2.metric("Buckets", result["layout"].bucket_count)
        c3.metric("Min width", f"{grid_min_width(result['layout'])} px")
        st.table([summary["progress_bands"]])

        st.subheader(f"Project Timeline - {view.value} View")
        _show_chart(st, result["layout"], result["visible"], read_only)
        if read_only:
            st.caption("Timeline view only - No modifications allowed")

        b1, b2 = st.columns(2)
        b1.write("**Buckets**")
        b1.table(result["buckets"])
        b2.write("**Bars**")
        b2.table(result["bars"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while building the timeline. Please verify the input format.")


if __name__ == "__main__":
    main()
