"""Lay out a CSV/JSON task or project file and render it as a timeline chart."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from timeline_engine.adapters import csv_adapter, json_adapter
from timeline_engine.layout import compute_layout
from timeline_engine.records import filter_for_granularity
from timeline_engine.render import plot_timeline
from timeline_engine.schema import Granularity

logger = logging.getLogger("render_timeline")


def _load_items(path: Path, kind: str):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path), kind=kind)
    if suffix == ".json":
        return json_adapter.parse(str(path), kind=kind)
    raise ValueError("Unsupported input format, expected .csv or .json")


def _summary(layout, items) -> dict:
    return {
        "granularity": layout.granularity.value,
        "buckets": [
            {"label": bucket.label, "start": bucket.start.isoformat(), "end": bucket.end.isoformat()}
            for bucket in layout.buckets
        ],
        "spans": {
            item.id: None if layout.spans.get(item.id) is None else asdict(layout.spans[item.id])
            for item in items
        },
        "today_fraction": layout.today_fraction,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a project timeline")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON task or project records")
    parser.add_argument("--kind", choices=["task", "project"], default="task")
    parser.add_argument("--granularity", choices=[g.value for g in Granularity], default=Granularity.WEEK.value)
    parser.add_argument("--out", default="outputs/timeline.png", help="Where to write the PNG chart")
    parser.add_argument("--read-only", action="store_true", help="Render with the read-only palette")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    granularity = Granularity(args.granularity)
    items = _load_items(Path(args.data), args.kind)
    visible = filter_for_granularity(items, granularity)
    if not visible and items and granularity is Granularity.DAY:
        logger.warning("No items suitable for the day view; items need a positive duration")

    layout = compute_layout(visible, granularity)
    print(json.dumps(_summary(layout, visible), indent=2))

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig = plot_timeline(layout, visible, read_only=args.read_only)
    fig.savefig(out_path, format="png")
    plt.close(fig)
    print(f"Saved timeline chart to {out_path} ({len(visible)} of {len(items)} items visible)")


if __name__ == "__main__":
    main()
