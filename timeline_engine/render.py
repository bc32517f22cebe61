"""Bar geometry and matplotlib rendering for computed layouts."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from timeline_engine.schema import Granularity, Item, Layout

PROJECT_COL_W = 240
DATE_COL_W = 110
UNIT_MIN_W = {
    Granularity.DAY: 40,
    Granularity.WEEK: 80,
    Granularity.MONTH: 120,
}

COLORS = {
    "bar": "#1d4ed8",
    "progress": "#93c5fd",
    "grid": "#e6e7ea",
    "text": "#0f172a",
    "today": "#ef4444",
}
READONLY_COLORS = {
    "bar": "#9ca3af",
    "progress": "#d1d5db",
}


def bar_frame(layout: Layout, items: Sequence[Item]) -> dict[str, Any]:
    """Return bar positions as fractions of the grid for every placed item."""

    placed = list(layout.placed(items))
    count = float(max(layout.bucket_count, 1))

    starts = np.asarray([span.start_index for _, span in placed], dtype=float)
    covered = np.asarray([span.covered_count for _, span in placed], dtype=float)
    progress = np.asarray([item.progress for item, _ in placed], dtype=float)

    return {
        "ids": [item.id for item, _ in placed],
        "labels": [item.label for item, _ in placed],
        "left": starts / count,
        "width": covered / count,
        "progress": np.clip(progress, 0.0, 100.0),
    }


def grid_min_width(layout: Layout) -> int:
    """Minimum pixel width of the chart: label columns plus one unit per bucket."""

    return PROJECT_COL_W + DATE_COL_W * 2 + layout.bucket_count * UNIT_MIN_W[layout.granularity]


def today_offset(layout: Layout) -> Optional[float]:
    """Pixel x-position of the today line, or None when now is off the grid."""

    if layout.today_fraction is None:
        return None
    grid_width = layout.bucket_count * UNIT_MIN_W[layout.granularity]
    return PROJECT_COL_W + DATE_COL_W * 2 + layout.today_fraction * grid_width


def plot_timeline(layout: Layout, items: Sequence[Item], read_only: bool = False, ax=None):
    """Draw a Gantt chart of ``layout`` in bucket units and return the figure."""

    frame = bar_frame(layout, items)
    count = layout.bucket_count
    rows = len(frame["labels"])

    if ax is None:
        width_in = max(8.0, grid_min_width(layout) / 100.0)
        fig, ax = plt.subplots(figsize=(width_in, 1.5 + 0.5 * max(rows, 1)))
    else:
        fig = ax.figure

    palette = dict(COLORS)
    if read_only:
        palette.update(READONLY_COLORS)

    ax.set_xlim(0, count)
    ax.set_xticks(np.arange(count) + 0.5)
    ax.set_xticklabels([bucket.label for bucket in layout.buckets], fontsize=8)
    ax.set_xticks(np.arange(count + 1), minor=True)
    ax.grid(which="minor", axis="x", color=palette["grid"])
    ax.tick_params(which="minor", length=0)

    if not rows:
        ax.set_yticks([])
        ax.text(0.5, 0.5, "No tasks to display", ha="center", va="center", color="gray", transform=ax.transAxes)
    else:
        y_pos = np.arange(rows)
        left = frame["left"] * count
        width = frame["width"] * count
        done = width * frame["progress"] / 100.0

        ax.barh(y_pos, width, left=left, height=0.5, align="center", color=palette["bar"], alpha=0.8 if read_only else 1.0)
        ax.barh(y_pos, done, left=left, height=0.5, align="center", color=palette["progress"])
        for y, x, pct in zip(y_pos, left, frame["progress"]):
            ax.text(x + 0.05, y, f"{pct:.0f}%", va="center", ha="left", fontsize=8, color="white")

        ax.set_yticks(y_pos)
        ax.set_yticklabels(frame["labels"])
        ax.set_ylim(rows - 0.5, -0.5)

    if layout.today_fraction is not None:
        ax.axvline(layout.today_fraction * count, color=palette["today"], linewidth=2, alpha=0.95)

    title = f"Timeline - {layout.granularity.value} view"
    if read_only:
        title += " (read-only)"
    ax.set_title(title)
    fig.tight_layout()
    return fig
