from datetime import datetime

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from timeline_engine.layout import compute_layout
from timeline_engine.render import bar_frame, grid_min_width, plot_timeline, today_offset
from timeline_engine.schema import Granularity, Item


def sample_items():
    return [
        Item("1", "First", datetime(2025, 1, 15), datetime(2025, 1, 20), 150),
        Item("2", "Second", datetime(2025, 2, 1), datetime(2025, 2, 10), 30),
    ]


def test_bar_frame_fractions():
    items = sample_items()
    layout = compute_layout(items, Granularity.MONTH, now=datetime(2025, 2, 1))
    frame = bar_frame(layout, items)

    assert frame["ids"] == ["1", "2"]
    assert np.allclose(frame["left"], [0.0, 0.5])
    assert np.allclose(frame["width"], [0.5, 0.5])
    assert np.allclose(frame["progress"], [100.0, 30.0])


def test_pixel_geometry():
    layout = compute_layout(sample_items(), Granularity.MONTH, now=datetime(2025, 2, 1))
    assert grid_min_width(layout) == 240 + 220 + 2 * 120
    assert today_offset(layout) == 240 + 220 + 0.5 * 240

    outside = compute_layout(sample_items(), Granularity.MONTH, now=datetime(2026, 1, 1))
    assert today_offset(outside) is None


def test_plot_timeline_draws_bars():
    items = sample_items()
    layout = compute_layout(items, Granularity.MONTH, now=datetime(2025, 2, 1))
    fig = plot_timeline(layout, items, read_only=True)
    ax = fig.axes[0]

    assert [tick.get_text() for tick in ax.get_xticklabels()] == ["Jan 2025", "Feb 2025"]
    assert len(ax.patches) == 4
    assert "read-only" in ax.get_title()
    plt.close(fig)


def test_plot_timeline_empty():
    layout = compute_layout([], Granularity.WEEK, now=datetime(2025, 2, 1))
    fig = plot_timeline(layout, [])
    assert any(text.get_text() == "No tasks to display" for text in fig.axes[0].texts)
    plt.close(fig)
