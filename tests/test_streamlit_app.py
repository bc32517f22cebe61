from datetime import datetime

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from timeline_engine.schema import Granularity, Item
from ui_demo_streamlit.app import _show_chart, run_engine


class RecordingPage:
    def __init__(self):
        self.figures = []

    def pyplot(self, fig):
        self.figures.append(fig)


def sample_items():
    return [
        Item("Task-1", "Design", datetime(2025, 1, 6), datetime(2025, 1, 17), 100),
        Item("Task-2", "Build", datetime(2025, 1, 20), datetime(2025, 2, 21), 40),
        Item("Task-3", "Review", datetime(2025, 3, 10), datetime(2025, 3, 10), 20),
    ]


def test_run_engine_day_view_hides_instant_items():
    result = run_engine(sample_items(), Granularity.DAY)
    assert [item.id for item in result["visible"]] == ["Task-1", "Task-2"]
    assert result["summary"]["visible_items"] == 2
    assert len(result["bars"]) == 2


def test_show_chart_releases_figures():
    plt.close("all")
    result = run_engine(sample_items(), Granularity.WEEK)
    page = RecordingPage()

    for _ in range(3):
        _show_chart(page, result["layout"], result["visible"], read_only=False)

    assert len(page.figures) == 3
    assert plt.get_fignums() == []
