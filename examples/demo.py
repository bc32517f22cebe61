"""Demo script for timeline-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timeline_engine.adapters.csv_adapter import parse
from timeline_engine.layout import compute_layout
from timeline_engine.records import filter_for_granularity
from timeline_engine.schema import Granularity


def main() -> None:
    items = parse("examples/sample_tasks.csv")
    for granularity in Granularity:
        visible = filter_for_granularity(items, granularity)
        layout = compute_layout(visible, granularity)
        print(f"{granularity.value}: {[bucket.label for bucket in layout.buckets]}")
        for item, span in layout.placed(visible):
            print(f"  {item.label}: buckets {span.start_index}..{span.end_index} ({span.covered_count})")
        print("  today:", layout.today_fraction)


if __name__ == "__main__":
    main()
