"""Core data schema for timeline layout."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class Granularity(str, Enum):
    """Bucket size and alignment mode of a timeline grid."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class Item:
    """Time-ranged record placed on the timeline by its caller."""

    id: str
    label: str
    start: datetime
    end: datetime
    progress: float = 0.0


@dataclass
class Bucket:
    """One period of the grid; ``end`` is the last millisecond of the period."""

    start: datetime
    end: datetime
    label: str


@dataclass
class Span:
    start_index: int
    end_index: int
    covered_count: int


@dataclass
class Layout:
    """Bucket grid, per-item spans and the position of now."""

    granularity: Granularity
    buckets: List[Bucket]
    spans: Dict[str, Optional[Span]] = field(default_factory=dict)
    today_fraction: Optional[float] = None

    @property
    def bucket_count(self) -> int:
        return len(self.buckets)

    def placed(self, items: Iterable[Item]) -> Iterator[Tuple[Item, Span]]:
        """Yield items that have a span, in the given order."""

        for item in items:
            span = self.spans.get(item.id)
            if span is not None:
                yield item, span
