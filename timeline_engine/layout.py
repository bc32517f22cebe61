"""Timeline layout engine: bucket grid, item spans and today marker."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from timeline_engine.periods import RESOLUTION, align, next_period_start, period_label
from timeline_engine.schema import Bucket, Granularity, Item, Layout, Span

logger = logging.getLogger(__name__)


def effective_end(item: Item) -> datetime:
    """Clamp a reversed interval to zero width at ``start``."""

    return item.end if item.end >= item.start else item.start


def build_buckets(range_start: datetime, range_end: datetime, granularity: Granularity) -> list[Bucket]:
    """Build contiguous buckets from the one holding ``range_start`` to the one holding ``range_end``."""

    cursor = align(range_start, granularity)
    final = max(align(range_end, granularity), cursor)

    buckets: list[Bucket] = []
    while cursor <= final:
        following = next_period_start(cursor, granularity)
        buckets.append(Bucket(start=cursor, end=following - RESOLUTION, label=period_label(cursor, granularity)))
        cursor = following
    return buckets


def locate_span(start: datetime, end: datetime, buckets: Sequence[Bucket]) -> Optional[Span]:
    """Return the first..last overlapping bucket indices, or None without overlap."""

    first = -1
    last = -1
    for index, bucket in enumerate(buckets):
        if start <= bucket.end and end >= bucket.start:
            if first == -1:
                first = index
            last = index

    if first == -1:
        return None
    return Span(start_index=first, end_index=last, covered_count=last - first + 1)


def today_fraction(buckets: Sequence[Bucket], now: datetime) -> Optional[float]:
    """Horizontal position of ``now`` across the grid, in [0, 1)."""

    if not buckets or now < buckets[0].start or now > buckets[-1].end:
        return None

    elapsed = 0.0
    for bucket in buckets:
        if now > bucket.end:
            elapsed += 1.0
            continue
        width = bucket.end - bucket.start + RESOLUTION
        elapsed += (now - bucket.start) / width
        break
    return elapsed / len(buckets)


def compute_layout(items: Sequence[Item], granularity: Granularity, now: Optional[datetime] = None) -> Layout:
    """Lay out ``items`` on a bucket grid of the given granularity.

    Degenerate input is normalized rather than rejected: an empty item list
    yields one bucket around ``now``, and an item ending before it starts is
    placed as a zero-width interval at its start.
    """

    granularity = Granularity(granularity)
    if now is None:
        tz = items[0].start.tzinfo if items else None
        now = datetime.now(tz)

    if not items:
        buckets = build_buckets(now, now, granularity)
        return Layout(granularity=granularity, buckets=buckets, spans={}, today_fraction=today_fraction(buckets, now))

    range_start = min(item.start for item in items)
    range_end = max(effective_end(item) for item in items)
    buckets = build_buckets(range_start, range_end, granularity)

    spans: dict[str, Optional[Span]] = {}
    for item in items:
        span = locate_span(item.start, effective_end(item), buckets)
        if span is None:
            logger.debug("Item %s does not overlap the %s grid; leaving it unplaced", item.id, granularity.value)
        spans[item.id] = span

    logger.debug("Laid out %d items over %d %s buckets", len(items), len(buckets), granularity.value)
    return Layout(
        granularity=granularity,
        buckets=buckets,
        spans=spans,
        today_fraction=today_fraction(buckets, now),
    )
