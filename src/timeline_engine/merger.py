from __future__ import annotations

"""
Rebuild a timeline from an unordered bag of absolute intervals.

Intervals are swept in start-time order and packed into as few parallel
lanes as the overlaps require. Lanes are chosen first-fit by index, and
silence is always materialized as an explicit AbsGap.
"""

import os
from typing import Any, List, Sequence

from .abs_timeline import (
    AbsGap,
    AbsInterval,
    AbsParallel,
    AbsSequential,
    AbsTimeline,
    count_lanes,
)


def concat_timelines(a: AbsTimeline, b: AbsTimeline) -> AbsSequential:
    """Put b after a, inserting an AbsGap if b starts later than a ends."""
    if a.end_time.equals(b.start_time):
        return AbsSequential(a, b)
    return AbsSequential(a, AbsGap(a.end_time, b.start_time), b)


def _pad_start(interval: AbsInterval[Any], start_time) -> AbsTimeline:
    if start_time.equals(interval.start_time):
        return interval
    return AbsSequential(AbsGap(start_time, interval.start_time), interval)


def fit_parallel(parallel: AbsParallel, interval: AbsInterval[Any]) -> AbsParallel:
    """Place interval in the first lane that is free by its start time.

    If every lane is still busy, a new lane is opened.
    """
    lanes = parallel.children
    for i, lane in enumerate(lanes):
        if lane.end_time.le(interval.start_time):
            return AbsParallel(*lanes[:i], concat_timelines(lane, interval), *lanes[i + 1:])

    return AbsParallel(*lanes, _pad_start(interval, parallel.start_time))


def merge_interval(timeline: AbsTimeline, interval: AbsInterval[Any]) -> AbsTimeline:
    """Fold one interval into the accumulated timeline.

    Intervals must arrive sorted by start time.
    """
    if timeline is AbsGap.ZERO:
        return interval

    # No overlap with anything so far
    if interval.start_time.ge(timeline.end_time):
        return concat_timelines(timeline, interval)

    if isinstance(timeline, AbsParallel):
        return fit_parallel(timeline, interval)

    # A single lane overlaps the interval: promote to two lanes
    return AbsParallel(timeline, _pad_start(interval, timeline.start_time))


def from_intervals(intervals: Sequence[AbsInterval[Any]]) -> AbsTimeline:
    """Merge intervals (in any order) into a single absolute timeline.

    Every interval keeps its exact start/end time and payload. Ties in
    start time keep their input order. Intervals ending before they start
    are rejected with ValueError; zero-length intervals are kept.
    """
    for interval in intervals:
        if interval.end_time.lt(interval.start_time):
            raise ValueError(
                f"interval ends before it starts: {interval.start_time} > {interval.end_time}"
            )

    if not intervals:
        return AbsGap.ZERO
    if len(intervals) == 1:
        return intervals[0]

    ordered: List[AbsInterval[Any]] = sorted(intervals, key=lambda x: x.start_time)

    merged: AbsTimeline = AbsGap.ZERO
    for interval in ordered:
        merged = merge_interval(merged, interval)

    if os.environ.get("TIMELINE_ENGINE_DEBUG"):
        print(f"[merge-debug] intervals={len(ordered)} lanes={count_lanes(merged)}")
    return merged
