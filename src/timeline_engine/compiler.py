from __future__ import annotations

"""
Compile a relative Timeline into an absolute one.
"""

from .abs_timeline import AbsGap, AbsInterval, AbsParallel, AbsSequential, AbsTimeline
from .rational import Rational, ZERO
from .timeline import Gap, Interval, Parallel, Sequential, Timeline


def from_relative(timeline: Timeline, start_time: Rational = ZERO) -> AbsTimeline:
    """Assign absolute start/end times to every node of a relative timeline.

    Sequential children are laid out back to back starting at start_time,
    advancing by each child's relative duration. Parallel children all
    start at start_time. An empty Sequential or Parallel becomes an empty
    AbsGap at start_time.
    """
    if isinstance(timeline, Gap):
        return AbsGap(start_time, start_time.add(timeline.duration))

    if isinstance(timeline, Interval):
        return AbsInterval(timeline.value, start_time, start_time.add(timeline.duration))

    if isinstance(timeline, (Sequential, Parallel)) and not timeline.children:
        return AbsGap(start_time, start_time)

    if isinstance(timeline, Sequential):
        cursor = start_time
        children = []
        for child in timeline.children:
            children.append(from_relative(child, cursor))
            cursor = cursor.add(child.duration)
        return AbsSequential(*children)

    if isinstance(timeline, Parallel):
        return AbsParallel(*(from_relative(x, start_time) for x in timeline.children))

    raise TypeError(f"not a timeline: {timeline!r}")
