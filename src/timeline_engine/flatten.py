from __future__ import annotations

"""
Normalize absolute timelines by removing redundant nesting.

flatten_sequential and flatten_parallel are mutually recursive; each
call descends one level, so recursion depth is bounded by tree depth.
"""

from typing import List

from .abs_timeline import AbsGap, AbsParallel, AbsSequential, AbsTimeline


def _flatten_child(child: AbsTimeline) -> AbsTimeline:
    if isinstance(child, AbsSequential):
        return flatten_sequential(child)
    if isinstance(child, AbsParallel):
        return flatten_parallel(child)
    return child


def _wrap(cls, children: List[AbsTimeline]) -> AbsTimeline:
    if not children:
        return AbsGap.ZERO
    if len(children) == 1:
        return children[0]
    return cls(*children)


def flatten_sequential(seq: AbsSequential) -> AbsTimeline:
    """Splice nested sequentials into one level and drop empty gaps."""
    flattened: List[AbsTimeline] = []
    for child in seq.children:
        flat = _flatten_child(child)
        if isinstance(flat, AbsGap) and flat.is_empty:
            continue
        if isinstance(flat, AbsSequential):
            flattened.extend(flat.children)
        else:
            flattened.append(flat)
    return _wrap(AbsSequential, flattened)


def flatten_parallel(par: AbsParallel) -> AbsTimeline:
    """Splice nested parallels into one level and drop empty gaps."""
    flattened: List[AbsTimeline] = []
    for child in par.children:
        flat = _flatten_child(child)
        if isinstance(flat, AbsGap) and flat.is_empty:
            continue
        if isinstance(flat, AbsParallel):
            flattened.extend(flat.children)
        else:
            flattened.append(flat)
    return _wrap(AbsParallel, flattened)


def flatten(timeline: AbsTimeline) -> AbsTimeline:
    """Flatten a timeline. Gaps and intervals are returned unchanged."""
    return _flatten_child(timeline)
