"""
Exact-rational musical timeline engine.

Relative timelines (Gap, Interval, Sequential, Parallel) are compiled to
absolute timelines with `from_relative`; unordered absolute intervals are
merged back into a minimal-lane timeline with `from_intervals`.
"""

from .rational import INF, NEG_INF, ONE, ZERO, Rational
from .timeline import Gap, Interval, Parallel, Sequential, Timeline
from .abs_timeline import AbsGap, AbsInterval, AbsParallel, AbsSequential, AbsTimeline, iter_events
from .compiler import from_relative
from .merger import from_intervals
from .flatten import flatten

__all__ = [
    "Rational",
    "ZERO",
    "ONE",
    "INF",
    "NEG_INF",
    "Gap",
    "Interval",
    "Sequential",
    "Parallel",
    "Timeline",
    "AbsGap",
    "AbsInterval",
    "AbsSequential",
    "AbsParallel",
    "AbsTimeline",
    "iter_events",
    "from_relative",
    "from_intervals",
    "flatten",
]
