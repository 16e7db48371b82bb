from __future__ import annotations

"""
Absolute timelines: the compiled form of a Timeline where every node
carries explicit start and end times.

These nodes are produced by `compiler.from_relative` and
`merger.from_intervals`; sketch code does not build them by hand.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, Iterator, Tuple, TypeVar, Union

from .rational import Rational, ZERO

T = TypeVar("T")


@dataclass(frozen=True)
class AbsGap:
    start_time: Rational
    end_time: Rational
    duration: Rational = field(init=False, repr=False, compare=False)

    ZERO: ClassVar["AbsGap"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", self.end_time.sub(self.start_time))

    @property
    def is_empty(self) -> bool:
        return self.duration.equals(ZERO)

    def __iter__(self) -> Iterator["AbsInterval[Any]"]:
        return iter(())


AbsGap.ZERO = AbsGap(ZERO, ZERO)


@dataclass(frozen=True)
class AbsInterval(Generic[T]):
    value: T
    start_time: Rational
    end_time: Rational
    duration: Rational = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "duration", self.end_time.sub(self.start_time))

    def __iter__(self) -> Iterator["AbsInterval[T]"]:
        yield self


@dataclass(frozen=True, init=False)
class AbsSequential:
    """Contiguous children: each one ends exactly when the next begins.

    Silence between events must be spelled out with an AbsGap.
    """

    children: Tuple["AbsTimeline", ...]
    start_time: Rational = field(repr=False, compare=False)
    end_time: Rational = field(repr=False, compare=False)
    duration: Rational = field(repr=False, compare=False)

    def __init__(self, *children: "AbsTimeline") -> None:
        for current, following in zip(children, children[1:]):
            if not current.end_time.equals(following.start_time):
                raise ValueError(
                    "children of AbsSequential must not have any implicit gaps "
                    f"({current.end_time} != {following.start_time})"
                )

        start = end = ZERO
        if children:
            start = children[0].start_time
            end = children[-1].end_time

        object.__setattr__(self, "children", tuple(children))
        object.__setattr__(self, "start_time", start)
        object.__setattr__(self, "end_time", end)
        object.__setattr__(self, "duration", end.sub(start))

    def __iter__(self) -> Iterator["AbsInterval[Any]"]:
        for child in self.children:
            yield from child


@dataclass(frozen=True, init=False)
class AbsParallel:
    """Overlaid lanes. Spans from the earliest child start to the latest child end."""

    children: Tuple["AbsTimeline", ...]
    start_time: Rational = field(repr=False, compare=False)
    end_time: Rational = field(repr=False, compare=False)
    duration: Rational = field(repr=False, compare=False)

    def __init__(self, *children: "AbsTimeline") -> None:
        start = end = ZERO
        if children:
            start = children[0].start_time
            end = children[0].end_time
            for child in children[1:]:
                if child.start_time.lt(start):
                    start = child.start_time
                end = end.max(child.end_time)

        object.__setattr__(self, "children", tuple(children))
        object.__setattr__(self, "start_time", start)
        object.__setattr__(self, "end_time", end)
        object.__setattr__(self, "duration", end.sub(start))

    def __iter__(self) -> Iterator["AbsInterval[Any]"]:
        intervals = [x for child in self.children for x in child]
        # Stable sort: simultaneous notes keep lane order
        intervals.sort(key=lambda x: x.start_time)
        return iter(intervals)


AbsTimeline = Union[AbsGap, AbsInterval[Any], AbsSequential, AbsParallel]


def iter_events(timeline: AbsTimeline) -> Iterator[Tuple[Any, Rational, Rational]]:
    """Yield (payload, start_time, end_time) triples in timeline order.

    This is the flat view consumed by audio schedulers and MIDI export.
    """
    for interval in timeline:
        yield interval.value, interval.start_time, interval.end_time


def count_lanes(timeline: AbsTimeline) -> int:
    """Number of lanes needed to play the timeline without overlaps in a lane."""
    if isinstance(timeline, AbsGap):
        return 0
    if isinstance(timeline, AbsInterval):
        return 1
    if isinstance(timeline, AbsSequential):
        return max((count_lanes(x) for x in timeline.children), default=0)
    if isinstance(timeline, AbsParallel):
        return sum(count_lanes(x) for x in timeline.children)
    raise TypeError(f"not an absolute timeline: {timeline!r}")
