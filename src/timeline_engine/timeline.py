from __future__ import annotations

"""
Relative-time timelines.

A Timeline is a small closed union:

  - Gap(duration): silence
  - Interval(value, duration): a leaf carrying a payload (usually a Note)
  - Sequential(*children): children placed back to back
  - Parallel(*children): children overlaid from the same offset

Durations are Rationals measured in measures.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, List, Tuple, TypeVar, Union

from .rational import Rational, ZERO

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Gap:
    """A rest. Mostly needed inside containers to space out events."""

    duration: Rational


@dataclass(frozen=True)
class Interval(Generic[T]):
    value: T
    duration: Rational


@dataclass(frozen=True, init=False)
class Sequential:
    """Children played one after another."""

    children: Tuple["Timeline", ...]

    def __init__(self, *children: "Timeline") -> None:
        object.__setattr__(self, "children", tuple(children))

    @property
    def duration(self) -> Rational:
        total = ZERO
        for child in self.children:
            total = total.add(child.duration)
        return total

    @classmethod
    def from_repeat(cls, material: "Timeline", repeats: int) -> "Timeline":
        """Repeat material `repeats` times.

        One repeat returns the material itself; more than one wraps copies
        in a Sequential, which may nest if material is itself Sequential.
        """
        if repeats < 1:
            raise ValueError("repeats must be a positive integer")
        if repeats == 1:
            return material
        return cls(*([material] * repeats))

    @classmethod
    def from_loop(cls, material: "Timeline", total_duration: Rational) -> "Timeline":
        """Loop material until it fills total_duration exactly."""
        if total_duration.equals(ZERO):
            raise ValueError("total duration must be nonzero")
        if material.duration.equals(ZERO):
            raise ValueError("material duration must be nonzero")

        num_repeats = total_duration.div(material.duration)
        if num_repeats.remainder != 0:
            # Needs cropping the material to fit the tail
            raise NotImplementedError("partial loop")

        return cls.from_repeat(material, num_repeats.quotient)


@dataclass(frozen=True, init=False)
class Parallel:
    """Children played simultaneously."""

    children: Tuple["Timeline", ...]

    def __init__(self, *children: "Timeline") -> None:
        object.__setattr__(self, "children", tuple(children))

    @property
    def duration(self) -> Rational:
        longest = ZERO
        for child in self.children:
            longest = longest.max(child.duration)
        return longest


Timeline = Union[Gap, Interval[Any], Sequential, Parallel]


def _unknown(timeline: Any) -> TypeError:
    return TypeError(f"not a timeline: {timeline!r}")


def timeline_map(f: Callable[[Interval[T]], Interval[U]], timeline: Timeline) -> Timeline:
    """Apply f to every Interval, keeping gaps and structure."""
    if isinstance(timeline, Gap):
        return timeline
    if isinstance(timeline, Interval):
        return f(timeline)
    if isinstance(timeline, Sequential):
        return Sequential(*(timeline_map(f, x) for x in timeline.children))
    if isinstance(timeline, Parallel):
        return Parallel(*(timeline_map(f, x) for x in timeline.children))
    raise _unknown(timeline)


def to_events(timeline: Timeline, offset: Rational = ZERO) -> List[Tuple[Any, Rational, Rational]]:
    """List (value, start, end) triples without building an absolute tree."""
    if isinstance(timeline, Gap):
        return []
    if isinstance(timeline, Interval):
        return [(timeline.value, offset, offset.add(timeline.duration))]
    if isinstance(timeline, Sequential):
        start = offset
        results: List[Tuple[Any, Rational, Rational]] = []
        for child in timeline.children:
            results.extend(to_events(child, start))
            start = start.add(child.duration)
        return results
    if isinstance(timeline, Parallel):
        results = []
        for child in timeline.children:
            results.extend(to_events(child, offset))
        return results
    raise _unknown(timeline)


def num_lanes(timeline: Timeline) -> int:
    """Maximum number of intervals that can sound at once."""
    if isinstance(timeline, Gap):
        return 0
    if isinstance(timeline, Interval):
        return 1
    if isinstance(timeline, Sequential):
        return max((num_lanes(x) for x in timeline.children), default=0)
    if isinstance(timeline, Parallel):
        return sum(num_lanes(x) for x in timeline.children)
    raise _unknown(timeline)


def iter_with_gaps(timeline: Timeline) -> Iterator[Union[Gap, Interval[Any]]]:
    """Yield every leaf, gaps included, depth first."""
    if isinstance(timeline, (Gap, Interval)):
        yield timeline
    elif isinstance(timeline, (Sequential, Parallel)):
        for child in timeline.children:
            yield from iter_with_gaps(child)
    else:
        raise _unknown(timeline)


def retrograde(timeline: Timeline) -> Timeline:
    """Reverse a timeline in time.

    Sequential children come back in reverse order. A Parallel child that
    ends before the whole Parallel gets a leading Gap for the silence it
    used to leave at the end, so every lane still finishes together.
    """
    if isinstance(timeline, (Gap, Interval)):
        return timeline
    if isinstance(timeline, Sequential):
        return Sequential(*(retrograde(x) for x in reversed(timeline.children)))
    if isinstance(timeline, Parallel):
        full_duration = timeline.duration
        children: List[Timeline] = []
        for child in timeline.children:
            if child.duration.equals(full_duration):
                children.append(retrograde(child))
            else:
                children.append(Sequential(Gap(full_duration.sub(child.duration)), retrograde(child)))
        return Parallel(*children)
    raise _unknown(timeline)
