from __future__ import annotations

import pytest

from timeline_engine.abs_timeline import (
    AbsGap,
    AbsInterval,
    AbsParallel,
    AbsSequential,
    count_lanes,
    iter_events,
)
from timeline_engine.compiler import from_relative
from timeline_engine.rational import ONE, ZERO, Rational
from timeline_engine.timeline import Gap, Interval, Parallel, Sequential


def test_durations_are_derived():
    assert AbsGap(ONE, Rational(5, 2)).duration == Rational(3, 2)
    assert AbsInterval("x", Rational(1, 4), Rational(3, 4)).duration == Rational(1, 2)


def test_zero_gap_placeholder():
    assert AbsGap.ZERO.is_empty
    assert AbsGap.ZERO.duration == ZERO
    assert not AbsGap(ONE, Rational(2)).is_empty


def test_sequential_spans_first_to_last_child():
    seq = AbsSequential(AbsInterval(1, ONE, Rational(2)), AbsGap(Rational(2), Rational(4)))
    assert (seq.start_time, seq.end_time, seq.duration) == (ONE, Rational(4), Rational(3))


def test_sequential_rejects_implicit_gaps():
    with pytest.raises(ValueError, match="implicit gaps"):
        AbsSequential(AbsInterval(1, ZERO, ONE), AbsInterval(2, Rational(2), Rational(3)))


def test_parallel_spans_earliest_start_to_latest_end():
    par = AbsParallel(
        AbsInterval(1, ONE, Rational(2)),
        AbsInterval(2, Rational(1, 2), Rational(3, 2)),
        AbsInterval(3, ONE, Rational(5, 2)),
    )
    assert par.start_time == Rational(1, 2)
    assert par.end_time == Rational(5, 2)
    assert par.duration == Rational(2)


def test_empty_containers_span_nothing():
    assert AbsSequential().duration == ZERO
    assert AbsParallel().end_time == ZERO


def test_iteration_skips_gaps():
    a = AbsInterval("a", ZERO, ONE)
    b = AbsInterval("b", Rational(2), Rational(3))
    seq = AbsSequential(a, AbsGap(ONE, Rational(2)), b)
    assert list(seq) == [a, b]
    assert list(AbsGap.ZERO) == []


def test_parallel_iterates_in_start_order():
    timeline = from_relative(
        Parallel(
            Sequential(Interval("a", ONE), Interval("c", ONE)),
            Sequential(Gap(Rational(1, 2)), Interval("b", ONE)),
        )
    )
    assert [x.value for x in timeline] == ["a", "b", "c"]


def test_iter_events_yields_triples():
    timeline = from_relative(Sequential(Interval("x", Rational(1, 2)), Interval("y", Rational(1, 2))), Rational(1, 4))
    assert list(iter_events(timeline)) == [
        ("x", Rational(1, 4), Rational(3, 4)),
        ("y", Rational(3, 4), Rational(5, 4)),
    ]


def test_count_lanes():
    timeline = from_relative(
        Sequential(
            Interval(1, ONE),
            Parallel(Interval(2, ONE), Sequential(Interval(3, ONE), Parallel(Interval(4, ONE), Interval(5, ONE)))),
        )
    )
    assert count_lanes(timeline) == 3
    assert count_lanes(AbsGap.ZERO) == 0


def test_nodes_are_immutable():
    interval = AbsInterval(1, ZERO, ONE)
    with pytest.raises(AttributeError):
        interval.start_time = ONE  # type: ignore[misc]
