from __future__ import annotations

import pytest

from timeline_engine.rational import ONE, ZERO, Rational
from timeline_engine.timeline import (
    Gap,
    Interval,
    Parallel,
    Sequential,
    iter_with_gaps,
    num_lanes,
    retrograde,
    timeline_map,
    to_events,
)


def test_sequential_duration_sums_children():
    seq = Sequential(Interval(1, Rational(1)), Interval(2, Rational(1, 2)))
    assert seq.duration == Rational(3, 2)


def test_sequential_duration_of_nested_sequences():
    seq = Sequential(
        Interval(1, Rational(1)),
        Sequential(Interval(2, Rational(1, 2)), Interval(3, Rational(2))),
        Interval(4, Rational(1, 2)),
    )
    # 1 + 1/2 + 2 + 1/2
    assert seq.duration == Rational(4)


def test_parallel_duration_is_max():
    par = Parallel(
        Interval(1, Rational(1)),
        Parallel(Interval(1, Rational(1, 2)), Interval(1, Rational(2))),
        Interval(1, Rational(1, 2)),
    )
    assert par.duration == Rational(2)


def test_empty_containers_have_zero_duration():
    assert Sequential().duration == ZERO
    assert Parallel().duration == ZERO


def test_duration_additivity():
    a = Sequential(Interval("a", Rational(1, 3)), Gap(Rational(1, 6)))
    b = Parallel(Interval("b", Rational(3, 4)), Interval("c", Rational(1, 4)))
    assert Sequential(a, b).duration == a.duration + b.duration
    assert Parallel(a, b).duration == a.duration.max(b.duration)


def test_nodes_are_immutable():
    seq = Sequential(Gap(ONE))
    with pytest.raises(AttributeError):
        seq.children = ()  # type: ignore[misc]
    assert isinstance(seq.children, tuple)


def test_from_repeat():
    interval = Interval(1, Rational(2))
    with pytest.raises(ValueError, match="repeats must be a positive integer"):
        Sequential.from_repeat(interval, 0)
    assert Sequential.from_repeat(interval, 1) is interval
    assert Sequential.from_repeat(interval, 3) == Sequential(interval, interval, interval)


def test_from_loop():
    interval = Interval(1, Rational(2))
    with pytest.raises(ValueError, match="total duration must be nonzero"):
        Sequential.from_loop(interval, ZERO)
    assert Sequential.from_loop(interval, Rational(2)) is interval
    assert Sequential.from_loop(interval, Rational(8)) == Sequential(*([interval] * 4))
    with pytest.raises(NotImplementedError):
        Sequential.from_loop(interval, Rational(3))


def test_from_loop_rejects_zero_length_material():
    with pytest.raises(ValueError, match="material duration must be nonzero"):
        Sequential.from_loop(Sequential(), Rational(4))
    with pytest.raises(ValueError, match="material duration must be nonzero"):
        Sequential.from_loop(Gap(ZERO), ONE)


def test_timeline_map_keeps_structure():
    original = Parallel(
        Sequential(Interval(1, Rational(1, 2)), Gap(Rational(1, 4)), Interval(2, Rational(3))),
        Sequential(Interval(3, Rational(4, 5)), Interval(4, Rational(1, 2))),
    )

    result = timeline_map(lambda x: Interval(x.value + 10, x.duration), original)

    expected = Parallel(
        Sequential(Interval(11, Rational(1, 2)), Gap(Rational(1, 4)), Interval(12, Rational(3))),
        Sequential(Interval(13, Rational(4, 5)), Interval(14, Rational(1, 2))),
    )
    assert result == expected


def test_to_events_offsets():
    timeline = Sequential(
        Interval("a", Rational(1, 2)),
        Gap(Rational(1, 2)),
        Parallel(Interval("b", ONE), Interval("c", Rational(1, 4))),
    )
    assert to_events(timeline, Rational(1)) == [
        ("a", Rational(1), Rational(3, 2)),
        ("b", Rational(2), Rational(3)),
        ("c", Rational(2), Rational(9, 4)),
    ]


def test_num_lanes():
    assert num_lanes(Gap(ONE)) == 0
    assert num_lanes(Interval(1, ONE)) == 1
    timeline = Sequential(
        Interval(1, ONE),
        Parallel(Interval(2, ONE), Sequential(Interval(3, ONE), Parallel(Interval(4, ONE), Gap(ONE)))),
    )
    assert num_lanes(timeline) == 2


def test_iter_with_gaps_includes_gaps_in_order():
    g = Gap(ONE)
    a = Interval("a", ONE)
    b = Interval("b", ONE)
    assert list(iter_with_gaps(Sequential(a, Parallel(g, b)))) == [a, g, b]


def test_unknown_node_type_rejected():
    with pytest.raises(TypeError):
        num_lanes("not a timeline")  # type: ignore[arg-type]


HALF = Rational(1, 2)
QUARTER = Rational(1, 4)


def test_retrograde_of_note_or_rest_is_identity():
    note = Interval("C4", HALF)
    rest = Gap(HALF)
    assert retrograde(note) == note
    assert retrograde(rest) == rest


def test_retrograde_reverses_melody():
    melody = Sequential(Interval("C4", HALF), Interval("E4", HALF), Gap(QUARTER), Interval("G4", ONE))

    assert retrograde(melody) == Sequential(
        Interval("G4", ONE), Gap(QUARTER), Interval("E4", HALF), Interval("C4", HALF)
    )


def test_retrograde_of_even_chord_is_identity():
    chord = Parallel(Interval("C4", HALF), Interval("E4", HALF), Interval("G4", HALF))
    assert retrograde(chord) == chord


def test_retrograde_pads_short_chord_tones():
    chord = Parallel(Interval("C4", ONE), Interval("E4", HALF), Interval("G4", QUARTER))

    result = retrograde(chord)

    assert result == Parallel(
        Interval("C4", ONE),
        Sequential(Gap(HALF), Interval("E4", HALF)),
        Sequential(Gap(Rational(3, 4)), Interval("G4", QUARTER)),
    )
    assert result.duration == chord.duration


def test_retrograde_reverses_each_voice():
    harmony = Parallel(
        Sequential(Interval("C4", ONE), Gap(HALF), Interval("E4", HALF)),
        Sequential(Interval("C4", HALF), Interval("G4", HALF), Interval("E4", HALF)),
    )

    assert retrograde(harmony) == Parallel(
        Sequential(Interval("E4", HALF), Gap(HALF), Interval("C4", ONE)),
        Sequential(
            Gap(HALF),
            Sequential(Interval("E4", HALF), Interval("G4", HALF), Interval("C4", HALF)),
        ),
    )


def test_retrograde_twice_keeps_event_times():
    timeline = Sequential(
        Interval("a", QUARTER),
        Parallel(Interval("b", ONE), Sequential(Gap(QUARTER), Interval("c", QUARTER))),
    )

    twice = retrograde(retrograde(timeline))

    assert sorted(to_events(twice), key=lambda e: e[0]) == sorted(to_events(timeline), key=lambda e: e[0])


def test_retrograde_rejects_unknown_nodes():
    with pytest.raises(TypeError):
        retrograde("not a timeline")  # type: ignore[arg-type]
