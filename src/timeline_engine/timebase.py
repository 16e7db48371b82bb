from __future__ import annotations

"""
Timebase utilities for converting between musical time and clocks.

Musical time is a Rational number of measures. MIDI files count ticks
with PPQ (ticks per quarter note); audio clocks count seconds at a BPM.
"""

from .rational import Rational


def ticks_per_beat(ppq: int) -> int:
    """Ticks per quarter note (beat)."""
    return int(ppq)


def ticks_per_measure(ppq: int, beats_per_measure: int = 4) -> int:
    """Ticks per measure given PPQ and time signature (default 4/4)."""
    return ticks_per_beat(ppq) * beats_per_measure


def to_ticks(time: Rational, ppq: int, beats_per_measure: int = 4) -> int:
    """Convert a time in measures to integer ticks (rounded to nearest).

    Rounding is done exactly, with halves rounding to even like round().
    """
    if time.is_infinite:
        raise ValueError("cannot convert an infinite time to ticks")
    exact = time.mul(Rational(ticks_per_measure(ppq, beats_per_measure)))
    whole, rest = exact.quotient, exact.remainder
    twice = 2 * rest
    if twice > exact.denominator or (twice == exact.denominator and whole % 2 == 1):
        whole += 1
    return whole


def from_ticks(ticks: int, ppq: int, beats_per_measure: int = 4) -> Rational:
    """Convert ticks to an exact time in measures."""
    return Rational(ticks, ticks_per_measure(ppq, beats_per_measure))


def seconds_per_measure(bpm: float, beats_per_measure: int = 4) -> float:
    """One beat lasts 60/BPM seconds."""
    return beats_per_measure * 60.0 / bpm


def to_seconds(time: Rational, bpm: float, beats_per_measure: int = 4) -> float:
    """Convert a time in measures to seconds for an audio clock."""
    return time.real * seconds_per_measure(bpm, beats_per_measure)
