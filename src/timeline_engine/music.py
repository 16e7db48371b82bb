from __future__ import annotations

"""
Musical payloads for timelines: notes, melodies, harmonies and scores.

Pitches are usually MIDI note numbers, but any pitch type works until
the music is exported.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from .rational import Rational
from .timeline import Gap, Interval, Parallel, Sequential, Timeline, timeline_map

P = TypeVar("P")
Q = TypeVar("Q")


class Velocity:
    """MIDI velocities for the usual dynamic markings."""

    PP = 32
    P = 48
    MP = 64
    MF = 80
    F = 96
    FF = 112


@dataclass(frozen=True)
class Note(Generic[P]):
    pitch: P
    velocity: int = Velocity.MF


def make_note(pitch: P, duration: Rational, velocity: Optional[int] = None) -> Interval[Note[P]]:
    if velocity is None:
        velocity = Velocity.MF
    return Interval(Note(pitch, velocity), duration)


# Musical aliases
Rest = Gap
Melody = Sequential
Harmony = Parallel

Music = Timeline


def parse_melody(*pairs: Tuple[Optional[P], Rational]) -> Sequential:
    """Build a melody from (pitch, duration) pairs. A None pitch is a rest."""
    children: List[Timeline] = []
    for pitch, duration in pairs:
        if pitch is None:
            children.append(Rest(duration))
        else:
            children.append(make_note(pitch, duration))
    return Melody(*children)


def parse_cycle(cycle_length: Rational, notes: Sequence[Union[P, None, Sequence[Any]]]) -> Sequential:
    """Subdivide cycle_length evenly between notes, Tidal Cycles style.

    A nested list becomes a nested cycle squeezed into a single beat, and
    None is a rest. For example parse_cycle(ONE, [60, 62, [64, 65], 67]).
    """
    if not notes:
        raise ValueError("cycle must contain at least one note")

    beat_length = cycle_length.mul(Rational(1, len(notes)))
    children: List[Timeline] = []
    for note in notes:
        if note is None:
            children.append(Rest(beat_length))
        elif isinstance(note, (list, tuple)):
            children.append(parse_cycle(beat_length, note))
        else:
            children.append(make_note(note, beat_length))
    return Melody(*children)


def map_pitch(pitch_func: Callable[[P], Q], music: Music) -> Music:
    """Convert every pitch, e.g. to transpose or change pitch space."""

    def convert(interval: Interval[Note[P]]) -> Interval[Note[Q]]:
        note = interval.value
        return Interval(Note(pitch_func(note.pitch), note.velocity), interval.duration)

    return timeline_map(convert, music)


@dataclass
class Part:
    """One instrument's music within a Score."""

    music: Music
    channel: int = 0
    instrument: Optional[int] = None  # General MIDI program number
    name: str = ""


@dataclass
class Score:
    parts: List[Part] = field(default_factory=list)

    @property
    def duration(self) -> Rational:
        return Parallel(*(part.music for part in self.parts)).duration
