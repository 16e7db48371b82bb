from __future__ import annotations

"""
Decode MIDI files into absolute note intervals and rebuild timelines.

mido handles the file format; this module only pairs note on/off
messages and converts ticks to measures.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import mido

from .abs_timeline import AbsInterval, AbsTimeline
from .flatten import flatten
from .merger import from_intervals
from .music import Note
from .timebase import from_ticks

DEFAULT_TICKS_PER_QUARTER = 480


class NoteStream:
    """Collects note on/off messages into AbsInterval[Note] in measures.

    Notes are tracked per (channel, pitch). A note_on for a pitch that is
    still sounding ends the previous note first.
    """

    def __init__(self, ticks_per_quarter: int = DEFAULT_TICKS_PER_QUARTER, beats_per_measure: int = 4) -> None:
        self.ticks_per_quarter = ticks_per_quarter
        self.beats_per_measure = beats_per_measure
        # (channel, pitch) -> (start tick, velocity)
        self._held: Dict[Tuple[int, int], Tuple[int, int]] = {}
        self.notes: List[AbsInterval[Note[int]]] = []

    def _to_measures(self, ticks: int):
        return from_ticks(ticks, self.ticks_per_quarter, self.beats_per_measure)

    def note_on(self, abs_ticks: int, pitch: int, velocity: int, channel: int = 0) -> None:
        self.note_off(abs_ticks, pitch, channel)
        self._held[(channel, pitch)] = (abs_ticks, velocity)

    def note_off(self, abs_ticks: int, pitch: int, channel: int = 0) -> None:
        held = self._held.pop((channel, pitch), None)
        if held is None:
            return
        start_ticks, velocity = held
        self.notes.append(
            AbsInterval(
                Note(pitch, velocity),
                self._to_measures(start_ticks),
                self._to_measures(abs_ticks),
            )
        )

    def process_message(self, abs_ticks: int, msg: mido.Message) -> None:
        """Feed a note_on/note_off message. note_on with velocity 0 is a note off."""
        if msg.type == "note_on" and msg.velocity > 0:
            self.note_on(abs_ticks, msg.note, msg.velocity, msg.channel)
        elif msg.type in ("note_on", "note_off"):
            self.note_off(abs_ticks, msg.note, msg.channel)
        else:
            raise ValueError(f"message must be a note on or note off event, got {msg.type}")

    def build(self, end_ticks: int) -> List[AbsInterval[Note[int]]]:
        """Close any dangling notes at end_ticks and return all notes."""
        for channel, pitch in list(self._held):
            self.note_off(end_ticks, pitch, channel)
        return self.notes


def read_midi_intervals(
    path: Union[str, Path],
    beats_per_measure: int = 4,
    track_index: Optional[int] = None,
) -> List[AbsInterval[Note[int]]]:
    """Return every note in the file as an unordered list of intervals.

    With track_index set, only that track is read.
    """
    mf = mido.MidiFile(str(path))
    intervals: List[AbsInterval[Note[int]]] = []
    for i, track in enumerate(mf.tracks):
        if track_index is not None and i != track_index:
            continue
        stream = NoteStream(mf.ticks_per_beat, beats_per_measure)
        tick = 0
        for msg in track:
            tick += int(msg.time)
            if msg.type in ("note_on", "note_off"):
                stream.process_message(tick, msg)
        intervals.extend(stream.build(tick))
    return intervals


def read_midi_timeline(
    path: Union[str, Path],
    beats_per_measure: int = 4,
    track_index: Optional[int] = None,
) -> AbsTimeline:
    """Read a MIDI file and rebuild a flattened, minimal-lane timeline."""
    intervals = read_midi_intervals(path, beats_per_measure, track_index)
    return flatten(from_intervals(intervals))
