from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from mido import Message, MetaMessage, MidiFile, MidiTrack, bpm2tempo

from .abs_timeline import iter_events
from .compiler import from_relative
from .music import Music, Score
from .timebase import to_ticks


@dataclass
class MidiEvent:
    note: int
    vel: int
    start_abs_tick: int
    dur_tick: int
    channel: int = 0


def timeline_to_midi_events(
    music: Music,
    ppq: int,
    channel: int = 0,
    beats_per_measure: int = 4,
) -> List[MidiEvent]:
    """Compile music to absolute time and convert each note to ticks."""
    events: List[MidiEvent] = []
    for note, start, end in iter_events(from_relative(music)):
        start_tick = to_ticks(start, ppq, beats_per_measure)
        end_tick = to_ticks(end, ppq, beats_per_measure)
        events.append(
            MidiEvent(
                note=int(note.pitch),
                vel=int(note.velocity),
                start_abs_tick=start_tick,
                dur_tick=end_tick - start_tick,
                channel=channel,
            )
        )
    return events


def _build_track(events: Sequence[MidiEvent], program: Optional[int], channel: int) -> MidiTrack:
    track = MidiTrack()

    # (abs_tick, priority, message); note_off (0) sorts before note_on (1) on the same tick
    msgs = []
    if program is not None:
        msgs.append((0, -1, Message("program_change", program=program, channel=channel, time=0)))
    for ev in events:
        start = ev.start_abs_tick
        end = ev.start_abs_tick + max(1, ev.dur_tick)
        msgs.append((start, 1, Message("note_on", note=ev.note, velocity=ev.vel, channel=ev.channel, time=0)))
        msgs.append((end, 0, Message("note_off", note=ev.note, velocity=0, channel=ev.channel, time=0)))

    msgs.sort(key=lambda t: (t[0], t[1]))

    # Delta-encode
    last_t = 0
    for abs_t, _prio, msg in msgs:
        msg.time = max(0, abs_t - last_t)
        track.append(msg)
        last_t = abs_t
    return track


def write_midi(
    tracks: Sequence[Sequence[MidiEvent]],
    ppq: int,
    bpm: float,
    out_path: str,
    programs: Optional[Sequence[Optional[int]]] = None,
    channels: Optional[Sequence[int]] = None,
) -> None:
    """
    Write one MIDI track per event list using absolute tick scheduling.
    Steps:
      - format 0 for a single track, format 1 otherwise
      - set tempo meta on the first track
      - sort by (abs tick, note_off before note_on)
      - delta-encode times
    """
    mid = MidiFile(type=0 if len(tracks) == 1 else 1)
    mid.ticks_per_beat = int(ppq)

    for i, events in enumerate(tracks):
        program = programs[i] if programs else None
        channel = channels[i] if channels else 0
        track = _build_track(events, program, channel)
        if i == 0:
            track.insert(0, MetaMessage("set_tempo", tempo=bpm2tempo(bpm), time=0))
        mid.tracks.append(track)

    mid.save(out_path)


def write_score(
    score: Score,
    ppq: int,
    bpm: float,
    out_path: str,
    general_midi: bool = False,
    beats_per_measure: int = 4,
) -> None:
    """Write a Score with one track per part.

    A single part always goes on channel 0. Program changes are only
    written for General MIDI exports; DAW clip exports leave instrument
    choice to the host.
    """
    if len(score.parts) > 16:
        raise ValueError("scores with more than 16 parts not supported")

    if len(score.parts) == 1:
        channels = [0]
    else:
        channels = [part.channel for part in score.parts]

    tracks = [
        timeline_to_midi_events(part.music, ppq, channel=channel, beats_per_measure=beats_per_measure)
        for part, channel in zip(score.parts, channels)
    ]
    programs = [part.instrument if general_midi else None for part in score.parts]
    write_midi(tracks, ppq=ppq, bpm=bpm, out_path=out_path, programs=programs, channels=channels)
