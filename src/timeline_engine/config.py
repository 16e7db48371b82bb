from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .music import Part, Score, parse_melody
from .rational import Rational


@dataclass
class PartConfig:
    channel: int = 0
    instrument: Optional[int] = None
    name: str = ""
    # (pitch or None for a rest, duration in measures)
    notes: List[Tuple[Optional[int], Rational]] = field(default_factory=list)


@dataclass
class RenderConfig:
    bpm: float = 120.0
    ppq: int = 480
    beats_per_measure: int = 4
    out: str = "out/timeline.mid"
    general_midi: bool = False
    parts: List[PartConfig] = field(default_factory=list)

    def build_score(self) -> Score:
        return Score(
            parts=[
                Part(
                    music=parse_melody(*p.notes),
                    channel=p.channel,
                    instrument=p.instrument,
                    name=p.name,
                )
                for p in self.parts
            ]
        )


def _note_from_entry(entry: Any) -> Tuple[Optional[int], Rational]:
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        raise ValueError(f"note must be a [pitch, duration] pair, got {entry!r}")
    pitch, duration = entry
    if pitch is not None:
        pitch = int(pitch)
        if not 0 <= pitch <= 127:
            raise ValueError(f"pitch out of MIDI range: {pitch}")
    dur = Rational.parse(duration)
    if dur.is_infinite or dur.lt(Rational.ZERO):
        raise ValueError(f"duration must be finite and non-negative: {duration!r}")
    return pitch, dur


def _part_from_dict(d: Dict[str, Any], index: int) -> PartConfig:
    channel = int(d.get("channel", index))
    if not 0 <= channel <= 15:
        raise ValueError(f"MIDI channel must be in [0, 15], got {channel}")
    instrument = d.get("instrument")
    return PartConfig(
        channel=channel,
        instrument=int(instrument) if instrument is not None else None,
        name=str(d.get("name", "")),
        notes=[_note_from_entry(n) for n in d.get("notes", [])],
    )


def _render_config_from_dict(raw: Dict[str, Any]) -> RenderConfig:
    return RenderConfig(
        bpm=float(raw.get("bpm", 120)),
        ppq=int(raw.get("ppq", 480)),
        beats_per_measure=int(raw.get("beats_per_measure", 4)),
        out=str(raw.get("out", "out/timeline.mid")),
        general_midi=bool(raw.get("general_midi", False)),
        parts=[_part_from_dict(p, i) for i, p in enumerate(raw.get("parts", []))],
    )


def render_config_from_dict(raw: Dict[str, Any]) -> RenderConfig:
    return _render_config_from_dict(raw)


def load_render_config(path: str) -> RenderConfig:
    with open(path, "r") as f:
        raw = json.load(f)
    return _render_config_from_dict(raw)
