from __future__ import annotations

import argparse
import os
from typing import List

from .abs_timeline import count_lanes
from .config import load_render_config
from .flatten import flatten
from .merger import from_intervals
from .midi_reader import read_midi_intervals
from .midi_writer import write_score


def _cmd_render(args: argparse.Namespace) -> int:
    cfg = load_render_config(args.config)
    out_path = args.out or cfg.out

    # Ensure output directory exists
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)

    score = cfg.build_score()
    write_score(
        score,
        ppq=cfg.ppq,
        bpm=cfg.bpm,
        out_path=out_path,
        general_midi=cfg.general_midi,
        beats_per_measure=cfg.beats_per_measure,
    )
    print(
        f"Wrote {len(score.parts)} part(s) to {out_path} "
        f"(bpm={cfg.bpm}, ppq={cfg.ppq}, measures={score.duration})"
    )
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    intervals = read_midi_intervals(args.midi, beats_per_measure=args.beats_per_measure)
    timeline = flatten(from_intervals(intervals))
    print(f"notes={len(intervals)}")
    print(f"start={timeline.start_time} end={timeline.end_time} duration={timeline.duration}")
    print(f"lanes={count_lanes(timeline)}")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render and inspect rational-time music timelines")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a JSON score config to MIDI")
    render.add_argument("--config", required=True, help="Path to JSON config with bpm, ppq, parts, out")
    render.add_argument("--out", default=None, help="Override the output path from the config")
    render.set_defaults(func=_cmd_render)

    inspect = sub.add_parser("inspect", help="Merge a MIDI file into a timeline and summarize it")
    inspect.add_argument("midi", help="Path to a .mid file")
    inspect.add_argument("--beats-per-measure", type=int, default=4, help="Time signature numerator (default 4)")
    inspect.set_defaults(func=_cmd_inspect)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
