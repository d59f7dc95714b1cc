"""Command-line interface for SceneCue.

Offline tooling for sequence documents: validate them, inspect their
timing, and dry-run them against an in-memory scene.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from scenecue.core.config.loader import load_app_config
from scenecue.core.config.models import AppConfig
from scenecue.core.scene.impl_memory import InMemoryScene
from scenecue.core.scheduling.timer_queue import TimerQueue
from scenecue.core.sequencer.models import SequenceDescriptor
from scenecue.core.sequencer.player import SequencePlayer
from scenecue.core.tracing.tracer import Tracer
from scenecue.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)


def _load_descriptor(path: Path) -> SequenceDescriptor | None:
    """Read and validate a sequence file, reporting problems on the console."""
    if not path.exists():
        console.print(f"[red]ERROR: Sequence file not found: {path}[/red]")
        return None

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        console.print(f"[red]ERROR: Sequence file is empty: {path}[/red]")
        return None

    try:
        return SequenceDescriptor.from_json(text)
    except ValidationError as e:
        console.print(f"[red]ERROR: Invalid sequence document: {path}[/red]")
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "<document>"
            console.print(f"   - {location}: {error['msg']}")
        return None


def _load_config(args: argparse.Namespace) -> AppConfig:
    return load_app_config(Path(args.app_config) if args.app_config else None)


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a sequence document."""
    path = Path(args.file)
    descriptor = _load_descriptor(path)
    if descriptor is None:
        return 1

    console.print(f"[green]✅ Valid sequence:[/green] {path.name}")
    skipped = [t for t in descriptor.tracks if not t.is_object_track]
    if skipped:
        kinds = sorted({t.type or "<none>" for t in skipped})
        console.print(f"[yellow]   {len(skipped)} track(s) will be ignored (type: {', '.join(kinds)})[/yellow]")
    inert = sum(
        1 for t in descriptor.object_tracks() for kf in t.keyframes if kf.value.is_empty()
    )
    if inert:
        console.print(f"[yellow]   {inert} keyframe(s) set no x/y/angle and will change nothing[/yellow]")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print tracks and timing of a sequence document."""
    descriptor = _load_descriptor(Path(args.file))
    if descriptor is None:
        return 1
    config = _load_config(args)

    table = Table(title=descriptor.name or "(unnamed sequence)")
    table.add_column("Track")
    table.add_column("Type")
    table.add_column("Keyframes", justify="right")
    table.add_column("Last keyframe (s)", justify="right")
    for track in descriptor.tracks:
        table.add_row(
            track.name or "-",
            track.type or "-",
            str(len(track.keyframes)),
            f"{track.last_keyframe_time:.3f}",
        )
    console.print(table)

    end_ms = descriptor.max_time * 1000.0 + config.sequencer.deactivation_padding_ms
    console.print(f"Approx duration: {descriptor.approx_duration():.3f}s")
    console.print(f"Stops playing at: {end_ms:.0f}ms")
    if descriptor.latest_keyframe_time > descriptor.max_time:
        console.print(
            f"[yellow]⚠ A keyframe at {descriptor.latest_keyframe_time:.3f}s comes after the "
            "end of its track's last keyframe and will fire after the sequence stops playing[/yellow]"
        )
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Dry-run a sequence against an in-memory scene."""
    descriptor = _load_descriptor(Path(args.file))
    if descriptor is None:
        return 1
    config = _load_config(args)

    queue = TimerQueue()
    scene = InMemoryScene(clock=lambda: queue.now_ms)
    for track in descriptor.object_tracks():
        if track.name and not scene.get_objects(track.name):
            scene.create(track.name)

    tracer = Tracer()
    player = SequencePlayer(
        queue,
        tracer=tracer,
        padding_ms=config.sequencer.deactivation_padding_ms,
        name_prefix=config.sequencer.name_prefix,
    )
    seq_name = player.play_descriptor(scene, descriptor)

    stopped_at: float | None = None
    step_ms = float(args.step_ms)
    while queue.next_deadline() is not None:
        if step_ms > 0:
            queue.advance(step_ms)
        else:
            queue.advance_to(queue.next_deadline())
        if stopped_at is None and not player.is_playing(scene, seq_name):
            stopped_at = queue.now_ms

    table = Table(title=f"Simulation: {seq_name}")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Object")
    table.add_column("Property")
    table.add_column("Value", justify="right")
    for change in scene.history():
        table.add_row(f"{change.time_ms:.0f}", change.object_name, change.prop, f"{change.value:g}")
    console.print(table)
    console.print(f"Scene objects: {', '.join(scene.object_names()) or '(none)'}")
    console.print(f"Keyframes fired: {len(tracer.find('cinematic_keyframe'))}")

    if stopped_at is not None:
        console.print(f"Stopped playing at: {stopped_at:.0f}ms")
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="scenecue",
        description="SceneCue - cinematic sequence tooling",
    )
    p.add_argument(
        "--app-config",
        default=None,
        help="Path to app config JSON/YAML (default: config.json when present)",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    validate = sub.add_parser("validate", help="Validate a sequence document")
    validate.add_argument("file", help="Path to sequence JSON")
    validate.set_defaults(func=cmd_validate)

    inspect = sub.add_parser("inspect", help="Show tracks and timing of a sequence")
    inspect.add_argument("file", help="Path to sequence JSON")
    inspect.set_defaults(func=cmd_inspect)

    simulate = sub.add_parser("simulate", help="Dry-run a sequence against an in-memory scene")
    simulate.add_argument("file", help="Path to sequence JSON")
    simulate.add_argument(
        "--step-ms",
        type=float,
        default=0.0,
        help="Frame step in milliseconds (default: jump straight to each timer)",
    )
    simulate.set_defaults(func=cmd_simulate)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    configure_logging(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
