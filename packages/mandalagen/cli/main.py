"""Command-line interface for mandalagen."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.table import Table

from mandalagen.core.animation.loop import frame_progress, loop_closure_error
from mandalagen.core.animation.synthesizer import FrameParameterBundle, FrameSynthesizer
from mandalagen.core.config.loader import load_app_config, load_preset
from mandalagen.core.config.models import AppConfig
from mandalagen.core.config.presets import get_preset, list_presets
from mandalagen.core.config.schema import (
    ConfigurationError,
    phase_starts,
    resolve_config,
    validate_config,
)
from mandalagen.core.effects import EFFECTS, TreeOfLifeEffect
from mandalagen.core.utils.logging import configure_logging, log_performance

console = Console()
logger = logging.getLogger(__name__)

CLOSURE_TOLERANCE = 1e-9


def _load_raw(name_or_path: str, app_config: AppConfig) -> dict | None:
    try:
        return load_preset(name_or_path, search_dir=app_config.preset_dir)
    except (KeyError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]ERROR: Could not load preset: {e}[/red]")
        return None


def _effect_for(raw: dict) -> type:
    return EFFECTS.get(raw.get("effect", TreeOfLifeEffect.name), TreeOfLifeEffect)


def run_validate(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Validate a preset and report loop-closure drift."""
    raw = _load_raw(args.preset, app_config)
    if raw is None:
        return 1

    result = validate_config(raw)
    if not result.valid:
        console.print(f"[red]❌ {args.preset}: {len(result.errors)} error(s)[/red]")
        for error in result.errors:
            console.print(f"   - {error}")
        return 1

    resolved = resolve_config(raw, seed=0)
    synthesizer = resolved.build_synthesizer(_effect_for(raw).elements())
    drift = {k: v for k, v in loop_closure_error(synthesizer).items() if v > CLOSURE_TOLERANCE}

    console.print(f"[green]✅ {args.preset} is valid[/green]")
    console.print(f"   Phases: {', '.join(resolved.timeline.names)}")
    if drift:
        console.print("[yellow]⚠️  Parameters differ between first and last frame:[/yellow]")
        for name, error in drift.items():
            console.print(f"   - {name}: {error:.6f}")
    return 0


@log_performance
def sample_frames(
    synthesizer: FrameSynthesizer, total_frames: int, every: int
) -> list[tuple[int, FrameParameterBundle]]:
    """Synthesize every ``every``-th frame, always including the last."""
    frames = list(range(0, total_frames, every))
    if frames[-1] != total_frames - 1:
        frames.append(total_frames - 1)
    return [(f, synthesizer.synthesize(frame_progress(f, total_frames))) for f in frames]


def run_sample(args: argparse.Namespace, app_config: AppConfig) -> int:
    """Print synthesized bundles for a sample of frames."""
    raw = _load_raw(args.preset, app_config)
    if raw is None:
        return 1

    seed = args.seed if args.seed is not None else app_config.render.seed
    try:
        resolved = resolve_config(raw, seed=seed)
    except ConfigurationError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    total_frames = args.frames if args.frames is not None else app_config.render.total_frames
    if total_frames < 1 or args.every < 1:
        console.print("[red]ERROR: --frames and --every must be >= 1[/red]")
        return 1

    synthesizer = resolved.build_synthesizer(_effect_for(raw).elements())
    samples = sample_frames(synthesizer, total_frames, args.every)

    if args.json:
        for frame, bundle in samples:
            print(json.dumps({"frame": frame, **bundle.to_dict()}))
        return 0

    params = resolved.table.parameter_names
    table = Table(title=f"{args.preset} ({total_frames} frames, seed={seed})")
    for column in ("frame", "progress", "phase", "next", "blend", *params, "order"):
        table.add_column(column, justify="right" if column not in ("phase", "next", "order") else "left")

    for frame, bundle in samples:
        values = [f"{bundle[p]:.3f}" if p in bundle else "-" for p in params]
        order = " ".join(e.name for e in bundle.activation_order[:3])
        table.add_row(
            str(frame),
            f"{bundle.progress:.4f}",
            bundle.current_phase,
            bundle.next_phase,
            f"{bundle.transition_blend:.3f}",
            *values,
            order,
        )

    console.print(table)
    console.print(f"Easings: {resolved.easings}")
    return 0


def run_presets(args: argparse.Namespace, app_config: AppConfig) -> int:
    """List built-in presets."""
    table = Table(title="Built-in presets")
    table.add_column("name")
    table.add_column("effect")
    table.add_column("phases")
    for name in list_presets():
        raw = get_preset(name)
        table.add_row(name, raw.get("effect", TreeOfLifeEffect.name), ", ".join(phase_starts(raw)))
    console.print(table)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="mandalagen",
        description="mandalagen - phase-animated generative mandala effects",
    )
    p.add_argument(
        "--app-config",
        default=None,
        help=f"Path to app config (default: {AppConfig.default_path()} if present)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    p.add_argument(
        "--structured-logs", action="store_true", help="Emit logs as JSON lines"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    validate = sub.add_parser("validate", help="Validate a preset or preset file")
    validate.add_argument("preset", help="Built-in preset name or path to .yaml/.json")

    sample = sub.add_parser("sample", help="Print synthesized parameters for sampled frames")
    sample.add_argument("preset", help="Built-in preset name or path to .yaml/.json")
    sample.add_argument("--frames", type=int, default=None, help="Frames in the loop")
    sample.add_argument("--every", type=int, default=10, help="Sample every Nth frame")
    sample.add_argument("--seed", type=int, default=None, help="Seed for one-time picks")
    sample.add_argument("--json", action="store_true", help="Print JSON lines instead of a table")

    sub.add_parser("presets", help="List built-in presets")

    return p


COMMANDS = {
    "validate": run_validate,
    "sample": run_sample,
    "presets": run_presets,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    args = build_arg_parser().parse_args(argv)

    app_config = load_app_config(Path(args.app_config) if args.app_config else None)
    configure_logging(
        level=args.log_level or app_config.logging.level,
        format_string=app_config.logging.format,
        structured=args.structured_logs or app_config.logging.structured,
    )

    return COMMANDS[args.cmd](args, app_config)


if __name__ == "__main__":
    sys.exit(main())
