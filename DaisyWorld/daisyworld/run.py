"""CLI entry point."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional
import argparse
import logging
import sys

from .config import ConfigurationError, SimulationConfig
from .simulation import run_simulation, write_csv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daisyworld simulation with the pollen effect")
    parser.add_argument("--steps", type=int, default=5000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)
    parser.add_argument("--pollen-chance", type=float, default=None, help="Pollen conversion chance")
    parser.add_argument("--luminosity", type=float, default=None, help="Starting luminosity")
    parser.add_argument("--log-every", type=int, default=100)
    parser.add_argument("--log-level", type=str, default="WARNING")
    parser.add_argument("--csv", type=str, default=None, help="Write per-tick stats to CSV")
    parser.add_argument("--plot", type=str, default=None, help="Write a history plot image")
    parser.add_argument("--no-summary", action="store_true", help="Disable summary output")
    parser.add_argument("--render-every", type=int, default=0, help="Render every N ticks")
    parser.add_argument("--render-path", type=str, default=None, help="Output path or dir for PPM frames")
    parser.add_argument("--render-ascii", action="store_true", help="Print ASCII map at render ticks")
    parser.add_argument("--render-scale", type=int, default=4, help="PPM scale factor")
    parser.add_argument(
        "--viewer",
        choices=("none", "matplotlib", "pygame"),
        default="none",
        help="Watch the run in a window instead of running headless",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Environment settings first, then explicit flags on top."""
    cfg = SimulationConfig.from_env()
    overrides = {}
    if args.width is not None:
        overrides["width"] = args.width
    if args.height is not None:
        overrides["height"] = args.height
    if args.pollen_chance is not None:
        overrides["pollen_conversion_chance"] = args.pollen_chance
    if args.luminosity is not None:
        overrides["starting_luminosity"] = args.luminosity
    return replace(cfg, **overrides).validate()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = config_from_args(args)
    except ConfigurationError as exc:
        print(f"invalid settings: {exc}", file=sys.stderr)
        return 2

    if args.viewer != "none" and (args.render_every or args.render_path or args.render_ascii):
        print("frame rendering flags only apply with --viewer none", file=sys.stderr)
        return 2

    if args.viewer == "matplotlib":
        from .viewer import run_viewer

        stats = run_viewer(steps=args.steps, seed=args.seed, sim_config=cfg)
    elif args.viewer == "pygame":
        from .window import run_window

        stats = run_window(seed=args.seed, sim_config=cfg, max_steps=args.steps)
    else:
        stats = run_simulation(
            steps=args.steps,
            seed=args.seed,
            config=cfg,
            log_every=args.log_every,
            csv_path=args.csv,
            summary=not args.no_summary,
            render_every=args.render_every,
            render_path=args.render_path,
            render_ascii_enabled=args.render_ascii,
            render_scale=args.render_scale,
        )

    if args.viewer != "none" and args.csv:
        write_csv(stats, args.csv)
    if args.plot:
        from .viewer import plot_history

        plot_history(stats, args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
