"""Simulation driver."""

from __future__ import annotations

from dataclasses import astuple, fields
from typing import Dict, List, Optional, Sequence
import csv
import os

from .config import SimulationConfig
from .engine import SimulationEngine, StepStats
from .renderer import render_ascii, render_ppm

STATS_COLUMNS = [f.name for f in fields(StepStats)]


def write_csv(stats: Sequence[StepStats], csv_path: str) -> None:
    """One row per tick; the header is written even for an empty run."""
    with open(csv_path, "w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(STATS_COLUMNS)
        writer.writerows(astuple(s) for s in stats)


def _summarize(stats: List[StepStats]) -> Dict[str, float]:
    if not stats:
        return {
            "steps": 0,
            "final_black": 0,
            "final_white": 0,
            "final_empty": 0,
            "peak_black": 0,
            "peak_white": 0,
            "avg_black": 0.0,
            "avg_white": 0.0,
            "min_temp": 0.0,
            "max_temp": 0.0,
            "avg_temp": 0.0,
            "final_temp": 0.0,
            "final_luminosity": 0.0,
            "total_conversions": 0,
        }
    last = stats[-1]
    temps = [s.temperature for s in stats]
    return {
        "steps": len(stats),
        "final_black": last.black,
        "final_white": last.white,
        "final_empty": last.empty,
        "peak_black": max(s.black for s in stats),
        "peak_white": max(s.white for s in stats),
        "avg_black": sum(s.black for s in stats) / len(stats),
        "avg_white": sum(s.white for s in stats) / len(stats),
        "min_temp": min(temps),
        "max_temp": max(temps),
        "avg_temp": sum(temps) / len(temps),
        "final_temp": last.temperature,
        "final_luminosity": last.luminosity,
        "total_conversions": sum(s.conversions for s in stats),
    }


def _print_summary(summary: Dict[str, float]) -> None:
    print("summary:")
    print(
        f"  steps={int(summary['steps'])} final_black={int(summary['final_black'])} "
        f"final_white={int(summary['final_white'])} final_empty={int(summary['final_empty'])}"
    )
    print(
        f"  peak_black={int(summary['peak_black'])} peak_white={int(summary['peak_white'])} "
        f"avg_black={summary['avg_black']:.1f} avg_white={summary['avg_white']:.1f}"
    )
    print(
        f"  temp min={summary['min_temp']:.2f} max={summary['max_temp']:.2f} "
        f"avg={summary['avg_temp']:.2f} final={summary['final_temp']:.2f}"
    )
    print(
        f"  final_luminosity={summary['final_luminosity']:.4f} "
        f"pollen_conversions={int(summary['total_conversions'])}"
    )


def frame_path(target: str, tick: int) -> str:
    """``target`` is a ``{tick}`` template, a single .ppm file, or a directory of frames."""
    if "{tick}" in target:
        return target.format(tick=tick)
    if os.path.splitext(target)[1].lower() == ".ppm":
        return target
    return os.path.join(target, f"tick_{tick:06d}.ppm")


def run_simulation(
    steps: int,
    seed: Optional[int] = None,
    config: Optional[SimulationConfig] = None,
    log_every: int = 100,
    csv_path: Optional[str] = None,
    summary: bool = True,
    render_every: int = 0,
    render_path: Optional[str] = None,
    render_ascii_enabled: bool = False,
    render_scale: int = 4,
) -> List[StepStats]:
    engine = SimulationEngine(config, seed=seed)

    stats: List[StepStats] = []
    for _ in range(steps):
        step_stats = engine.step()
        stats.append(step_stats)
        if log_every and step_stats.tick % log_every == 0:
            print(
                f"tick={step_stats.tick} temp={step_stats.temperature:.2f} "
                f"lum={step_stats.luminosity:.4f} black={step_stats.black} "
                f"white={step_stats.white} empty={step_stats.empty} "
                f"pollen={step_stats.conversions}"
            )
        if render_every and step_stats.tick % render_every == 0:
            grid = engine.grid
            if render_ascii_enabled:
                print(render_ascii(grid))
            if render_path:
                target = frame_path(render_path, step_stats.tick)
                os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
                render_ppm(grid, target, scale=render_scale)
    if csv_path:
        write_csv(stats, csv_path)
    if summary:
        _print_summary(_summarize(stats))
    return stats
