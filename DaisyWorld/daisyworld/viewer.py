"""Animated viewer and history plots for Daisyworld (matplotlib)."""

from __future__ import annotations

from typing import List, Optional, Sequence

try:
    import matplotlib.pyplot as plt
    from matplotlib.animation import FuncAnimation
except Exception as exc:  # pragma: no cover - optional dependency
    raise RuntimeError(
        "Viewer requires matplotlib and numpy. Install with: pip install matplotlib numpy"
    ) from exc

from . import config
from .config import SimulationConfig
from .engine import SimulationEngine, StepStats
from .renderer import kind_rgb_array


def _title(stats: StepStats) -> str:
    return (
        f"Tick {stats.tick}  Temp {stats.temperature:.2f} C  Lum {stats.luminosity:.2f}\n"
        f"Black {stats.black}  White {stats.white}  Empty {stats.empty}"
    )


def plot_history(stats: Sequence[StepStats], path: Optional[str] = None) -> None:
    """Temperature, luminosity and populations over time; saved when path is given."""
    ticks = [s.tick for s in stats]
    fig, (ax_temp, ax_pop) = plt.subplots(2, 1, sharex=True, figsize=(9, 7))

    ax_temp.plot(ticks, [s.temperature for s in stats], color="tab:red", label="temperature")
    ax_temp.set_ylabel("Temperature (C)")
    ax_lum = ax_temp.twinx()
    ax_lum.plot(ticks, [s.luminosity for s in stats], color="tab:orange", label="luminosity")
    ax_lum.set_ylabel("Luminosity")

    ax_pop.plot(ticks, [s.black for s in stats], color="black", label="black")
    ax_pop.plot(ticks, [s.white for s in stats], color="0.7", label="white")
    ax_pop.plot(ticks, [s.empty for s in stats], color="tab:brown", label="empty")
    ax_pop.set_xlabel("Tick")
    ax_pop.set_ylabel("Patches")
    ax_pop.legend(loc="upper right")

    fig.tight_layout()
    if path:
        fig.savefig(path)
        plt.close(fig)
    else:
        plt.show()


def run_viewer(
    steps: int,
    seed: Optional[int] = None,
    sim_config: Optional[SimulationConfig] = None,
    interval_ms: int = config.SIM_SPEED_MS,
    steps_per_frame: int = 1,
) -> List[StepStats]:
    engine = SimulationEngine(sim_config, seed=seed)
    history: List[StepStats] = [engine.stats()]

    fig, ax = plt.subplots(figsize=(7, 7))
    image = ax.imshow(kind_rgb_array(engine.grid), interpolation="nearest")
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_title(_title(history[-1]))

    def update(_frame: int):
        for _ in range(max(1, steps_per_frame)):
            history.append(engine.step())
        image.set_data(kind_rgb_array(engine.grid))
        ax.set_title(_title(history[-1]))
        return (image,)

    frames = max(1, steps // max(1, steps_per_frame))
    # keep a reference so the animation is not garbage collected
    _anim = FuncAnimation(fig, update, frames=frames, interval=interval_ms, blit=False, repeat=False)
    plt.show()
    return history
