"""Per-tick update phases.

Both phases read the current grid and write a scratch copy, so no change made
during a sweep is visible to later cells of the same sweep. The caller swaps
the returned grid in once the sweep is complete.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import random

from .config import SimulationConfig
from .grid import NEIGHBOR_OFFSETS, Grid, PopulationCounts
from .growth import death_chance, species_growth
from .patch import Patch


class InvariantError(AssertionError):
    """Grid bookkeeping no longer adds up; a stage is broken."""


@dataclass(frozen=True)
class GrowthRates:
    black: float
    white: float
    black_death: float
    white_death: float

    @classmethod
    def at(cls, temp: float, cfg: SimulationConfig) -> "GrowthRates":
        black = species_growth(temp, cfg.black)
        white = species_growth(temp, cfg.white)
        return cls(
            black=black,
            white=white,
            black_death=death_chance(black, cfg.death_threshold, cfg.death_chance),
            white_death=death_chance(white, cfg.death_threshold, cfg.death_chance),
        )


def check_counts(counts: PopulationCounts, area: int) -> None:
    if counts.total != area:
        raise InvariantError(
            f"population counts {counts} sum to {counts.total}, grid area is {area}"
        )


def pollen_conversion(grid: Grid, rng: random.Random, chance: float) -> Tuple[Grid, int]:
    """Daisies convert enemy neighbors to their own kind.

    Returns the scratch grid and the number of successful conversions. Several
    sources may hit the same target; every one of them writes the same kind
    (the target's enemy), so the last write wins without changing the result.
    """
    width, height = grid.width, grid.height
    current = grid.cells.tolist()
    scratch = grid.snapshot()
    nxt = scratch.cells
    conversions = 0

    for x in range(width):
        for y in range(height):
            kind = current[y][x]
            if kind == Patch.EMPTY:
                continue
            enemy = Patch(kind).enemy
            for dx, dy in NEIGHBOR_OFFSETS:
                nx = (x + dx + width) % width
                ny = (y + dy + height) % height
                if current[ny][nx] != enemy:
                    continue
                if rng.random() < chance:
                    nxt[ny, nx] = kind
                    conversions += 1

    return scratch, conversions


def reproduction_and_death(
    grid: Grid,
    rng: random.Random,
    rates: GrowthRates,
) -> Tuple[Grid, PopulationCounts]:
    """Seed empty ground and kill daisies; counts are tallied from the scratch grid."""
    current = grid.cells.tolist()
    scratch = grid.snapshot()
    nxt = scratch.cells
    seed_total = rates.black + rates.white

    for x in range(grid.width):
        for y in range(grid.height):
            kind = current[y][x]
            if kind == Patch.EMPTY:
                # one shared draw, black checked first
                r = rng.random()
                if r < rates.black:
                    nxt[y, x] = Patch.BLACK_DAISY
                elif r < seed_total:
                    nxt[y, x] = Patch.WHITE_DAISY
            else:
                chance = rates.black_death if kind == Patch.BLACK_DAISY else rates.white_death
                if rng.random() < chance:
                    nxt[y, x] = Patch.EMPTY

    counts = scratch.counts()
    check_counts(counts, scratch.area)
    return scratch, counts
