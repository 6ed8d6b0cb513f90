"""Daisyworld simulation engine.

One tick runs, in this order and without skipping:

  1. advance solar luminosity
  2. derive the global temperature from the previous tick's populations
  3. pollen conversion between adjacent black and white daisies
  4. seeding of empty ground and death of badly-suited daisies

The engine owns the grid, the counters, the climate state and the single
seeded random source. Callers read results through the accessors.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple
import logging
import random

from . import climate
from .config import ConfigurationError, SimulationConfig
from .grid import Grid, PopulationCounts
from .stages import GrowthRates, check_counts, pollen_conversion, reproduction_and_death

logger = logging.getLogger("daisyworld.engine")


@dataclass(frozen=True)
class StepStats:
    tick: int
    luminosity: float
    temperature: float
    average_albedo: float
    black: int
    white: int
    empty: int
    conversions: int


class SimulationEngine:
    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        seed: Optional[int] = None,
        grid: Optional[Grid] = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.initialize(seed=seed, grid=grid)

    def initialize(
        self,
        seed: Optional[int] = None,
        probabilities: Optional[Tuple[float, float]] = None,
        config: Optional[SimulationConfig] = None,
        grid: Optional[Grid] = None,
    ) -> None:
        """Full reset: new random source, new grid, counters and climate.

        ``probabilities`` is the (black, white) genesis distribution; the rest
        of the planet starts empty. A supplied ``grid`` is copied and used
        instead of a random genesis. Nothing changes if validation fails.
        """
        cfg = config or self.config
        if probabilities is not None:
            black_prob, white_prob = probabilities
            cfg = replace(cfg, initial_black_prob=black_prob, initial_white_prob=white_prob)
        cfg.validate()
        if grid is not None and (grid.width, grid.height) != (cfg.width, cfg.height):
            raise ConfigurationError(
                f"grid is {grid.width}x{grid.height}, settings expect {cfg.width}x{cfg.height}",
                "grid",
            )
        if grid is not None and not grid.holds_only_patches():
            raise ConfigurationError("grid holds unknown patch kinds", "grid")

        rng = random.Random(seed)
        if grid is None:
            start = Grid.random(
                cfg.width, cfg.height, rng, cfg.initial_black_prob, cfg.initial_white_prob
            )
        else:
            start = grid.snapshot()
        counts = start.counts()
        check_counts(counts, start.area)

        self.config = cfg
        self.seed = seed
        self._rng = rng
        self._grid = start
        self._counts = counts
        self._albedo = climate.albedo_table(cfg)
        self._luminosity = cfg.starting_luminosity
        self._average_albedo = climate.average_albedo(counts, start.area, self._albedo)
        self._temperature = climate.temperature(self._luminosity, self._average_albedo)
        self._tick = 0
        self._last_conversions = 0
        logger.info(
            "initialized %dx%d grid seed=%s black=%d white=%d empty=%d",
            cfg.width, cfg.height, seed, counts.black, counts.white, counts.empty,
        )

    def step(self) -> StepStats:
        cfg = self.config
        self._luminosity = climate.advance_luminosity(
            self._luminosity, cfg.luminosity_increase, cfg.max_luminosity
        )
        self._average_albedo = climate.average_albedo(self._counts, self._grid.area, self._albedo)
        self._temperature = climate.temperature(self._luminosity, self._average_albedo)

        self._grid, self._last_conversions = pollen_conversion(
            self._grid, self._rng, cfg.pollen_conversion_chance
        )
        rates = GrowthRates.at(self._temperature, cfg)
        self._grid, self._counts = reproduction_and_death(self._grid, self._rng, rates)
        self._tick += 1

        stats = self.stats()
        logger.debug(
            "tick=%d L=%.4f T=%.2f black=%d white=%d empty=%d pollen=%d",
            stats.tick, stats.luminosity, stats.temperature,
            stats.black, stats.white, stats.empty, stats.conversions,
        )
        return stats

    def stats(self) -> StepStats:
        return StepStats(
            tick=self._tick,
            luminosity=self._luminosity,
            temperature=self._temperature,
            average_albedo=self._average_albedo,
            black=self._counts.black,
            white=self._counts.white,
            empty=self._counts.empty,
            conversions=self._last_conversions,
        )

    @property
    def grid(self) -> Grid:
        """A copy of the current grid, decoupled from engine storage."""
        return self._grid.snapshot()

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def tick(self) -> int:
        return self._tick

    @property
    def luminosity(self) -> float:
        return self._luminosity

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def counts(self) -> PopulationCounts:
        return self._counts

    @property
    def black_count(self) -> int:
        return self._counts.black

    @property
    def white_count(self) -> int:
        return self._counts.white

    @property
    def empty_count(self) -> int:
        return self._counts.empty
