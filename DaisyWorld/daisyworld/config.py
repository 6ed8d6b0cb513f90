"""Daisyworld constants and validated simulation settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Optional

# Grid
GRID_WIDTH = 100
GRID_HEIGHT = 100

# Albedo (reflectivity)
ALBEDO_EMPTY = 0.4
ALBEDO_BLACK = 0.25
ALBEDO_WHITE = 0.75

# Solar luminosity
STARTING_LUMINOSITY = 0.8
MAX_LUMINOSITY = 1.6
LUMINOSITY_INCREASE = 0.0001

# Pollen effect
POLLEN_CONVERSION_CHANCE = 0.05

# Growth curves (degrees C)
BLACK_OPTIMAL_TEMP = 10.0
WHITE_OPTIMAL_TEMP = 30.0
MIN_GROWTH_TEMP = 5.0
MAX_GROWTH_TEMP = 40.0

# Death when a species' growth probability drops to the threshold
DEATH_THRESHOLD = 0.01
DEATH_CHANCE = 0.3

# Genesis distribution (remainder is empty ground)
INITIAL_BLACK_PROB = 0.2
INITIAL_WHITE_PROB = 0.2

# Temperature model
TEMP_SCALE = 50.0
TEMP_OFFSET = -25.0
ABSOLUTE_ZERO = -273.0

# Presentation
CELL_SIZE = 6
SIM_SPEED_MS = 5

ENV_PREFIX = "DAISYWORLD_"


class ConfigurationError(ValueError):
    """Raised when simulation settings are malformed."""

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        self.message = message
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}" if field_name else message)


def _check_probability(value: float, name: str) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"must be between 0.0 and 1.0, got {value}", name)


@dataclass(frozen=True)
class SpeciesConfig:
    optimal_temp: float
    min_temp: float = MIN_GROWTH_TEMP
    max_temp: float = MAX_GROWTH_TEMP

    def validate(self, name: str = "species") -> None:
        if self.min_temp >= self.max_temp:
            raise ConfigurationError(
                f"min_temp ({self.min_temp}) must be below max_temp ({self.max_temp})",
                f"{name}.min_temp",
            )


@dataclass(frozen=True)
class SimulationConfig:
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    albedo_empty: float = ALBEDO_EMPTY
    albedo_black: float = ALBEDO_BLACK
    albedo_white: float = ALBEDO_WHITE
    starting_luminosity: float = STARTING_LUMINOSITY
    max_luminosity: float = MAX_LUMINOSITY
    luminosity_increase: float = LUMINOSITY_INCREASE
    pollen_conversion_chance: float = POLLEN_CONVERSION_CHANCE
    black: SpeciesConfig = field(default_factory=lambda: SpeciesConfig(BLACK_OPTIMAL_TEMP))
    white: SpeciesConfig = field(default_factory=lambda: SpeciesConfig(WHITE_OPTIMAL_TEMP))
    death_threshold: float = DEATH_THRESHOLD
    death_chance: float = DEATH_CHANCE
    initial_black_prob: float = INITIAL_BLACK_PROB
    initial_white_prob: float = INITIAL_WHITE_PROB

    @property
    def area(self) -> int:
        return self.width * self.height

    def validate(self) -> "SimulationConfig":
        """Check every field and return self, raising ConfigurationError on the first problem."""
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"must be a positive integer, got {value!r}", name)
        for name in (
            "albedo_empty",
            "albedo_black",
            "albedo_white",
            "pollen_conversion_chance",
            "death_threshold",
            "death_chance",
            "initial_black_prob",
            "initial_white_prob",
        ):
            _check_probability(getattr(self, name), name)
        if self.initial_black_prob + self.initial_white_prob > 1.0:
            raise ConfigurationError(
                "initial black and white probabilities must not sum above 1.0",
                "initial_white_prob",
            )
        if self.starting_luminosity < 0.0:
            raise ConfigurationError(
                f"must be non-negative, got {self.starting_luminosity}", "starting_luminosity"
            )
        if self.starting_luminosity > self.max_luminosity:
            raise ConfigurationError(
                f"must not exceed max_luminosity ({self.max_luminosity})", "starting_luminosity"
            )
        if self.luminosity_increase < 0.0:
            raise ConfigurationError(
                f"must be non-negative, got {self.luminosity_increase}", "luminosity_increase"
            )
        self.black.validate("black")
        self.white.validate("white")
        return self

    @staticmethod
    def from_env(environ: Optional[dict] = None) -> "SimulationConfig":
        """Build settings from DAISYWORLD_* variables, e.g. DAISYWORLD_POLLEN_CONVERSION_CHANCE."""
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(SimulationConfig):
            if f.name in ("black", "white"):
                continue
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                overrides[f.name] = int(raw) if f.type in (int, "int") else float(raw)
            except ValueError as exc:
                raise ConfigurationError(f"cannot parse {raw!r}", f.name) from exc
        species = {}
        for name, optimal in (("black", BLACK_OPTIMAL_TEMP), ("white", WHITE_OPTIMAL_TEMP)):
            prefix = f"{ENV_PREFIX}{name.upper()}_"
            try:
                species[name] = SpeciesConfig(
                    optimal_temp=float(env.get(prefix + "OPTIMAL_TEMP", optimal)),
                    min_temp=float(env.get(prefix + "MIN_TEMP", MIN_GROWTH_TEMP)),
                    max_temp=float(env.get(prefix + "MAX_TEMP", MAX_GROWTH_TEMP)),
                )
            except ValueError as exc:
                raise ConfigurationError("cannot parse temperature setting", name) from exc
        return SimulationConfig(**overrides, **species)
