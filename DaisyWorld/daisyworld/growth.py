"""Parabolic growth curves for the two daisy species."""

from __future__ import annotations

from .config import SpeciesConfig


def growth_probability(temp: float, optimal: float, min_temp: float, max_temp: float) -> float:
    """Downward parabola: 1.0 at ``optimal``, 0.0 at the range boundaries and outside."""
    if temp < min_temp or temp > max_temp:
        return 0.0
    span = max_temp - min_temp
    k = 4.0 / (span * span)
    return max(0.0, 1.0 - k * (temp - optimal) ** 2)


def species_growth(temp: float, species: SpeciesConfig) -> float:
    return growth_probability(temp, species.optimal_temp, species.min_temp, species.max_temp)


def death_chance(growth: float, threshold: float, chance: float) -> float:
    return chance if growth <= threshold else 0.0
