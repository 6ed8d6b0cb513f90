"""Planetary albedo, temperature and solar forcing."""

from __future__ import annotations

from typing import Dict

from . import config
from .config import SimulationConfig
from .grid import PopulationCounts
from .patch import DEFAULT_ALBEDO, Patch


def albedo_table(cfg: SimulationConfig) -> Dict[Patch, float]:
    return {
        Patch.EMPTY: cfg.albedo_empty,
        Patch.BLACK_DAISY: cfg.albedo_black,
        Patch.WHITE_DAISY: cfg.albedo_white,
    }


def average_albedo(
    counts: PopulationCounts,
    area: int,
    albedo: Dict[Patch, float] = DEFAULT_ALBEDO,
) -> float:
    total = (
        counts.white * albedo[Patch.WHITE_DAISY]
        + counts.black * albedo[Patch.BLACK_DAISY]
        + counts.empty * albedo[Patch.EMPTY]
    )
    return total / area


def temperature(luminosity: float, avg_albedo: float) -> float:
    """Fourth-root response to absorbed light, rescaled to roughly degrees C.

    Returns ABSOLUTE_ZERO when nothing is absorbed, since the fractional power
    is undefined for non-positive input.
    """
    absorbed = luminosity * (1 - avg_albedo)
    if absorbed > 0:
        return absorbed ** 0.25 * config.TEMP_SCALE + config.TEMP_OFFSET
    return config.ABSOLUTE_ZERO


def advance_luminosity(
    current: float,
    increase: float = config.LUMINOSITY_INCREASE,
    maximum: float = config.MAX_LUMINOSITY,
) -> float:
    return min(current + increase, maximum)
