"""Daisyworld: planetary temperature regulation by black and white daisies, with pollen."""

from .config import ConfigurationError, SimulationConfig, SpeciesConfig
from .engine import SimulationEngine, StepStats
from .grid import Grid, PopulationCounts
from .patch import Patch
from .stages import InvariantError

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Grid",
    "InvariantError",
    "Patch",
    "PopulationCounts",
    "SimulationConfig",
    "SimulationEngine",
    "SpeciesConfig",
    "StepStats",
]
