"""Cell occupant kinds."""

from __future__ import annotations

from enum import IntEnum

from . import config


class Patch(IntEnum):
    EMPTY = 0
    BLACK_DAISY = 1
    WHITE_DAISY = 2

    @property
    def albedo(self) -> float:
        """Default reflectivity; a configured run reads climate.albedo_table(config)."""
        return DEFAULT_ALBEDO[self]

    @property
    def is_daisy(self) -> bool:
        return self is not Patch.EMPTY

    @property
    def enemy(self) -> "Patch":
        """The competing daisy kind; EMPTY has no enemy and maps to itself."""
        return ENEMIES.get(self, Patch.EMPTY)


DEFAULT_ALBEDO = {
    Patch.EMPTY: config.ALBEDO_EMPTY,
    Patch.BLACK_DAISY: config.ALBEDO_BLACK,
    Patch.WHITE_DAISY: config.ALBEDO_WHITE,
}

ENEMIES = {
    Patch.BLACK_DAISY: Patch.WHITE_DAISY,
    Patch.WHITE_DAISY: Patch.BLACK_DAISY,
}
