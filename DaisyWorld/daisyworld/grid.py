"""Toroidal daisy grid with double-buffer snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple
import random

import numpy as np

from .patch import Patch


NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if not (dx == 0 and dy == 0)
)


def wrap(c: int, dim: int) -> int:
    return ((c % dim) + dim) % dim


@dataclass(frozen=True)
class PopulationCounts:
    black: int
    white: int
    empty: int

    @property
    def total(self) -> int:
        return self.black + self.white + self.empty

    def of(self, kind: Patch) -> int:
        if kind is Patch.BLACK_DAISY:
            return self.black
        if kind is Patch.WHITE_DAISY:
            return self.white
        return self.empty


class Grid:
    """W x H cells of Patch kinds; x wraps on width, y wraps on height.

    Storage is a numpy int8 array indexed ``[y, x]``, the same row-major
    layout renderers expect for an image.
    """

    def __init__(self, width: int, height: int, fill: Patch = Patch.EMPTY) -> None:
        self.width = width
        self.height = height
        self.cells = np.full((height, width), int(fill), dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from row-major kinds, ``rows[y][x]``."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        grid.cells[:, :] = np.asarray(rows, dtype=np.int8)
        return grid

    @classmethod
    def random(
        cls,
        width: int,
        height: int,
        rng: random.Random,
        black_prob: float,
        white_prob: float,
    ) -> "Grid":
        """Genesis: one draw per cell, black below black_prob, white below the running sum."""
        grid = cls(width, height)
        for x in range(width):
            for y in range(height):
                r = rng.random()
                if r < black_prob:
                    grid.cells[y, x] = Patch.BLACK_DAISY
                elif r < black_prob + white_prob:
                    grid.cells[y, x] = Patch.WHITE_DAISY
        return grid

    @property
    def area(self) -> int:
        return self.width * self.height

    def get(self, x: int, y: int) -> Patch:
        return Patch(int(self.cells[wrap(y, self.height), wrap(x, self.width)]))

    def set(self, x: int, y: int, kind: Patch) -> None:
        self.cells[wrap(y, self.height), wrap(x, self.width)] = int(kind)

    def neighbors(self, x: int, y: int) -> List[Tuple[int, int]]:
        return [
            (wrap(x + dx, self.width), wrap(y + dy, self.height))
            for dx, dy in NEIGHBOR_OFFSETS
        ]

    def coords(self) -> Iterator[Tuple[int, int]]:
        """Every (x, y), x outer and y inner."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def snapshot(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone.width = self.width
        clone.height = self.height
        clone.cells = self.cells.copy()
        return clone

    def holds_only_patches(self) -> bool:
        return bool(np.isin(self.cells, [int(p) for p in Patch]).all())

    def counts(self) -> PopulationCounts:
        tally = np.bincount(self.cells.ravel(), minlength=len(Patch))
        return PopulationCounts(
            black=int(tally[Patch.BLACK_DAISY]),
            white=int(tally[Patch.WHITE_DAISY]),
            empty=int(tally[Patch.EMPTY]),
        )

    def to_array(self) -> np.ndarray:
        """Read-only view of the kinds, shape (height, width)."""
        view = self.cells.view()
        view.flags.writeable = False
        return view

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self.cells, other.cells))
        )

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, counts={self.counts()})"
