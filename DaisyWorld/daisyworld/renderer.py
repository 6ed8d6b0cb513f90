"""Rendering utilities for the Daisyworld grid."""

from __future__ import annotations

from typing import Dict, Tuple
import math

import numpy as np

from .grid import Grid
from .patch import Patch


PATCH_CHARS: Dict[Patch, str] = {
    Patch.EMPTY: ".",
    Patch.BLACK_DAISY: "#",
    Patch.WHITE_DAISY: "o",
}

PATCH_COLORS: Dict[Patch, Tuple[int, int, int]] = {
    Patch.EMPTY: (128, 128, 128),
    Patch.BLACK_DAISY: (0, 0, 0),
    Patch.WHITE_DAISY: (255, 255, 255),
}

BACKGROUND_COLOR = (64, 64, 64)


def kind_rgb_array(grid: Grid) -> np.ndarray:
    """uint8 image of shape (height, width, 3)."""
    palette = np.zeros((len(Patch), 3), dtype=np.uint8)
    for kind, color in PATCH_COLORS.items():
        palette[kind] = color
    return palette[grid.to_array()]


def render_ascii(grid: Grid, max_width: int = 120, max_height: int = 60) -> str:
    scale_x = max(1, int(math.ceil(grid.width / max_width)))
    scale_y = max(1, int(math.ceil(grid.height / max_height)))
    out_width = int(math.ceil(grid.width / scale_x))
    out_height = int(math.ceil(grid.height / scale_y))
    cells = grid.to_array()

    lines = []
    for sy in range(out_height):
        y = min(grid.height - 1, sy * scale_y)
        row = []
        for sx in range(out_width):
            x = min(grid.width - 1, sx * scale_x)
            row.append(PATCH_CHARS.get(Patch(int(cells[y, x])), "?"))
        lines.append("".join(row))
    return "\n".join(lines)


def render_ppm(grid: Grid, path: str, scale: int = 4) -> None:
    scale = max(1, int(scale))
    image = kind_rgb_array(grid)
    if scale > 1:
        image = image.repeat(scale, axis=0).repeat(scale, axis=1)
    img_h, img_w = image.shape[:2]

    with open(path, "w", encoding="ascii") as handle:
        handle.write(f"P3\n{img_w} {img_h}\n255\n")
        for row in image:
            handle.write(" ".join(f"{r} {g} {b}" for r, g, b in row.tolist()) + "\n")
