# render/colors.py
"""Color lookups and utilities for tile rendering."""
from __future__ import annotations

from typing import Tuple, cast

from render.config import (
    BIOME_COLORS,
    COLOR_STRUCTURE_UNKNOWN,
    EDGE_BRIGHTNESS,
    STRUCTURE_COLORS,
)
from world.structures import StructureKind
from world.terrain import Biome

Color = Tuple[int, int, int]


def apply_brightness(color: Color, brightness: float) -> Color:
    """Apply brightness multiplier to a color."""
    return cast(Color, tuple(max(0, min(255, int(c * brightness))) for c in color))


def blend_colors(color1: Color, color2: Color, weight: float = 0.5) -> Color:
    """Blend two colors with given weight (0 = all color1, 1 = all color2)."""
    return cast(Color, tuple(int(c1 * (1 - weight) + c2 * weight) for c1, c2 in zip(color1, color2)))


def biome_color(biome: Biome, corner_index: int = 0) -> Color:
    """Color of a biome corner piece; pieces on a blend edge are slightly darker."""
    color = BIOME_COLORS[biome]
    if corner_index == 0:
        return color
    return apply_brightness(color, EDGE_BRIGHTNESS)


def structure_color(kind: StructureKind) -> Color:
    return STRUCTURE_COLORS.get(kind, COLOR_STRUCTURE_UNKNOWN)
