"""
utils.py - Common utility functions for Planet Builder

Provides the integer coordinate type and shared, stateless grid helpers
used across different modules.
"""
from __future__ import annotations

from typing import Iterator, List, NamedTuple, Sequence


class Coords(NamedTuple):
    """Integer tile coordinates.

    Addition works with another ``Coords`` or any ``(dx, dy)`` pair, so
    direction vectors can be applied directly: ``pos + (1, 0)``.
    """
    x: int
    y: int

    def __add__(self, other: Sequence[int]) -> "Coords":  # type: ignore[override]
        return Coords(self.x + other[0], self.y + other[1])

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


# =============================================================================
# 8-Neighbor Utilities
# =============================================================================

# 8 neighboring directions (cardinal + diagonal)
NEIGHBORS_8: List[Coords] = [
    Coords(-1, -1), Coords(0, -1), Coords(1, -1),
    Coords(-1,  0),                Coords(1,  0),
    Coords(-1,  1), Coords(0,  1), Coords(1,  1),
]


def in_bounds(pos: Sequence[int], width: int, height: int) -> bool:
    """Return True if ``pos`` lies within a ``width`` x ``height`` grid."""
    return 0 <= pos[0] < width and 0 <= pos[1] < height


def get_neighbors_8(x: int, y: int, width: int, height: int) -> List[Coords]:
    """Return list of in-bounds 8-connected neighbors for a given position."""
    options = []
    for d in NEIGHBORS_8:
        nx, ny = x + d.x, y + d.y
        if 0 <= nx < width and 0 <= ny < height:
            options.append(Coords(nx, ny))
    return options


def rect_iter(start: Sequence[int], end: Sequence[int]) -> Iterator[Coords]:
    """Iterate all coordinates in the rectangle ``start``..``end`` (inclusive).

    Rows are walked in x-major order: ``(x0, y0), (x0, y0+1), ...``.
    An empty iterator is returned if ``end`` precedes ``start``.
    """
    for x in range(start[0], end[0] + 1):
        for y in range(start[1], end[1] + 1):
            yield Coords(x, y)


def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


def clamp_to_bounds(pos: Sequence[int], width: int, height: int) -> Coords:
    """Clamp position to within map bounds.

    Args:
        pos: Position to clamp
        width: Map width in tiles
        height: Map height in tiles

    Returns:
        Position clamped to valid range
    """
    return Coords(max(0, min(width - 1, pos[0])), max(0, min(height - 1, pos[1])))
