"""Tile compositing: which biome layers to draw per tile, and how each corner blends.

Two derived products are computed from the Planet, both read-only:

1. LayeredTexMap - for every tile, the biomes that must be drawn there. A
   tile always shows its own biome; any 8-connected neighbor whose biome has
   a lower z is drawn underneath as an extra layer, so the lower biome shows
   through at the shared edge.

2. Corner indices - each tile is drawn as 4 corner pieces. A piece's shape
   (0-4) depends on whether the two orthogonal neighbors and the diagonal
   neighbor on that corner "match" the layer being drawn:

       a    b    c    index
       T    T    T    0   interior
       T    F    -    1   edge along x
       F    T    -    2   edge along y
       F    F    -    3   outer corner
       T    T    F    4   inner corner

   The index and corner slot select a cell in a 6x4 autotile sheet.

Biome probes treat off-map tiles as matching (no seam at the map border);
structure probes treat them as not matching.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from config import ATLAS_COLUMNS, LAYER_CAPACITY, PIECE_SIZE, TILE_SIZE
from utils import Coords, get_neighbors_8, in_bounds
from world.structures import StructureKind, capabilities_for, is_buildable
from world.terrain import Biome, BiomeAttrs

if TYPE_CHECKING:
    from game_state.planet import Planet

Probe = Callable[[Coords], bool]

# Diagonal corner directions, in the fixed enumeration order used by the atlas
CORNERS: Tuple[Coords, ...] = (Coords(-1, -1), Coords(-1, 1), Coords(1, 1), Coords(1, -1))

# (column, row) of each corner's piece within a 2x2 pattern block
CORNER_PIECE_GRID: Tuple[Tuple[int, int], ...] = ((0, 1), (0, 0), (1, 0), (1, 1))


class CornerPiece(NamedTuple):
    corner: Coords
    index: int         # Corner pattern 0-4
    atlas_index: int   # Cell in the autotile sheet


class StructurePiece(NamedTuple):
    kind: StructureKind
    corner: Optional[Coords]   # None for single-sprite structures
    index: int
    atlas_index: int


# =============================================================================
# Layer derivation
# =============================================================================

class LayeredTexMap:
    """Per-tile biome layers. A disposable projection of a Planet's map."""

    def __init__(self, layers: List[List[Tuple[Biome, ...]]]):
        self._layers = layers

    @property
    def width(self) -> int:
        return len(self._layers)

    @property
    def height(self) -> int:
        return len(self._layers[0]) if self._layers else 0

    def in_range(self, pos: Sequence[int]) -> bool:
        return in_bounds(pos, self.width, self.height)

    def layers(self, pos: Sequence[int]) -> Tuple[Biome, ...]:
        if not self.in_range(pos):
            raise IndexError(f"tile {tuple(pos)} is outside the {self.width}x{self.height} map")
        return self._layers[pos[0]][pos[1]]

    def contains(self, pos: Sequence[int], biome: Biome) -> bool:
        return biome in self.layers(pos)

    def draw_order(self, pos: Sequence[int], biome_attrs: Mapping[Biome, BiomeAttrs]) -> List[Biome]:
        """Layers at ``pos`` sorted by ascending z; equal z keeps layer order."""
        return sorted(self.layers(pos), key=lambda b: biome_attrs[b].z)


def build_layered_tex_map(planet: Planet, biome_attrs: Mapping[Biome, BiomeAttrs]) -> LayeredTexMap:
    """Derive the biome layers of every tile.

    Args:
        planet: Planet to read (never modified)
        biome_attrs: z value per biome, from the loaded asset attributes

    Raises:
        KeyError: if the map holds a biome with no loaded attributes
    """
    w, h = planet.size
    biomes = planet.biome_grid

    present = {Biome(int(v)) for v in np.unique(biomes)}
    missing = present - set(biome_attrs)
    if missing:
        raise KeyError(f"no render attributes loaded for biome(s): {sorted(b.slug for b in missing)}")

    z_of: Dict[Biome, float] = {b: attrs.z for b, attrs in biome_attrs.items()}
    stacks: List[List[List[Biome]]] = [[[] for _ in range(h)] for _ in range(w)]

    for biome in biome_attrs:
        tile_z = z_of[biome]
        for x, y in np.argwhere(biomes == int(biome)):
            x, y = int(x), int(y)
            stack = stacks[x][y]
            stack.append(biome)
            for n in get_neighbors_8(x, y, w, h):
                neighbor = Biome(int(biomes[n.x, n.y]))
                if z_of[neighbor] < tile_z and neighbor not in stack:
                    stack.append(neighbor)
            assert len(stack) <= LAYER_CAPACITY, f"layer overflow at ({x}, {y}): {stack}"

    return LayeredTexMap([[tuple(stack) for stack in column] for column in stacks])


# =============================================================================
# Corner blending
# =============================================================================

def corner_index(same: Probe, pos: Sequence[int], corner: Sequence[int]) -> int:
    """Classify one corner of the tile at ``pos`` (see module docstring)."""
    p = Coords(int(pos[0]), int(pos[1]))
    a = same(p + (corner[0], 0))
    b = same(p + (0, corner[1]))
    c = same(p + corner)

    if a and b and c:
        return 0
    if a and not b:
        return 1
    if not a and b:
        return 2
    if not a and not b:
        return 3
    return 4


def biome_probe(ltm: LayeredTexMap, biome: Biome) -> Probe:
    """Match tiles that draw ``biome``; off-map tiles always match."""
    def same(q: Coords) -> bool:
        if not ltm.in_range(q):
            return True
        return ltm.contains(q, biome)
    return same


def structure_probe(planet: Planet, kind: StructureKind) -> Probe:
    """Match tiles holding a ``kind`` structure; off-map tiles never match."""
    def same(q: Coords) -> bool:
        if not planet.in_range(q):
            return False
        return int(planet.structure_grid[q.x, q.y]) == int(kind)
    return same


def atlas_cell(slot: int, index: int) -> Tuple[int, int]:
    """(column, row) in the autotile sheet for corner ``slot`` with pattern ``index``."""
    piece_col, piece_row = CORNER_PIECE_GRID[slot]
    return (index % 3) * 2 + piece_col, (index // 3) * 2 + piece_row


def atlas_index(slot: int, index: int) -> int:
    col, row = atlas_cell(slot, index)
    return col + row * ATLAS_COLUMNS


def piece_origin(pos: Sequence[int], corner: Sequence[int]) -> Tuple[int, int]:
    """Top-left world pixel of the corner piece of tile ``pos``."""
    return (pos[0] * TILE_SIZE + PIECE_SIZE * ((corner[0] + 1) // 2),
            pos[1] * TILE_SIZE + PIECE_SIZE * ((corner[1] + 1) // 2))


def corner_pieces(same: Probe, pos: Sequence[int]) -> List[CornerPiece]:
    """The four corner pieces of the tile at ``pos`` in CORNERS order."""
    pieces = []
    for slot, corner in enumerate(CORNERS):
        index = corner_index(same, pos, corner)
        pieces.append(CornerPiece(corner, index, atlas_index(slot, index)))
    return pieces


def biome_pieces(
    ltm: LayeredTexMap,
    pos: Sequence[int],
    biome_attrs: Mapping[Biome, BiomeAttrs],
) -> List[Tuple[Biome, List[CornerPiece]]]:
    """Corner pieces for every layer at ``pos``, bottom layer first."""
    return [(biome, corner_pieces(biome_probe(ltm, biome), pos))
            for biome in ltm.draw_order(pos, biome_attrs)]


def structure_pieces(planet: Planet, pos: Sequence[int]) -> List[StructurePiece]:
    """Sprites for the structure anchored at ``pos``.

    Chain-like kinds blend with same-kind neighbors through the corner table.
    Every other structure is a single fixed sprite drawn at its anchor.
    Empty and OCCUPIED tiles draw nothing.
    """
    kind = planet.structure_at(pos).kind
    if kind in (StructureKind.NONE, StructureKind.OCCUPIED):
        return []
    if is_buildable(kind) and capabilities_for(kind).chains:
        same = structure_probe(planet, kind)
        return [StructurePiece(kind, piece.corner, piece.index, piece.atlas_index)
                for piece in corner_pieces(same, pos)]
    return [StructurePiece(kind, None, 0, 0)]
