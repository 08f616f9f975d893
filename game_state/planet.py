"""Planet world model: the authoritative tile grid.

Tile state is held in per-attribute NumPy arrays indexed ``[x, y]``:

    biome_grid        uint8    Biome value
    land_feature_grid uint8    LandFeature value
    structure_grid    uint8    StructureKind value
    anchor_grid       int32    (x, y) of the owning anchor for OCCUPIED tiles, else -1
    biomass_grid      float32  biomass amount

``Tile`` is a read-only view assembled from those arrays for a single
coordinate. The map is only mutated through ``place``, ``set_biome`` and
``advance_tick``; any map mutation raises ``map_changed`` so the compositing
cache knows to rebuild.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Set, Tuple

import numpy as np

from config import MIN_MAP_SIZE
from utils import Coords, in_bounds
from world.structures import Structure, StructureKind, StructureSize
from world.terrain import Biome, LandFeature

NO_ANCHOR = -1


@dataclass
class Tile:
    """Full state of one grid cell."""
    biome: Biome = Biome.OCEAN
    land_feature: LandFeature = LandFeature.NONE
    structure: Structure = field(default_factory=Structure.none)
    biomass: float = 0.0


@dataclass
class Player:
    """Holds player resources."""
    energy: float = 0.0
    material: float = 0.0


@dataclass(eq=False)
class Planet:
    """Main world state container.

    Dimensions are fixed at construction. Replacing the map size means
    replacing the whole Planet.
    """
    biome_grid: np.ndarray
    land_feature_grid: np.ndarray
    structure_grid: np.ndarray
    anchor_grid: np.ndarray
    biomass_grid: np.ndarray
    tick: int = 0
    player: Player = field(default_factory=Player)

    # Set on every map mutation, cleared by whoever caches derived map data
    map_changed: bool = True

    def __post_init__(self) -> None:
        shape = self.biome_grid.shape
        if len(shape) != 2 or shape[0] < 1 or shape[1] < 1:
            raise ValueError(f"planet grids must be non-empty 2D arrays, got shape {shape}")
        for name in ("land_feature_grid", "structure_grid", "biomass_grid"):
            if getattr(self, name).shape != shape:
                raise ValueError(f"{name} shape {getattr(self, name).shape} does not match {shape}")
        if self.anchor_grid.shape != (shape[0], shape[1], 2):
            raise ValueError(f"anchor_grid shape {self.anchor_grid.shape} does not match {shape}")

    # === Construction ===
    @classmethod
    def empty(cls, width: int, height: int) -> "Planet":
        """All-ocean planet with no structures."""
        if width < 1 or height < 1:
            raise ValueError(f"planet size must be positive, got {width}x{height}")
        return cls(
            biome_grid=np.full((width, height), int(Biome.default()), dtype=np.uint8),
            land_feature_grid=np.full((width, height), int(LandFeature.NONE), dtype=np.uint8),
            structure_grid=np.full((width, height), int(StructureKind.NONE), dtype=np.uint8),
            anchor_grid=np.full((width, height, 2), NO_ANCHOR, dtype=np.int32),
            biomass_grid=np.zeros((width, height), dtype=np.float32),
        )

    @classmethod
    def new(cls, width: int, height: int) -> "Planet":
        """Fresh planet: all ocean with the player's Core near the center.

        Raises:
            ValueError: if either dimension is below MIN_MAP_SIZE (the Core
                needs a 2x2 area)
        """
        if width < MIN_MAP_SIZE or height < MIN_MAP_SIZE:
            raise ValueError(
                f"planet must be at least {MIN_MAP_SIZE}x{MIN_MAP_SIZE}, got {width}x{height}")
        planet = cls.empty(width, height)
        core_pos = Coords(width // 2 - 1, height // 2 - 1)
        planet.place(core_pos, StructureSize.MIDDLE, Structure.of(StructureKind.CORE))
        return planet

    # === Dimensions ===
    @property
    def width(self) -> int:
        return int(self.biome_grid.shape[0])

    @property
    def height(self) -> int:
        return int(self.biome_grid.shape[1])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_range(self, pos: Sequence[int]) -> bool:
        return in_bounds(pos, self.width, self.height)

    def _checked(self, pos: Sequence[int]) -> Coords:
        # NumPy would silently wrap negative indices
        if not self.in_range(pos):
            raise IndexError(f"tile {tuple(pos)} is outside the {self.width}x{self.height} map")
        return Coords(int(pos[0]), int(pos[1]))

    # === Tile access ===
    def biome_at(self, pos: Sequence[int]) -> Biome:
        p = self._checked(pos)
        return Biome(int(self.biome_grid[p.x, p.y]))

    def structure_at(self, pos: Sequence[int]) -> Structure:
        p = self._checked(pos)
        kind = StructureKind(int(self.structure_grid[p.x, p.y]))
        if kind is StructureKind.OCCUPIED:
            ax, ay = self.anchor_grid[p.x, p.y]
            return Structure.occupied(Coords(int(ax), int(ay)))
        return Structure.of(kind)

    def tile(self, pos: Sequence[int]) -> Tile:
        """Assemble the full Tile for a grid cell."""
        p = self._checked(pos)
        return Tile(
            biome=Biome(int(self.biome_grid[p.x, p.y])),
            land_feature=LandFeature(int(self.land_feature_grid[p.x, p.y])),
            structure=self.structure_at(p),
            biomass=float(self.biomass_grid[p.x, p.y]),
        )

    def structures(self) -> Iterator[Tuple[Coords, Structure]]:
        """Yield (anchor, structure) for every placed structure."""
        for x, y in np.argwhere(self.structure_grid > int(StructureKind.OCCUPIED)):
            pos = Coords(int(x), int(y))
            yield pos, self.structure_at(pos)

    # === Placement ===
    @staticmethod
    def footprint(pos: Sequence[int], size: StructureSize) -> List[Coords]:
        """Anchor followed by the tiles occupied by ``size``, in order."""
        anchor = Coords(int(pos[0]), int(pos[1]))
        return [anchor] + [anchor + offset for offset in size.occupied_tiles()]

    def placeable(self, pos: Sequence[int], size: StructureSize) -> bool:
        """Check whether every footprint tile is on the map and free."""
        if not self.in_range(pos):
            return False
        for p in self.footprint(pos, size):
            if not self.in_range(p):
                return False
            if self.structure_grid[p.x, p.y] != int(StructureKind.NONE):
                return False
        return True

    def place(self, pos: Sequence[int], size: StructureSize, structure: Structure) -> None:
        """Place ``structure`` with its anchor at ``pos``.

        Callers must check ``placeable`` first; placing onto a blocked or
        off-map footprint is a programming error.

        Raises:
            ValueError: if the footprint is not placeable, or ``structure`` is
                NONE/OCCUPIED
        """
        if structure.kind in (StructureKind.NONE, StructureKind.OCCUPIED):
            raise ValueError(f"cannot place a {structure.kind.slug} tile state as a structure")
        if not self.placeable(pos, size):
            raise ValueError(
                f"cannot place {structure.kind.slug} ({size.value}) at {tuple(pos)}: "
                "footprint is blocked or off the map")

        anchor, *occupied = self.footprint(pos, size)
        self.structure_grid[anchor.x, anchor.y] = int(structure.kind)
        for p in occupied:
            self.structure_grid[p.x, p.y] = int(StructureKind.OCCUPIED)
            self.anchor_grid[p.x, p.y] = (anchor.x, anchor.y)
        self.map_changed = True

    # === Editing ===
    def set_biome(self, pos: Sequence[int], biome: Biome) -> None:
        """Overwrite the biome of a single tile."""
        p = self._checked(pos)
        self.biome_grid[p.x, p.y] = int(biome)
        self.map_changed = True

    def advance_tick(self) -> None:
        self.tick += 1

    # === Consistency ===
    def check_invariants(self) -> List[str]:
        """Return a description of every occupancy inconsistency (empty if none).

        Every OCCUPIED tile must point at an on-map anchor holding a
        structure, and the tiles pointing at one anchor must form exactly the
        footprint of one ``StructureSize``.
        """
        problems: List[str] = []
        footprints = {frozenset(size.occupied_tiles()) for size in StructureSize}
        claimed: Dict[Coords, Set[Coords]] = {}

        occupied_mask = self.structure_grid == int(StructureKind.OCCUPIED)
        for x, y in np.argwhere(occupied_mask):
            pos = Coords(int(x), int(y))
            ax, ay = self.anchor_grid[pos.x, pos.y]
            anchor = Coords(int(ax), int(ay))
            if not self.in_range(anchor):
                problems.append(f"{pos} is occupied by off-map anchor {anchor}")
                continue
            anchor_kind = int(self.structure_grid[anchor.x, anchor.y])
            if anchor_kind in (int(StructureKind.NONE), int(StructureKind.OCCUPIED)):
                problems.append(f"{pos} is occupied by {anchor}, which holds no structure")
                continue
            claimed.setdefault(anchor, set()).add(Coords(pos.x - anchor.x, pos.y - anchor.y))

        for anchor, offsets in sorted(claimed.items()):
            if frozenset(offsets) not in footprints:
                tiles = sorted(anchor + off for off in offsets)
                problems.append(f"tiles {tiles} do not form a footprint anchored at {anchor}")

        stray = np.argwhere(~occupied_mask & np.any(self.anchor_grid != NO_ANCHOR, axis=2))
        for x, y in stray:
            problems.append(f"({int(x)}, {int(y)}) carries an anchor but is not occupied")
        return problems

    # === Copying / comparison ===
    def copy(self) -> "Planet":
        """Deep copy, safe to hand to another thread as a read-only snapshot."""
        return Planet(
            biome_grid=self.biome_grid.copy(),
            land_feature_grid=self.land_feature_grid.copy(),
            structure_grid=self.structure_grid.copy(),
            anchor_grid=self.anchor_grid.copy(),
            biomass_grid=self.biomass_grid.copy(),
            tick=self.tick,
            player=Player(self.player.energy, self.player.material),
            map_changed=self.map_changed,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Planet):
            return NotImplemented
        return (
            self.tick == other.tick
            and self.player == other.player
            and np.array_equal(self.biome_grid, other.biome_grid)
            and np.array_equal(self.land_feature_grid, other.land_feature_grid)
            and np.array_equal(self.structure_grid, other.structure_grid)
            and np.array_equal(self.anchor_grid, other.anchor_grid)
            and np.array_equal(self.biomass_grid, other.biomass_grid)
        )
