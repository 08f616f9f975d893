"""
structures.py - Player-built structures for Planet Builder

Defines structure kinds, footprints, and per-kind capabilities:
- Branch: single-tile, chains into neighboring branches when drawn
- Core: the player's 2x2 starting base

Every kind that can be built registers a StructureCapabilities subclass.
Kinds without one are known to the save format but cannot be built yet.

All structures operate on tile coordinates (x, y). A multi-tile structure is
stored on its anchor tile; the other footprint tiles hold Structure.occupied().
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, List, Mapping, Optional

from utils import Coords


class StructureKind(IntEnum):
    NONE = 0
    OCCUPIED = 1
    BRANCH = 2
    CORE = 3
    GATHERER_DRONE_HUB = 4
    COMBAT_DRONE_HUB = 5
    PHOTOSYNTHESIS_MODULE = 6
    SILICON_CHEM_MODULE = 7
    MINING_MODULE = 8

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "StructureKind":
        for kind in cls:
            if kind.slug == slug:
                return kind
        raise ValueError(f"Unknown structure kind: {slug!r}")


class StructureSize(Enum):
    SMALL = "small"
    MIDDLE = "middle"

    def occupied_tiles(self) -> List[Coords]:
        """Tiles occupied in addition to the anchor, relative to the anchor."""
        if self is StructureSize.SMALL:
            return []
        return [Coords(1, 0), Coords(1, 1), Coords(0, 1)]


@dataclass(frozen=True)
class Structure:
    """The structure value held by a single tile.

    ``anchor`` is only set for OCCUPIED and points at the tile holding the
    structure that covers this one.
    """
    kind: StructureKind = StructureKind.NONE
    anchor: Optional[Coords] = None

    def __post_init__(self) -> None:
        if (self.kind is StructureKind.OCCUPIED) != (self.anchor is not None):
            raise ValueError("anchor must be given for OCCUPIED and only for OCCUPIED")

    @classmethod
    def none(cls) -> "Structure":
        return cls(StructureKind.NONE)

    @classmethod
    def occupied(cls, by: Coords) -> "Structure":
        return cls(StructureKind.OCCUPIED, Coords(*by))

    @classmethod
    def of(cls, kind: StructureKind) -> "Structure":
        return cls(kind)

    @property
    def is_none(self) -> bool:
        return self.kind is StructureKind.NONE


@dataclass(frozen=True)
class StructureAttrs:
    """Asset-provided footprint and sprite sheet geometry for a structure kind."""
    size: StructureSize = StructureSize.SMALL
    width: int = 48
    height: int = 48
    columns: int = 1
    rows: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StructureAttrs":
        unknown = set(data) - {"size", "width", "height", "columns", "rows"}
        if unknown:
            raise ValueError(f"Unknown structure attribute(s): {sorted(unknown)}")
        return cls(
            size=StructureSize(data.get("size", StructureSize.SMALL.value)),
            width=int(data.get("width", 48)),
            height=int(data.get("height", 48)),
            columns=int(data.get("columns", 1)),
            rows=int(data.get("rows", 1)),
        )


class StructureCapabilities(ABC):
    """What a buildable structure kind can do.

    Subclasses describe one kind each. The compositing engine and the UI ask
    these objects instead of matching on the kind themselves.
    """
    kind: StructureKind
    default_size: StructureSize = StructureSize.SMALL
    chains: bool = False  # Blends into same-kind neighbors when drawn

    @abstractmethod
    def get_info_string(self) -> str:
        """Return the text shown in the structure info panel."""
        pass


class Branch(StructureCapabilities):
    """Single-tile connector that visually links to adjacent branches."""
    kind = StructureKind.BRANCH
    chains = True

    def get_info_string(self) -> str:
        return "Branch"


class Core(StructureCapabilities):
    """Player's starting base."""
    kind = StructureKind.CORE
    default_size = StructureSize.MIDDLE

    def get_info_string(self) -> str:
        return "Core"


# TODO: register drone hubs and modules once their footprints are designed.
STRUCTURE_CAPABILITIES: Dict[StructureKind, StructureCapabilities] = {
    cap.kind: cap for cap in (Branch(), Core())
}


# Furthest tile any footprint reaches right of or below its anchor
FOOTPRINT_REACH = max((max(off.x, off.y) for size in StructureSize for off in size.occupied_tiles()), default=0)


def is_buildable(kind: StructureKind) -> bool:
    return kind in STRUCTURE_CAPABILITIES


def capabilities_for(kind: StructureKind) -> StructureCapabilities:
    """Look up the capabilities of a structure kind.

    Raises:
        ValueError: for NONE/OCCUPIED, which are tile states rather than structures
        NotImplementedError: for kinds that have not been implemented yet
    """
    if kind in (StructureKind.NONE, StructureKind.OCCUPIED):
        raise ValueError(f"{kind.slug} is not a structure")
    try:
        return STRUCTURE_CAPABILITIES[kind]
    except KeyError:
        raise NotImplementedError(f"structure kind {kind.slug} is not implemented") from None


def structure_info(structure: Structure) -> str:
    """Return the display text for a structure placed on an anchor tile."""
    return capabilities_for(structure.kind).get_info_string()
