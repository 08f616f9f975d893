# game_state/actions.py
"""Player intents and how they are applied to the simulation.

The frontend never mutates the Planet directly. Clicks and menu choices are
turned into intent values, queued, and applied in order by
``SimulationContext.update``.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Deque, Iterator, List, Optional, Union

from config import MAX_MAP_SIZE
from game_state.planet import Planet
from utils import Coords
from world.structures import Structure, StructureKind, StructureSize, capabilities_for, is_buildable
from world.terrain import Biome

if TYPE_CHECKING:
    from game_state.state import SimulationContext

logger = logging.getLogger(__name__)


# =============================================================================
# Intents
# =============================================================================

@dataclass(frozen=True)
class EditBiomeAt:
    coords: Coords
    biome: Biome


@dataclass(frozen=True)
class BuildStructureAt:
    coords: Coords
    kind: StructureKind


@dataclass(frozen=True)
class NewWorld:
    width: int
    height: int


@dataclass(frozen=True)
class SaveWorld:
    path: str


@dataclass(frozen=True)
class LoadWorld:
    path: str


Intent = Union[EditBiomeAt, BuildStructureAt, NewWorld, SaveWorld, LoadWorld]


class IntentQueue:
    """FIFO of pending intents, drained once per update."""

    def __init__(self) -> None:
        self._items: Deque[Intent] = deque()

    def push(self, intent: Intent) -> None:
        self._items.append(intent)

    def drain(self) -> Iterator[Intent]:
        """Yield queued intents in order until the queue is empty.

        Intents pushed while draining are yielded in the same pass.
        """
        while self._items:
            yield self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


# =============================================================================
# Cursor modes
# =============================================================================

@dataclass(frozen=True)
class NormalCursor:
    pass


@dataclass(frozen=True)
class EditBiomeCursor:
    biome: Biome


@dataclass(frozen=True)
class BuildCursor:
    kind: StructureKind


CursorMode = Union[NormalCursor, EditBiomeCursor, BuildCursor]


def structure_size(ctx: SimulationContext, kind: StructureKind) -> StructureSize:
    """Footprint size of ``kind``: asset attributes first, then the kind's default."""
    attrs = ctx.assets.structures.get(kind)
    if attrs is not None:
        return attrs.size
    return capabilities_for(kind).default_size


def cursor_action(ctx: SimulationContext, coords: Coords) -> Optional[Intent]:
    """Turn a click on ``coords`` into an intent for the current cursor mode.

    Returns the queued intent, or None if the click does nothing.
    """
    mode = ctx.cursor_mode
    if isinstance(mode, NormalCursor):
        logger.debug("Clicked tile %s", coords)
        return None
    if not ctx.planet.in_range(coords):
        return None

    intent: Intent
    if isinstance(mode, EditBiomeCursor):
        intent = EditBiomeAt(coords, mode.biome)
    else:
        intent = BuildStructureAt(coords, mode.kind)
    ctx.intents.push(intent)
    return intent


def hover_footprint(ctx: SimulationContext, coords: Coords) -> List[Coords]:
    """Tiles to highlight under the cursor, clipped to the map."""
    mode = ctx.cursor_mode
    if isinstance(mode, NormalCursor) or not ctx.planet.in_range(coords):
        return []
    if isinstance(mode, EditBiomeCursor):
        return [coords]
    if not is_buildable(mode.kind):
        return [coords]
    tiles = Planet.footprint(coords, structure_size(ctx, mode.kind))
    return [p for p in tiles if ctx.planet.in_range(p)]


# =============================================================================
# Applying intents
# =============================================================================

def apply_intent(ctx: SimulationContext, intent: Intent) -> None:
    """Apply one intent to the context.

    Raises:
        IndexError: if an EditBiomeAt targets a tile outside the map
        TypeError: for values that are not intents
    """
    if isinstance(intent, EditBiomeAt):
        ctx.planet.set_biome(intent.coords, intent.biome)
    elif isinstance(intent, BuildStructureAt):
        _build(ctx, intent)
    elif isinstance(intent, NewWorld):
        _new_world(ctx, intent)
    elif isinstance(intent, SaveWorld):
        ctx.io.submit_save(ctx.planet.copy(), intent.path)
        ctx.messages.append(f"Saving to {intent.path}...")
    elif isinstance(intent, LoadWorld):
        ctx.io.submit_load(intent.path)
        ctx.messages.append(f"Loading {intent.path}...")
    else:
        raise TypeError(f"not an intent: {intent!r}")


def _reject(ctx: SimulationContext, message: str) -> None:
    logger.warning(message)
    ctx.messages.append(message)


def _build(ctx: SimulationContext, intent: BuildStructureAt) -> None:
    kind = intent.kind
    if not is_buildable(kind):
        _reject(ctx, f"Cannot build {kind.slug}: not available yet.")
        return

    size = structure_size(ctx, kind)
    if not ctx.planet.placeable(intent.coords, size):
        _reject(ctx, f"Cannot build {kind.slug} at {intent.coords}: area is blocked.")
        return

    ctx.planet.place(intent.coords, size, Structure.of(kind))
    ctx.messages.append(f"Built {capabilities_for(kind).get_info_string()} at {intent.coords}.")


def _new_world(ctx: SimulationContext, intent: NewWorld) -> None:
    if intent.width > MAX_MAP_SIZE or intent.height > MAX_MAP_SIZE:
        _reject(ctx, f"Map size is limited to {MAX_MAP_SIZE}x{MAX_MAP_SIZE}.")
        return
    try:
        planet = Planet.new(intent.width, intent.height)
    except ValueError as e:
        _reject(ctx, f"Cannot create planet: {e}")
        return

    ctx.replace_planet(planet)
    ctx.messages.append(f"New {intent.width}x{intent.height} planet.")
