# game_state/state.py
"""Core simulation context: everything the update loop and the renderer share."""
from __future__ import annotations

import collections
import logging
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from config import MESSAGE_LOG_SIZE
from game_state.actions import CursorMode, IntentQueue, NormalCursor, apply_intent
from game_state.io_worker import IOResult, PersistenceWorker
from game_state.planet import Planet
from render.compositing import LayeredTexMap, build_layered_tex_map
from simulation.clock import SimulationClock
from utils import Coords
from world.assets import AssetAttributes, default_asset_attributes
from world.structures import StructureKind, is_buildable, structure_info

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Main simulation container.

    ``update`` is the only writer of ``planet``. The frontend reads the
    planet and the layer cache between updates and pushes intents.
    """
    planet: Planet
    assets: AssetAttributes = field(default_factory=default_asset_attributes)
    intents: IntentQueue = field(default_factory=IntentQueue)
    clock: SimulationClock = field(default_factory=SimulationClock)
    io: PersistenceWorker = field(default_factory=PersistenceWorker)
    messages: Deque[str] = field(default_factory=lambda: collections.deque(maxlen=MESSAGE_LOG_SIZE))

    # UI state
    cursor_mode: CursorMode = field(default_factory=NormalCursor)
    hover_tile: Optional[Coords] = None
    edit_map: bool = False

    # Tile the camera should center on; consumed by the frontend
    centering: Optional[Coords] = None

    # Compositing cache
    _ltm: Optional[LayeredTexMap] = None
    _ltm_planet: Optional[Planet] = None

    # === Planet lifecycle ===
    def replace_planet(self, planet: Planet) -> None:
        """Swap in a whole new planet (new world or completed load)."""
        self.planet = planet
        self._ltm = None
        self._ltm_planet = None
        self.hover_tile = None
        self.request_centering(Coords(planet.width // 2, planet.height // 2))

    def request_centering(self, tile: Coords) -> None:
        self.centering = tile

    def consume_centering(self) -> Optional[Coords]:
        tile, self.centering = self.centering, None
        return tile

    # === Compositing cache ===
    def layered_tex_map(self) -> LayeredTexMap:
        """Current layer map, rebuilt if the planet changed since the last call."""
        if self._ltm is None or self._ltm_planet is not self.planet or self.planet.map_changed:
            self._ltm = build_layered_tex_map(self.planet, self.assets.biomes)
            self._ltm_planet = self.planet
            self.planet.map_changed = False
        return self._ltm

    # === Update loop ===
    def update(self, dt: float) -> bool:
        """Advance the simulation by ``dt`` seconds of real time.

        Applies queued intents in order, then any finished save/load jobs,
        then fires the clock. Returns True if a tick fired.
        """
        for intent in self.intents.drain():
            apply_intent(self, intent)

        for result in self.io.poll():
            self._apply_io_result(result)

        if self.clock.update(dt):
            self.planet.advance_tick()
            logger.debug("Tick %d", self.planet.tick)
            return True
        return False

    def _apply_io_result(self, result: IOResult) -> None:
        if not result.ok:
            logger.warning("cannot %s: %s", result.op, result.error)
            self.messages.append(f"Could not {result.op} {result.path}.")
            return

        if result.op == "load":
            self.replace_planet(result.planet)
            self.messages.append(f"Loaded {result.path}.")
        else:
            self.messages.append(f"Saved to {result.path}.")

    def close(self) -> None:
        """Finish pending I/O and stop the worker."""
        self.io.shutdown()

    # === HUD queries ===
    def hover_info(self) -> List[str]:
        """Lines describing the hovered tile, empty if nothing is hovered."""
        pos = self.hover_tile
        if pos is None or not self.planet.in_range(pos):
            return []

        tile = self.planet.tile(pos)
        lines = [f"{pos} {tile.biome.slug}"]
        if tile.land_feature:
            lines.append(tile.land_feature.name.lower())

        structure = tile.structure
        if structure.kind is StructureKind.OCCUPIED:
            structure = self.planet.structure_at(structure.anchor)
        if structure.kind is not StructureKind.NONE:
            if is_buildable(structure.kind):
                lines.append(structure_info(structure))
            else:
                lines.append(structure.kind.slug)
        return lines
