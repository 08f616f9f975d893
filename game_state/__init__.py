# game_state/__init__.py
"""Game state management module."""

from game_state.planet import Planet, Player, Tile
from game_state.state import SimulationContext
from game_state.initialization import build_initial_state
from game_state.actions import (
    BuildCursor,
    BuildStructureAt,
    CursorMode,
    EditBiomeAt,
    EditBiomeCursor,
    IntentQueue,
    LoadWorld,
    NewWorld,
    NormalCursor,
    SaveWorld,
    apply_intent,
    cursor_action,
    hover_footprint,
)
from game_state.persistence import (
    PersistenceError,
    PlanetDecodeError,
    PlanetEncodeError,
    PlanetOpenError,
    PlanetReadWriteError,
    load_planet,
    save_planet,
)

__all__ = [
    'Planet',
    'Player',
    'Tile',
    'SimulationContext',
    'build_initial_state',
    'BuildCursor',
    'BuildStructureAt',
    'CursorMode',
    'EditBiomeAt',
    'EditBiomeCursor',
    'IntentQueue',
    'LoadWorld',
    'NewWorld',
    'NormalCursor',
    'SaveWorld',
    'apply_intent',
    'cursor_action',
    'hover_footprint',
    'PersistenceError',
    'PlanetDecodeError',
    'PlanetEncodeError',
    'PlanetOpenError',
    'PlanetReadWriteError',
    'load_planet',
    'save_planet',
]
