"""
Centralized game configuration for Planet Builder.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- render/config.py (colors, UI dimensions, etc.)
- world/assets.py (loading of biome/structure attribute files)
"""
from __future__ import annotations

from typing import Dict, Tuple

# =============================================================================
# CORE GAME DESIGN
# =============================================================================
# Size of the planet created at startup (tiles)
DEFAULT_MAP_SIZE: Tuple[int, int] = (30, 30)

# Bounds accepted by the "new world" tool. The Core structure needs a 2x2 area.
MIN_MAP_SIZE = 2
MAX_MAP_SIZE = 100

# =============================================================================
# TIME & SIMULATION
# =============================================================================
TICK_INTERVAL = 2.0   # Seconds per simulation tick
DRAW_FPS = 30         # Frontend redraw rate

# =============================================================================
# COMPOSITING
# =============================================================================
TILE_SIZE = 48                  # Tile edge in world pixels
PIECE_SIZE = TILE_SIZE // 2     # Corner piece edge (4 pieces per tile)

# Self + 8 neighbors
LAYER_CAPACITY = 9

# Autotile sprite sheet geometry: 5 corner patterns packed into 6x4 cells
ATLAS_COLUMNS = 6
ATLAS_ROWS = 4

# =============================================================================
# PERSISTENCE
# =============================================================================
SAVE_FORMAT_VERSION = 1
DEFAULT_SAVE_PATH = "planet.npz"

# =============================================================================
# LOGGING
# =============================================================================
LOG_LEVEL_ENV = "PLANET_LOG_LEVEL"
MESSAGE_LOG_SIZE = 100    # Player-facing event log length

# =============================================================================
# DEFAULT ASSET ATTRIBUTES
# =============================================================================
# Biome render/blend priority. Lower z is drawn underneath.
BIOME_Z: Dict[str, float] = {
    "ocean": 0.0,
    "desert": 1.0,
    "grassland": 2.0,
    "mountains": 3.0,
}

# Structure footprint and sprite sheet geometry, keyed by structure slug
STRUCTURE_ATTRS: Dict[str, Dict[str, object]] = {
    "branch": {"size": "small", "width": 24, "height": 24, "columns": 6, "rows": 4},
    "core": {"size": "middle", "width": 96, "height": 96, "columns": 1, "rows": 1},
}
