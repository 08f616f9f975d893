# render/config.py
"""
Configuration constants for the rendering domain.
Includes UI dimensions, colors, font sizes, and other visual tuning values.
"""
from __future__ import annotations

from typing import Dict, Tuple

from world.structures import StructureKind
from world.terrain import Biome

# =============================================================================
# UI LAYOUT & DIMENSIONS
# =============================================================================
VIRTUAL_WIDTH = 1280
VIRTUAL_HEIGHT = 720

SIDEBAR_WIDTH = 300
LINE_HEIGHT = 20
FONT_SIZE = 18
SECTION_SPACING = 8
LOG_PANEL_HEIGHT = 160
LOG_LINE_HEIGHT = 18
HELP_COLUMN_WIDTH = 210
HELP_KEY_WIDTH = 95

CAMERA_PAN_SPEED = 600.0              # Viewport pixels per second
ZOOM_STEP = 1.25

# =============================================================================
# COLORS
# =============================================================================
# UI Colors
COLOR_BG_DARK = (20, 20, 25)
COLOR_BG_PANEL = (25, 25, 30)
COLOR_TEXT_WHITE = (230, 230, 230)
COLOR_TEXT_GRAY = (160, 160, 160)
COLOR_TEXT_DIM = (100, 100, 100)
COLOR_TEXT_HIGHLIGHT = (220, 200, 120)
COLOR_LOG_TEXT = (160, 200, 160)

# Cursor highlight colors by mode
HIGHLIGHT_COLORS = {
    "build": (80, 140, 200),
    "build_invalid": (200, 80, 80),
    "edit_biome": (200, 180, 80),
}
HIGHLIGHT_ALPHA = 70

# Brightness of blended (non-interior) corner pieces
EDGE_BRIGHTNESS = 0.85

# Biome base colors
BIOME_COLORS: Dict[Biome, Tuple[int, int, int]] = {
    Biome.OCEAN: (48, 104, 176),
    Biome.DESERT: (214, 184, 122),
    Biome.GRASSLAND: (104, 160, 72),
    Biome.MOUNTAINS: (128, 120, 112),
}

STRUCTURE_COLORS: Dict[StructureKind, Tuple[int, int, int]] = {
    StructureKind.BRANCH: (90, 60, 40),
    StructureKind.CORE: (230, 230, 240),
}
COLOR_STRUCTURE_UNKNOWN = (200, 60, 200)
