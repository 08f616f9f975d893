"""
keybindings.py - Centralized key mappings for Planet Builder

Single source of truth for all keyboard controls.
"""
from __future__ import annotations

from typing import List, Tuple

import pygame

from world.structures import StructureKind
from world.terrain import Biome

# Number keys pick a biome brush (map editing only)
BIOME_KEYS = {
    pygame.K_1: Biome.OCEAN,
    pygame.K_2: Biome.DESERT,
    pygame.K_3: Biome.GRASSLAND,
    pygame.K_4: Biome.MOUNTAINS,
}

# Structure build modes
BUILD_KEYS = {
    pygame.K_b: StructureKind.BRANCH,
}

SELECT_KEY = pygame.K_q         # Back to the plain select cursor
NEW_WORLD_KEY = pygame.K_F2
SAVE_KEY = pygame.K_F5
LOAD_KEY = pygame.K_F9

# Camera
PAN_KEYS = {
    pygame.K_w: (0, -1),
    pygame.K_s: (0, 1),
    pygame.K_a: (-1, 0),
    pygame.K_d: (1, 0),
    pygame.K_UP: (0, -1),
    pygame.K_DOWN: (0, 1),
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
}
ZOOM_IN_KEYS = (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS)
ZOOM_OUT_KEYS = (pygame.K_MINUS, pygame.K_KP_MINUS)

# System keys
QUIT_KEY = pygame.K_ESCAPE
HELP_KEY = pygame.K_h

# Control descriptions for help display
# (keys, action, needs --edit-map)
CONTROL_DESCRIPTIONS: List[Tuple[str, str, bool]] = [
    ("WASD/arrows", "pan", False),
    ("+/-, wheel", "zoom", False),
    ("LClick", "apply cursor", False),
    ("Q", "select cursor", False),
    ("B", "build branch", False),
    ("1-4", "paint biome", True),
    ("F2", "new world", True),
    ("F5", "save", False),
    ("F9", "load", False),
    ("H", "toggle help", False),
    ("Esc", "quit", False),
]
