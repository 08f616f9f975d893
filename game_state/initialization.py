# game_state/initialization.py
"""Simulation context initialization."""
from __future__ import annotations

import logging
from typing import Optional

from config import DEFAULT_MAP_SIZE
from game_state.planet import Planet
from game_state.state import SimulationContext
from utils import Coords
from world.assets import AssetAttributes, default_asset_attributes

logger = logging.getLogger(__name__)


def build_initial_state(
    width: int = DEFAULT_MAP_SIZE[0],
    height: int = DEFAULT_MAP_SIZE[1],
    assets: Optional[AssetAttributes] = None,
    edit_map: bool = False,
) -> SimulationContext:
    """Create a new simulation context around a fresh planet.

    The camera is asked to center on the middle of the map.

    Raises:
        ValueError: if the map is smaller than MIN_MAP_SIZE
    """
    planet = Planet.new(width, height)
    ctx = SimulationContext(
        planet=planet,
        assets=assets if assets is not None else default_asset_attributes(),
        edit_map=edit_map,
    )
    ctx.request_centering(Coords(width // 2, height // 2))
    ctx.messages.append(f"New {width}x{height} planet. Your Core has landed.")
    logger.info("Initialized %dx%d planet (edit_map=%s)", width, height, edit_map)
    return ctx
