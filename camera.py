# camera.py
"""
Camera system for viewport management.

Handles the transformation between three coordinate spaces:
1. World space - pixel coordinates on the planet surface (TILE_SIZE per tile)
2. Tile space - planet tile coordinates
3. Viewport space - coordinates within the visible map area

The camera tracks the world position of the viewport's top-left corner.
Only the tiles returned by ``get_visible_tile_range`` are drawn each frame.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from config import TILE_SIZE
from utils import Coords, clamp


@dataclass
class Camera:
    """Manages the viewport into the planet."""
    # World position (top-left of viewport in world pixels)
    world_x: float = 0.0
    world_y: float = 0.0

    # Viewport size in screen pixels
    viewport_width: int = 960
    viewport_height: int = 720

    # Planet size in tiles
    map_width: int = 1
    map_height: int = 1

    tile_size: int = TILE_SIZE

    # Zoom level (1.0 = 100%, 0.5 = 2x view area, 2.0 = 200% size)
    zoom: float = 1.0

    @property
    def world_pixel_width(self) -> int:
        return self.map_width * self.tile_size

    @property
    def world_pixel_height(self) -> int:
        return self.map_height * self.tile_size

    def set_map_size(self, width: int, height: int) -> None:
        """Set the world bounds in tiles (after a new world or load)."""
        self.map_width = width
        self.map_height = height
        self._clamp_to_bounds()

    def set_viewport_size(self, width: int, height: int) -> None:
        self.viewport_width = width
        self.viewport_height = height
        self._clamp_to_bounds()

    def set_zoom(self, zoom_level: float) -> None:
        """Set zoom level, clamping to reasonable bounds."""
        self.zoom = clamp(zoom_level, 0.25, 4.0)
        self._clamp_to_bounds()

    def center_on(self, world_x: float, world_y: float) -> None:
        """Center the camera on a world position."""
        self.world_x = world_x - (self.viewport_width / self.zoom) / 2
        self.world_y = world_y - (self.viewport_height / self.zoom) / 2
        self._clamp_to_bounds()

    def center_on_tile(self, tile: Sequence[int]) -> None:
        self.center_on(*self.tile_to_world_center(tile))

    def pan(self, dx: float, dy: float) -> None:
        """Move the camera by a viewport-pixel offset."""
        self.world_x += dx / self.zoom
        self.world_y += dy / self.zoom
        self._clamp_to_bounds()

    def _clamp_to_bounds(self) -> None:
        """Clamp camera position to world bounds."""
        visible_w = self.viewport_width / self.zoom
        visible_h = self.viewport_height / self.zoom

        max_x = max(0, self.world_pixel_width - visible_w)
        max_y = max(0, self.world_pixel_height - visible_h)

        self.world_x = max(0, min(self.world_x, max_x))
        self.world_y = max(0, min(self.world_y, max_y))

    def world_to_viewport(self, world_x: float, world_y: float) -> Tuple[float, float]:
        return (world_x - self.world_x) * self.zoom, (world_y - self.world_y) * self.zoom

    def viewport_to_world(self, vp_x: float, vp_y: float) -> Tuple[float, float]:
        return (vp_x / self.zoom) + self.world_x, (vp_y / self.zoom) + self.world_y

    # =========================================================================
    # Tile coordinate conversions
    # =========================================================================

    def world_to_tile(self, world_x: float, world_y: float) -> Coords:
        """Tile under a world position. May lie outside the map."""
        return Coords(int(world_x // self.tile_size), int(world_y // self.tile_size))

    def viewport_to_tile(self, vp_x: float, vp_y: float) -> Coords:
        return self.world_to_tile(*self.viewport_to_world(vp_x, vp_y))

    def tile_to_world(self, tile: Sequence[int]) -> Tuple[float, float]:
        """World position of a tile's top-left corner."""
        return tile[0] * self.tile_size, tile[1] * self.tile_size

    def tile_to_world_center(self, tile: Sequence[int]) -> Tuple[float, float]:
        half = self.tile_size / 2
        return tile[0] * self.tile_size + half, tile[1] * self.tile_size + half

    def get_visible_tile_range(self) -> Tuple[Coords, Coords]:
        """
        Get the range of tiles visible in the viewport, clamped to the map.

        Returns: (start, end) - end is exclusive
        """
        start_x = max(0, int(self.world_x // self.tile_size))
        start_y = max(0, int(self.world_y // self.tile_size))

        end_x = min(int((self.world_x + self.viewport_width / self.zoom) // self.tile_size) + 1,
                    self.map_width)
        end_y = min(int((self.world_y + self.viewport_height / self.zoom) // self.tile_size) + 1,
                    self.map_height)

        return Coords(start_x, start_y), Coords(max(start_x, end_x), max(start_y, end_y))

    def get_anchor_tile_range(self, reach: int) -> Tuple[Coords, Coords]:
        """Visible tile range grown up and left by ``reach`` tiles.

        Anchors in the extra rows and columns own footprints that can extend
        into view.
        """
        start, end = self.get_visible_tile_range()
        return Coords(max(0, start.x - reach), max(0, start.y - reach)), end

    def is_tile_visible(self, tile: Sequence[int]) -> bool:
        start, end = self.get_visible_tile_range()
        return start.x <= tile[0] < end.x and start.y <= tile[1] < end.y
