# render/map.py
"""Map and structure rendering with camera support.

Each visible tile is drawn as composited corner pieces: every biome layer
bottom-up, then the structure anchored on the tile. Pieces are flat colored
rectangles shaped by their corner index instead of sprite sheet cells.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

import pygame

from config import PIECE_SIZE
from game_state.actions import BuildCursor, EditBiomeCursor, hover_footprint, structure_size
from render.colors import Color, biome_color, blend_colors, structure_color
from render.compositing import biome_pieces, piece_origin, structure_pieces
from render.config import COLOR_BG_DARK, HIGHLIGHT_ALPHA, HIGHLIGHT_COLORS
from utils import Coords, rect_iter
from world.structures import FOOTPRINT_REACH, StructureKind, StructureSize, is_buildable

if TYPE_CHECKING:
    from camera import Camera
    from game_state.state import SimulationContext

Rect = Tuple[float, float, float, float]

# Cache highlight surfaces by (size, color, alpha) to avoid per-frame surface creation
_HIGHLIGHT_SURFACE_CACHE: Dict[Tuple[int, Color, int], pygame.Surface] = {}


def _get_cached_highlight_surface(size: int, color: Color, alpha: int) -> pygame.Surface:
    key = (size, color, alpha)
    if key not in _HIGHLIGHT_SURFACE_CACHE:
        surf = pygame.Surface((size, size), pygame.SRCALPHA)
        surf.fill((*color, alpha))
        _HIGHLIGHT_SURFACE_CACHE[key] = surf
    return _HIGHLIGHT_SURFACE_CACHE[key]


def piece_rects(origin: Sequence[float], corner: Sequence[int], index: int, size: float = PIECE_SIZE) -> List[Rect]:
    """World-space rectangles that make up one corner piece.

    The filled part always hugs the tile center; edges and corners cut away
    the half or quarter that faces the non-matching neighbor.
    """
    ox, oy = origin
    half = size / 2
    inner_x = ox + half if corner[0] < 0 else ox
    inner_y = oy + half if corner[1] < 0 else oy

    if index == 0:
        return [(ox, oy, size, size)]
    if index == 1:
        return [(ox, inner_y, size, half)]
    if index == 2:
        return [(inner_x, oy, half, size)]
    if index == 3:
        return [(inner_x, inner_y, half, half)]
    return [(ox, inner_y, size, half), (inner_x, oy, half, size)]


def _draw_world_rect(surface: pygame.Surface, camera: "Camera", rect: Rect, color: Color) -> None:
    x, y = camera.world_to_viewport(rect[0], rect[1])
    w = rect[2] * camera.zoom
    h = rect[3] * camera.zoom
    pygame.draw.rect(surface, color, pygame.Rect(int(x), int(y), max(1, round(w)), max(1, round(h))))


def render_map_viewport(surface: pygame.Surface, ctx: "SimulationContext", camera: "Camera") -> None:
    """Render the visible portion of the planet to the map viewport surface."""
    surface.fill(COLOR_BG_DARK)

    planet = ctx.planet
    ltm = ctx.layered_tex_map()
    biome_attrs = ctx.assets.biomes
    start, end = camera.get_visible_tile_range()
    if end.x <= start.x or end.y <= start.y:
        return

    visible = list(rect_iter(start, (end.x - 1, end.y - 1)))

    for pos in visible:
        for biome, pieces in biome_pieces(ltm, pos, biome_attrs):
            for piece in pieces:
                color = biome_color(biome, piece.index)
                for rect in piece_rects(piece_origin(pos, piece.corner), piece.corner, piece.index):
                    _draw_world_rect(surface, camera, rect, color)

    # Structures overlap neighboring tiles, so draw them after all terrain.
    # Anchors up to FOOTPRINT_REACH tiles above or left of the view still show.
    anchor_start, anchor_end = camera.get_anchor_tile_range(FOOTPRINT_REACH)
    for pos in rect_iter(anchor_start, (anchor_end.x - 1, anchor_end.y - 1)):
        for piece in structure_pieces(planet, pos):
            color = structure_color(piece.kind)
            if piece.corner is not None:
                for rect in piece_rects(piece_origin(pos, piece.corner), piece.corner, piece.index):
                    _draw_world_rect(surface, camera, rect, color)
            else:
                _draw_single_sprite(surface, camera, ctx, pos, piece.kind, color)

    render_hover_highlight(surface, ctx, camera)


def _draw_single_sprite(surface: pygame.Surface, camera: "Camera", ctx: "SimulationContext",
                        pos: Coords, kind: StructureKind, color: Color) -> None:
    tile = camera.tile_size
    size = structure_size(ctx, kind) if is_buildable(kind) else StructureSize.SMALL
    span = 2 if size is StructureSize.MIDDLE else 1
    x, y = camera.tile_to_world(pos)
    inset = tile * 0.15
    rect = (x + inset, y + inset, tile * span - 2 * inset, tile * span - 2 * inset)
    _draw_world_rect(surface, camera, rect, blend_colors(color, (0, 0, 0), 0.4))
    inner = (rect[0] + 3, rect[1] + 3, rect[2] - 6, rect[3] - 6)
    _draw_world_rect(surface, camera, inner, color)


def render_hover_highlight(surface: pygame.Surface, ctx: "SimulationContext", camera: "Camera") -> None:
    """Shade the tiles the current cursor mode would affect."""
    if ctx.hover_tile is None:
        return
    tiles = hover_footprint(ctx, ctx.hover_tile)
    if not tiles:
        return

    mode = ctx.cursor_mode
    if isinstance(mode, EditBiomeCursor):
        color = HIGHLIGHT_COLORS["edit_biome"]
    elif isinstance(mode, BuildCursor) and is_buildable(mode.kind) and \
            ctx.planet.placeable(ctx.hover_tile, structure_size(ctx, mode.kind)):
        color = HIGHLIGHT_COLORS["build"]
    else:
        color = HIGHLIGHT_COLORS["build_invalid"]

    size = max(1, round(camera.tile_size * camera.zoom))
    highlight = _get_cached_highlight_surface(size, color, HIGHLIGHT_ALPHA)
    for tile in tiles:
        vp_x, vp_y = camera.world_to_viewport(*camera.tile_to_world(tile))
        surface.blit(highlight, (int(vp_x), int(vp_y)))
        pygame.draw.rect(surface, color, pygame.Rect(int(vp_x), int(vp_y), size, size), 2)
