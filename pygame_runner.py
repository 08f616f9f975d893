# pygame_runner.py
"""
Pygame-CE frontend for Planet Builder.

Architecture:
- World space: pixel coordinates on the planet surface (TILE_SIZE per tile)
- Virtual screen space: fixed 1280x720 UI layout surface
- Screen space: actual window pixels (scales with resize)

The camera controls which portion of the planet is visible in the map
viewport. Input is turned into intents on the SimulationContext; the frame
loop then calls ``ctx.update(dt)`` once and draws the result.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Tuple

import pygame

from camera import Camera
from config import DEFAULT_SAVE_PATH, DRAW_FPS
from game_state import (
    BuildCursor,
    EditBiomeCursor,
    LoadWorld,
    NewWorld,
    NormalCursor,
    SaveWorld,
    SimulationContext,
    cursor_action,
)
from keybindings import (
    BIOME_KEYS,
    BUILD_KEYS,
    CONTROL_DESCRIPTIONS,
    HELP_KEY,
    LOAD_KEY,
    NEW_WORLD_KEY,
    PAN_KEYS,
    QUIT_KEY,
    SAVE_KEY,
    SELECT_KEY,
    ZOOM_IN_KEYS,
    ZOOM_OUT_KEYS,
)
from render.config import (
    CAMERA_PAN_SPEED,
    COLOR_BG_DARK,
    FONT_SIZE,
    LOG_PANEL_HEIGHT,
    SIDEBAR_WIDTH,
    VIRTUAL_HEIGHT,
    VIRTUAL_WIDTH,
    ZOOM_STEP,
)
from render.hud import render_event_log, render_help_overlay, render_hud
from render.map import render_map_viewport
from utils import Coords

logger = logging.getLogger(__name__)


def screen_to_virtual(
    screen_pos: Tuple[int, int],
    screen_size: Tuple[int, int],
) -> Tuple[int, int]:
    """Transform screen coordinates to virtual screen coordinates."""
    screen_w, screen_h = screen_size
    scale = min(screen_w / VIRTUAL_WIDTH, screen_h / VIRTUAL_HEIGHT)
    offset_x = (screen_w - VIRTUAL_WIDTH * scale) / 2
    offset_y = (screen_h - VIRTUAL_HEIGHT * scale) / 2

    return int((screen_pos[0] - offset_x) / scale), int((screen_pos[1] - offset_y) / scale)


def virtual_to_tile(virtual_pos: Tuple[int, int], map_rect: pygame.Rect, camera: Camera) -> Optional[Coords]:
    """Tile under a virtual screen position, or None outside the map viewport."""
    if not map_rect.collidepoint(virtual_pos):
        return None
    return camera.viewport_to_tile(virtual_pos[0] - map_rect.x, virtual_pos[1] - map_rect.y)


def blit_virtual_to_screen(virtual_screen: pygame.Surface, screen: pygame.Surface) -> None:
    """Scale and blit the virtual screen to the actual display, with letterboxing."""
    screen_w, screen_h = screen.get_size()
    scale = min(screen_w / VIRTUAL_WIDTH, screen_h / VIRTUAL_HEIGHT)
    scaled_w = int(VIRTUAL_WIDTH * scale)
    scaled_h = int(VIRTUAL_HEIGHT * scale)

    screen.fill((0, 0, 0))
    scaled = pygame.transform.scale(virtual_screen, (scaled_w, scaled_h))
    screen.blit(scaled, ((screen_w - scaled_w) // 2, (screen_h - scaled_h) // 2))


def render_to_virtual_screen(
    virtual_screen: pygame.Surface,
    map_surface: pygame.Surface,
    font,
    ctx: SimulationContext,
    camera: Camera,
    map_rect: pygame.Rect,
    show_help: bool,
) -> None:
    """Render everything to the virtual screen at fixed resolution."""
    virtual_screen.fill(COLOR_BG_DARK)

    render_map_viewport(map_surface, ctx, camera)
    virtual_screen.blit(map_surface, map_rect.topleft)

    render_hud(virtual_screen, font, ctx, map_rect.right + 12, 12)

    log_y = map_rect.bottom
    pygame.draw.line(virtual_screen, (80, 80, 80), (0, log_y), (VIRTUAL_WIDTH, log_y), 2)
    if show_help:
        render_help_overlay(virtual_screen, font, CONTROL_DESCRIPTIONS, (12, log_y + 8),
                            (VIRTUAL_WIDTH - 24, LOG_PANEL_HEIGHT - 16), edit_map=ctx.edit_map)
    else:
        render_event_log(virtual_screen, font, ctx, (12, log_y + 8), LOG_PANEL_HEIGHT)


def handle_key(ctx: SimulationContext, camera: Camera, key: int, save_path: str) -> None:
    """Map a key press to a cursor mode change or an intent."""
    if key == SELECT_KEY:
        ctx.cursor_mode = NormalCursor()
    elif key in BUILD_KEYS:
        ctx.cursor_mode = BuildCursor(BUILD_KEYS[key])
    elif key in BIOME_KEYS and ctx.edit_map:
        ctx.cursor_mode = EditBiomeCursor(BIOME_KEYS[key])
    elif key == NEW_WORLD_KEY and ctx.edit_map:
        ctx.intents.push(NewWorld(ctx.planet.width, ctx.planet.height))
    elif key == SAVE_KEY:
        ctx.intents.push(SaveWorld(save_path))
    elif key == LOAD_KEY:
        ctx.intents.push(LoadWorld(save_path))
    elif key in ZOOM_IN_KEYS:
        camera.set_zoom(camera.zoom * ZOOM_STEP)
    elif key in ZOOM_OUT_KEYS:
        camera.set_zoom(camera.zoom / ZOOM_STEP)


def run(ctx: SimulationContext, save_path: str = DEFAULT_SAVE_PATH) -> None:
    """Main frame loop."""
    pygame.init()

    virtual_screen = pygame.Surface((VIRTUAL_WIDTH, VIRTUAL_HEIGHT))
    screen = pygame.display.set_mode((VIRTUAL_WIDTH, VIRTUAL_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Planet Builder" + (" - Map Editor" if ctx.edit_map else ""))

    font = pygame.font.Font(None, FONT_SIZE)
    clock = pygame.time.Clock()

    map_rect = pygame.Rect(0, 0, VIRTUAL_WIDTH - SIDEBAR_WIDTH, VIRTUAL_HEIGHT - LOG_PANEL_HEIGHT)
    map_surface = pygame.Surface(map_rect.size)

    camera = Camera(viewport_width=map_rect.width, viewport_height=map_rect.height)
    camera.set_map_size(ctx.planet.width, ctx.planet.height)
    ctx.messages.append("Press H for help.")

    show_help = False
    running = True
    while running:
        dt = clock.tick(DRAW_FPS) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == QUIT_KEY:
                    running = False
                elif event.key == HELP_KEY:
                    show_help = not show_help
                else:
                    handle_key(ctx, camera, event.key, save_path)
            elif event.type == pygame.MOUSEWHEEL:
                camera.set_zoom(camera.zoom * (ZOOM_STEP ** event.y))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                virtual_pos = screen_to_virtual(event.pos, screen.get_size())
                tile = virtual_to_tile(virtual_pos, map_rect, camera)
                if tile is not None:
                    cursor_action(ctx, tile)

        keys = pygame.key.get_pressed()
        dx = dy = 0
        for key, (kx, ky) in PAN_KEYS.items():
            if keys[key]:
                dx += kx
                dy += ky
        if dx or dy:
            camera.pan(dx * CAMERA_PAN_SPEED * dt, dy * CAMERA_PAN_SPEED * dt)

        virtual_pos = screen_to_virtual(pygame.mouse.get_pos(), screen.get_size())
        tile = virtual_to_tile(virtual_pos, map_rect, camera)
        ctx.hover_tile = tile if tile is not None and ctx.planet.in_range(tile) else None

        ctx.update(dt)

        center = ctx.consume_centering()
        if center is not None:
            camera.set_map_size(ctx.planet.width, ctx.planet.height)
            camera.center_on_tile(center)

        render_to_virtual_screen(virtual_screen, map_surface, font, ctx, camera, map_rect, show_help)
        blit_virtual_to_screen(virtual_screen, screen)
        pygame.display.flip()

    logger.info("Shutting down")
    ctx.close()
    pygame.quit()


if __name__ == "__main__":
    from main import main
    sys.exit(main())
