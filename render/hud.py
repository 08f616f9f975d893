# render/hud.py
"""HUD panels: planet status, hovered tile info, event log, help."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence, Tuple

import pygame

from game_state.actions import BuildCursor, EditBiomeCursor
from render.config import (
    COLOR_BG_PANEL,
    COLOR_LOG_TEXT,
    COLOR_TEXT_DIM,
    COLOR_TEXT_GRAY,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_WHITE,
    HELP_COLUMN_WIDTH,
    HELP_KEY_WIDTH,
    LINE_HEIGHT,
    LOG_LINE_HEIGHT,
    SECTION_SPACING,
)

if TYPE_CHECKING:
    from game_state.state import SimulationContext

Color = Tuple[int, int, int]

# Rendered text surfaces keyed by (font id, text, color)
_TEXT_CACHE: Dict[Tuple[int, str, Color], pygame.Surface] = {}


def draw_text(surface, font, text: str, pos: Tuple[int, int], color: Color = COLOR_TEXT_WHITE) -> None:
    """Draw text at the given position, using a cache to avoid re-rendering."""
    cache_key = (id(font), text, color)
    if cache_key not in _TEXT_CACHE:
        _TEXT_CACHE[cache_key] = font.render(text, True, color)
    surface.blit(_TEXT_CACHE[cache_key], pos)


def draw_section_header(surface, font, text: str, pos: Tuple[int, int], width: int = 200) -> int:
    """Draw a section header with underline. Returns the y position after the header."""
    x, y = pos
    draw_text(surface, font, text, (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += LINE_HEIGHT
    pygame.draw.line(surface, (100, 100, 80), (x, y), (x + width, y), 1)
    return y + 6


def cursor_mode_label(ctx: "SimulationContext") -> str:
    mode = ctx.cursor_mode
    if isinstance(mode, EditBiomeCursor):
        return f"Paint {mode.biome.slug}"
    if isinstance(mode, BuildCursor):
        return f"Build {mode.kind.slug}"
    return "Select"


def render_hud(screen, font, ctx: "SimulationContext", hud_x: int, start_y: int) -> int:
    """Render the planet and tile panels. Returns final y position."""
    y_offset = draw_section_header(screen, font, "PLANET", (hud_x, start_y), width=260) + 4

    planet = ctx.planet
    lines: List[str] = [
        f"Size: {planet.width}x{planet.height}",
        f"Tick: {planet.tick}",
        f"Energy: {planet.player.energy:.1f}",
        f"Material: {planet.player.material:.1f}",
        f"Cursor: {cursor_mode_label(ctx)}",
    ]
    if ctx.io.busy:
        lines.append("Saving/loading...")
    for line in lines:
        draw_text(screen, font, line, (hud_x, y_offset))
        y_offset += LINE_HEIGHT
    y_offset += SECTION_SPACING

    info = ctx.hover_info()
    if info:
        y_offset = draw_section_header(screen, font, "TILE", (hud_x, y_offset), width=260) + 4
        for line in info:
            draw_text(screen, font, line, (hud_x, y_offset), color=COLOR_TEXT_GRAY)
            y_offset += LINE_HEIGHT
        y_offset += SECTION_SPACING

    return y_offset


def render_event_log(surface, font, ctx: "SimulationContext", pos: Tuple[int, int], max_height: int) -> None:
    """Render the newest messages that fit in ``max_height``, oldest first."""
    x, y = pos
    draw_text(surface, font, "EVENT LOG", (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += LINE_HEIGHT + 4

    room = (max_height - LINE_HEIGHT - 2 * LOG_LINE_HEIGHT) // LOG_LINE_HEIGHT
    if room <= 0:
        return

    recent = list(ctx.messages)[-room:]
    hidden = len(ctx.messages) - len(recent)
    for message in recent:
        draw_text(surface, font, f"- {message}", (x, y), color=COLOR_LOG_TEXT)
        y += LOG_LINE_HEIGHT
    if hidden:
        draw_text(surface, font, f"[{hidden} older]", (x, y), color=COLOR_TEXT_DIM)


def render_help_overlay(surface, font, controls: Sequence[Tuple[str, str, bool]], pos: Tuple[int, int],
                        size: Tuple[int, int], edit_map: bool = False) -> None:
    """List the controls as key/action pairs, filling columns top to bottom.

    Controls that need the map editor are left out unless ``edit_map`` is set.
    """
    x0, y0 = pos
    width, height = size
    pygame.draw.rect(surface, COLOR_BG_PANEL, (x0 - 4, y0 - 4, width, height))
    draw_text(surface, font, "CONTROLS", (x0, y0), color=COLOR_TEXT_HIGHLIGHT)

    top = y0 + LOG_LINE_HEIGHT + 4
    per_column = max(1, (y0 + height - top) // LOG_LINE_HEIGHT)
    shown = [(k, a) for k, a, edit_only in controls if edit_map or not edit_only]
    for i, (keys, action) in enumerate(shown):
        col, row = divmod(i, per_column)
        cx = x0 + col * HELP_COLUMN_WIDTH
        if cx + HELP_COLUMN_WIDTH > x0 + width:
            break
        cy = top + row * LOG_LINE_HEIGHT
        draw_text(surface, font, keys, (cx, cy), color=COLOR_TEXT_WHITE)
        draw_text(surface, font, action, (cx + HELP_KEY_WIDTH, cy), color=COLOR_TEXT_GRAY)
