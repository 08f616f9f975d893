# tests/test_map_render.py

import pygame
import pytest

from camera import Camera
from game_state import SimulationContext, build_initial_state
from render.colors import structure_color
from render.map import render_map_viewport
from world.structures import StructureKind


@pytest.fixture
def ctx():
    context = build_initial_state(10, 10)
    yield context
    context.close()


def make_view(x_tiles: int, y_tiles: int) -> Camera:
    camera = Camera(viewport_width=96, viewport_height=96, tile_size=48)
    camera.set_map_size(10, 10)
    camera.pan(x_tiles * 48, y_tiles * 48)
    return camera


def test_core_drawn_when_anchor_in_view(ctx: SimulationContext) -> None:
    surface = pygame.Surface((96, 96))
    render_map_viewport(surface, ctx, make_view(4, 4))
    assert tuple(surface.get_at((48, 48)))[:3] == structure_color(StructureKind.CORE)


def test_core_drawn_when_anchor_left_and_above_view(ctx: SimulationContext) -> None:
    # Core anchor is (4, 4); the view starts at its occupied tile (5, 5)
    camera = make_view(5, 5)
    assert camera.get_visible_tile_range()[0] == (5, 5)

    surface = pygame.Surface((96, 96))
    render_map_viewport(surface, ctx, camera)
    assert tuple(surface.get_at((20, 20)))[:3] == structure_color(StructureKind.CORE)
