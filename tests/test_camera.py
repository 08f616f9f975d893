# tests/test_camera.py

from camera import Camera
from utils import Coords


def make_camera(map_w: int = 30, map_h: int = 30) -> Camera:
    camera = Camera(viewport_width=480, viewport_height=480, tile_size=48)
    camera.set_map_size(map_w, map_h)
    return camera


def test_visible_range_at_origin() -> None:
    camera = make_camera()
    assert camera.get_visible_tile_range() == (Coords(0, 0), Coords(11, 11))


def test_visible_range_clamped_to_small_map() -> None:
    camera = make_camera(5, 3)
    assert camera.get_visible_tile_range() == (Coords(0, 0), Coords(5, 3))


def test_center_on_far_tile_stays_in_bounds() -> None:
    camera = make_camera()
    camera.center_on_tile((29, 29))
    start, end = camera.get_visible_tile_range()
    assert end == Coords(30, 30)
    assert camera.world_x == 30 * 48 - 480
    assert start.x >= 0 and start.y >= 0


def test_zoomed_out_range_never_exceeds_map() -> None:
    camera = make_camera(10, 10)
    camera.set_zoom(0.25)
    start, end = camera.get_visible_tile_range()
    assert start == Coords(0, 0)
    assert end == Coords(10, 10)


def test_viewport_to_tile() -> None:
    camera = make_camera()
    assert camera.viewport_to_tile(50, 10) == Coords(1, 0)
    camera.set_zoom(2.0)
    assert camera.viewport_to_tile(50, 10) == Coords(0, 0)
    assert camera.is_tile_visible((0, 0))


def test_zoom_is_clamped() -> None:
    camera = make_camera()
    camera.set_zoom(100.0)
    assert camera.zoom == 4.0
    camera.set_zoom(0.0)
    assert camera.zoom == 0.25


def test_anchor_range_reaches_up_and_left() -> None:
    camera = make_camera()
    camera.pan(100, 100)
    assert camera.get_visible_tile_range() == (Coords(2, 2), Coords(13, 13))
    assert camera.get_anchor_tile_range(1) == (Coords(1, 1), Coords(13, 13))


def test_anchor_range_clamped_at_map_edge() -> None:
    camera = make_camera()
    assert camera.get_anchor_tile_range(1) == (Coords(0, 0), Coords(11, 11))
