# tests/test_planet.py

import numpy as np
import pytest

from game_state.planet import NO_ANCHOR, Planet
from utils import Coords, rect_iter
from world.structures import Structure, StructureKind, StructureSize
from world.terrain import Biome


def count_non_empty(planet: Planet) -> int:
    return int(np.count_nonzero(planet.structure_grid != int(StructureKind.NONE)))


@pytest.mark.parametrize("size", [(2, 2), (3, 3), (7, 4), (10, 10)])
def test_new_places_single_core(size) -> None:
    w, h = size
    planet = Planet.new(w, h)
    anchor = Coords(w // 2 - 1, h // 2 - 1)

    assert planet.size == (w, h)
    assert planet.tick == 0
    assert planet.player.energy == 0.0 and planet.player.material == 0.0
    assert np.all(planet.biome_grid == int(Biome.OCEAN))
    assert list(planet.structures()) == [(anchor, Structure.of(StructureKind.CORE))]
    assert count_non_empty(planet) == 4
    assert planet.check_invariants() == []


@pytest.mark.parametrize("size", [(1, 5), (5, 1), (1, 1), (0, 3)])
def test_new_rejects_small_maps(size) -> None:
    with pytest.raises(ValueError):
        Planet.new(*size)


def test_empty_rejects_zero_size() -> None:
    with pytest.raises(ValueError):
        Planet.empty(0, 4)


def test_place_middle_scenario() -> None:
    planet = Planet.empty(10, 10)
    assert planet.placeable((4, 4), StructureSize.MIDDLE)

    planet.place((4, 4), StructureSize.MIDDLE, Structure.of(StructureKind.CORE))

    assert not planet.placeable((4, 4), StructureSize.MIDDLE)
    assert planet.tile((4, 4)).structure == Structure.of(StructureKind.CORE)
    for pos in [(5, 4), (5, 5), (4, 5)]:
        assert planet.tile(pos).structure == Structure.occupied(Coords(4, 4))
    assert count_non_empty(planet) == 4


@pytest.mark.parametrize("size", [StructureSize.SMALL, StructureSize.MIDDLE])
def test_place_then_not_placeable(size: StructureSize) -> None:
    for pos in rect_iter((0, 0), (3, 3)):
        planet = Planet.empty(4, 4)
        if not planet.placeable(pos, size):
            continue
        planet.place(pos, size, Structure.of(StructureKind.BRANCH))
        assert not planet.placeable(pos, size)
        assert count_non_empty(planet) == 1 + len(size.occupied_tiles())
        assert planet.check_invariants() == []


def test_placeable_rejects_edges_and_overlap() -> None:
    planet = Planet.empty(4, 4)
    assert not planet.placeable((3, 0), StructureSize.MIDDLE)
    assert not planet.placeable((0, 3), StructureSize.MIDDLE)
    assert not planet.placeable((-1, 0), StructureSize.SMALL)
    assert not planet.placeable((4, 0), StructureSize.SMALL)

    planet.place((1, 1), StructureSize.SMALL, Structure.of(StructureKind.BRANCH))
    assert not planet.placeable((0, 0), StructureSize.MIDDLE)
    assert planet.placeable((2, 2), StructureSize.MIDDLE)


def test_place_without_check_is_rejected() -> None:
    planet = Planet.new(6, 6)
    before = planet.copy()
    with pytest.raises(ValueError):
        planet.place((2, 2), StructureSize.SMALL, Structure.of(StructureKind.BRANCH))
    with pytest.raises(ValueError):
        planet.place((0, 0), StructureSize.SMALL, Structure.none())
    assert planet == before


def test_out_of_bounds_access() -> None:
    planet = Planet.empty(3, 3)
    with pytest.raises(IndexError):
        planet.tile((-1, 0))
    with pytest.raises(IndexError):
        planet.structure_at((0, 3))
    with pytest.raises(IndexError):
        planet.set_biome((3, 0), Biome.DESERT)


def test_set_biome_flags_map_change() -> None:
    planet = Planet.empty(3, 3)
    planet.map_changed = False
    planet.set_biome((1, 2), Biome.MOUNTAINS)
    assert planet.biome_at((1, 2)) is Biome.MOUNTAINS
    assert planet.map_changed


def test_advance_tick() -> None:
    planet = Planet.empty(2, 2)
    planet.advance_tick()
    planet.advance_tick()
    assert planet.tick == 2


def test_check_invariants_reports_bad_occupancy() -> None:
    planet = Planet.empty(4, 4)
    planet.structure_grid[1, 1] = int(StructureKind.OCCUPIED)
    planet.anchor_grid[1, 1] = (0, 0)
    assert planet.check_invariants()

    planet = Planet.empty(4, 4)
    planet.anchor_grid[2, 2] = (1, 1)
    assert planet.check_invariants()

    planet = Planet.empty(4, 4)
    assert planet.anchor_grid[0, 0, 0] == NO_ANCHOR
    assert planet.check_invariants() == []


def test_check_invariants_requires_complete_footprint() -> None:
    planet = Planet.new(4, 4)
    planet.structure_grid[2, 1] = int(StructureKind.NONE)
    planet.anchor_grid[2, 1] = NO_ANCHOR
    assert planet.check_invariants()


def test_check_invariants_rejects_occupied_next_to_small_anchor() -> None:
    planet = Planet.empty(4, 4)
    planet.place((0, 0), StructureSize.SMALL, Structure.of(StructureKind.BRANCH))
    planet.structure_grid[1, 0] = int(StructureKind.OCCUPIED)
    planet.anchor_grid[1, 0] = (0, 0)
    assert planet.check_invariants()


def test_copy_is_independent() -> None:
    planet = Planet.new(5, 5)
    snapshot = planet.copy()
    assert snapshot == planet

    planet.set_biome((0, 0), Biome.DESERT)
    planet.player.energy = 3.0
    assert snapshot != planet
    assert snapshot.biome_at((0, 0)) is Biome.OCEAN
    assert snapshot.player.energy == 0.0
