# tests/test_compositing.py

from typing import Dict

import pytest

from config import ATLAS_COLUMNS, ATLAS_ROWS
from game_state.planet import Planet
from render.compositing import (
    CORNERS,
    StructurePiece,
    atlas_cell,
    atlas_index,
    biome_pieces,
    biome_probe,
    build_layered_tex_map,
    corner_index,
    corner_pieces,
    piece_origin,
    structure_pieces,
    structure_probe,
)
from utils import Coords, rect_iter
from world.assets import default_asset_attributes
from world.structures import Structure, StructureKind, StructureSize
from world.terrain import Biome, BiomeAttrs

BIOME_ATTRS = default_asset_attributes().biomes


def two_biome_planet() -> Planet:
    """6x4 planet: ocean for x < 3, desert for x >= 3."""
    planet = Planet.empty(6, 4)
    for pos in rect_iter((3, 0), (5, 3)):
        planet.set_biome(pos, Biome.DESERT)
    return planet


def table_probe(pos: Coords, corner: Coords, a: bool, b: bool, c: bool):
    answers: Dict[Coords, bool] = {
        pos + (corner.x, 0): a,
        pos + (0, corner.y): b,
        pos + corner: c,
    }
    return lambda q: answers[q]


@pytest.mark.parametrize(
    "a, b, c, expected",
    [
        (True, True, True, 0),
        (True, True, False, 4),
        (True, False, True, 1),
        (True, False, False, 1),
        (False, True, True, 2),
        (False, True, False, 2),
        (False, False, True, 3),
        (False, False, False, 3),
    ],
)
def test_corner_index_table(a: bool, b: bool, c: bool, expected: int) -> None:
    pos = Coords(5, 5)
    for corner in CORNERS:
        assert corner_index(table_probe(pos, corner, a, b, c), pos, corner) == expected


def test_uniform_grid_has_single_layer() -> None:
    planet = Planet.empty(5, 5)
    ltm = build_layered_tex_map(planet, BIOME_ATTRS)
    for pos in rect_iter((0, 0), (4, 4)):
        assert ltm.layers(pos) == (Biome.OCEAN,)
        pieces = corner_pieces(biome_probe(ltm, Biome.OCEAN), pos)
        assert [p.index for p in pieces] == [0, 0, 0, 0]


def test_straight_border_layers() -> None:
    ltm = build_layered_tex_map(two_biome_planet(), BIOME_ATTRS)
    for y in range(4):
        assert ltm.layers((0, y)) == (Biome.OCEAN,)
        assert ltm.layers((2, y)) == (Biome.OCEAN,)
        assert ltm.layers((3, y)) == (Biome.DESERT, Biome.OCEAN)
        assert ltm.layers((4, y)) == (Biome.DESERT,)
        assert ltm.layers((5, y)) == (Biome.DESERT,)


def test_border_tile_corners() -> None:
    ltm = build_layered_tex_map(two_biome_planet(), BIOME_ATTRS)
    pos = Coords(3, 1)
    layers = biome_pieces(ltm, pos, BIOME_ATTRS)
    assert [biome for biome, _ in layers] == [Biome.OCEAN, Biome.DESERT]

    ocean = {p.corner: p.index for p in layers[0][1]}
    desert = {p.corner: p.index for p in layers[1][1]}
    assert ocean == {Coords(-1, -1): 0, Coords(-1, 1): 0, Coords(1, 1): 2, Coords(1, -1): 2}
    assert desert == {Coords(-1, -1): 2, Coords(-1, 1): 2, Coords(1, 1): 0, Coords(1, -1): 0}


def test_lower_neighbors_collected() -> None:
    planet = Planet.empty(3, 3)
    planet.set_biome((1, 1), Biome.MOUNTAINS)
    planet.set_biome((0, 0), Biome.DESERT)
    planet.set_biome((2, 2), Biome.GRASSLAND)
    ltm = build_layered_tex_map(planet, BIOME_ATTRS)

    center = ltm.layers((1, 1))
    assert center[0] is Biome.MOUNTAINS
    assert set(center) == {Biome.MOUNTAINS, Biome.OCEAN, Biome.DESERT, Biome.GRASSLAND}
    assert ltm.draw_order((1, 1), BIOME_ATTRS) == [Biome.OCEAN, Biome.DESERT, Biome.GRASSLAND, Biome.MOUNTAINS]
    # Lower neighbors never pick up higher ones
    assert ltm.layers((0, 0)) == (Biome.DESERT, Biome.OCEAN)
    assert ltm.layers((0, 1)) == (Biome.OCEAN,)


def test_equal_z_neighbors_do_not_blend() -> None:
    planet = Planet.empty(2, 1)
    planet.set_biome((1, 0), Biome.DESERT)
    attrs = {Biome.OCEAN: BiomeAttrs(z=1.0), Biome.DESERT: BiomeAttrs(z=1.0)}
    ltm = build_layered_tex_map(planet, attrs)
    assert ltm.layers((0, 0)) == (Biome.OCEAN,)
    assert ltm.layers((1, 0)) == (Biome.DESERT,)


def test_missing_biome_attrs_is_an_error() -> None:
    planet = Planet.empty(2, 2)
    planet.set_biome((0, 0), Biome.DESERT)
    with pytest.raises(KeyError):
        build_layered_tex_map(planet, {Biome.OCEAN: BiomeAttrs(z=0.0)})


def test_layers_out_of_range() -> None:
    ltm = build_layered_tex_map(Planet.empty(2, 2), BIOME_ATTRS)
    with pytest.raises(IndexError):
        ltm.layers((2, 0))


def test_edge_probe_policies() -> None:
    planet = Planet.empty(3, 3)
    ltm = build_layered_tex_map(planet, BIOME_ATTRS)
    for outside in [Coords(-1, 0), Coords(0, -1), Coords(3, 1), Coords(-1, -1), Coords(3, 3)]:
        assert biome_probe(ltm, Biome.OCEAN)(outside) is True
        assert biome_probe(ltm, Biome.MOUNTAINS)(outside) is True
        assert structure_probe(planet, StructureKind.BRANCH)(outside) is False
    assert biome_probe(ltm, Biome.MOUNTAINS)(Coords(1, 1)) is False


def test_atlas_cells_stay_in_sheet() -> None:
    seen = set()
    for slot in range(len(CORNERS)):
        for index in range(5):
            col, row = atlas_cell(slot, index)
            assert 0 <= col < ATLAS_COLUMNS
            assert 0 <= row < ATLAS_ROWS
            assert atlas_index(slot, index) == col + row * ATLAS_COLUMNS
            seen.add((col, row))
    assert len(seen) == 20


def test_interior_atlas_indices() -> None:
    assert [atlas_index(slot, 0) for slot in range(4)] == [6, 0, 1, 7]
    assert atlas_cell(3, 4) == (3, 3)


def test_piece_origin() -> None:
    assert piece_origin((1, 2), (-1, -1)) == (48, 96)
    assert piece_origin((1, 2), (1, 1)) == (72, 120)


def test_branch_chain_pieces() -> None:
    planet = Planet.empty(5, 5)
    for pos in [(1, 1), (2, 1)]:
        planet.place(pos, StructureSize.SMALL, Structure.of(StructureKind.BRANCH))

    pieces = {p.corner: p.index for p in structure_pieces(planet, (1, 1))}
    assert pieces == {Coords(-1, -1): 3, Coords(-1, 1): 3, Coords(1, 1): 1, Coords(1, -1): 1}
    assert all(p.kind is StructureKind.BRANCH for p in structure_pieces(planet, (2, 1)))


def test_branch_does_not_chain_past_map_edge() -> None:
    planet = Planet.empty(2, 2)
    planet.place((0, 0), StructureSize.SMALL, Structure.of(StructureKind.BRANCH))
    assert [p.index for p in structure_pieces(planet, (0, 0))] == [3, 3, 3, 3]


def test_single_sprite_structures() -> None:
    planet = Planet.new(4, 4)
    assert structure_pieces(planet, (1, 1)) == [StructurePiece(StructureKind.CORE, None, 0, 0)]
    assert structure_pieces(planet, (2, 2)) == []
    assert structure_pieces(planet, (0, 0)) == []

    planet.structure_grid[0, 0] = int(StructureKind.MINING_MODULE)
    assert structure_pieces(planet, (0, 0)) == [StructurePiece(StructureKind.MINING_MODULE, None, 0, 0)]


def test_compositing_does_not_mutate() -> None:
    planet = two_biome_planet()
    before = planet.copy()
    ltm = build_layered_tex_map(planet, BIOME_ATTRS)
    for pos in rect_iter((0, 0), (5, 3)):
        biome_pieces(ltm, pos, BIOME_ATTRS)
        structure_pieces(planet, pos)
    assert planet == before
