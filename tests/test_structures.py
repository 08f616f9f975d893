# tests/test_structures.py

import pytest

from utils import Coords
from world.structures import (
    FOOTPRINT_REACH,
    Structure,
    StructureAttrs,
    StructureKind,
    StructureSize,
    capabilities_for,
    is_buildable,
    structure_info,
)


def test_occupied_tiles() -> None:
    assert StructureSize.SMALL.occupied_tiles() == []
    assert StructureSize.MIDDLE.occupied_tiles() == [Coords(1, 0), Coords(1, 1), Coords(0, 1)]


def test_structure_anchor_only_for_occupied() -> None:
    occupied = Structure.occupied(Coords(2, 3))
    assert occupied.kind is StructureKind.OCCUPIED
    assert occupied.anchor == Coords(2, 3)
    assert Structure.none().is_none
    with pytest.raises(ValueError):
        Structure(StructureKind.OCCUPIED)
    with pytest.raises(ValueError):
        Structure(StructureKind.BRANCH, Coords(0, 0))


def test_branch_and_core_capabilities() -> None:
    branch = capabilities_for(StructureKind.BRANCH)
    core = capabilities_for(StructureKind.CORE)
    assert branch.chains is True
    assert branch.default_size is StructureSize.SMALL
    assert core.chains is False
    assert core.default_size is StructureSize.MIDDLE
    assert structure_info(Structure.of(StructureKind.BRANCH)) == "Branch"
    assert structure_info(Structure.of(StructureKind.CORE)) == "Core"


@pytest.mark.parametrize(
    "kind",
    [
        StructureKind.GATHERER_DRONE_HUB,
        StructureKind.COMBAT_DRONE_HUB,
        StructureKind.PHOTOSYNTHESIS_MODULE,
        StructureKind.SILICON_CHEM_MODULE,
        StructureKind.MINING_MODULE,
    ],
)
def test_unimplemented_kinds(kind: StructureKind) -> None:
    assert not is_buildable(kind)
    with pytest.raises(NotImplementedError):
        capabilities_for(kind)


@pytest.mark.parametrize("kind", [StructureKind.NONE, StructureKind.OCCUPIED])
def test_tile_states_are_not_structures(kind: StructureKind) -> None:
    assert not is_buildable(kind)
    with pytest.raises(ValueError):
        capabilities_for(kind)


def test_kind_slugs() -> None:
    assert StructureKind.GATHERER_DRONE_HUB.slug == "gatherer-drone-hub"
    assert StructureKind.from_slug("silicon-chem-module") is StructureKind.SILICON_CHEM_MODULE
    with pytest.raises(ValueError):
        StructureKind.from_slug("castle")


def test_structure_attrs_from_dict() -> None:
    attrs = StructureAttrs.from_dict({"size": "middle", "columns": 2})
    assert attrs.size is StructureSize.MIDDLE
    assert attrs.columns == 2
    assert attrs.rows == 1
    assert StructureAttrs.from_dict({}).size is StructureSize.SMALL
    with pytest.raises(ValueError):
        StructureAttrs.from_dict({"colour": "red"})
    with pytest.raises(ValueError):
        StructureAttrs.from_dict({"size": "huge"})


def test_footprint_reach_covers_middle() -> None:
    assert FOOTPRINT_REACH == 1
    for size in StructureSize:
        assert all(0 <= off.x <= FOOTPRINT_REACH and 0 <= off.y <= FOOTPRINT_REACH
                   for off in size.occupied_tiles())
