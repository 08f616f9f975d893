"""Planet persistence: save/load a whole Planet as one binary blob.

The file is a compressed NumPy ``.npz`` archive holding:

    format_version  int64 scalar
    tick            uint64 scalar
    player          float64[2]  (energy, material)
    biome           uint8[w, h]
    land_feature    uint8[w, h]
    structure       uint8[w, h]
    anchor          int32[w, h, 2]
    biomass         float32[w, h]

Saving writes to a temporary file next to the destination and renames it
into place, so a failed save never leaves a truncated file behind. Loading
validates everything before building a Planet, so callers only ever receive
a consistent value and can swap it in whole.
"""
from __future__ import annotations

import logging
import os
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import Dict, Union

import numpy as np

from config import SAVE_FORMAT_VERSION
from game_state.planet import Planet, Player
from world.structures import StructureKind
from world.terrain import Biome, LandFeature

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_GRID_KEYS = ("biome", "land_feature", "structure", "anchor", "biomass")
_ALL_KEYS = frozenset(("format_version", "tick", "player") + _GRID_KEYS)


class PersistenceError(Exception):
    """Base class for save/load failures. The in-memory Planet is never touched."""

    def __init__(self, message: str, path: PathLike):
        super().__init__(f"{message}: {os.fspath(path)}")
        self.path = os.fspath(path)


class PlanetOpenError(PersistenceError):
    """The file could not be opened (load) or created (save)."""


class PlanetReadWriteError(PersistenceError):
    """The file was opened but reading or writing it failed."""


class PlanetEncodeError(PersistenceError):
    """The planet could not be encoded."""


class PlanetDecodeError(PersistenceError):
    """The bytes are not a valid encoding of a Planet of this format version."""


# =============================================================================
# Encoding
# =============================================================================

def encode_planet(planet: Planet) -> Dict[str, np.ndarray]:
    """Map a Planet to the named arrays stored in the archive."""
    return {
        "format_version": np.array(SAVE_FORMAT_VERSION, dtype=np.int64),
        "tick": np.array(planet.tick, dtype=np.uint64),
        "player": np.array([planet.player.energy, planet.player.material], dtype=np.float64),
        "biome": planet.biome_grid.astype(np.uint8, copy=False),
        "land_feature": planet.land_feature_grid.astype(np.uint8, copy=False),
        "structure": planet.structure_grid.astype(np.uint8, copy=False),
        "anchor": planet.anchor_grid.astype(np.int32, copy=False),
        "biomass": planet.biomass_grid.astype(np.float32, copy=False),
    }


def _check_enum_range(name: str, grid: np.ndarray, enum_cls, path: PathLike) -> None:
    valid = np.array([int(member) for member in enum_cls], dtype=grid.dtype)
    if not np.isin(grid, valid).all():
        raise PlanetDecodeError(f"{name} grid holds values outside {enum_cls.__name__}", path)


def decode_planet(arrays: Dict[str, np.ndarray], path: PathLike) -> Planet:
    """Validate archive arrays and build a Planet from them.

    Raises:
        PlanetDecodeError: on version, key, shape, dtype or consistency mismatch
    """
    keys = set(arrays)
    if keys != _ALL_KEYS:
        raise PlanetDecodeError(
            f"unexpected archive layout (missing {sorted(_ALL_KEYS - keys)}, "
            f"extra {sorted(keys - _ALL_KEYS)})", path)

    version = arrays["format_version"]
    if version.shape != () or int(version) != SAVE_FORMAT_VERSION:
        raise PlanetDecodeError(
            f"unsupported save format version {version.tolist()} (expected {SAVE_FORMAT_VERSION})", path)

    tick = arrays["tick"]
    player = arrays["player"]
    if tick.shape != () or tick.dtype != np.uint64:
        raise PlanetDecodeError("tick must be a uint64 scalar", path)
    if player.shape != (2,) or player.dtype != np.float64:
        raise PlanetDecodeError("player must be two float64 counters", path)

    expected_dtypes = {
        "biome": np.uint8,
        "land_feature": np.uint8,
        "structure": np.uint8,
        "anchor": np.int32,
        "biomass": np.float32,
    }
    for key, dtype in expected_dtypes.items():
        if arrays[key].dtype != dtype:
            raise PlanetDecodeError(f"{key} has dtype {arrays[key].dtype}, expected {np.dtype(dtype)}", path)

    _check_enum_range("biome", arrays["biome"], Biome, path)
    _check_enum_range("land_feature", arrays["land_feature"], LandFeature, path)
    _check_enum_range("structure", arrays["structure"], StructureKind, path)

    try:
        planet = Planet(
            biome_grid=arrays["biome"],
            land_feature_grid=arrays["land_feature"],
            structure_grid=arrays["structure"],
            anchor_grid=arrays["anchor"],
            biomass_grid=arrays["biomass"],
            tick=int(tick),
            player=Player(energy=float(player[0]), material=float(player[1])),
        )
    except ValueError as e:
        raise PlanetDecodeError(f"inconsistent grid shapes ({e})", path) from e

    problems = planet.check_invariants()
    if problems:
        raise PlanetDecodeError(f"inconsistent structure occupancy ({problems[0]})", path)
    return planet


# =============================================================================
# File I/O
# =============================================================================

def save_planet(planet: Planet, path: PathLike) -> None:
    """Write ``planet`` to ``path``, replacing any existing file atomically.

    Raises:
        PlanetOpenError: if the temporary file cannot be created
        PlanetReadWriteError: if writing or renaming into place fails
        PlanetEncodeError: if the planet cannot be encoded
    """
    path = Path(path)
    try:
        arrays = encode_planet(planet)
    except (TypeError, ValueError, OverflowError) as e:
        raise PlanetEncodeError(f"cannot encode planet ({e})", path) from e

    directory = path.parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    except OSError as e:
        raise PlanetOpenError(f"cannot create save file ({e.strerror or e})", path) from e

    try:
        with os.fdopen(fd, "wb") as f:
            np.savez_compressed(f, **arrays)
        os.chmod(tmp_name, _file_mode(path))
        os.replace(tmp_name, path)
    except OSError as e:
        _remove_quietly(tmp_name)
        raise PlanetReadWriteError(f"cannot write save file ({e.strerror or e})", path) from e
    except BaseException:
        _remove_quietly(tmp_name)
        raise

    logger.info("Saved %dx%d planet at tick %d to %s", planet.width, planet.height, planet.tick, path)


def load_planet(path: PathLike) -> Planet:
    """Read a Planet from ``path``.

    Raises:
        PlanetOpenError: if the file cannot be opened
        PlanetReadWriteError: if reading the file fails
        PlanetDecodeError: if the contents are not a valid planet
    """
    path = Path(path)
    try:
        f = open(path, "rb")
    except OSError as e:
        raise PlanetOpenError(f"cannot open save file ({e.strerror or e})", path) from e

    with f:
        try:
            archive = np.load(f, allow_pickle=False)
            if isinstance(archive, np.ndarray):
                raise PlanetDecodeError("not a planet archive", path)
            with archive:
                arrays = {key: archive[key] for key in archive.files}
        except PersistenceError:
            raise
        except (ValueError, EOFError, KeyError, zipfile.BadZipFile, zlib.error) as e:
            raise PlanetDecodeError(f"corrupt save file ({e})", path) from e
        except OSError as e:
            raise PlanetReadWriteError(f"cannot read save file ({e.strerror or e})", path) from e

    planet = decode_planet(arrays, path)
    logger.info("Loaded %dx%d planet at tick %d from %s", planet.width, planet.height, planet.tick, path)
    return planet


def _remove_quietly(name: str) -> None:
    try:
        os.remove(name)
    except FileNotFoundError:
        pass


def _file_mode(path: Path) -> int:
    """Permission bits for a save: the existing file's, else the umask default."""
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
