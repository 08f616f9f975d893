"""
Asset attribute tables for Planet Builder.

The compositing engine needs a z value per biome, and placement needs a
footprint size per structure kind. Both come from here: either the defaults
in config.py or a JSON file with the same shape:

    {
        "biomes": {"ocean": {"z": 0.0}, "desert": {"z": 1.0}},
        "structures": {"branch": {"size": "small", "columns": 6, "rows": 4}}
    }

Keys are kebab-case slugs. Biome iteration order is file order.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from config import BIOME_Z, STRUCTURE_ATTRS
from world.structures import StructureAttrs, StructureKind
from world.terrain import Biome, BiomeAttrs

logger = logging.getLogger(__name__)


@dataclass
class AssetAttributes:
    """Read-only attribute tables, available once assets have loaded."""
    biomes: Dict[Biome, BiomeAttrs] = field(default_factory=dict)
    structures: Dict[StructureKind, StructureAttrs] = field(default_factory=dict)

    def z(self, biome: Biome) -> float:
        """Blend priority of ``biome``. KeyError if the biome has no attributes."""
        return self.biomes[biome].z

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetAttributes":
        unknown = set(data) - {"biomes", "structures"}
        if unknown:
            raise ValueError(f"Unknown asset section(s): {sorted(unknown)}")

        biomes: Dict[Biome, BiomeAttrs] = {}
        for slug, attrs in data.get("biomes", {}).items():
            extra = set(attrs) - {"z"}
            if extra:
                raise ValueError(f"Unknown biome attribute(s) for {slug}: {sorted(extra)}")
            biomes[Biome.from_slug(slug)] = BiomeAttrs(z=float(attrs["z"]))

        structures: Dict[StructureKind, StructureAttrs] = {}
        for slug, attrs in data.get("structures", {}).items():
            structures[StructureKind.from_slug(slug)] = StructureAttrs.from_dict(attrs)

        return cls(biomes=biomes, structures=structures)


def default_asset_attributes() -> AssetAttributes:
    """Build the attribute tables from the defaults in config.py."""
    return AssetAttributes.from_dict({"biomes": {k: {"z": z} for k, z in BIOME_Z.items()},
                                      "structures": STRUCTURE_ATTRS})


def load_asset_attributes(path: Union[str, Path]) -> AssetAttributes:
    """Load attribute tables from a JSON file.

    Raises:
        OSError: if the file cannot be read
        ValueError: if the file is not valid JSON or names unknown keys
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    assets = AssetAttributes.from_dict(data)
    logger.info("Loaded asset attributes from %s (%d biomes, %d structures)",
                path, len(assets.biomes), len(assets.structures))
    return assets
