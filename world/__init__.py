"""
World module: biomes, land features, structures, and asset attributes.

Provides:
- Biome and land feature definitions (from terrain.py)
- Structure kinds, footprints, and capabilities (from structures.py)
- Biome/structure attribute tables (from assets.py)
"""

# Core terrain types
from world.terrain import (
    Biome,
    BiomeAttrs,
    LandFeature,
)

# Structures
from world.structures import (
    Structure,
    StructureAttrs,
    StructureCapabilities,
    StructureKind,
    StructureSize,
    capabilities_for,
    is_buildable,
    structure_info,
)

# Asset attributes
from world.assets import (
    AssetAttributes,
    default_asset_attributes,
    load_asset_attributes,
)

__all__ = [
    # Terrain
    "Biome",
    "BiomeAttrs",
    "LandFeature",
    # Structures
    "Structure",
    "StructureAttrs",
    "StructureCapabilities",
    "StructureKind",
    "StructureSize",
    "capabilities_for",
    "is_buildable",
    "structure_info",
    # Assets
    "AssetAttributes",
    "default_asset_attributes",
    "load_asset_attributes",
]
