"""
terrain.py - Biome and land feature definitions for Planet Builder

Biomes are stored on the planet grid as small integers (see Biome). Their
render/blend priority lives in BiomeAttrs, which is supplied by the asset
attribute tables (world/assets.py) rather than hardcoded on the enum.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Biome(IntEnum):
    OCEAN = 0
    MOUNTAINS = 1
    DESERT = 2
    GRASSLAND = 3

    @classmethod
    def default(cls) -> "Biome":
        return cls.OCEAN

    @property
    def slug(self) -> str:
        """Kebab-case name used in asset files and the UI."""
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "Biome":
        for biome in cls:
            if biome.slug == slug:
                return biome
        raise ValueError(f"Unknown biome: {slug!r}")


@dataclass(frozen=True)
class BiomeAttrs:
    """Render attributes for a biome.

    z is both the draw priority and the blend priority: a biome with lower z
    shows underneath its higher-z neighbors along their shared edge.
    """
    z: float


class LandFeature(IntEnum):
    """Resource deposits on a tile (descriptive only for now)."""
    NONE = 0
    OIL = 1
    LIME = 2
    IRON = 3
