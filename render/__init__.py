# render/__init__.py
"""
Rendering module for Planet Builder.

The compositing engine and color lookups are pure and import without a
display. The pygame drawing lives in render.map and render.hud.
"""
from render.colors import (
    Color,
    apply_brightness,
    biome_color,
    blend_colors,
    structure_color,
)
from render.compositing import (
    CORNER_PIECE_GRID,
    CORNERS,
    CornerPiece,
    LayeredTexMap,
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

__all__ = [
    # Colors
    "Color",
    "apply_brightness",
    "biome_color",
    "blend_colors",
    "structure_color",
    # Compositing
    "CORNER_PIECE_GRID",
    "CORNERS",
    "CornerPiece",
    "LayeredTexMap",
    "StructurePiece",
    "atlas_cell",
    "atlas_index",
    "biome_pieces",
    "biome_probe",
    "build_layered_tex_map",
    "corner_index",
    "corner_pieces",
    "piece_origin",
    "structure_pieces",
    "structure_probe",
]
