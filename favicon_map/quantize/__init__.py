# favicon_map/quantize/__init__.py
"""
Quantize API.

Provides:
  quantize_colours(source, max_colors, method="neuquant") -> U8Image
    Replace every pixel by its nearest colour from a learned palette.

    Args:
      source     : uint8 [H,W,3] or [H,W,4]
      max_colors : palette bound, >= 1
      method     : "neuquant" (default), "median_cut" or "octree"

    Returns:
      uint8 [H,W,3]. Alpha is always dropped.

  build_palette(rgba_pixels, max_colors, method) -> PaletteModel
    Palette models expose palette_rgb (uint8 [P,3]) and nearest_indices(rgba).

Notes:
  - NeuQuant samples every pixel once (sample factor 1).
  - A bound larger than the number of distinct colours is fine; the palette
    then holds near-duplicate entries.
"""

from .neuquant import NeuQuant
from .pillow_palette import PillowPalette
from .run import PaletteModel, build_palette, quantize_colours

__all__ = [
    "NeuQuant",
    "PillowPalette",
    "PaletteModel",
    "build_palette",
    "quantize_colours",
]
