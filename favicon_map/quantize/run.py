# favicon_map/quantize/run.py
from __future__ import annotations

"""
Colour quantization entry point.

Normalises any pixel buffer to RGBA, learns a bounded palette, and replaces
every pixel by its nearest palette colour. The result stays true-colour RGB;
only the number of distinct colours is reduced.
"""

from typing import Union

import numpy as np

from ..core_types import QUANTIZE_METHODS, PixelBuffer, U8Image, to_rgba
from ..errors import InvalidParameterError
from .neuquant import NeuQuant
from .pillow_palette import PILLOW_METHODS, PillowPalette

PaletteModel = Union[NeuQuant, PillowPalette]


def build_palette(
    rgba_pixels: np.ndarray, max_colors: int, method: str = "neuquant"
) -> PaletteModel:
    """
    Learn a palette model exposing palette_rgb and nearest_indices().

    Args:
      rgba_pixels : uint8 [N,4]
      max_colors  : palette bound, >= 1
      method      : "neuquant" | "median_cut" | "octree"
    """
    if max_colors < 1:
        raise InvalidParameterError(f"max_colors must be >= 1, got {max_colors}")
    if method == "neuquant":
        return NeuQuant(rgba_pixels, int(max_colors), sample_factor=1)
    if method in PILLOW_METHODS:
        return PillowPalette(rgba_pixels, int(max_colors), method=method)
    raise InvalidParameterError(
        f"unknown quantize method {method!r}; "
        f"expected one of {', '.join(QUANTIZE_METHODS)}"
    )


def quantize_colours(
    source: PixelBuffer, max_colors: int, method: str = "neuquant"
) -> U8Image:
    """
    Reduce source to at most max_colors distinct colours.

    Returns:
      uint8 [H,W,3] with the same height and width as source.
    """
    if max_colors < 1:
        raise InvalidParameterError(f"max_colors must be >= 1, got {max_colors}")
    rgba = to_rgba(source)
    height, width = rgba.shape[:2]
    if height == 0 or width == 0:
        return np.zeros((height, width, 3), dtype=np.uint8)

    flat = rgba.reshape(-1, 4)
    model = build_palette(flat, max_colors, method)
    indices = model.nearest_indices(flat)
    return model.palette_rgb[indices].reshape(height, width, 3).astype(np.uint8)


__all__ = ["PaletteModel", "build_palette", "quantize_colours"]
