# favicon_map/quantize/pillow_palette.py
from __future__ import annotations

"""
Palette models backed by Pillow's built-in quantizers (median cut, fast octree).

Pillow only supplies the palette; pixels are mapped to the nearest used
palette entry in RGB, so every backend shares the same mapping contract.
"""

import numpy as np
from PIL import Image

from ..core_types import MAX_PALETTE_SIZE, U8Palette
from ..errors import InvalidParameterError
from ..utils import nearest_palette_indices_rgb_distance

PILLOW_METHODS = {
    "median_cut": Image.Quantize.MEDIANCUT,
    "octree": Image.Quantize.FASTOCTREE,
}


class PillowPalette:
    """
    Palette learned by Image.quantize().

    Args:
      pixels  : uint8 [N,4] RGBA samples (alpha ignored)
      colours : palette size, 1..256
      method  : "median_cut" or "octree"
    """

    def __init__(self, pixels: np.ndarray, colours: int, method: str = "median_cut"):
        if method not in PILLOW_METHODS:
            raise InvalidParameterError(f"unknown Pillow quantize method {method!r}")
        if not 1 <= colours <= MAX_PALETTE_SIZE:
            raise InvalidParameterError(
                f"{method} palette size must be in 1..{MAX_PALETTE_SIZE}, got {colours}"
            )
        rgb = np.asarray(pixels, dtype=np.uint8).reshape(-1, 4)[:, :3]
        if rgb.shape[0] == 0:
            raise InvalidParameterError("cannot learn a palette from zero pixels")

        strip = Image.fromarray(np.ascontiguousarray(rgb[None, :, :]))
        quantized = strip.quantize(colors=int(colours), method=PILLOW_METHODS[method])
        raw = quantized.getpalette() or [128, 128, 128]
        full = np.array(raw, dtype=np.uint8).reshape(-1, 3)

        # Keep only entries Pillow actually assigned; the rest is zero padding.
        used = np.unique(np.array(quantized, dtype=np.int32))
        used = used[used < full.shape[0]]
        self._palette: U8Palette = np.ascontiguousarray(full[used])
        self.method = method

    @property
    def palette_rgb(self) -> U8Palette:
        """uint8 [P,3] palette, P <= colours."""
        return self._palette

    def nearest_indices(self, pixels: np.ndarray) -> np.ndarray:
        """Closest palette index (Euclidean RGB) for each row of uint8 [N,4]."""
        rgb = np.asarray(pixels).reshape(-1, 4)[:, :3]
        return nearest_palette_indices_rgb_distance(rgb, self._palette)


__all__ = ["PILLOW_METHODS", "PillowPalette"]
