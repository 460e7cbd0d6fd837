# favicon_map/rasterize.py
from __future__ import annotations

"""
SVG rasterization via cairosvg.

The document is always rendered to exactly target_size x target_size pixels,
whatever width/height/viewBox it declares. Bad markup is an error, never a
blank canvas.
"""

import io

import numpy as np
from PIL import Image

from .core_types import U8Rgba
from .errors import InvalidParameterError, VectorParseError
from .image_io import looks_like_svg


def rasterize_svg(svg_bytes: bytes, target_size: int) -> U8Rgba:
    """
    Render SVG markup to uint8 [S,S,4] RGBA on a transparent background.

    Raises:
      VectorParseError: empty, non-SVG, or malformed markup.
      InvalidParameterError: target_size < 1.
    """
    if target_size < 1:
        raise InvalidParameterError(f"target_size must be >= 1, got {target_size}")
    if not svg_bytes or not svg_bytes.strip():
        raise VectorParseError("failed to parse SVG: empty document")
    if not looks_like_svg(svg_bytes):
        raise VectorParseError("failed to parse SVG: no <svg> element found")

    # Imported here so raster-only use does not need the native cairo library.
    import cairosvg

    try:
        png = cairosvg.svg2png(
            bytestring=svg_bytes,
            output_width=int(target_size),
            output_height=int(target_size),
        )
    except Exception as exc:  # cairosvg surfaces XML, value and cairo errors alike
        raise VectorParseError(f"failed to parse SVG: {exc}") from exc
    if not png:
        raise VectorParseError("failed to parse SVG: renderer produced no output")

    with Image.open(io.BytesIO(png)) as im:
        rgba = im.convert("RGBA")
    if rgba.size != (target_size, target_size):
        rgba = rgba.resize((target_size, target_size), Image.Resampling.LANCZOS)
    return np.array(rgba, dtype=np.uint8)


__all__ = ["rasterize_svg"]
