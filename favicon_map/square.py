# favicon_map/square.py
from __future__ import annotations

"""
Square fitting: scale a picture into a fixed square canvas without distortion.

The content is resized with Lanczos, centred with floor offsets, and pasted
over a flat background taken from the source's top-left pixel. The canvas is
always opaque RGB; any source alpha is ignored when pasting.
"""

from typing import Tuple

import numpy as np
from PIL import Image

from .core_types import (
    PixelBuffer,
    RGBTuple,
    U8Image,
    as_pixel_buffer,
    coerce_to_rgb_tuple,
)
from .errors import DegenerateGeometryError, InvalidParameterError


def calculate_size(width: int, height: int, output_size: int) -> Tuple[int, int]:
    """
    Content size after a uniform scale that fits (width, height) inside an
    output_size square. Dimensions are truncated, not rounded.

    >>> calculate_size(100, 150, 200)
    (133, 200)
    """
    if width <= 0 or height <= 0:
        raise DegenerateGeometryError(
            f"cannot fit a {width}x{height} image: both dimensions must be > 0"
        )
    scale = min(output_size / float(width), output_size / float(height))
    return int(width * scale), int(height * scale)


def paste_offsets(output_size: int, new_w: int, new_h: int) -> Tuple[int, int]:
    """Top-left paste position; odd remainders bias towards the top-left."""
    return (output_size - new_w) // 2, (output_size - new_h) // 2


def top_left_colour(source: PixelBuffer) -> RGBTuple:
    """RGB of pixel (0, 0); alpha is dropped."""
    if source.shape[0] == 0 or source.shape[1] == 0:
        raise DegenerateGeometryError("empty image has no top-left pixel")
    return coerce_to_rgb_tuple(source[0, 0])


def create_square_canvas(output_size: int, colour: RGBTuple) -> U8Image:
    """Opaque RGB square filled with a single colour."""
    canvas = np.empty((output_size, output_size, 3), dtype=np.uint8)
    canvas[...] = np.asarray(colour, dtype=np.uint8)
    return canvas


def resize_lanczos(source: PixelBuffer, new_w: int, new_h: int) -> PixelBuffer:
    """Exact resize to (new_w, new_h) with Pillow's 3-lobe Lanczos filter."""
    im = Image.fromarray(np.ascontiguousarray(source))  # RGB or RGBA by shape
    if im.size == (new_w, new_h):
        return np.array(im, dtype=np.uint8)
    resized = im.resize((new_w, new_h), resample=Image.Resampling.LANCZOS)
    return np.array(resized, dtype=np.uint8)


def paste_opaque(canvas: U8Image, content: PixelBuffer, x: int, y: int) -> None:
    """
    Overwrite canvas pixels with content RGB at (x, y), in place.
    No blending: alpha, if present, is ignored. Out-of-bounds parts are clipped.
    """
    canvas_h, canvas_w = canvas.shape[:2]
    content_h, content_w = content.shape[:2]
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + content_w, canvas_w), min(y + content_h, canvas_h)
    if x1 <= x0 or y1 <= y0:
        return
    canvas[y0:y1, x0:x1] = content[y0 - y : y1 - y, x0 - x : x1 - x, :3]


def fit_to_square(source: PixelBuffer, output_size: int) -> U8Image:
    """
    Fit source into an output_size x output_size opaque canvas.

    Returns:
      uint8 [S,S,3]. An output_size of 0 gives an empty (0,0,3) array.

    Raises:
      DegenerateGeometryError: source has zero width or height.
      InvalidParameterError: negative output_size.
    """
    src = as_pixel_buffer(source)
    height, width = src.shape[:2]
    if output_size < 0:
        raise InvalidParameterError(f"output_size must be >= 0, got {output_size}")

    new_w, new_h = calculate_size(width, height, output_size)
    canvas = create_square_canvas(output_size, top_left_colour(src))
    if new_w == 0 or new_h == 0:
        # extreme aspect ratio (or output_size 0): nothing left to paste
        return canvas

    # alpha is discarded by the paste; resizing it would only premultiply RGB
    resized = resize_lanczos(np.ascontiguousarray(src[..., :3]), new_w, new_h)
    paste_x, paste_y = paste_offsets(output_size, new_w, new_h)
    paste_opaque(canvas, resized, paste_x, paste_y)
    return canvas


__all__ = [
    "calculate_size",
    "paste_offsets",
    "top_left_colour",
    "create_square_canvas",
    "resize_lanczos",
    "paste_opaque",
    "fit_to_square",
]
