# favicon_map/pipeline.py
from __future__ import annotations

"""
Picture -> icon pipeline.

  load (decode raster | rasterize SVG) -> fit_to_square -> quantize_colours -> encode_ico

Every stage is a pure transform returning a new buffer; nothing is shared
between calls.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from .core_types import ConversionConfig, PixelBuffer, as_pixel_buffer, channel_count
from .ico import encode_ico
from .image_io import decode_image_bytes, is_svg_source
from .quantize import quantize_colours
from .rasterize import rasterize_svg
from .square import fit_to_square
from .utils import (
    colour_usage_report,
    count_distinct_colours,
    debug_log,
    format_seconds_compact,
    key_value_pairs_to_string,
    warn,
)


@dataclass(frozen=True)
class ConversionResult:
    """Icon bytes plus the facts worth reporting about one conversion."""

    icon: bytes
    source_kind: str  # "svg" | "raster"
    source_size: Tuple[int, int]  # (width, height)
    source_channels: int
    canvas_size: Tuple[int, int]
    max_colors: int
    colours_used: int


def load_source(
    data: bytes, output_size: int, *, name: Optional[str | Path] = None
) -> PixelBuffer:
    """SVG input is rendered at output_size; anything else is decoded as a raster."""
    if is_svg_source(data, name):
        return rasterize_svg(data, output_size)
    return decode_image_bytes(data)


def convert_image(source: PixelBuffer, config: ConversionConfig) -> bytes:
    """Fit, quantize and encode an already decoded pixel buffer."""
    config.validate()
    canvas = fit_to_square(as_pixel_buffer(source), config.output_size)
    quantized = quantize_colours(canvas, config.max_colors, config.method)
    return encode_ico(quantized)


def convert_bytes(
    data: bytes,
    config: ConversionConfig,
    *,
    name: Optional[str | Path] = None,
    debug: bool = False,
) -> ConversionResult:
    """
    Full conversion from raw input bytes.

    Args:
      data   : raster or SVG file contents
      config : output size, palette bound and quantize method
      name   : optional file name, used only to recognise .svg inputs
      debug  : print per-stage details and timings

    Raises:
      InvalidParameterError, DecodeError, VectorParseError, DegenerateGeometryError
    """
    config.validate()
    t0 = time.perf_counter()
    kind = "svg" if is_svg_source(data, name) else "raster"
    source = as_pixel_buffer(load_source(data, config.output_size, name=name))
    height, width = source.shape[:2]
    channels = channel_count(source)
    t1 = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Loaded", f"{width}x{height}"),
                    ("Kind", kind),
                    ("Channels", channels),
                ]
            )
        )
        if channels == 4 and bool(np.any(source[..., 3] < 255)):
            warn("source has transparent pixels; they are flattened onto the canvas")

    canvas = fit_to_square(source, config.output_size)
    t2 = time.perf_counter()
    quantized = quantize_colours(canvas, config.max_colors, config.method)
    t3 = time.perf_counter()
    icon = encode_ico(quantized)
    t4 = time.perf_counter()

    colours_used = count_distinct_colours(quantized)
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Canvas", f"{canvas.shape[1]}x{canvas.shape[0]}"),
                    ("Method", config.method),
                    ("Max colours", config.max_colors),
                    ("Colours used", colours_used),
                    ("Bytes", len(icon)),
                ]
            )
        )
        debug_log(
            f"timings load={format_seconds_compact(t1 - t0)}, "
            f"fit={format_seconds_compact(t2 - t1)}, "
            f"quantize={format_seconds_compact(t3 - t2)}, "
            f"encode={format_seconds_compact(t4 - t3)}"
        )
        top = colour_usage_report(quantized)[:4]
        debug_log("top colours " + ", ".join(f"{hx}={n}" for hx, n in top))

    return ConversionResult(
        icon=icon,
        source_kind=kind,
        source_size=(width, height),
        source_channels=channels,
        canvas_size=(canvas.shape[1], canvas.shape[0]),
        max_colors=config.max_colors,
        colours_used=colours_used,
    )


__all__ = ["ConversionResult", "load_source", "convert_image", "convert_bytes"]
