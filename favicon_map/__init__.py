# favicon_map/__init__.py
"""
favicon_map package.

Purpose:
  Turn any picture (raster or SVG) into a small, square, colour-reduced .ico.
  See favicon_map.cli for the command line.

Public API:
  convert_bytes   : raw input bytes -> ConversionResult (icon bytes + report).
  convert_image   : decoded pixel buffer -> icon bytes.
  fit_to_square   : aspect-preserving fit onto a flat square canvas.
  quantize_colours: palette reduction that keeps true-colour pixels.
  encode_ico      : single-entry 24-bit ICO serializer.
  rasterize_svg   : SVG markup -> RGBA buffer at a fixed size.
  core_types      : type aliases and ConversionConfig.
  errors          : DecodeError, VectorParseError, DegenerateGeometryError, ...

Quick start:
  from favicon_map import ConversionConfig, convert_bytes
  icon = convert_bytes(data, ConversionConfig(output_size=32, max_colors=16)).icon
"""

__version__ = "0.1.0"

from . import core_types
from . import errors
from . import utils

from .core_types import ConversionConfig
from .errors import (
    ChannelMismatchError,
    DecodeError,
    DegenerateGeometryError,
    FaviconMapError,
    InvalidParameterError,
    VectorParseError,
)
from .ico import encode_ico, read_ico_directory
from .pipeline import ConversionResult, convert_bytes, convert_image, load_source
from .quantize import quantize_colours
from .rasterize import rasterize_svg
from .square import calculate_size, fit_to_square

__all__ = [
    "__version__",
    "core_types",
    "errors",
    "utils",
    "ConversionConfig",
    "ConversionResult",
    "FaviconMapError",
    "DecodeError",
    "VectorParseError",
    "DegenerateGeometryError",
    "InvalidParameterError",
    "ChannelMismatchError",
    "calculate_size",
    "fit_to_square",
    "quantize_colours",
    "encode_ico",
    "read_ico_directory",
    "rasterize_svg",
    "load_source",
    "convert_image",
    "convert_bytes",
]
