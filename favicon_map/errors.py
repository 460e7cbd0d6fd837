# favicon_map/errors.py
"""
Error taxonomy for the conversion pipeline.

Each class also derives from the matching built-in, so callers may catch
ValueError / TypeError without importing this module.
"""


class FaviconMapError(Exception):
    """Base class for every failure raised by favicon_map."""


class DecodeError(FaviconMapError, ValueError):
    """Input bytes are not a decodable raster image or icon."""


class VectorParseError(FaviconMapError, ValueError):
    """SVG markup is empty, malformed, or could not be rendered."""


class DegenerateGeometryError(FaviconMapError, ValueError):
    """A zero-width or zero-height buffer where a real image is required."""


class InvalidParameterError(FaviconMapError, ValueError):
    """A configuration value is outside its supported range."""


class ChannelMismatchError(FaviconMapError, TypeError):
    """A pixel buffer has the wrong channel layout for the stage consuming it."""


__all__ = [
    "FaviconMapError",
    "DecodeError",
    "VectorParseError",
    "DegenerateGeometryError",
    "InvalidParameterError",
    "ChannelMismatchError",
]
