# favicon_map/core_types.py
from __future__ import annotations

"""
Core type aliases, the conversion config value object, and small buffer helpers.
"""

from dataclasses import dataclass
from typing import Literal, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .errors import ChannelMismatchError, InvalidParameterError

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

PixelBuffer = NDArray[np.uint8]  # (H, W, 3) or (H, W, 4)
U8Image = NDArray[np.uint8]  # (H, W, 3)
U8Rgba = NDArray[np.uint8]  # (H, W, 4)
U8Palette = NDArray[np.uint8]  # (P, 3)

QuantizeMethod = Literal["neuquant", "median_cut", "octree"]
QUANTIZE_METHODS: Tuple[str, ...] = ("neuquant", "median_cut", "octree")

# Largest edge the ICO directory can declare (stored as 0).
MAX_ICON_EDGE = 256
MAX_PALETTE_SIZE = 256

DEFAULT_OUTPUT_SIZE = 32
DEFAULT_MAX_COLORS = 16


# Value objects


@dataclass(frozen=True)
class ConversionConfig:
    """Parameters for one picture -> icon conversion."""

    output_size: int = DEFAULT_OUTPUT_SIZE  # square canvas edge in pixels
    max_colors: int = DEFAULT_MAX_COLORS  # palette bound
    method: QuantizeMethod = "neuquant"

    def validate(self) -> "ConversionConfig":
        if not 1 <= int(self.output_size) <= MAX_ICON_EDGE:
            raise InvalidParameterError(
                f"output_size must be in 1..{MAX_ICON_EDGE}, got {self.output_size}"
            )
        if not 1 <= int(self.max_colors) <= MAX_PALETTE_SIZE:
            raise InvalidParameterError(
                f"max_colors must be in 1..{MAX_PALETTE_SIZE}, got {self.max_colors}"
            )
        if self.method not in QUANTIZE_METHODS:
            raise InvalidParameterError(
                f"unknown quantize method {self.method!r}; "
                f"expected one of {', '.join(QUANTIZE_METHODS)}"
            )
        return self


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3+ length sequence or array row to an (int, int, int) RGB tuple.
    Extra channels (alpha) are dropped.
    """
    if len(value) < 3:  # type: ignore[arg-type]
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def channel_count(image: np.ndarray) -> int:
    """Channels per pixel of an (H,W,C) buffer; 1 for a 2-D greyscale array."""
    return 1 if image.ndim == 2 else int(image.shape[-1])


def as_pixel_buffer(image: np.ndarray) -> PixelBuffer:
    """
    Validate a uint8 (H,W,3|4) buffer and return it typed as PixelBuffer.
    A 2-D (H,W) greyscale array is promoted to RGB.
    """
    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        raise ChannelMismatchError(f"expected uint8 pixels, got {arr.dtype}")
    if arr.ndim == 2:
        return np.repeat(arr[..., None], 3, axis=2)
    if arr.ndim != 3 or arr.shape[-1] not in (3, 4):
        raise ChannelMismatchError(
            f"expected (H,W,3) or (H,W,4) pixel buffer, got shape {arr.shape}"
        )
    return arr  # type: ignore[return-value]


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,3) image and return it typed as U8Image."""
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[-1] != 3:
        raise ChannelMismatchError(
            f"expected uint8 (H,W,3) RGB bitmap, got {image.dtype} {image.shape}"
        )
    return image  # type: ignore[return-value]


def to_rgba(image: np.ndarray) -> U8Rgba:
    """Return an (H,W,4) copy of a pixel buffer; missing alpha becomes 255."""
    arr = as_pixel_buffer(image)
    if arr.shape[-1] == 4:
        return arr.copy()
    height, width = arr.shape[:2]
    out = np.full((height, width, 4), 255, dtype=np.uint8)
    out[..., :3] = arr
    return out


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "PixelBuffer",
    "U8Image",
    "U8Rgba",
    "U8Palette",
    "QuantizeMethod",
    "QUANTIZE_METHODS",
    "MAX_ICON_EDGE",
    "MAX_PALETTE_SIZE",
    "DEFAULT_OUTPUT_SIZE",
    "DEFAULT_MAX_COLORS",
    # value objects
    "ConversionConfig",
    # helpers
    "rgb_to_hex",
    "coerce_to_rgb_tuple",
    "channel_count",
    "as_pixel_buffer",
    "assert_u8_image_rgb",
    "to_rgba",
]
