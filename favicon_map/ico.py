# favicon_map/ico.py
from __future__ import annotations

"""
Single-entry ICO container with a 24-bit uncompressed DIB payload.

Encoding goes through Pillow's ICO writer with bitmap_format="bmp": one
directory entry, a BITMAPINFOHEADER with the height doubled, BGR rows
bottom-up, then an all-opaque 1-bpp AND mask. Only the directory is read
back here, for reporting.
"""

import io
import struct
from dataclasses import dataclass
from typing import List

import numpy as np
from PIL import Image

from .core_types import MAX_ICON_EDGE, assert_u8_image_rgb
from .errors import DecodeError, DegenerateGeometryError, InvalidParameterError

ICO_MAGIC = b"\x00\x00\x01\x00"
ICONDIR = struct.Struct("<HHH")
ICONDIRENTRY = struct.Struct("<BBBBHHII")


@dataclass(frozen=True)
class IconDirectoryEntry:
    """One ICONDIRENTRY as read back from a container."""

    width: int
    height: int
    colour_count: int
    planes: int
    bit_count: int
    size: int
    offset: int


def encode_ico(bitmap: np.ndarray) -> bytes:
    """
    Serialise one RGB bitmap as an ICO file.

    Raises:
      ChannelMismatchError: bitmap is not uint8 (H,W,3).
      DegenerateGeometryError: a zero dimension.
      InvalidParameterError: an edge above 256.
    """
    rgb = assert_u8_image_rgb(np.asarray(bitmap))
    height, width = rgb.shape[:2]
    if width == 0 or height == 0:
        raise DegenerateGeometryError(f"cannot encode a {width}x{height} icon")
    if width > MAX_ICON_EDGE or height > MAX_ICON_EDGE:
        raise InvalidParameterError(
            f"icon edges must be <= {MAX_ICON_EDGE}, got {width}x{height}"
        )

    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(rgb)).save(
        buf, format="ICO", sizes=[(width, height)], bitmap_format="bmp"
    )
    return buf.getvalue()


def read_ico_directory(data: bytes) -> List[IconDirectoryEntry]:
    """Parse the ICO header and directory entries (payloads are not decoded)."""
    if len(data) < ICONDIR.size or data[:4] != ICO_MAGIC:
        raise DecodeError("not an ICO container")
    _reserved, _kind, count = ICONDIR.unpack_from(data, 0)
    end = ICONDIR.size + count * ICONDIRENTRY.size
    if count == 0 or len(data) < end:
        raise DecodeError(f"truncated ICO directory ({count} entries declared)")

    entries: List[IconDirectoryEntry] = []
    for i in range(count):
        w, h, colours, _res, planes, bits, size, offset = ICONDIRENTRY.unpack_from(
            data, ICONDIR.size + i * ICONDIRENTRY.size
        )
        if offset + size > len(data):
            raise DecodeError(f"ICO entry {i} points past the end of the data")
        entries.append(
            IconDirectoryEntry(
                width=w or MAX_ICON_EDGE,
                height=h or MAX_ICON_EDGE,
                colour_count=colours,
                planes=planes,
                bit_count=bits,
                size=size,
                offset=offset,
            )
        )
    return entries


__all__ = [
    "ICO_MAGIC",
    "IconDirectoryEntry",
    "encode_ico",
    "read_ico_directory",
]
