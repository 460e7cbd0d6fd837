# favicon_map/image_io.py
from __future__ import annotations

"""
Image I/O helpers: raster decode to RGBA, SVG sniffing, and byte-level file access.
"""

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Rgba
from .errors import DecodeError

SVG_SUFFIXES = {".svg", ".svgz"}
GZIP_MAGIC = b"\x1f\x8b"
SNIFF_BYTES = 4096


def looks_like_svg(data: bytes) -> bool:
    """True when an <svg tag appears near the start (gzip-compressed SVGZ counts)."""
    if data[:2] == GZIP_MAGIC:
        return True
    head = data[:SNIFF_BYTES].lstrip(b"\xef\xbb\xbf").lower()
    return b"<svg" in head


def is_svg_source(data: bytes, name: Optional[str | Path] = None) -> bool:
    """Pick the vector path by file suffix, falling back to a content sniff."""
    if name is not None and Path(name).suffix.lower() in SVG_SUFFIXES:
        return True
    return looks_like_svg(data)


def decode_image_bytes(data: bytes) -> U8Rgba:
    """
    Decode any Pillow-readable raster to uint8 [H,W,4] RGBA.
    EXIF orientation is applied; embedded colour profiles are ignored (sRGB assumed).
    """
    if not data:
        raise DecodeError("empty input")
    try:
        with Image.open(io.BytesIO(data)) as im0:
            im0.load()
            im = ImageOps.exif_transpose(im0).convert("RGBA")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as exc:
        raise DecodeError(f"cannot decode input image: {exc}") from exc
    return np.array(im, dtype=np.uint8)


def read_source_bytes(path: Path) -> bytes:
    """Read an input file; OSError propagates to the caller."""
    return Path(path).read_bytes()


def write_icon(path: Path, data: bytes) -> Path:
    """Write icon bytes; OSError (missing folder, permissions) propagates."""
    path = Path(path)
    path.write_bytes(data)
    return path


__all__ = [
    "looks_like_svg",
    "is_svg_source",
    "decode_image_bytes",
    "read_source_bytes",
    "write_icon",
]
