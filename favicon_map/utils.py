# favicon_map/utils.py
from __future__ import annotations

"""
Shared utilities for favicon_map.

Includes time formatting, colour statistics, nearest-colour search used by the
palette models, and tidy logging.
"""

from typing import Any, Iterable, List, Tuple

import numpy as np

from .core_types import U8Palette, rgb_to_hex


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Colour stats


def count_distinct_colours(image: np.ndarray) -> int:
    """Number of distinct pixel values in an (H,W,C) buffer."""
    if image.size == 0:
        return 0
    flat = image.reshape(-1, image.shape[-1])
    return int(np.unique(flat, axis=0).shape[0])


def colour_usage_report(image_rgb: np.ndarray) -> List[Tuple[str, int]]:
    """
    Simple colour usage report for an RGB buffer.

    Returns a list of (hex, count) sorted by count descending.
    """
    if image_rgb.size == 0:
        return []
    flat = image_rgb.reshape(-1, 3)
    uniques, counts = np.unique(flat, axis=0, return_counts=True)
    report: List[Tuple[str, int]] = []
    for rgb_row, count in sorted(zip(uniques, counts), key=lambda x: -int(x[1])):
        rgb = (int(rgb_row[0]), int(rgb_row[1]), int(rgb_row[2]))
        report.append((rgb_to_hex(rgb), int(count)))
    return report


def nearest_palette_indices_rgb_distance(
    src_rgb: np.ndarray, pal_rgb: U8Palette, chunk: int = 65536
) -> np.ndarray:
    """For each source RGB row, pick nearest palette row by squared Euclidean distance."""
    src = src_rgb.reshape(-1, 3).astype(np.int32, copy=False)
    pal = pal_rgb.astype(np.int32, copy=False)
    out = np.empty((src.shape[0],), dtype=np.int32)
    for start in range(0, src.shape[0], chunk):
        block = src[start : start + chunk]
        diff = pal[None, :, :] - block[:, None, :]
        dist2 = np.sum(diff * diff, axis=2)
        out[start : start + chunk] = np.argmin(dist2, axis=1)
    return out


#  CLI / stdout


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] Size: 32  Colours: 16  Method: neuquant
    Routes to debug() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_seconds_compact",
    "format_total_duration_compact",
    "format_bool_on_off",
    "format_number_compact",
    # colour stats
    "count_distinct_colours",
    "colour_usage_report",
    "nearest_palette_indices_rgb_distance",
    # logging
    "enable_line_buffered_stdout",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
]
