#!/usr/bin/env python3
"""
favicon_map CLI
Convert a picture (raster or SVG) into a small square, colour-reduced .ico file.

Usage:
  favicon-map INPUT [OUTPUT] --size S --colours K
              --method [neuquant|median_cut|octree] --verbose

Input:
  Any Pillow-readable raster, or an SVG document (.svg/.svgz or sniffed markup).

Output:
  A single-entry ICO with one 24-bit bitmap. OUTPUT defaults to favicon.ico and
  must end with ".ico".

Exit codes:
  0 success, 1 conversion or write failure / bad output name, 2 input not found.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from .core_types import (
    DEFAULT_MAX_COLORS,
    DEFAULT_OUTPUT_SIZE,
    QUANTIZE_METHODS,
    ConversionConfig,
)
from .errors import FaviconMapError
from .ico import read_ico_directory
from .image_io import read_source_bytes, write_icon
from .pipeline import convert_bytes
from .utils import (
    enable_line_buffered_stdout,
    error,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="favicon-map",
        description="Convert an image to a square, colour-reduced favicon (.ico).",
    )
    parser.add_argument("input", type=Path, help="Input image (raster or SVG)")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=Path("favicon.ico"),
        help='Output file, must end with ".ico" (default: favicon.ico)',
    )
    parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_OUTPUT_SIZE,
        help="Square icon edge in pixels (1..256).",
    )
    parser.add_argument(
        "--colours",
        "--colors",
        dest="colours",
        type=int,
        default=DEFAULT_MAX_COLORS,
        help="Maximum number of distinct colours (1..256).",
    )
    parser.add_argument(
        "--method",
        choices=list(QUANTIZE_METHODS),
        default="neuquant",
        help="Palette builder.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="More details about the conversion process",
    )
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        input: Path to image
        output: Path to .ico
        size: icon edge
        colours: palette bound
        method: palette builder name
        verbose: bool
    """
    return build_parser().parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Convert one file; returns the process exit code."""
    t_start = time.perf_counter()
    src: Path = args.input
    dst: Path = args.output

    if dst.suffix.lower() != ".ico":
        error(f"the output file has to use the '.ico' suffix: {dst}")
        return 1
    if not src.exists():
        error(f"not found: {src}")
        return 2

    config = ConversionConfig(
        output_size=args.size, max_colors=args.colours, method=args.method
    )
    if args.verbose:
        print_banner(src.name)
        log(f"Converting '{src}' to '{dst}'")
        print_config_line(
            "run",
            [
                ("Size", config.output_size),
                ("Colours", config.max_colors),
                ("Method", config.method),
            ],
            debug=False,
        )

    try:
        data = read_source_bytes(src)
        result = convert_bytes(data, config, name=src, debug=args.verbose)
    except FaviconMapError as exc:
        error(str(exc))
        return 1
    except OSError as exc:
        error(f"cannot read the input image: {exc}")
        return 1

    try:
        write_icon(dst, result.icon)
    except OSError as exc:
        error(f"cannot save the output image: {exc}")
        return 1

    if args.verbose:
        w, h = result.source_size
        entry = read_ico_directory(result.icon)[0]
        log(
            key_value_pairs_to_string(
                [
                    ("Original", f"{w}x{h}"),
                    ("Channels", result.source_channels),
                    ("Icon", f"{entry.width}x{entry.height}"),
                    ("Bits", entry.bit_count),
                    ("Colours used", result.colours_used),
                ]
            )
        )
        log(f"Total time {format_total_duration_compact(time.perf_counter() - t_start)}")
    log(f"Output saved to '{dst}'")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    enable_line_buffered_stdout()
    sys.exit(run(parse_cli_args(argv)))


if __name__ == "__main__":
    main()
