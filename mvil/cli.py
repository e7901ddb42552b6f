# -*- coding: utf-8 -*-
"""
MVIL Command Line - Binarize, edge-detect or segment an image file.

Sub-commands
------------
binarize
    Auto-contrast, Phansalkar local threshold, then morphological close.
edges
    Gaussian pre-blur, Sobel gradient, non-maximum suppression and
    hysteresis linking.
watershed
    Immersion watershed; writes the divide lines.

Input and output paths are explicit arguments. The output format is
taken from ``--format`` or inferred from the output suffix, and the
input resolution is carried over to the output.

Usage
-----
    mvil binarize wafer.tif wafer_mask.png --radius 15 --close-size 6
    mvil edges wafer.tif wafer_edges.png --low 20 --high 60
    mvil watershed wafer.tif wafer_basins.png --gradient

Dependencies
------------
Pillow

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-12

Modified
--------
2026-10-14
"""

# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

# MVIL internal
from mvil.exceptions import MvilError
from mvil.image_processing import (
    AutoContrast,
    CannyEdgeDetector,
    MorphologicalFilter,
    PhansalkarThreshold,
    Pipeline,
    Watershed,
    sobel,
)
from mvil.IO import RasterReader, RasterWriter
from mvil.types.field import ScalarField
from mvil.vocabulary import OutputFormat

logger = logging.getLogger(__name__)

_FORMATS = {fmt.name.lower(): fmt for fmt in OutputFormat}


def _binarize(plane: ScalarField, args: argparse.Namespace, depth: int) -> ScalarField:
    pipeline = Pipeline([
        AutoContrast(depth=args.depth or depth),
        PhansalkarThreshold(radius=args.radius, max_workers=args.workers),
        MorphologicalFilter(operation='close', size=args.close_size),
    ])
    return pipeline.apply(plane)


def _edges(plane: ScalarField, args: argparse.Namespace, depth: int) -> ScalarField:
    detector = CannyEdgeDetector(
        low=args.low,
        high=args.high,
        link=not args.no_link,
        sigma=args.sigma,
        blur_size=args.blur_size,
        norm=args.norm,
    )
    return detector.apply(plane)


def _watershed(plane: ScalarField, args: argparse.Namespace, depth: int) -> ScalarField:
    if args.gradient:
        plane = sobel(plane).magnitude
    return Watershed(color=args.color).apply(plane)


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``mvil`` argument parser."""
    parser = argparse.ArgumentParser(
        prog='mvil',
        description="Machine vision inspection operations on raster images.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("input", type=Path, help="Input image path.")
    common.add_argument("output", type=Path, help="Output image path.")
    common.add_argument(
        "--plane",
        type=int,
        default=0,
        help="Input plane to process (default: 0).",
    )
    common.add_argument(
        "--format",
        choices=sorted(_FORMATS),
        default=None,
        help="Output format (default: inferred from the output suffix).",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    binarize = sub.add_parser(
        "binarize", parents=[common],
        help="Auto-contrast, Phansalkar threshold and morphological close.",
    )
    binarize.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Bit depth for auto-contrast (default: the input's depth).",
    )
    binarize.add_argument(
        "--radius",
        type=int,
        default=15,
        help="Phansalkar window half-size (default: 15).",
    )
    binarize.add_argument(
        "--close-size",
        type=int,
        default=6,
        help="Closing disk diameter (default: 6).",
    )
    binarize.add_argument(
        "--workers",
        type=int,
        default=0,
        help="Row dispatch thread limit, 0 for CPU count (default: 0).",
    )
    binarize.set_defaults(handler=_binarize)

    edges = sub.add_parser(
        "edges", parents=[common],
        help="Canny-style edge detection.",
    )
    edges.add_argument("--low", type=float, default=20.0,
                       help="Weak edge threshold (default: 20).")
    edges.add_argument("--high", type=float, default=60.0,
                       help="Strong edge threshold (default: 60).")
    edges.add_argument("--sigma", type=float, default=0.6,
                       help="Gaussian pre-blur sigma, 0 disables (default: 0.6).")
    edges.add_argument("--blur-size", type=int, default=5,
                       help="Gaussian kernel size (default: 5).")
    edges.add_argument("--norm", choices=["l1", "l2"], default="l1",
                       help="Gradient magnitude norm (default: l1).")
    edges.add_argument("--no-link", action="store_true",
                       help="Skip hysteresis; write the thinned magnitude.")
    edges.set_defaults(handler=_edges)

    basins = sub.add_parser(
        "watershed", parents=[common],
        help="Immersion watershed divide lines.",
    )
    basins.add_argument("--color", type=float, default=255.0,
                        help="Divide pixel value (default: 255).")
    basins.add_argument("--gradient", action="store_true",
                        help="Flood the Sobel gradient magnitude of the input.")
    basins.set_defaults(handler=_watershed)

    return parser


def run(args: argparse.Namespace) -> Path:
    """Execute a parsed command and return the written path."""
    with RasterReader(args.input) as reader:
        if not 0 <= args.plane < reader.plane_count:
            raise IndexError(
                f"--plane {args.plane} out of range; "
                f"{args.input} has {reader.plane_count} planes"
            )
        plane = reader.read_plane(args.plane)
        depth = reader.depth
        dpi = reader.dpi

    logger.info("%s: %s plane %d (%dx%d)", args.command, args.input,
                args.plane, plane.width, plane.height)
    result = args.handler(plane, args, depth)

    fmt = _FORMATS[args.format] if args.format else None
    with RasterWriter(args.output, fmt, dpi=dpi) as writer:
        written = writer.write([result])
    logger.info("Wrote %s", written)
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``mvil`` console script.

    Returns
    -------
    int
        ``0`` on success, ``1`` when processing fails.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose, 2)]
    logging.basicConfig(level=level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        written = run(args)
    except (MvilError, OSError, IndexError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1
    print(written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
