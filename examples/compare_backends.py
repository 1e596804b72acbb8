#!/usr/bin/env python3
"""Compare the float and fixed-point renders of the reference scene.

Renders the same frame with both numeric back-ends, quantizes the float
frame with the fixed-point pixel rule and reports how far apart they are.

Usage:
    python examples/compare_backends.py [options]

Options:
    --width WIDTH         Frame width in pixels (default: 80)
    --height HEIGHT       Frame height in pixels (default: 50)
    --tolerance N         Channel difference counted as a match (default: 2)
    --show                Show both frames and their difference (matplotlib)
    --log-level LEVEL     Logging level (default: WARNING)

Example:
    python examples/compare_backends.py --width 40 --height 25
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from tinytrace.config import RenderConfig, create_renderer
from tinytrace.preview.export import compute_rmse, max_channel_difference

logger = logging.getLogger("compare_backends")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Compare float and fixed-point renders.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=80, help="Frame width in pixels (default: 80)")
    parser.add_argument("--height", type=int, default=50, help="Frame height in pixels (default: 50)")
    parser.add_argument(
        "--tolerance",
        type=int,
        default=2,
        help="Channel difference counted as a match (default: 2)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show both frames and their difference (requires matplotlib)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args()


def compare_backends(width: int, height: int, tolerance: int = 2, show: bool = False) -> dict:
    """Render both back-ends and compute agreement statistics.

    Returns:
        Dictionary with keys "max_diff", "rmse" and "match_fraction".
    """
    images = {}
    for backend in ("float", "fixed"):
        renderer = create_renderer(RenderConfig(width=width, height=height, backend=backend))
        renderer.render()
        images[backend] = renderer.get_image_uint8()

    float_image, fixed_image = images["float"], images["fixed"]
    per_pixel = np.abs(float_image.astype(np.int16) - fixed_image.astype(np.int16)).max(axis=2)

    stats = {
        "max_diff": max_channel_difference(float_image, fixed_image),
        "rmse": compute_rmse(float_image, fixed_image),
        "match_fraction": float(np.mean(per_pixel <= tolerance)),
    }

    if show:
        from tinytrace.preview.display import show_comparison

        show_comparison(float_image, fixed_image, labels=("float", "fixed"))

    return stats


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        stats = compare_backends(args.width, args.height, args.tolerance, args.show)
    except Exception as e:
        logger.debug("comparison failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Max channel difference: {stats['max_diff']}")
    print(f"RMSE (8-bit units):     {stats['rmse']:.3f}")
    print(
        f"Pixels within {args.tolerance}:       {stats['match_fraction'] * 100:.1f}%"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
