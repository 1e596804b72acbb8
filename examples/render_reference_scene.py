#!/usr/bin/env python3
"""Render the reference scene.

Renders the four-sphere reference scene with either numeric back-end, draws
it on the terminal with 24-bit ANSI colors and optionally saves a PNG.

Usage:
    python examples/render_reference_scene.py [options]

Options:
    --width WIDTH         Frame width in pixels (default: 80)
    --height HEIGHT       Frame height in pixels (default: 50)
    --fov DEGREES         Vertical field of view in degrees (default: 60)
    --max-depth DEPTH     Recursion depth cap (default: 2)
    --backend NAME        Numeric back-end, float or fixed (default: float)
    --terminal MODE       Terminal output: half, full or none (default: half)
    --output OUTPUT       Also save the frame as a PNG
    --log-level LEVEL     Logging level (default: WARNING)
    --quiet               Suppress progress output

Example:
    python examples/render_reference_scene.py --backend fixed --output fixed.png
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time

from tinytrace.config import RenderConfig, create_renderer
from tinytrace.preview.export import save_png
from tinytrace.preview.terminal import write_frame

logger = logging.getLogger("render_reference_scene")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the reference scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=80, help="Frame width in pixels (default: 80)")
    parser.add_argument("--height", type=int, default=50, help="Frame height in pixels (default: 50)")
    parser.add_argument(
        "--fov",
        type=float,
        default=60.0,
        help="Vertical field of view in degrees (default: 60)",
    )
    parser.add_argument("--max-depth", type=int, default=2, help="Recursion depth cap (default: 2)")
    parser.add_argument(
        "--backend",
        choices=("float", "fixed"),
        default="float",
        help="Numeric back-end (default: float)",
    )
    parser.add_argument(
        "--terminal",
        choices=("half", "full", "none"),
        default="half",
        help="Terminal output mode (default: half)",
    )
    parser.add_argument("--output", type=str, default=None, help="Also save the frame as a PNG")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def render_reference_scene(
    config: RenderConfig,
    terminal: str = "half",
    output_path: str | None = None,
    quiet: bool = False,
) -> None:
    """Render the reference scene, draw it and optionally save it.

    Args:
        config: Render configuration.
        terminal: Terminal output mode, or "none" to skip drawing.
        output_path: PNG path, or None to skip saving.
        quiet: If True, suppress progress output.
    """
    renderer = create_renderer(config)
    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            # stderr, so the frame on stdout stays clean
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows ({progress_pct:.1f}%)",
                end="",
                flush=True,
                file=sys.stderr,
            )

    image = renderer.render(callback=progress_callback)
    if not quiet:
        print(file=sys.stderr)

    if terminal != "none":
        write_frame(image, sys.stdout, mode=terminal)

    if output_path is not None:
        save_png(renderer, output_path)
        if not quiet:
            print(f"Saved to: {output_path}", file=sys.stderr)

    if not quiet:
        print(f"Total time: {time.time() - start_time:.2f}s", file=sys.stderr)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = RenderConfig(
            width=args.width,
            height=args.height,
            fov=math.radians(args.fov),
            max_depth=args.max_depth,
            backend=args.backend,
        )
        render_reference_scene(
            config,
            terminal=args.terminal,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        logger.debug("render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
