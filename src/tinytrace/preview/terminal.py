"""ANSI true-color terminal output.

Frames are drawn with 24-bit color escape sequences, so any terminal that
understands ``ESC[38;2;R;G;Bm`` / ``ESC[48;2;R;G;Bm`` can show a render
without a window system.

Two layouts are available:

    - ``"half"``: two pixel rows per text line using the upper half block;
      the foreground color paints the top pixel and the background color the
      bottom one. An odd last row keeps the default background below it.
    - ``"full"``: one space per pixel, painted with the background color.

Example:
    >>> import sys
    >>> from tinytrace.core.renderer import Renderer
    >>> from tinytrace.scene.reference import create_reference_scene
    >>> from tinytrace.preview.terminal import write_frame
    >>>
    >>> renderer = Renderer(create_reference_scene("fixed"))
    >>> write_frame(renderer.render(), sys.stdout)
"""

from __future__ import annotations

import sys
from typing import Literal, TextIO

import numpy as np
import numpy.typing as npt

from tinytrace.preview.export import image_to_uint8

TerminalMode = Literal["half", "full"]

ESC = "\033["
UPPER_HALF_BLOCK = "▀"

# Black background, white foreground
RESTORE_COLORS = f"{ESC}48;5;16m{ESC}38;5;15m"
HOME = f"{ESC}H"
HIDE_CURSOR = f"{ESC}?25l"
SHOW_CURSOR = f"{ESC}?25h"
CLEAR_SCREEN = f"{ESC}2J"
DEFAULT_BACKGROUND = f"{ESC}49m"

PREAMBLE = HOME + HIDE_CURSOR + RESTORE_COLORS + CLEAR_SCREEN
EPILOGUE = RESTORE_COLORS + SHOW_CURSOR


def _fg(pixel) -> str:
    return f"{ESC}38;2;{pixel[0]};{pixel[1]};{pixel[2]}m"


def _bg(pixel) -> str:
    return f"{ESC}48;2;{pixel[0]};{pixel[1]};{pixel[2]}m"


def frame_to_ansi(
    image: npt.NDArray[np.floating],
    mode: TerminalMode = "half",
) -> str:
    """Encode a frame as ANSI escape sequences.

    Args:
        image: Frame array of shape (H, W, 3), float or uint8.
        mode: ``"half"`` or ``"full"`` (see module docstring).

    Returns:
        The frame text, one line per text row, each line ending with a
        default-background reset and a newline. No preamble or epilogue.

    Raises:
        ValueError: If mode is unknown or the array is not (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) frame, got shape {image.shape}")

    pixels = image_to_uint8(image).tolist()
    height = len(pixels)
    lines = []

    if mode == "full":
        for row in pixels:
            lines.append("".join(_bg(p) + " " for p in row) + DEFAULT_BACKGROUND + "\n")
    elif mode == "half":
        for y in range(0, height, 2):
            top = pixels[y]
            if y + 1 < height:
                bottom = pixels[y + 1]
                cells = (_fg(t) + _bg(b) + UPPER_HALF_BLOCK for t, b in zip(top, bottom))
            else:
                cells = (_fg(t) + DEFAULT_BACKGROUND + UPPER_HALF_BLOCK for t in top)
            lines.append("".join(cells) + DEFAULT_BACKGROUND + "\n")
    else:
        raise ValueError(f"Unknown terminal mode: {mode!r} (expected 'half' or 'full')")

    return "".join(lines)


def write_frame(
    image: npt.NDArray[np.floating],
    stream: TextIO | None = None,
    mode: TerminalMode = "half",
    *,
    clear: bool = True,
) -> None:
    """Draw a frame on a terminal stream and flush it.

    Args:
        image: Frame array of shape (H, W, 3), float or uint8.
        stream: Output stream (default sys.stdout).
        mode: ``"half"`` or ``"full"``.
        clear: Whether to home the cursor and clear the screen first.
    """
    if stream is None:
        stream = sys.stdout
    body = frame_to_ansi(image, mode)
    stream.write((PREAMBLE if clear else "") + body + EPILOGUE)
    stream.flush()
