"""Preview module for output and visualization.

Components:
    terminal: ANSI 24-bit color terminal output
    export: PNG export and frame comparison
    display: Matplotlib-based preview (matplotlib is an optional extra)

Example:
    >>> from tinytrace.preview import save_png, write_frame
    >>> from tinytrace.core.renderer import Renderer
    >>> from tinytrace.scene.reference import create_reference_scene
    >>>
    >>> renderer = Renderer(create_reference_scene("fixed"))
    >>> write_frame(renderer.render())
    >>> save_png(renderer, "reference.png")
"""

from .display import apply_gamma, process_image_for_display, show_comparison, show_preview
from .export import (
    compute_rmse,
    image_to_uint8,
    max_channel_difference,
    save_png,
    save_png_from_array,
)
from .terminal import TerminalMode, frame_to_ansi, write_frame

__all__ = [
    # Terminal output
    "frame_to_ansi",
    "write_frame",
    "TerminalMode",
    # Display functions
    "show_preview",
    "show_comparison",
    "apply_gamma",
    "process_image_for_display",
    # Export functions
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
    "compute_rmse",
    "max_channel_difference",
]
