"""Matplotlib-based preview display for rendered frames.

The tracer writes its colors straight to the pixel grid without any tone
curve, so the display pipeline defaults to gamma 1.0 (what you see is what
the terminal shows). A different gamma can be given to brighten the
midtones for inspection.

Example:
    >>> from tinytrace.preview.display import show_preview
    >>> from tinytrace.core.renderer import Renderer
    >>> from tinytrace.scene.reference import create_reference_scene
    >>>
    >>> renderer = Renderer(create_reference_scene("float"))
    >>> renderer.render()
    >>> show_preview(renderer, gamma=2.2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from tinytrace.core.renderer import Renderer


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Apply gamma encoding: out = in^(1/gamma).

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma value; 1.0 returns the image unchanged.

    Returns:
        Gamma encoded image, clamped to [0, 1].

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma = {gamma} must be positive")
    if gamma == 1.0:
        return image

    # Negative values would give NaN
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def process_image_for_display(
    image: npt.NDArray[np.floating],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Prepare a frame for display.

    8-bit frames (from the fixed-point back-end) are rescaled to [0, 1]
    first; float frames are taken as is. Then gamma is applied and the
    result clamped.

    Args:
        image: Frame array of shape (H, W, 3), float or uint8.
        gamma: Gamma correction value.

    Returns:
        float32 image in [0, 1].
    """
    if image.dtype == np.uint8:
        result = image.astype(np.float32) / 255.0
    else:
        result = image.astype(np.float32)

    result = apply_gamma(result, gamma)
    return np.clip(result, 0.0, 1.0).astype(np.float32)


def show_preview(
    renderer: Renderer,
    *,
    gamma: float = 1.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 5),
    block: bool = True,
) -> None:
    """Display the last rendered frame in a Matplotlib window.

    Args:
        renderer: A Renderer that has already rendered a frame.
        gamma: Gamma correction value.
        title: Custom title (default shows back-end and frame size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.

    Raises:
        RuntimeError: If the renderer has not rendered a frame yet.
    """
    import matplotlib.pyplot as plt

    display_image = process_image_for_display(renderer.get_image_numpy(), gamma=gamma)

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    # Nearest keeps the individual pixels of small frames visible
    ax.imshow(display_image, interpolation="nearest")
    ax.axis("off")

    if title is None:
        title = f"{renderer.backend_name} backend - {renderer.width}x{renderer.height}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.floating],
    image_b: npt.NDArray[np.floating],
    *,
    labels: tuple[str, str] = ("float", "fixed"),
    gamma: float = 1.0,
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 4),
    block: bool = True,
) -> float:
    """Display two frames side by side with an amplified difference view.

    Args:
        image_a: First frame (H, W, 3), float or uint8.
        image_b: Second frame, same shape as image_a.
        labels: Labels for the two frames.
        gamma: Gamma correction value.
        diff_scale: Scale factor for difference amplification.
        figsize: Figure size in inches.
        block: Whether to block execution until the figure is closed.

    Returns:
        RMSE between the two frames in display space.

    Raises:
        ValueError: If the frame shapes differ.
    """
    # export imports this module at load time
    from tinytrace.preview.export import compute_rmse

    display_a = process_image_for_display(image_a, gamma=gamma)
    display_b = process_image_for_display(image_b, gamma=gamma)
    rmse = compute_rmse(display_a, display_b)

    import matplotlib.pyplot as plt

    diff = display_a.astype(np.float64) - display_b.astype(np.float64)
    diff_amplified = np.clip(np.abs(diff) * diff_scale, 0.0, 1.0)

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    for ax, image, title in (
        (axes[0], display_a, labels[0]),
        (axes[1], display_b, labels[1]),
        (axes[2], diff_amplified, f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}"),
    ):
        ax.imshow(image, interpolation="nearest")
        ax.set_title(title)
        ax.axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
