"""Image export and frame comparison utilities.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Float frames are quantized with the same rule the fixed-point back-end uses
for its pixels (clamp to [0, 1], scale by 255, round half up), so a float
render and a fixed render of the same scene can be compared channel by
channel.

Example:
    >>> from tinytrace.preview.export import save_png
    >>> from tinytrace.core.renderer import Renderer
    >>> from tinytrace.scene.reference import create_reference_scene
    >>>
    >>> renderer = Renderer(create_reference_scene("fixed"))
    >>> renderer.render()
    >>> save_png(renderer, "reference.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from tinytrace.preview.display import process_image_for_display

if TYPE_CHECKING:
    from tinytrace.core.renderer import Renderer

logger = logging.getLogger(__name__)


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a frame to 8-bit channels.

    uint8 frames pass through unchanged when gamma is 1.0.

    Args:
        image: Frame array of shape (H, W, 3), float or uint8.
        gamma: Gamma correction value.

    Returns:
        uint8 array of shape (H, W, 3).
    """
    if image.dtype == np.uint8 and gamma == 1.0:
        return image.copy()

    processed = process_image_for_display(image, gamma=gamma)
    return np.floor(processed * 255.0 + 0.5).astype(np.uint8)


def save_png_from_array(
    image: npt.NDArray[np.floating],
    filepath: str,
    *,
    gamma: float = 1.0,
) -> None:
    """Save a frame array as an 8-bit PNG.

    Args:
        image: Frame array of shape (H, W, 3), float or uint8.
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value.
    """
    pil_image = PILImage.fromarray(image_to_uint8(image, gamma=gamma), mode="RGB")
    pil_image.save(filepath)
    logger.info("saved %s", filepath)


def save_png(
    renderer: Renderer,
    filepath: str,
    *,
    gamma: float = 1.0,
) -> None:
    """Save the last frame of a renderer as an 8-bit PNG.

    Raises:
        RuntimeError: If the renderer has not rendered a frame yet.
    """
    if gamma == 1.0:
        image = renderer.get_image_uint8()
    else:
        image = image_to_uint8(renderer.get_image_numpy(), gamma=gamma)
    save_png_from_array(image, filepath)


def _check_shapes(image_a: np.ndarray, image_b: np.ndarray) -> None:
    if image_a.shape != image_b.shape:
        raise ValueError(f"Image shapes must match: {image_a.shape} vs {image_b.shape}")


def compute_rmse(
    image_a: npt.NDArray[np.number],
    image_b: npt.NDArray[np.number],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value in the units of the inputs (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    _check_shapes(image_a, image_b)
    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))


def max_channel_difference(
    image_a: npt.NDArray[np.uint8],
    image_b: npt.NDArray[np.uint8],
) -> int:
    """Largest absolute difference of any channel of any pixel.

    Raises:
        ValueError: If image shapes don't match.
    """
    _check_shapes(image_a, image_b)
    diff = np.abs(image_a.astype(np.int16) - image_b.astype(np.int16))
    return int(diff.max()) if diff.size else 0
