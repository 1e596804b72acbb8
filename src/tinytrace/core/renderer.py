"""Pixel driver and frame renderer.

``render_pixel`` is the per-pixel boundary of the tracer: it maps integer
pixel coordinates to a primary ray, traces it, and converts the color to the
active back-end's output:

    - float back-end: the raw (r, g, b) floats, unclamped
    - fixed back-end: three saturated 8-bit channels

``Renderer`` sequences ``render_pixel`` over a whole frame, strictly
row-major, and stores the result in a NumPy array.

Example:
    >>> from tinytrace.core.renderer import Renderer
    >>> from tinytrace.camera.pinhole import PinholeCamera
    >>> from tinytrace.scene.reference import create_reference_scene
    >>> scene = create_reference_scene("fixed")
    >>> renderer = Renderer(scene, PinholeCamera(width=16, height=10))
    >>> image = renderer.render()
    >>> image.shape, image.dtype
    ((10, 16, 3), dtype('uint8'))
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from tinytrace.camera.pinhole import Camera, PinholeCamera
from tinytrace.core.integrator import MAX_DEPTH, cast_ray
from tinytrace.core.scalar import FixedBackend
from tinytrace.scene.manager import Scene

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


def render_pixel(
    scene: Scene,
    camera: Camera,
    x: int,
    y: int,
    max_depth: int = MAX_DEPTH,
) -> tuple:
    """Render one pixel.

    Args:
        scene: The scene to render.
        camera: Primary ray generator (same back-end as the scene).
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        max_depth: Recursion depth cap passed to the tracer.

    Returns:
        Three floats (float back-end) or three ints in [0, 255] (fixed
        back-end).
    """
    ray = camera.get_ray(x, y)
    color = cast_ray(scene, ray.origin, ray.direction, 0, max_depth)
    return scene.backend.encode_color(color)


class Renderer:
    """Frame renderer for one scene and camera.

    The frame buffer is float32 for the float back-end (raw colors, not
    clamped) and uint8 for the fixed back-end.

    Attributes:
        scene: The scene being rendered.
        camera: The primary ray generator.
        max_depth: Recursion depth cap.
    """

    def __init__(
        self,
        scene: Scene,
        camera: PinholeCamera | None = None,
        *,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            camera: Camera configuration; the default 80x50, fov pi/3 if None.
            max_depth: Recursion depth cap (non-negative).

        Raises:
            ValueError: If max_depth is negative.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth = {max_depth} must be non-negative")
        self.scene = scene
        self.camera = Camera(camera or PinholeCamera(), scene.backend)
        self.max_depth = max_depth
        self._frame: np.ndarray | None = None

    @property
    def width(self) -> int:
        return self.camera.width

    @property
    def height(self) -> int:
        return self.camera.height

    @property
    def backend_name(self) -> str:
        return self.scene.backend.name

    @property
    def is_fixed_point(self) -> bool:
        return isinstance(self.scene.backend, FixedBackend)

    def render_pixel(self, x: int, y: int) -> tuple:
        """Render a single pixel.

        Raises:
            ValueError: If (x, y) lies outside the frame.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} frame"
            )
        return render_pixel(self.scene, self.camera, x, y, self.max_depth)

    def render_rows(self) -> Generator[tuple[int, list[tuple]], None, None]:
        """Render the frame one row at a time, top to bottom.

        Yields:
            Tuple of (row_index, pixels) where pixels holds one output tuple
            per column, left to right.
        """
        for y in range(self.height):
            yield y, [
                render_pixel(self.scene, self.camera, x, y, self.max_depth)
                for x in range(self.width)
            ]

    def render(self, callback: ProgressCallback | None = None) -> np.ndarray:
        """Render the whole frame.

        Args:
            callback: Optional function called after each row with
                (rows_done, total_rows).

        Returns:
            The frame as a (height, width, 3) array: float32 for the float
            back-end, uint8 for the fixed back-end.
        """
        dtype = np.uint8 if self.is_fixed_point else np.float32
        frame = np.zeros((self.height, self.width, 3), dtype=dtype)

        logger.info(
            "rendering %dx%d frame (%s backend, max depth %d)",
            self.width,
            self.height,
            self.backend_name,
            self.max_depth,
        )
        start_time = time.perf_counter()

        for y, row in self.render_rows():
            frame[y] = np.asarray(row, dtype=dtype)
            if callback is not None:
                callback(y + 1, self.height)

        logger.info("frame done in %.3fs", time.perf_counter() - start_time)
        self._frame = frame
        return frame

    def _check_rendered(self) -> np.ndarray:
        if self._frame is None:
            raise RuntimeError("No frame rendered yet. Call render() first.")
        return self._frame

    def get_frame(self) -> np.ndarray:
        """Get the raw frame buffer of the last render.

        Raises:
            RuntimeError: If nothing has been rendered yet.
        """
        return self._check_rendered()

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the last frame as float32 values clamped to [0, 1].

        Raises:
            RuntimeError: If nothing has been rendered yet.
        """
        frame = self._check_rendered()
        if self.is_fixed_point:
            return (frame.astype(np.float32) / 255.0).astype(np.float32)
        return np.clip(frame, 0.0, 1.0).astype(np.float32)

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the last frame as 8-bit channels.

        The float frame is clamped and rounded the same way the fixed-point
        back-end quantizes (round half up after scaling by 255).

        Raises:
            RuntimeError: If nothing has been rendered yet.
        """
        frame = self._check_rendered()
        if self.is_fixed_point:
            return frame.copy()
        return np.floor(np.clip(frame, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

    def save_image(self, filepath: str) -> None:
        """Save the last frame as an 8-bit PNG (no gamma correction).

        Raises:
            RuntimeError: If nothing has been rendered yet.
        """
        from PIL import Image as PILImage

        PILImage.fromarray(self.get_image_uint8(), mode="RGB").save(filepath)
        logger.info("saved %s", filepath)

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"backend={self.backend_name!r}, max_depth={self.max_depth})"
        )
