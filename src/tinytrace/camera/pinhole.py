"""Pinhole camera model for perspective projection ray generation.

The camera sits at the world origin looking down -z, with +y up. Pixel
(x, y) is addressed in screen convention (y grows downward), so the vertical
offset is flipped when building the camera-space direction:

    dir = (x + 0.5 - W/2,  H/2 - (y + 0.5),  -H / (2 tan(fov/2)))

The image-plane distance involves a tangent, which is not part of the
scalar operation set; it is computed once in Python floats when the
``Camera`` is built and converted to the active back-end together with the
other constants, so per-pixel work only uses scalar arithmetic.

Example:
    >>> from tinytrace.core.scalar import get_backend
    >>> from tinytrace.camera.pinhole import Camera, PinholeCamera
    >>> camera = Camera(PinholeCamera(width=80, height=50), get_backend("float"))
    >>> ray = camera.get_ray(40, 25)
    >>> ray.direction.z < 0.0
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from tinytrace.core.ray import Ray, make_vec3, normalize
from tinytrace.core.scalar import NumericBackend

# =============================================================================
# Camera Data Structures
# =============================================================================

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 50
DEFAULT_FOV = math.pi / 3.0


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        fov: Field of view in radians, spanning the frame height.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fov: float = DEFAULT_FOV

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Frame dimensions ({self.width}x{self.height}) must be positive"
            )
        if not 0.0 < self.fov < math.pi:
            raise ValueError(f"Field of view = {self.fov} must be in (0, pi)")

    @property
    def image_plane_distance(self) -> float:
        """Distance to the image plane, in pixel units."""
        return self.height / (2.0 * math.tan(self.fov / 2.0))

    @property
    def corner_length_squared(self) -> float:
        """Upper bound on dot(dir, dir) over all unnormalized pixel directions."""
        return (
            (self.width / 2.0) ** 2
            + (self.height / 2.0) ** 2
            + self.image_plane_distance**2
        )


class Camera:
    """Primary ray generator for one camera configuration and back-end.

    Attributes:
        config: The camera configuration.
        backend: The numeric back-end rays are expressed in.
    """

    def __init__(self, config: PinholeCamera, backend: NumericBackend) -> None:
        """Initialize the ray generator.

        Raises:
            ValueError: If normalizing a corner direction would leave the
                back-end's representable range.
        """
        if config.corner_length_squared >= backend.max_magnitude:
            raise ValueError(
                f"Frame {config.width}x{config.height} at fov {config.fov:.3f} is too "
                f"large for the {backend.name} backend"
            )
        self.config = config
        self.backend = backend
        ops = backend
        self._origin = make_vec3(ops.zero, ops.zero, ops.zero)
        self._half_width = ops.scalar(config.width / 2.0)
        self._half_height = ops.scalar(config.height / 2.0)
        self._dir_z = ops.scalar(-config.image_plane_distance)

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def get_ray(self, x: int, y: int) -> Ray:
        """Generate the primary ray through the center of pixel (x, y).

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            A Ray from the eye with a normalized direction.
        """
        ops = self.backend
        dir_x = ops.from_int(x) + ops.half - self._half_width
        dir_y = self._half_height - (ops.from_int(y) + ops.half)
        direction = normalize(make_vec3(dir_x, dir_y, self._dir_z), ops)
        return Ray(origin=self._origin, direction=direction)

    def __repr__(self) -> str:
        return f"Camera({self.config!r}, backend={self.backend.name!r})"
