"""Scene model and the builder that assembles it.

A ``Scene`` is an immutable value: the numeric back-end its scalars belong
to, a tuple of spheres, a tuple of point lights, an optional checker floor
and the sky gradient. It is built once, before rendering, and only read
afterwards, so the tracer can share it freely between pixels.

``SceneManager`` collects primitives given as float literals, converts them
through the back-end and validates them, then freezes the result with
``build()``.

Example:
    >>> from tinytrace.scene.manager import SceneManager
    >>> from tinytrace.materials.material import IVORY
    >>> manager = SceneManager("fixed")
    >>> manager.add_sphere(center=(0.0, 0.0, -5.0), radius=1.0, material=IVORY)
    0
    >>> manager.add_light(position=(10.0, 10.0, 10.0), intensity=1.5)
    0
    >>> scene = manager.build()
    >>> len(scene.spheres), len(scene.lights)
    (1, 1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tinytrace.core.ray import Vec3, make_vec3
from tinytrace.core.scalar import NumericBackend, Scalar, get_backend
from tinytrace.geometry.plane import CheckerPlane, CheckerPlaneParams
from tinytrace.geometry.sphere import Sphere, make_sphere
from tinytrace.materials.material import MaterialParams

logger = logging.getLogger(__name__)

# Sky gradient colors; the sky is s * SKY_BASE + s * SKY_TINT
SKY_BASE = (0.2, 0.7, 0.8)
SKY_TINT = (0.0, 0.0, 0.5)


@dataclass(frozen=True)
class Light:
    """A point light.

    Attributes:
        position: Position of the light in world space.
        intensity: Scalar intensity (positive).
    """

    position: Vec3
    intensity: Scalar


@dataclass(frozen=True)
class Sky:
    """The two colors blended by the sky gradient."""

    base: Vec3
    tint: Vec3


@dataclass(frozen=True)
class Scene:
    """An immutable scene.

    Attributes:
        backend: The numeric back-end all scalars of the scene belong to.
        spheres: The spheres, tested in order.
        lights: The point lights.
        checker: The checker floor, or None for a scene without one.
        sky: The sky gradient colors.
    """

    backend: NumericBackend
    spheres: tuple[Sphere, ...]
    lights: tuple[Light, ...]
    checker: CheckerPlane | None
    sky: Sky


def make_sky(
    ops: NumericBackend,
    base: tuple[float, float, float] = SKY_BASE,
    tint: tuple[float, float, float] = SKY_TINT,
) -> Sky:
    return Sky(
        base=make_vec3(*(ops.scalar(c) for c in base)),
        tint=make_vec3(*(ops.scalar(c) for c in tint)),
    )


class SceneManager:
    """Builder collecting primitives for an immutable Scene.

    Attributes:
        backend: The numeric back-end used to convert every literal.
    """

    def __init__(self, backend: str | NumericBackend = "float") -> None:
        """Initialize an empty scene builder.

        Args:
            backend: Back-end name (``"float"`` or ``"fixed"``) or instance.

        Raises:
            ValueError: If the back-end name is unknown.
        """
        self.backend = get_backend(backend)
        self._spheres: list[Sphere] = []
        self._lights: list[Light] = []
        self._checker: CheckerPlane | None = None
        self._sky = make_sky(self.backend)

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: MaterialParams,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere.
            radius: The radius of the sphere (must be positive).
            material: The material literals for the sphere.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If the radius is not positive or a value does not fit
                the back-end.
        """
        sphere = make_sphere(self.backend, center, radius, material)
        self._spheres.append(sphere)
        logger.debug("sphere %d: center=%s radius=%s", len(self._spheres) - 1, center, radius)
        return len(self._spheres) - 1

    def add_light(self, position: tuple[float, float, float], intensity: float) -> int:
        """Add a point light to the scene.

        Returns:
            The index of the added light.

        Raises:
            ValueError: If the intensity is not positive.
        """
        if intensity <= 0.0:
            raise ValueError(f"Light intensity = {intensity} must be positive.")
        light = Light(
            position=make_vec3(*(self.backend.scalar(p) for p in position)),
            intensity=self.backend.scalar(intensity),
        )
        self._lights.append(light)
        logger.debug("light %d: position=%s intensity=%s", len(self._lights) - 1, position, intensity)
        return len(self._lights) - 1

    def set_checker_plane(self, params: CheckerPlaneParams | None = None) -> None:
        """Enable the checker floor (default configuration if params is None)."""
        self._checker = (params or CheckerPlaneParams()).build(self.backend)

    def remove_checker_plane(self) -> None:
        self._checker = None

    def set_sky(
        self,
        base: tuple[float, float, float] = SKY_BASE,
        tint: tuple[float, float, float] = SKY_TINT,
    ) -> None:
        self._sky = make_sky(self.backend, base, tint)

    def get_sphere_count(self) -> int:
        return len(self._spheres)

    def get_light_count(self) -> int:
        return len(self._lights)

    def clear(self) -> None:
        """Remove all primitives and restore the default sky."""
        self._spheres.clear()
        self._lights.clear()
        self._checker = None
        self._sky = make_sky(self.backend)

    def build(self) -> Scene:
        """Freeze the collected primitives into an immutable Scene."""
        scene = Scene(
            backend=self.backend,
            spheres=tuple(self._spheres),
            lights=tuple(self._lights),
            checker=self._checker,
            sky=self._sky,
        )
        logger.info(
            "built %s scene: %d spheres, %d lights, checker floor %s",
            self.backend.name,
            len(scene.spheres),
            len(scene.lights),
            "on" if scene.checker is not None else "off",
        )
        return scene
