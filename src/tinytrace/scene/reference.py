"""Reference scene configuration.

The reference scene is the classic four-sphere test scene of the tiny
raytracer:

- ivory sphere on the left
- glass sphere in front, in the middle of the view
- red rubber sphere behind it
- large mirror sphere up and to the right
- three white point lights
- a checkerboard floor at y = -4

All coordinates stay well inside the Q16.16 range so the same scene renders
on both numeric back-ends.

Example:
    >>> from tinytrace.scene.reference import create_reference_scene
    >>> scene = create_reference_scene("fixed")
    >>> len(scene.spheres), len(scene.lights)
    (4, 3)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tinytrace.core.scalar import NumericBackend
from tinytrace.geometry.plane import CheckerPlaneParams
from tinytrace.materials.material import GLASS, IVORY, MIRROR, RED_RUBBER, MaterialParams
from tinytrace.scene.manager import SKY_BASE, SKY_TINT, Scene, SceneManager


@dataclass(frozen=True)
class SphereParams:
    """Float-literal description of one sphere."""

    center: tuple[float, float, float]
    radius: float
    material: MaterialParams


@dataclass(frozen=True)
class LightParams:
    """Float-literal description of one point light."""

    position: tuple[float, float, float]
    intensity: float


# Index of each sphere in the reference sphere list
IVORY_SPHERE = 0
GLASS_SPHERE = 1
RED_RUBBER_SPHERE = 2
MIRROR_SPHERE = 3

REFERENCE_SPHERES = (
    SphereParams((-3.0, 0.0, -16.0), 2.0, IVORY),
    SphereParams((-1.0, -1.5, -12.0), 2.0, GLASS),
    SphereParams((1.5, -0.5, -18.0), 3.0, RED_RUBBER),
    SphereParams((7.0, 5.0, -18.0), 4.0, MIRROR),
)

REFERENCE_LIGHTS = (
    LightParams((-20.0, 20.0, 20.0), 1.5),
    LightParams((30.0, 50.0, -25.0), 1.8),
    LightParams((30.0, 20.0, 30.0), 1.7),
)


@dataclass(frozen=True)
class ReferenceSceneParams:
    """Parameters for the reference scene.

    All fields default to the reference configuration; override them to get
    variants (fewer lights, no floor, a different sky) for experiments.

    Attributes:
        spheres: The spheres, in intersection order.
        lights: The point lights.
        checker: The checker floor configuration, or None for no floor.
        sky_base: First sky gradient color.
        sky_tint: Second sky gradient color.

    Example:
        >>> no_floor = ReferenceSceneParams(checker=None)
        >>> one_light = ReferenceSceneParams(lights=REFERENCE_LIGHTS[:1])
    """

    spheres: tuple[SphereParams, ...] = REFERENCE_SPHERES
    lights: tuple[LightParams, ...] = REFERENCE_LIGHTS
    checker: CheckerPlaneParams | None = field(default_factory=CheckerPlaneParams)
    sky_base: tuple[float, float, float] = SKY_BASE
    sky_tint: tuple[float, float, float] = SKY_TINT


def create_reference_scene(
    backend: str | NumericBackend = "float",
    params: ReferenceSceneParams | None = None,
) -> Scene:
    """Create the reference scene for one numeric back-end.

    Args:
        backend: Back-end name (``"float"`` or ``"fixed"``) or instance.
        params: Optional ReferenceSceneParams. If None, uses the defaults.

    Returns:
        The immutable Scene.

    Raises:
        ValueError: If the back-end is unknown or a parameter is invalid.
    """
    if params is None:
        params = ReferenceSceneParams()

    manager = SceneManager(backend)

    for sphere in params.spheres:
        manager.add_sphere(center=sphere.center, radius=sphere.radius, material=sphere.material)

    for light in params.lights:
        manager.add_light(position=light.position, intensity=light.intensity)

    if params.checker is not None:
        manager.set_checker_plane(params.checker)

    manager.set_sky(params.sky_base, params.sky_tint)

    return manager.build()
