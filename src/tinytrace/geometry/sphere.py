"""Sphere primitive with analytic ray-sphere intersection.

The intersection projects the sphere center onto the ray (the tca/d^2/thc
method) instead of solving the full quadratic, which keeps every
intermediate value small enough for the Q16.16 back-end.

Example:
    >>> from tinytrace.core.scalar import get_backend
    >>> from tinytrace.core.ray import make_vec3
    >>> from tinytrace.geometry.sphere import make_sphere, hit_sphere
    >>> from tinytrace.materials.material import IVORY
    >>> ops = get_backend("float")
    >>> sphere = make_sphere(ops, (0.0, 0.0, -5.0), 1.0, IVORY)
    >>> hit_sphere(sphere, make_vec3(0.0, 0.0, 0.0), make_vec3(0.0, 0.0, -1.0), ops)
    4.0
"""

from __future__ import annotations

from dataclasses import dataclass

from tinytrace.core.ray import Vec3, dot, make_vec3, normalize, sub
from tinytrace.core.scalar import NumericBackend, Scalar
from tinytrace.materials.material import Material, MaterialParams


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The surface material.
    """

    center: Vec3
    radius: Scalar
    material: Material


def hit_sphere(
    sphere: Sphere,
    origin: Vec3,
    direction: Vec3,
    ops: NumericBackend,
) -> Scalar | None:
    """Test for ray-sphere intersection.

    With L the vector from the ray origin to the center, tca = L . dir is the
    distance to the closest approach and d2 = L . L - tca^2 its squared
    distance from the center. The ray misses when d2 > r^2; otherwise the
    roots are tca -/+ thc with thc = sqrt(r^2 - d2).

    The near root is used when it lies beyond the surface bias, then the far
    root, so a ray leaving a sphere's surface (or starting inside it) does not
    report its own origin as a hit.

    Args:
        sphere: The sphere to test.
        origin: The starting point of the ray.
        direction: The normalized direction of the ray.
        ops: The active numeric back-end.

    Returns:
        The distance along the ray to the hit, or None on a miss.
    """
    to_center = sub(sphere.center, origin)
    tca = dot(to_center, direction)
    d2 = dot(to_center, to_center) - tca * tca
    r2 = sphere.radius * sphere.radius
    if d2 > r2:
        return None
    thc = ops.sqrt(r2 - d2)
    t0 = tca - thc
    if t0 > ops.surface_bias:
        return t0
    t1 = tca + thc
    if t1 > ops.surface_bias:
        return t1
    return None


def sphere_normal(sphere: Sphere, point: Vec3, ops: NumericBackend) -> Vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(sub(point, sphere.center), ops)


def make_sphere(
    ops: NumericBackend,
    center: tuple[float, float, float],
    radius: float,
    material: MaterialParams,
) -> Sphere:
    """Create a sphere from float literals.

    Raises:
        ValueError: If the radius is not positive.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius = {radius} must be positive.")
    return Sphere(
        center=make_vec3(*(ops.scalar(c) for c in center)),
        radius=ops.scalar(radius),
        material=material.build(ops),
    )
