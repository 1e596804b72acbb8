"""Ray data structure and vector utilities.

Vectors are immutable named tuples of scalars from either numeric back-end.
The functions here use only scalar operators, except where a square root or
a literal constant is needed; those take the active back-end (``ops``)
explicitly.

Tuple concatenation and repetition (``+`` and ``*`` on the tuples themselves)
are never used for vector math; use ``add``, ``sub`` and ``scale``.

Example:
    >>> from tinytrace.core.scalar import get_backend
    >>> from tinytrace.core.ray import Ray, make_vec3, normalize, ray_at
    >>> ops = get_backend("float")
    >>> direction = normalize(make_vec3(0.0, 0.0, -2.0), ops)
    >>> ray = Ray(origin=make_vec3(0.0, 0.0, 0.0), direction=direction)
    >>> ray_at(ray, 5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

from typing import NamedTuple

from tinytrace.core.scalar import NumericBackend, Scalar


class Vec3(NamedTuple):
    """A 3D vector of scalars."""

    x: Scalar
    y: Scalar
    z: Scalar


class Vec4(NamedTuple):
    """A 4D vector of scalars (used for material albedo weights)."""

    x: Scalar
    y: Scalar
    z: Scalar
    w: Scalar


class Ray(NamedTuple):
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Expected to be normalized by
            every caller in this package.
    """

    origin: Vec3
    direction: Vec3


def make_vec3(x: Scalar, y: Scalar, z: Scalar) -> Vec3:
    return Vec3(x, y, z)


def make_vec4(x: Scalar, y: Scalar, z: Scalar, w: Scalar) -> Vec4:
    return Vec4(x, y, z, w)


def ray_at(ray: Ray, t: Scalar) -> Vec3:
    """Compute the point ray.origin + t * ray.direction."""
    return add(ray.origin, scale(t, ray.direction))


# =============================================================================
# Vector Utility Functions
# =============================================================================


def add(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.x + b.x, a.y + b.y, a.z + b.z)


def sub(a: Vec3, b: Vec3) -> Vec3:
    return Vec3(a.x - b.x, a.y - b.y, a.z - b.z)


def neg(v: Vec3) -> Vec3:
    return Vec3(-v.x, -v.y, -v.z)


def scale(s: Scalar, v: Vec3) -> Vec3:
    """Multiply every component of v by the scalar s."""
    return Vec3(s * v.x, s * v.y, s * v.z)


def dot(a: Vec3, b: Vec3) -> Scalar:
    return a.x * b.x + a.y * b.y + a.z * b.z


def length(v: Vec3, ops: NumericBackend) -> Scalar:
    """Compute the Euclidean length of a vector.

    Args:
        v: The input vector.
        ops: The numeric back-end providing the square root.

    Returns:
        sqrt(v . v).
    """
    return ops.sqrt(dot(v, v))


def normalize(v: Vec3, ops: NumericBackend) -> Vec3:
    """Normalize a vector to unit length.

    Each component is divided by the length. A zero-length vector is
    returned unchanged.

    Args:
        v: The input vector.
        ops: The numeric back-end providing the square root.

    Returns:
        A unit vector in the direction of v, or v itself if its length is zero.
    """
    norm = length(v, ops)
    if norm == ops.zero:
        return v
    return Vec3(v.x / norm, v.y / norm, v.z / norm)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        incident - 2 (incident . normal) normal.
    """
    d = dot(incident, normal)
    return sub(incident, scale(d + d, normal))


def refract(
    incident: Vec3,
    normal: Vec3,
    eta_t: Scalar,
    eta_i: Scalar,
    ops: NumericBackend,
) -> Vec3:
    """Refract an incident vector through a surface using Snell's law.

    When the ray leaves the medium (the incidence cosine is negative) the
    normal is flipped and the two indices are swapped. Total internal
    reflection yields the fixed placeholder direction (1, 0, 0); it carries
    no physical meaning.

    Args:
        incident: The incoming direction vector (should be normalized).
        normal: The outward surface normal (should be normalized).
        eta_t: Refractive index on the far side of the surface.
        eta_i: Refractive index on the incident side of the surface.
        ops: The active numeric back-end.

    Returns:
        The (unnormalized) refracted direction.
    """
    cos_i = -ops.max(-ops.one, ops.min(ops.one, dot(incident, normal)))
    if cos_i < ops.zero:
        return refract(incident, neg(normal), eta_i, eta_t, ops)
    eta = eta_i / eta_t
    k = ops.one - eta * eta * (ops.one - cos_i * cos_i)
    if k < ops.zero:
        return Vec3(ops.one, ops.zero, ops.zero)
    return add(scale(eta, incident), scale(eta * cos_i - ops.sqrt(k), normal))
