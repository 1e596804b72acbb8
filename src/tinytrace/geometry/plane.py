"""Checkerboard floor: an implicit horizontal plane with a procedural texture.

The plane is not part of the sphere list. It is intersected analytically,
clipped to a finite rectangle, and shaded with a synthesized material whose
diffuse color alternates with the parity of the scaled hit coordinates.

The clipping rectangle and tile constants are fixed scene configuration,
kept as literals:
- plane at y = -4
- |x| < 10
- -30 < z < -10
- tile index = int(0.5 * x + 1000) + int(0.5 * z)

Example:
    >>> from tinytrace.core.scalar import get_backend
    >>> from tinytrace.core.ray import make_vec3
    >>> from tinytrace.geometry.plane import CheckerPlaneParams, hit_checker_plane
    >>> ops = get_backend("float")
    >>> plane = CheckerPlaneParams().build(ops)
    >>> origin = make_vec3(0.0, 0.0, -20.0)
    >>> hit_checker_plane(plane, origin, make_vec3(0.0, -1.0, 0.0), ops)
    (4.0, Vec3(x=0.0, y=-4.0, z=-20.0))
"""

from __future__ import annotations

from dataclasses import dataclass

from tinytrace.core.ray import Vec3, add, make_vec3, scale
from tinytrace.core.scalar import NumericBackend, Scalar


@dataclass(frozen=True)
class CheckerPlane:
    """A bounded horizontal checkerboard plane in one back-end's scalars.

    Attributes:
        height: The y coordinate of the plane.
        half_width: Hits need |x| strictly below this.
        z_near: Hits need z strictly below this.
        z_far: Hits need z strictly above this.
        tile_scale: Scale applied to x and z before taking parity.
        tile_offset: Offset added to the scaled x before truncation.
        odd_color: Diffuse color of tiles with odd parity.
        even_color: Diffuse color of tiles with even parity.
        normal: The plane normal (+y).
    """

    height: Scalar
    half_width: Scalar
    z_near: Scalar
    z_far: Scalar
    tile_scale: Scalar
    tile_offset: Scalar
    odd_color: Vec3
    even_color: Vec3
    normal: Vec3


@dataclass(frozen=True)
class CheckerPlaneParams:
    """Float-literal configuration of the checker plane."""

    height: float = -4.0
    half_width: float = 10.0
    z_near: float = -10.0
    z_far: float = -30.0
    tile_scale: float = 0.5
    tile_offset: float = 1000.0
    odd_color: tuple[float, float, float] = (0.3, 0.3, 0.3)
    even_color: tuple[float, float, float] = (0.3, 0.2, 0.1)

    def build(self, ops: NumericBackend) -> CheckerPlane:
        """Convert the literals to a CheckerPlane for the given back-end."""
        return CheckerPlane(
            height=ops.scalar(self.height),
            half_width=ops.scalar(self.half_width),
            z_near=ops.scalar(self.z_near),
            z_far=ops.scalar(self.z_far),
            tile_scale=ops.scalar(self.tile_scale),
            tile_offset=ops.scalar(self.tile_offset),
            odd_color=make_vec3(*(ops.scalar(c) for c in self.odd_color)),
            even_color=make_vec3(*(ops.scalar(c) for c in self.even_color)),
            normal=make_vec3(ops.zero, ops.one, ops.zero),
        )


def hit_checker_plane(
    plane: CheckerPlane,
    origin: Vec3,
    direction: Vec3,
    ops: NumericBackend,
) -> tuple[Scalar, Vec3] | None:
    """Intersect a ray with the bounded checker plane.

    Rays nearly parallel to the plane (|direction.y| at or below the
    back-end's parallel epsilon) never hit. Hits behind the origin or outside
    the clipping rectangle are rejected.

    Args:
        plane: The checker plane.
        origin: The starting point of the ray.
        direction: The normalized direction of the ray.
        ops: The active numeric back-end.

    Returns:
        A tuple of (distance, hit_point), or None on a miss.
    """
    if not ops.abs(direction.y) > ops.parallel_epsilon:
        return None
    distance = -(origin.y - plane.height) / direction.y
    if not distance > ops.zero:
        return None
    point = add(origin, scale(distance, direction))
    if (
        ops.abs(point.x) < plane.half_width
        and point.z < plane.z_near
        and point.z > plane.z_far
    ):
        return distance, point
    return None


def checker_parity(plane: CheckerPlane, point: Vec3, ops: NumericBackend) -> int:
    """Return 1 for odd tiles and 0 for even tiles."""
    tile_x = ops.to_int(plane.tile_scale * point.x + plane.tile_offset)
    tile_z = ops.to_int(plane.tile_scale * point.z)
    return (tile_x + tile_z) & 1


def checker_color(plane: CheckerPlane, point: Vec3, ops: NumericBackend) -> Vec3:
    """Diffuse color of the checker tile containing the hit point."""
    if checker_parity(plane, point, ops):
        return plane.odd_color
    return plane.even_color
