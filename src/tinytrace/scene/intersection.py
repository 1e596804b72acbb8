"""Scene-level ray intersection.

Resolves the nearest hit among all primitives of a scene: every sphere is
tested (brute force, in list order), then the checker floor, which only wins
when strictly closer than the nearest sphere. Hits at or beyond the
back-end's cutoff distance are reported as misses so the sky applies instead
of shading numerically degenerate far-away points.

Example:
    >>> from tinytrace.core.ray import make_vec3
    >>> from tinytrace.scene.reference import create_reference_scene
    >>> from tinytrace.scene.intersection import intersect_scene
    >>> scene = create_reference_scene("float")
    >>> record = intersect_scene(scene, make_vec3(0.0, 0.0, 0.0), make_vec3(0.0, 1.0, 0.0))
    >>> record.hit
    False
"""

from __future__ import annotations

from typing import NamedTuple

from tinytrace.core.ray import Vec3, add, scale
from tinytrace.core.scalar import Scalar
from tinytrace.geometry.plane import checker_color, hit_checker_plane
from tinytrace.geometry.sphere import hit_sphere, sphere_normal
from tinytrace.materials.material import Material, default_material
from tinytrace.scene.manager import Scene


class SceneHitRecord(NamedTuple):
    """Record of a ray-scene intersection.

    Attributes:
        hit: Whether the ray hit anything closer than the cutoff distance.
        distance: Distance along the ray to the nearest hit (the back-end's
            ``big`` sentinel when nothing was hit).
        point: The hit point. Only valid if hit is True.
        normal: The unit surface normal at the hit point (outward for
            spheres, +y for the floor). Only valid if hit is True.
        material: The material at the hit point. Only valid if hit is True.
    """

    hit: bool
    distance: Scalar
    point: Vec3 | None
    normal: Vec3 | None
    material: Material | None


def intersect_scene(scene: Scene, origin: Vec3, direction: Vec3) -> SceneHitRecord:
    """Test a ray against all primitives in the scene.

    Args:
        scene: The scene to test against.
        origin: The starting point of the ray.
        direction: The normalized direction of the ray.

    Returns:
        A SceneHitRecord for the nearest hit.
    """
    ops = scene.backend

    spheres_dist = ops.big
    point = None
    normal = None
    material = None

    for sphere in scene.spheres:
        t = hit_sphere(sphere, origin, direction, ops)
        if t is not None and t < spheres_dist:
            spheres_dist = t
            point = add(origin, scale(t, direction))
            normal = sphere_normal(sphere, point, ops)
            material = sphere.material

    nearest = spheres_dist
    if scene.checker is not None:
        plane_hit = hit_checker_plane(scene.checker, origin, direction, ops)
        if plane_hit is not None and plane_hit[0] < spheres_dist:
            nearest, point = plane_hit
            normal = scene.checker.normal
            material = default_material(ops, checker_color(scene.checker, point, ops))

    return SceneHitRecord(
        hit=nearest < ops.hit_cutoff,
        distance=nearest,
        point=point,
        normal=normal,
        material=material,
    )
