"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with biased ray-sphere intersection
    plane: Bounded horizontal checkerboard floor

Intersection routines return the distance along the ray, or None on a miss:
    t = hit_sphere(sphere, origin, direction, ops)
"""

from .plane import (
    CheckerPlane,
    CheckerPlaneParams,
    checker_color,
    checker_parity,
    hit_checker_plane,
)
from .sphere import Sphere, hit_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "sphere_normal",
    "CheckerPlane",
    "CheckerPlaneParams",
    "hit_checker_plane",
    "checker_parity",
    "checker_color",
]
