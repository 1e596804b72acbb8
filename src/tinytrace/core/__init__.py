"""Core rendering module.

Components:
    scalar: Float and Q16.16 fixed-point numeric back-ends
    ray: Vector and ray algebra written against a back-end
    integrator: Recursive Whitted tracer (shading, shadows, reflection,
        refraction, sky)
    renderer: Per-pixel driver and frame renderer
"""

from .ray import (
    Ray,
    Vec3,
    Vec4,
    add,
    dot,
    length,
    make_vec3,
    make_vec4,
    neg,
    normalize,
    ray_at,
    reflect,
    refract,
    scale,
    sub,
)
from .scalar import (
    BACKENDS,
    Fixed,
    FixedBackend,
    FloatBackend,
    NumericBackend,
    Scalar,
    get_backend,
)

# Note: integrator and renderer are NOT imported here; they depend on the
# scene package, which itself imports this one.
#   from tinytrace.core.renderer import Renderer

__all__ = [
    "Fixed",
    "Scalar",
    "NumericBackend",
    "FloatBackend",
    "FixedBackend",
    "BACKENDS",
    "get_backend",
    "Ray",
    "Vec3",
    "Vec4",
    "make_vec3",
    "make_vec4",
    "ray_at",
    "add",
    "sub",
    "neg",
    "scale",
    "dot",
    "length",
    "normalize",
    "reflect",
    "refract",
]
