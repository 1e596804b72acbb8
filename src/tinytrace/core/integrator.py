"""Whitted-style recursive ray tracing integrator.

This module evaluates the light arriving along a ray by recursive Whitted
light transport:

    - Local shading from every point light: Lambertian diffuse plus a Phong
      specular highlight
    - Hard shadows: a light is skipped when anything lies between the
      surface and the light
    - Mirror reflection and dielectric refraction, both traced recursively
      up to a fixed depth
    - A sky gradient for rays that miss the scene or run out of depth

All arithmetic goes through the scene's numeric back-end, so the same code
renders with floats or with Q16.16 fixed point. The reflection branch is
fully resolved before the refraction branch, and colors are never clamped
here; clamping and quantization happen at the pixel output.

Example:
    >>> from tinytrace.core.ray import make_vec3
    >>> from tinytrace.core.integrator import cast_ray
    >>> from tinytrace.scene.reference import create_reference_scene
    >>> scene = create_reference_scene("float")
    >>> color = cast_ray(scene, make_vec3(0.0, 0.0, 0.0), make_vec3(0.0, 0.0, -1.0))
"""

from __future__ import annotations

from typing import NamedTuple

from tinytrace.core.ray import (
    Vec3,
    add,
    dot,
    length,
    make_vec3,
    neg,
    normalize,
    reflect,
    refract,
    scale,
    sub,
)
from tinytrace.core.scalar import NumericBackend, Scalar
from tinytrace.materials.material import Material
from tinytrace.scene.intersection import intersect_scene
from tinytrace.scene.manager import Light, Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Deepest recursion level that still intersects the scene; deeper rays see the sky
MAX_DEPTH = 2


class LightingTerms(NamedTuple):
    """Accumulated local light intensities at a surface point."""

    diffuse: Scalar
    specular: Scalar


# =============================================================================
# Ray Helpers
# =============================================================================


def sky_color(scene: Scene, direction: Vec3) -> Vec3:
    """Sky gradient seen along a direction.

    Linear in direction.y: s * base + s * tint with s = (direction.y + 1) / 2.
    """
    ops = scene.backend
    s = ops.half * (direction.y + ops.one)
    return add(scale(s, scene.sky.base), scale(s, scene.sky.tint))


def offset_ray_origin(point: Vec3, normal: Vec3, direction: Vec3, ops: NumericBackend) -> Vec3:
    """Offset ray origin to avoid self-intersection.

    Pushes the point by the surface bias along the normal, on the side the
    new ray travels toward (below the surface when the direction points into
    it, above otherwise).

    Args:
        point: The intersection point.
        normal: The surface normal.
        direction: The direction of the secondary ray.
        ops: The active numeric back-end.

    Returns:
        The offset origin point.
    """
    offset = scale(ops.surface_bias, normal)
    if dot(direction, normal) < ops.zero:
        return sub(point, offset)
    return add(point, offset)


# =============================================================================
# Local Shading
# =============================================================================


def light_terms(
    scene: Scene,
    point: Vec3,
    normal: Vec3,
    direction: Vec3,
    material: Material,
    light: Light,
) -> LightingTerms:
    """Diffuse and specular intensity contributed by one light.

    A shadow ray is traced from the biased surface point toward the light;
    if it hits anything strictly closer than the light, both terms are
    exactly zero.

    Args:
        scene: The scene (used for the shadow test).
        point: The surface point being shaded.
        normal: The unit surface normal.
        direction: The direction of the incoming (viewing) ray.
        material: The surface material (only the exponent is used).
        light: The light to evaluate.

    Returns:
        LightingTerms for this light.
    """
    ops = scene.backend
    to_light = sub(light.position, point)
    light_dir = normalize(to_light, ops)
    light_distance = length(to_light, ops)

    shadow_orig = offset_ray_origin(point, normal, light_dir, ops)
    shadow = intersect_scene(scene, shadow_orig, light_dir)
    if shadow.hit and length(sub(shadow.point, shadow_orig), ops) < light_distance:
        return LightingTerms(ops.zero, ops.zero)

    diffuse = light.intensity * ops.max(ops.zero, dot(light_dir, normal))

    specular = ops.zero
    base = ops.max(ops.zero, dot(neg(reflect(neg(light_dir), normal)), direction))
    if base > ops.zero and material.specular_exponent > 0:
        specular = ops.pow_int(base, material.specular_exponent) * light.intensity

    return LightingTerms(diffuse, specular)


def direct_lighting(
    scene: Scene,
    point: Vec3,
    normal: Vec3,
    direction: Vec3,
    material: Material,
) -> LightingTerms:
    """Sum the diffuse and specular terms of every unshadowed light."""
    ops = scene.backend
    diffuse = ops.zero
    specular = ops.zero
    for light in scene.lights:
        terms = light_terms(scene, point, normal, direction, material, light)
        diffuse = diffuse + terms.diffuse
        specular = specular + terms.specular
    return LightingTerms(diffuse, specular)


# =============================================================================
# Recursive Tracer
# =============================================================================


def cast_ray(
    scene: Scene,
    origin: Vec3,
    direction: Vec3,
    depth: int = 0,
    max_depth: int = MAX_DEPTH,
) -> Vec3:
    """Trace a ray through the scene and return its color.

    Rays deeper than max_depth, and rays that miss, return the sky color.
    Otherwise the reflected and refracted rays are traced at depth + 1 (both
    of them, whatever the material weights) and combined with local shading:

        color = diffuse * albedo.x * diffuse_color
              + specular * albedo.y * white
              + albedo.z * reflected
              + albedo.w * refracted

    Args:
        scene: The scene to render.
        origin: The starting point of the ray.
        direction: The normalized direction of the ray.
        depth: Current recursion depth (0 for primary rays).
        max_depth: Deepest level that still intersects the scene.

    Returns:
        The unclamped RGB color.
    """
    if depth > max_depth:
        return sky_color(scene, direction)

    record = intersect_scene(scene, origin, direction)
    if not record.hit:
        return sky_color(scene, direction)

    ops = scene.backend
    point, normal, material = record.point, record.normal, record.material

    reflect_dir = normalize(reflect(direction, normal), ops)
    refract_dir = normalize(
        refract(direction, normal, material.refractive_index, ops.one, ops), ops
    )
    reflect_orig = offset_ray_origin(point, normal, reflect_dir, ops)
    refract_orig = offset_ray_origin(point, normal, refract_dir, ops)

    reflect_color = cast_ray(scene, reflect_orig, reflect_dir, depth + 1, max_depth)
    refract_color = cast_ray(scene, refract_orig, refract_dir, depth + 1, max_depth)

    lighting = direct_lighting(scene, point, normal, direction, material)

    albedo = material.albedo
    white = make_vec3(ops.one, ops.one, ops.one)
    result = scale(lighting.diffuse * albedo.x, material.diffuse_color)
    result = add(result, scale(lighting.specular * albedo.y, white))
    result = add(result, scale(albedo.z, reflect_color))
    result = add(result, scale(albedo.w, refract_color))
    return result
