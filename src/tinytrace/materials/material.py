"""Whitted-style surface material.

A material combines four independently weighted contributions: local
diffuse shading, a white specular highlight, mirror reflection and
transmission (refraction). The weights live in a 4-component albedo and are
never normalized or validated, so physically implausible combinations (the
reference mirror uses a specular weight of 10) are allowed.

``MaterialParams`` holds a material as plain float literals;
``MaterialParams.build`` converts it to a ``Material`` of scalars for one
numeric back-end. Conversion happens once, at scene construction.

Example:
    >>> from tinytrace.core.scalar import get_backend
    >>> from tinytrace.materials.material import GLASS
    >>> glass = GLASS.build(get_backend("float"))
    >>> glass.refractive_index
    1.5
"""

from __future__ import annotations

from dataclasses import dataclass

from tinytrace.core.ray import Vec3, Vec4, make_vec3, make_vec4
from tinytrace.core.scalar import NumericBackend, Scalar


@dataclass(frozen=True)
class Material:
    """A material expressed in one back-end's scalars.

    Attributes:
        refractive_index: Index of refraction (1.0 for non-refractive surfaces).
        albedo: Weights for (diffuse, specular, reflection, transmission).
        diffuse_color: Base RGB color for the diffuse term.
        specular_exponent: Phong exponent; 0 disables the highlight.
    """

    refractive_index: Scalar
    albedo: Vec4
    diffuse_color: Vec3
    specular_exponent: int


@dataclass(frozen=True)
class MaterialParams:
    """Float-literal description of a material.

    Attributes:
        refractive_index: Index of refraction.
        albedo: (diffuse, specular, reflection, transmission) weights.
        diffuse_color: RGB diffuse color.
        specular_exponent: Non-negative Phong exponent.
    """

    refractive_index: float = 1.0
    albedo: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
    diffuse_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    specular_exponent: int = 0

    def build(self, ops: NumericBackend) -> Material:
        """Convert the literals to a Material for the given back-end.

        Raises:
            ValueError: If the specular exponent is negative, or a literal
                is not representable in the back-end.
        """
        if self.specular_exponent < 0:
            raise ValueError(
                f"Specular exponent = {self.specular_exponent} is negative."
            )
        return Material(
            refractive_index=ops.scalar(self.refractive_index),
            albedo=make_vec4(*(ops.scalar(a) for a in self.albedo)),
            diffuse_color=make_vec3(*(ops.scalar(c) for c in self.diffuse_color)),
            specular_exponent=int(self.specular_exponent),
        )


def default_material(ops: NumericBackend, diffuse_color: Vec3) -> Material:
    """Build the plain diffuse material used for surfaces without their own.

    The checker plane uses it: index 1, albedo (1, 0, 0, 0), no highlight,
    and the given color.
    """
    return Material(
        refractive_index=ops.one,
        albedo=make_vec4(ops.one, ops.zero, ops.zero, ops.zero),
        diffuse_color=diffuse_color,
        specular_exponent=0,
    )


# =============================================================================
# Reference Materials
# =============================================================================

IVORY = MaterialParams(1.0, (0.6, 0.3, 0.1, 0.0), (0.4, 0.4, 0.3), 50)
GLASS = MaterialParams(1.5, (0.0, 0.5, 0.1, 0.8), (0.6, 0.7, 0.8), 125)
RED_RUBBER = MaterialParams(1.0, (0.9, 0.1, 0.0, 0.0), (0.3, 0.1, 0.1), 10)
MIRROR = MaterialParams(1.0, (0.0, 10.0, 0.8, 0.0), (1.0, 1.0, 1.0), 142)
