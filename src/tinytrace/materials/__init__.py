"""Materials module.

A single material model covers every surface: Lambertian diffuse, Phong
specular, mirror reflection and refraction, blended by a four-component
albedo.
"""

from .material import (
    GLASS,
    IVORY,
    MIRROR,
    RED_RUBBER,
    Material,
    MaterialParams,
    default_material,
)

__all__ = [
    "Material",
    "MaterialParams",
    "default_material",
    "IVORY",
    "GLASS",
    "RED_RUBBER",
    "MIRROR",
]
