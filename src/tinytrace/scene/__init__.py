"""Scene module for scene management and hit records.

Components:
    manager: Immutable scene model and the SceneManager builder
    intersection: Nearest-hit query over spheres and the checker floor
    reference: The four-sphere reference scene
"""

from .intersection import SceneHitRecord, intersect_scene
from .manager import SKY_BASE, SKY_TINT, Light, Scene, SceneManager, Sky, make_sky
from .reference import (
    GLASS_SPHERE,
    IVORY_SPHERE,
    MIRROR_SPHERE,
    RED_RUBBER_SPHERE,
    REFERENCE_LIGHTS,
    REFERENCE_SPHERES,
    LightParams,
    ReferenceSceneParams,
    SphereParams,
    create_reference_scene,
)

__all__ = [
    # Manager module
    "Scene",
    "SceneManager",
    "Light",
    "Sky",
    "make_sky",
    "SKY_BASE",
    "SKY_TINT",
    # Intersection module
    "SceneHitRecord",
    "intersect_scene",
    # Reference scene
    "ReferenceSceneParams",
    "SphereParams",
    "LightParams",
    "REFERENCE_SPHERES",
    "REFERENCE_LIGHTS",
    "IVORY_SPHERE",
    "GLASS_SPHERE",
    "RED_RUBBER_SPHERE",
    "MIRROR_SPHERE",
    "create_reference_scene",
]
