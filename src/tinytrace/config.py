"""Render configuration.

``RenderConfig`` groups everything needed to render the reference scene:
frame size, field of view, recursion depth and numeric back-end. The example
scripts build one from their command-line arguments.

Example:
    >>> from tinytrace.config import RenderConfig, create_renderer
    >>> renderer = create_renderer(RenderConfig(width=40, height=25, backend="fixed"))
    >>> renderer.backend_name
    'fixed'
"""

from __future__ import annotations

from dataclasses import dataclass

from tinytrace.camera.pinhole import (
    DEFAULT_FOV,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    Camera,
    PinholeCamera,
)
from tinytrace.core.integrator import MAX_DEPTH
from tinytrace.core.renderer import Renderer
from tinytrace.core.scalar import BACKENDS, get_backend
from tinytrace.scene.reference import ReferenceSceneParams, create_reference_scene


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for one render of the reference scene.

    Attributes:
        width: Frame width in pixels.
        height: Frame height in pixels.
        fov: Vertical field of view in radians.
        max_depth: Recursion depth cap.
        backend: Numeric back-end name, ``"float"`` or ``"fixed"``.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    fov: float = DEFAULT_FOV
    max_depth: int = MAX_DEPTH
    backend: str = "float"

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown numeric backend: {self.backend!r} (expected one of {sorted(BACKENDS)})"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth = {self.max_depth} must be non-negative")
        # Validates the frame against the back-end range
        Camera(self.camera(), get_backend(self.backend))

    def camera(self) -> PinholeCamera:
        return PinholeCamera(width=self.width, height=self.height, fov=self.fov)


def create_renderer(
    config: RenderConfig | None = None,
    scene_params: ReferenceSceneParams | None = None,
) -> Renderer:
    """Build the reference scene and a renderer for it.

    Args:
        config: Render configuration (defaults if None).
        scene_params: Optional reference scene overrides.

    Returns:
        A Renderer ready to ``render()``.
    """
    if config is None:
        config = RenderConfig()
    scene = create_reference_scene(config.backend, scene_params)
    return Renderer(scene, config.camera(), max_depth=config.max_depth)
