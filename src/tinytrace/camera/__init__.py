"""Camera module for primary ray generation."""

from .pinhole import DEFAULT_FOV, DEFAULT_HEIGHT, DEFAULT_WIDTH, Camera, PinholeCamera

__all__ = [
    "PinholeCamera",
    "Camera",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_FOV",
]
