"""Whitted-style ray tracer with interchangeable numeric back-ends.

The same tracing code renders a small scene of spheres, point lights and a
checkerboard floor either with native floats or with Q16.16 fixed-point
arithmetic, so the fixed-point result can be checked against the float one.

Subpackages:
    core: Scalar back-ends, vector algebra, the recursive tracer and the
        frame renderer
    geometry: Sphere and checker floor intersection
    materials: The Phong-style material and the reference presets
    scene: Scene model, builder, nearest-hit queries and the reference scene
    camera: Pinhole camera ray generation
    preview: Terminal output, PNG export and Matplotlib preview
"""

__version__ = "0.1.0"
