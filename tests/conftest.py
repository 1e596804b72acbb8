"""Pytest configuration for tinytrace tests.

Provides the numeric back-ends and the reference scenes. Scenes are
immutable, so the reference scenes are built once per session and shared.
"""

import pytest


@pytest.fixture(scope="session")
def float_ops():
    """The float back-end."""
    from tinytrace.core.scalar import get_backend

    return get_backend("float")


@pytest.fixture(scope="session")
def fixed_ops():
    """The Q16.16 fixed-point back-end."""
    from tinytrace.core.scalar import get_backend

    return get_backend("fixed")


@pytest.fixture(params=["float", "fixed"])
def ops(request):
    """Each back-end in turn, for tests that must hold on both."""
    from tinytrace.core.scalar import get_backend

    return get_backend(request.param)


@pytest.fixture(scope="session")
def float_scene():
    """Reference scene on the float back-end."""
    from tinytrace.scene.reference import create_reference_scene

    return create_reference_scene("float")


@pytest.fixture(scope="session")
def fixed_scene():
    """Reference scene on the fixed-point back-end."""
    from tinytrace.scene.reference import create_reference_scene

    return create_reference_scene("fixed")


def vec(ops, x, y, z):
    """Build a Vec3 from float literals in the given back-end."""
    from tinytrace.core.ray import make_vec3

    return make_vec3(ops.scalar(x), ops.scalar(y), ops.scalar(z))


def as_floats(ops, v):
    """Convert a vector of back-end scalars to a tuple of floats."""
    return tuple(ops.to_float(c) for c in v)
