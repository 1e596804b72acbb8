"""Unit tests for vector and ray algebra.

Every test runs on both numeric back-ends through the ``ops`` fixture.
"""

import pytest
from conftest import as_floats, vec


class TestVectorOps:
    """Tests for the component-wise vector operations."""

    def test_add_sub_neg(self, ops):
        """Test addition, subtraction and negation."""
        from tinytrace.core.ray import add, neg, sub

        a = vec(ops, 1.0, 2.0, 3.0)
        b = vec(ops, 0.5, -1.0, 2.0)
        assert as_floats(ops, add(a, b)) == (1.5, 1.0, 5.0)
        assert as_floats(ops, sub(a, b)) == (0.5, 3.0, 1.0)
        assert as_floats(ops, neg(a)) == (-1.0, -2.0, -3.0)

    def test_scale_and_dot(self, ops):
        """Test scalar multiplication and the dot product."""
        from tinytrace.core.ray import dot, scale

        a = vec(ops, 1.0, 2.0, 3.0)
        assert as_floats(ops, scale(ops.scalar(2.0), a)) == (2.0, 4.0, 6.0)
        assert ops.to_float(dot(a, vec(ops, 4.0, -5.0, 6.0))) == 12.0

    def test_length(self, ops):
        """Test the Euclidean length of a 3-4-5 vector."""
        from tinytrace.core.ray import length

        assert ops.to_float(length(vec(ops, 3.0, 4.0, 0.0), ops)) == 5.0

    def test_normalize(self, ops):
        """Test normalization divides every component by the length."""
        from tinytrace.core.ray import normalize

        result = as_floats(ops, normalize(vec(ops, 3.0, 4.0, 0.0), ops))
        assert result == pytest.approx((0.6, 0.8, 0.0), abs=1e-4)

    def test_normalize_zero_vector(self, ops):
        """Test that a zero vector is returned unchanged."""
        from tinytrace.core.ray import normalize

        zero = vec(ops, 0.0, 0.0, 0.0)
        assert normalize(zero, ops) == zero


class TestRay:
    """Tests for the Ray structure."""

    def test_ray_at(self, ops):
        """Test evaluating a point along a ray."""
        from tinytrace.core.ray import Ray, ray_at

        ray = Ray(origin=vec(ops, 1.0, 0.0, 0.0), direction=vec(ops, 0.0, 0.0, -1.0))
        assert as_floats(ops, ray_at(ray, ops.scalar(2.5))) == (1.0, 0.0, -2.5)


class TestReflect:
    """Tests for mirror reflection."""

    def test_reflect_off_floor(self, ops):
        """Test that the vertical component flips."""
        from tinytrace.core.ray import reflect

        result = reflect(vec(ops, 1.0, -1.0, 0.0), vec(ops, 0.0, 1.0, 0.0))
        assert as_floats(ops, result) == (1.0, 1.0, 0.0)

    def test_reflect_head_on(self, ops):
        """Test that a head-on ray bounces straight back."""
        from tinytrace.core.ray import reflect

        result = reflect(vec(ops, 0.0, 0.0, -1.0), vec(ops, 0.0, 0.0, 1.0))
        assert as_floats(ops, result) == (0.0, 0.0, 1.0)


class TestRefract:
    """Tests for Snell's law refraction."""

    def test_normal_incidence_entering(self, ops):
        """Test that a ray along the normal passes straight through."""
        from tinytrace.core.ray import refract

        result = refract(
            vec(ops, 0.0, 0.0, -1.0),
            vec(ops, 0.0, 0.0, 1.0),
            ops.scalar(1.5),
            ops.one,
            ops,
        )
        assert as_floats(ops, result) == pytest.approx((0.0, 0.0, -1.0), abs=1e-4)

    def test_normal_incidence_leaving(self, ops):
        """Test the inside-out case swaps the normal and the indices."""
        from tinytrace.core.ray import refract

        result = refract(
            vec(ops, 0.0, 0.0, 1.0),
            vec(ops, 0.0, 0.0, 1.0),
            ops.scalar(1.5),
            ops.one,
            ops,
        )
        assert as_floats(ops, result) == pytest.approx((0.0, 0.0, 1.0), abs=1e-4)

    def test_oblique_entry_bends_toward_normal(self, float_ops):
        """Test Snell's law: sin(t) = sin(i) / 1.5 when entering glass."""
        import math

        from tinytrace.core.ray import normalize, refract

        incident = normalize(vec(float_ops, 1.0, 0.0, -1.0), float_ops)
        result = normalize(
            refract(incident, vec(float_ops, 0.0, 0.0, 1.0), 1.5, 1.0, float_ops),
            float_ops,
        )
        sin_i = math.sin(math.pi / 4.0)
        assert result.x == pytest.approx(sin_i / 1.5, abs=1e-6)
        assert result.z < 0.0

    def test_total_internal_reflection(self, ops):
        """Test that TIR gives the placeholder direction (1, 0, 0)."""
        from tinytrace.core.ray import normalize, refract

        # Leaving glass at 45 degrees: sin > 1 / 1.5
        incident = normalize(vec(ops, 1.0, 0.0, 1.0), ops)
        result = refract(incident, vec(ops, 0.0, 0.0, 1.0), ops.scalar(1.5), ops.one, ops)
        assert as_floats(ops, result) == (1.0, 0.0, 0.0)
