"""Tests for the pinhole camera.

Tests cover:
- Configuration defaults and validation
- Image plane distance
- Primary ray directions: normalization, orientation and symmetry
"""

import math

import pytest
from conftest import as_floats


class TestPinholeCameraConfig:
    """Tests for PinholeCamera configuration."""

    def test_defaults(self):
        """Test the default 80x50 frame with a 60 degree field of view."""
        from tinytrace.camera.pinhole import PinholeCamera

        camera = PinholeCamera()
        assert camera.width == 80
        assert camera.height == 50
        assert camera.fov == pytest.approx(math.pi / 3.0)

    def test_image_plane_distance(self):
        """Test H / (2 tan(fov / 2))."""
        from tinytrace.camera.pinhole import PinholeCamera

        assert PinholeCamera().image_plane_distance == pytest.approx(25.0 / math.tan(math.pi / 6.0))

    @pytest.mark.parametrize("width,height", [(0, 50), (80, 0), (-1, 10)])
    def test_invalid_dimensions(self, width, height):
        """Test that non-positive frame sizes raise ValueError."""
        from tinytrace.camera.pinhole import PinholeCamera

        with pytest.raises(ValueError, match="must be positive"):
            PinholeCamera(width=width, height=height)

    @pytest.mark.parametrize("fov", [0.0, math.pi, -1.0])
    def test_invalid_fov(self, fov):
        """Test that the field of view must lie in (0, pi)."""
        from tinytrace.camera.pinhole import PinholeCamera

        with pytest.raises(ValueError, match="Field of view"):
            PinholeCamera(fov=fov)


class TestCameraRays:
    """Tests for primary ray generation."""

    def test_origin_is_eye(self, ops):
        """Test that every primary ray starts at the origin."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        ray = Camera(PinholeCamera(), ops).get_ray(10, 20)
        assert as_floats(ops, ray.origin) == (0.0, 0.0, 0.0)

    def test_direction_is_normalized(self, ops):
        """Test unit-length directions."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        camera = Camera(PinholeCamera(), ops)
        for x, y in [(0, 0), (40, 25), (79, 49)]:
            d = as_floats(ops, camera.get_ray(x, y).direction)
            assert math.sqrt(sum(c * c for c in d)) == pytest.approx(1.0, abs=1e-3)

    def test_center_ray(self, ops):
        """Test that pixel (40, 25) points just right of and below the axis."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        d = as_floats(ops, Camera(PinholeCamera(), ops).get_ray(40, 25).direction)
        assert d[0] == pytest.approx(0.01155, abs=1e-4)
        assert d[1] == pytest.approx(-0.01155, abs=1e-4)
        assert d[2] == pytest.approx(-0.99987, abs=1e-4)

    def test_top_left_points_up_left(self, ops):
        """Test screen rows grow downward."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        camera = Camera(PinholeCamera(), ops)
        top_left = camera.get_ray(0, 0).direction
        bottom_right = camera.get_ray(79, 49).direction
        assert top_left.x < ops.zero and top_left.y > ops.zero
        assert bottom_right.x > ops.zero and bottom_right.y < ops.zero

    def test_symmetry(self, float_ops):
        """Test mirrored pixels get mirrored directions."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        camera = Camera(PinholeCamera(), float_ops)
        left = camera.get_ray(0, 10).direction
        right = camera.get_ray(79, 10).direction
        assert left.x == pytest.approx(-right.x)
        assert left.y == pytest.approx(right.y)
        assert left.z == pytest.approx(right.z)

    def test_camera_properties(self, float_ops):
        """Test the frame size passthrough and repr."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        camera = Camera(PinholeCamera(width=16, height=10), float_ops)
        assert (camera.width, camera.height) == (16, 10)
        assert "float" in repr(camera)


class TestFixedPointRange:
    """Tests for frames that would overflow Q16.16 while normalizing."""

    def test_corner_length_squared(self):
        """Test (W/2)^2 + (H/2)^2 + D^2 for the default frame."""
        from tinytrace.camera.pinhole import PinholeCamera

        assert PinholeCamera().corner_length_squared == pytest.approx(4100.0)

    def test_fixed_rejects_large_frame(self, fixed_ops):
        """Test a 300x300 frame is refused on the fixed back-end."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        with pytest.raises(ValueError, match="too large for the fixed backend"):
            Camera(PinholeCamera(width=300, height=300), fixed_ops)

    def test_float_accepts_large_frame(self, float_ops):
        """Test the float back-end has no frame limit."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        camera = Camera(PinholeCamera(width=300, height=300), float_ops)
        assert camera.width == 300

    def test_fixed_accepts_double_frame(self, fixed_ops):
        """Test a 160x100 frame still fits and its corner ray is normalized."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera

        ray = Camera(PinholeCamera(width=160, height=100), fixed_ops).get_ray(0, 0)
        d = as_floats(fixed_ops, ray.direction)
        assert math.sqrt(sum(c * c for c in d)) == pytest.approx(1.0, abs=1e-3)
