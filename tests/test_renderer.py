"""Tests for the pixel driver and frame renderer.

Tests cover:
- Frame shapes and dtypes per back-end
- Row-major progress callback
- Error handling for out-of-frame pixels and missing renders
- PNG output
- Agreement between the float and fixed-point back-ends

Parity is checked on the full 80x50 frame. Pixels that differ by more than
two levels must sit on an edge that float rays a fraction of a pixel away
also cross.
"""

import logging

import numpy as np
import pytest
from PIL import Image as PILImage

SUBPIXEL_SHIFTS = (-0.25, 0.0, 0.25)


def shifted_float_pixel(scene, x, y, dx, dy):
    """Quantized float color of the ray through (x + 0.5 + dx, y + 0.5 + dy)."""
    from tinytrace.camera.pinhole import PinholeCamera
    from tinytrace.core.integrator import cast_ray
    from tinytrace.core.ray import make_vec3, normalize

    ops = scene.backend
    camera = PinholeCamera()
    direction = normalize(
        make_vec3(
            x + 0.5 + dx - camera.width / 2.0,
            camera.height / 2.0 - (y + 0.5 + dy),
            -camera.image_plane_distance,
        ),
        ops,
    )
    color = cast_ray(scene, make_vec3(0.0, 0.0, 0.0), direction)
    return ops.quantize_color(color)


class TestRenderPixel:
    """Tests for the per-pixel entry point."""

    def test_float_pixel_is_raw_floats(self, float_scene):
        """Test the float back-end returns three floats."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera
        from tinytrace.core.renderer import render_pixel

        pixel = render_pixel(float_scene, Camera(PinholeCamera(), float_scene.backend), 40, 25)
        assert len(pixel) == 3
        assert all(isinstance(c, float) for c in pixel)

    def test_fixed_pixel_is_8bit(self, fixed_scene):
        """Test the fixed back-end returns three saturated ints."""
        from tinytrace.camera.pinhole import Camera, PinholeCamera
        from tinytrace.core.renderer import render_pixel

        pixel = render_pixel(fixed_scene, Camera(PinholeCamera(), fixed_scene.backend), 40, 25)
        assert all(isinstance(c, int) and 0 <= c <= 255 for c in pixel)

    def test_sky_pixel(self, float_scene):
        """Test a top-row pixel that only sees the sky."""
        from tinytrace.core.renderer import Renderer

        r, g, b = Renderer(float_scene).render_pixel(0, 0)
        # Blue dominates the sky gradient
        assert b > g > r > 0.0

    def test_numpy_integer_coordinates(self, fixed_scene):
        """Test pixel coordinates taken from NumPy arrays on the fixed back-end."""
        from tinytrace.core.renderer import Renderer

        renderer = Renderer(fixed_scene)
        assert renderer.render_pixel(np.int64(40), np.int64(25)) == renderer.render_pixel(40, 25)

    @pytest.mark.parametrize("x,y", [(-1, 0), (80, 0), (0, 50), (0, -1)])
    def test_out_of_frame(self, float_scene, x, y):
        """Test that pixels outside the frame raise ValueError."""
        from tinytrace.core.renderer import Renderer

        with pytest.raises(ValueError, match="outside"):
            Renderer(float_scene).render_pixel(x, y)


class TestRenderer:
    """Tests for whole-frame rendering."""

    def test_float_frame(self, float_scene):
        """Test shape and dtype of a small float frame."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        frame = Renderer(float_scene, PinholeCamera(width=8, height=5)).render()
        assert frame.shape == (5, 8, 3)
        assert frame.dtype == np.float32

    def test_fixed_frame(self, fixed_scene):
        """Test shape and dtype of a small fixed-point frame."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        frame = Renderer(fixed_scene, PinholeCamera(width=8, height=5)).render()
        assert frame.shape == (5, 8, 3)
        assert frame.dtype == np.uint8

    def test_progress_callback(self, float_scene):
        """Test the callback fires once per row, top to bottom."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        calls = []
        Renderer(float_scene, PinholeCamera(width=4, height=3)).render(
            callback=lambda done, total: calls.append((done, total))
        )
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_render_rows_order(self, float_scene):
        """Test rows are produced in order with one pixel per column."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        rows = list(Renderer(float_scene, PinholeCamera(width=4, height=3)).render_rows())
        assert [y for y, _ in rows] == [0, 1, 2]
        assert all(len(pixels) == 4 for _, pixels in rows)

    def test_frame_matches_render_pixel(self, float_scene):
        """Test the frame buffer holds the per-pixel results."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        renderer = Renderer(float_scene, PinholeCamera(width=6, height=4))
        frame = renderer.render()
        stored = tuple(float(c) for c in frame[2, 3])
        assert stored == pytest.approx(renderer.render_pixel(3, 2), abs=1e-5)

    def test_image_before_render(self, float_scene):
        """Test that asking for an image before rendering raises."""
        from tinytrace.core.renderer import Renderer

        renderer = Renderer(float_scene)
        with pytest.raises(RuntimeError, match="render"):
            renderer.get_image_numpy()
        with pytest.raises(RuntimeError):
            renderer.get_image_uint8()

    def test_image_conversions(self, float_scene):
        """Test the clamped float image and its 8-bit quantization."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        renderer = Renderer(float_scene, PinholeCamera(width=6, height=4))
        renderer.render()
        image = renderer.get_image_numpy()
        assert image.min() >= 0.0 and image.max() <= 1.0

        ops = float_scene.backend
        expected = np.array(
            [[ops.quantize_color(p) for p in row] for row in renderer.get_frame().tolist()],
            dtype=np.int16,
        )
        diff = np.abs(renderer.get_image_uint8().astype(np.int16) - expected)
        assert diff.max() <= 1

    def test_negative_max_depth(self, float_scene):
        """Test that the depth cap must be non-negative."""
        from tinytrace.core.renderer import Renderer

        with pytest.raises(ValueError, match="max_depth"):
            Renderer(float_scene, max_depth=-1)

    def test_save_image(self, fixed_scene, tmp_path):
        """Test PNG output round-trips the 8-bit frame."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        renderer = Renderer(fixed_scene, PinholeCamera(width=8, height=5))
        frame = renderer.render()
        path = tmp_path / "frame.png"
        renderer.save_image(str(path))

        with PILImage.open(path) as img:
            assert img.size == (8, 5)
            np.testing.assert_array_equal(np.array(img), frame)

    def test_logs_timing(self, float_scene, caplog):
        """Test the frame start and finish log lines."""
        from tinytrace.camera.pinhole import PinholeCamera
        from tinytrace.core.renderer import Renderer

        caplog.set_level(logging.INFO, logger="tinytrace.core.renderer")
        Renderer(float_scene, PinholeCamera(width=2, height=2)).render()
        assert "rendering 2x2 frame (float backend" in caplog.text
        assert "frame done" in caplog.text

    def test_repr(self, fixed_scene):
        """Test the string representation."""
        from tinytrace.core.renderer import Renderer

        assert repr(Renderer(fixed_scene)) == (
            "Renderer(width=80, height=50, backend='fixed', max_depth=2)"
        )


class TestBackendParity:
    """Float and fixed-point renders of the reference scene agree."""

    def test_center_pixel(self, float_scene, fixed_scene):
        """Test the glass sphere center pixel within two levels per channel."""
        from tinytrace.core.renderer import Renderer

        float_pixel = float_scene.backend.quantize_color(Renderer(float_scene).render_pixel(40, 25))
        fixed_pixel = Renderer(fixed_scene).render_pixel(40, 25)
        for a, b in zip(float_pixel, fixed_pixel):
            assert abs(a - b) <= 2

    def test_full_frame(self, float_scene, fixed_scene):
        """Test every pixel agrees or sits on an edge the float render also crosses.

        A pixel whose fixed-point color is more than two levels off must be
        reproduced (within two levels per channel) by float rays shifted up
        to a quarter pixel. That holds at tile, shadow and silhouette edges
        but not for broken shading on a smooth surface.
        """
        from tinytrace.core.renderer import Renderer

        float_frame = Renderer(float_scene).render()
        fixed_frame = Renderer(fixed_scene).render()
        ops = float_scene.backend

        mismatched = []
        for y in range(fixed_frame.shape[0]):
            for x in range(fixed_frame.shape[1]):
                expected = ops.quantize_color(tuple(float(c) for c in float_frame[y, x]))
                actual = tuple(int(c) for c in fixed_frame[y, x])
                if max(abs(a - b) for a, b in zip(expected, actual)) > 2:
                    mismatched.append((x, y, actual))

        assert len(mismatched) <= 0.05 * fixed_frame.shape[0] * fixed_frame.shape[1]

        unexplained = []
        for x, y, actual in mismatched:
            nearby = [
                shifted_float_pixel(float_scene, x, y, dx, dy)
                for dx in SUBPIXEL_SHIFTS
                for dy in SUBPIXEL_SHIFTS
            ]
            for channel in range(3):
                low = min(p[channel] for p in nearby)
                high = max(p[channel] for p in nearby)
                if not low - 2 <= actual[channel] <= high + 2:
                    unexplained.append((x, y))
                    break

        assert unexplained == []
