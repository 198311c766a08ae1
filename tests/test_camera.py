"""Tests for Camera class."""

import pytest
from prismtrace.vec3 import Vec3, Point3
from prismtrace.camera import Camera


def make_camera(width=2, height=2, **kwargs):
    return Camera(image_width=width, image_height=height, **kwargs)


class TestCameraGeometry:
    """Test derived viewport geometry."""

    def test_viewport_width_follows_aspect_ratio(self):
        cam = make_camera(640, 360, viewport_height=1.0)
        assert cam.viewport_width == pytest.approx(640 / 360)

    def test_viewport_axes(self):
        cam = make_camera(4, 2, viewport_height=2.0)
        assert cam.viewport_x == Vec3(4, 0, 0)
        assert cam.viewport_y == Vec3(0, -2, 0)  # rows grow downward

    def test_pixel_deltas(self):
        cam = make_camera(4, 2, viewport_height=2.0)
        assert cam.pixel_delta_x == Vec3(1, 0, 0)
        assert cam.pixel_delta_y == Vec3(0, -1, 0)

    def test_top_left(self):
        cam = make_camera()
        assert cam.top_left() == Point3(-0.5, 0.5, -1)

    def test_pixel00_is_center_of_first_pixel(self):
        cam = make_camera()
        assert cam.pixel00 == Point3(-0.25, 0.25, -1)

    def test_focal_length_and_position(self):
        cam = make_camera(position=Point3(1, 2, 3), focal_length=2.0)
        assert cam.pixel00.z == pytest.approx(1.0)
        assert cam.top_left() == Point3(0.5, 2.5, 1)


class TestCameraRays:
    """Test Camera.ray_toward_pixel()."""

    def test_ray_starts_at_camera(self):
        cam = make_camera(position=Point3(1, 1, 1))
        assert cam.ray_toward_pixel(0, 0).origin == Point3(1, 1, 1)

    def test_first_pixel(self):
        cam = make_camera()
        assert cam.ray_toward_pixel(0, 0).direction == Vec3(-0.25, 0.25, -1)

    def test_last_pixel(self):
        cam = make_camera()
        assert cam.ray_toward_pixel(1, 1).direction == Vec3(0.25, -0.25, -1)

    def test_jitter_moves_within_pixel_grid(self):
        cam = make_camera()
        ray = cam.ray_toward_pixel(0, 0, 0.5, 0.5)
        assert ray.direction == Vec3(0, 0, -1)

    def test_jitter_equals_fractional_pixel(self):
        cam = make_camera(8, 6)
        assert cam.ray_toward_pixel(2, 3, 0.25, -0.5).direction == \
            cam.ray_toward_pixel(2.25, 2.5).direction

    def test_direction_not_normalized(self):
        cam = make_camera()
        assert cam.ray_toward_pixel(0, 0).direction.length() > 1.0


class TestCameraResize:
    """Test camera recreation on resolution change."""

    def test_resized_keeps_placement(self):
        cam = make_camera(640, 360, position=Point3(0, 1, 0), focal_length=2.0)
        new = cam.resized(100, 100)
        assert new.position == cam.position
        assert new.focal_length == 2.0
        assert new.viewport_height == cam.viewport_height
        assert new.viewport_width == pytest.approx(1.0)
        assert (new.image_width, new.image_height) == (100, 100)

    def test_resized_returns_new_camera(self):
        cam = make_camera()
        assert cam.resized(4, 4) is not cam
        assert cam.image_width == 2

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 5)])
    def test_invalid_resolution(self, width, height):
        with pytest.raises(ValueError):
            make_camera(width, height)

    def test_repr(self):
        assert "2x2" in repr(make_camera())
