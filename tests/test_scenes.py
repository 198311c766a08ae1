"""Tests for sample scenes."""

from prismtrace.vec3 import Point3, Vec3
from prismtrace.ray import Ray
from prismtrace.interval import Interval
from prismtrace.shapes import Sphere
from prismtrace.scenes import create_demo_scene, create_default_camera


class TestDemoScene:
    """Test the demo scene."""

    def test_contents(self):
        scene = create_demo_scene()
        assert len(scene) == 7
        assert all(isinstance(s, Sphere) for s in scene)

    def test_has_glass_and_metal(self):
        scene = create_demo_scene()
        assert any(s.transparency() == 1.0 for s in scene)
        assert any(s.roughness() == 0.0 and s.transparency() == 0.0 for s in scene)

    def test_ground_below_camera(self):
        scene = create_demo_scene()
        record = scene.hit(Ray(Point3(0, 0, 0), Vec3(0, -1, 0)), Interval(1e-4, float('inf')))
        assert record is not None
        assert record.point.y < 0


class TestDefaultCamera:
    """Test the default camera."""

    def test_default_camera(self):
        camera = create_default_camera(640, 360)
        assert camera.position == Point3(0, 0, 0)
        assert camera.focal_length == 1.0
        assert camera.viewport_height == 1.0
        assert (camera.image_width, camera.image_height) == (640, 360)
