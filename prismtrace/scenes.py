"""Sample scenes."""

from __future__ import annotations

from .vec3 import Color, Point3
from .camera import Camera
from .materials import Material
from .shapes import Sphere, Scene


def create_demo_scene() -> Scene:
    """Glass, mirror and metal spheres resting on a large ground sphere."""
    scene = Scene()

    ground = Material.diffuse(Color(128, 128, 128))
    default = Material.diffuse(Color(128, 128, 128))
    mirror = Material.metal(Color(240, 240, 240), 0.0)
    yellow_metal = Material.metal(Color(255, 255, 128), 0.1)
    dark_metal = Material.metal(Color(96, 96, 128), 0.0)
    diffuse_white = Material.diffuse(Color(255, 255, 255))
    glass = Material.glass(1.5)

    scene.add(Sphere(Point3(0, -100.5, -1), 100, ground))

    scene.add(Sphere(Point3(0, 0, -2), 0.5, glass))
    scene.add(Sphere(Point3(-2, 0.5, -3.5), 1, mirror))
    scene.add(Sphere(Point3(1.5, 0, -2.5), 0.5, yellow_metal))
    scene.add(Sphere(Point3(1.5, 3.5, -4), 3, dark_metal))
    scene.add(Sphere(Point3(0, -0.4, -1.45), 0.1, diffuse_white))
    scene.add(Sphere(Point3(0, 0.25, -5), 0.7, default))

    return scene


def create_default_camera(width: int, height: int) -> Camera:
    """Camera at the origin looking down -Z with a unit viewport."""
    return Camera(
        position=Point3(0, 0, 0),
        focal_length=1.0,
        viewport_height=1.0,
        image_width=width,
        image_height=height
    )
