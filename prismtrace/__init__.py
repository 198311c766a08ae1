"""
prismtrace - A recursive ray tracer for sphere scenes

Renders spheres with diffuse, metallic and glass materials into an RGBA
framebuffer:
- Analytic ray-sphere intersection with nearest-hit selection
- Recursive reflection and refraction with a bounce budget
- Multi-sample anti-aliasing
- Pluggable random sources (numpy or a 16-bit LFSR)
- Tile-based, optionally threaded rendering
"""

__version__ = "0.1.0"
__author__ = "prismtrace Team"

from .vec3 import Vec3, Point3, Color, refract_lossy, refract_physical
from .interval import Interval
from .ray import Ray
from .camera import Camera
from .materials import Material
from .shapes import HitRecord, Surface, Sphere, Scene
from .random_source import (
    RandomSource, SystemRandomSource, LFSR16, LFSRRandomSource,
    random_range_vec3, create_random_source
)
from .shading import (
    ShadingOptions, resolve_color, object_color, sky_color,
    normal_color, linear_to_gamma
)
from .framebuffer import FrameBuffer, to_rgba
from .renderer import Renderer, RenderSettings, get_platform_info
from .patterns import draw_noise, draw_rainbow_rectangle
from .scenes import create_demo_scene, create_default_camera
