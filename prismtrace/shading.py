"""
Shading engine: recursive color resolution for a single ray.

A ray that misses everything takes the sky gradient. A ray that hits a
surface blends three terms, weighted by the surface's material:

- the surface's own base color
- light arriving along the reflected (mirror-to-diffuse) direction
- light arriving through the surface along the refracted direction

Colors are on the 0-255 channel scale. Recursion depth is carried as an
explicit remaining-bounce counter.
"""

from __future__ import annotations
import math
from dataclasses import dataclass

from .vec3 import Vec3, Color
from .ray import Ray
from .interval import Interval
from .shapes import Scene, HitRecord
from .materials import MAX_CHANNEL
from .random_source import RandomSource

BLACK = Color(0, 0, 0)
WHITE = Color(MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL)
SKY = Color(127, 192, MAX_CHANNEL)


@dataclass(frozen=True)
class ShadingOptions:
    """Knobs for the shading engine.

    Attributes:
        epsilon: Lower bound of the hit window; keeps secondary rays from
            re-hitting the surface they start on
        white: Sky color for rays pointing straight down
        sky: Sky color for rays pointing straight up
        legacy_composition: Multiply the composed color by
            (reflectivity + transparency). Opaque matte surfaces come out
            black under this rule.
        physical_refraction: Use Snell's law with a total internal
            reflection branch instead of the abs()-clamped formula
        shade_normals: Debug mode, color hits by their surface normal
    """
    epsilon: float = 1e-4
    white: Color = WHITE
    sky: Color = SKY
    legacy_composition: bool = True
    physical_refraction: bool = False
    shade_normals: bool = False


DEFAULT_OPTIONS = ShadingOptions()


def sky_color(ray: Ray, options: ShadingOptions = DEFAULT_OPTIONS) -> Color:
    """Vertical gradient from ``white`` (down) to ``sky`` (up)."""
    c = 0.5 * (ray.direction.unit().y + 1.0)
    return options.white * (1.0 - c) + options.sky * c


def normal_color(normal: Vec3) -> Color:
    """Map a unit normal's components from [-1, 1] onto [0, 255]."""
    return (normal + 1.0) * MAX_CHANNEL / 2


def linear_to_gamma(linear: float) -> float:
    """Gamma-2 transform of a linear component; non-positive maps to 0."""
    if linear > 0:
        return math.sqrt(linear)
    return 0.0


def resolve_color(
    ray: Ray,
    scene: Scene,
    remaining_bounces: int,
    rng: RandomSource,
    options: ShadingOptions = DEFAULT_OPTIONS
) -> Color:
    """Compute the color seen along ``ray``.

    Args:
        ray: The ray to trace
        scene: Surfaces to intersect
        remaining_bounces: Recursion budget; below 1 the ray is black
        rng: Random source for diffuse scattering
        options: Shading options

    Returns:
        Color on the 0-255 scale
    """
    if remaining_bounces < 1:
        return BLACK

    hit = scene.hit(ray, Interval(options.epsilon, float('inf')))
    if hit is None:
        return sky_color(ray, options)

    if options.shade_normals:
        return normal_color(hit.normal)

    return object_color(hit, ray, remaining_bounces, rng, scene, options)


def object_color(
    hit: HitRecord,
    ray: Ray,
    remaining_bounces: int,
    rng: RandomSource,
    scene: Scene,
    options: ShadingOptions = DEFAULT_OPTIONS
) -> Color:
    """Blend a surface's own color with its reflected and refracted light."""
    surface = hit.surface
    base = surface.color()
    tint = base / MAX_CHANNEL
    transparency = surface.transparency()
    roughness = surface.roughness()

    refracted = BLACK
    if transparency > 0:
        direction = _refracted_direction(hit, ray, options)
        refracted = resolve_color(
            Ray(hit.point, direction), scene, remaining_bounces - 1, rng, options
        ) * tint

    reflectivity = (tint.r + tint.g + tint.b) / 3
    reflectivity *= 1 - transparency

    reflected = BLACK
    if reflectivity > 0:
        direction = ray.direction.reflect(hit.normal)

        if roughness > 0:
            scatter = rng.random_unit_vector()
            if not scatter.same_hemisphere(hit.normal):
                scatter = -scatter
            direction = direction + scatter * roughness

        direction = direction + hit.normal * (1 - roughness)

        reflected = resolve_color(
            Ray(hit.point, direction), scene, remaining_bounces - 1, rng, options
        ) * tint

    composed = (
        base * (1 - reflectivity - transparency)
        + reflected * reflectivity
        + refracted * transparency
    )

    if options.legacy_composition:
        composed = composed * (reflectivity + transparency)

    return composed


def _refracted_direction(hit: HitRecord, ray: Ray, options: ShadingOptions) -> Vec3:
    surface = hit.surface
    if options.physical_refraction:
        direction = surface.refract_physical(ray.direction, hit.normal, hit.front_face)
        if direction is None:
            # Total internal reflection: the ray stays inside
            facing = hit.normal if hit.front_face else -hit.normal
            direction = ray.direction.unit().reflect(facing)
        return direction.unit()
    return surface.refract(ray.direction, hit.normal, hit.front_face).unit()
