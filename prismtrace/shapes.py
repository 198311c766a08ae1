"""
Geometric surfaces for the ray tracer.

Every surface implements the ``Surface`` contract. The shading engine
only talks to that contract, so adding a primitive means adding a class
here and nothing else.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional
import math

from .vec3 import Vec3, Point3, Color, refract_lossy, refract_physical
from .ray import Ray
from .interval import Interval
from .materials import Material


@dataclass
class HitRecord:
    """Stores information about the nearest ray-surface intersection.

    Attributes:
        surface: The surface that was hit
        t: The ray parameter at intersection
        point: The intersection point in world space
        normal: Outward unit normal, independent of the side that was struck
        front_face: True if the ray travels against the outward normal
    """
    surface: Surface
    t: float
    point: Point3
    normal: Vec3
    front_face: bool


class Surface(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    def __init__(self, material: Material):
        self.material = material

    @abstractmethod
    def hit(self, ray: Ray, interval: Interval) -> Optional[float]:
        """Test if ray intersects this surface.

        Args:
            ray: The ray to test
            interval: Acceptance window for the hit parameter

        Returns:
            The nearest hit parameter inside the window, None otherwise
        """

    @abstractmethod
    def normal_at(self, ray: Ray, t: float) -> Vec3:
        """Outward (unnormalized) normal at ``ray.at(t)``."""

    @abstractmethod
    def refract(self, incoming: Vec3, normal: Vec3, hit_front: bool) -> Vec3:
        """Direction a transmitted ray leaves the surface in."""

    def refract_physical(self, incoming: Vec3, normal: Vec3, hit_front: bool) -> Optional[Vec3]:
        """Snell refraction with total internal reflection reported as None."""
        ior = self.refraction_index()
        eta_ratio = 1.0 / ior if hit_front else ior
        facing = normal if hit_front else -normal
        return refract_physical(incoming.unit(), facing, eta_ratio)

    def unit_normal_at(self, ray: Ray, t: float) -> Vec3:
        return self.normal_at(ray, t).unit()

    def color(self) -> Color:
        return self.material.color

    def roughness(self) -> float:
        return self.material.roughness

    def transparency(self) -> float:
        return self.material.transparency

    def refraction_index(self) -> float:
        return self.material.refraction_index


class Sphere(Surface):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float, material: Material):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere
            material: Material for shading (may be shared)
        """
        super().__init__(material)
        self.center = center
        self.radius = radius

    def discriminant(self, ray: Ray) -> float:
        """Quarter discriminant of the ray-sphere quadratic."""
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        return half_b * half_b - a * c

    def hit(self, ray: Ray, interval: Interval) -> Optional[float]:
        """Test ray-sphere intersection using the half-b quadratic.

        |O + tD - C|^2 = r^2 expands to t^2(D.D) + 2t(D.(O-C)) + |O-C|^2 - r^2 = 0.
        The direction is not assumed to be unit length.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Nearest root first
        root = (-half_b - sqrtd) / a
        if not interval.surrounds(root):
            root = (-half_b + sqrtd) / a
            if not interval.surrounds(root):
                return None

        return root

    def normal_at(self, ray: Ray, t: float) -> Vec3:
        return ray.at(t) - self.center

    def refract(self, incoming: Vec3, normal: Vec3, hit_front: bool) -> Vec3:
        ior = self.refraction_index()
        ratio = ior if hit_front else 1.0 / ior
        return refract_lossy(incoming, normal, ratio)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Scene:
    """An ordered collection of surfaces, traversed linearly."""

    def __init__(self, surfaces: Optional[Iterable[Surface]] = None):
        self.surfaces: list[Surface] = list(surfaces) if surfaces is not None else []

    def add(self, surface: Surface) -> None:
        """Add a surface to the scene."""
        self.surfaces.append(surface)

    def clear(self) -> None:
        """Remove all surfaces."""
        self.surfaces.clear()

    def hit(self, ray: Ray, interval: Interval) -> Optional[HitRecord]:
        """Find the closest intersection among all surfaces.

        The window's upper bound shrinks to every accepted hit, so a later
        surface only wins if it is strictly closer.
        """
        closest: Optional[Surface] = None
        window = interval

        for surface in self.surfaces:
            t = surface.hit(ray, window)
            if t is not None:
                closest = surface
                window = window.with_max(t)

        if closest is None:
            return None

        t = window.max
        normal = closest.unit_normal_at(ray, t)
        return HitRecord(
            surface=closest,
            t=t,
            point=ray.at(t),
            normal=normal,
            front_face=ray.hits_front(normal)
        )

    def __len__(self) -> int:
        return len(self.surfaces)

    def __iter__(self):
        return iter(self.surfaces)
