"""
Camera module for generating primary rays.

The camera looks down -Z from its position. The viewport is a plane at
``focal_length`` in front of it; image rows grow downward while world Y
grows upward, so the vertical viewport axis is negated.
"""

from __future__ import annotations
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera sized for a fixed output resolution.

    The derived viewport geometry depends on the aspect ratio, so a new
    camera must be built (see ``resized``) whenever the output size
    changes.
    """

    def __init__(
        self,
        position: Point3 = Point3(0, 0, 0),
        focal_length: float = 1.0,
        viewport_height: float = 1.0,
        image_width: int = 640,
        image_height: int = 360
    ):
        """Create a camera.

        Args:
            position: Camera position in world space
            focal_length: Distance from the camera to the viewport plane
            viewport_height: Height of the viewport in world units
            image_width: Output width in pixels
            image_height: Output height in pixels
        """
        if image_width <= 0 or image_height <= 0:
            raise ValueError(
                f"Camera resolution must be positive, got {image_width}x{image_height}"
            )

        self.position = position
        self.focal_length = focal_length
        self.image_width = image_width
        self.image_height = image_height

        self.viewport_height = viewport_height
        self.viewport_width = viewport_height * (image_width / image_height)

        # Viewport edges, walked in screen order (left->right, top->bottom)
        self.viewport_x = Vec3(self.viewport_width, 0, 0)
        self.viewport_y = Vec3(0, -self.viewport_height, 0)

        self.pixel_delta_x = self.viewport_x / image_width
        self.pixel_delta_y = self.viewport_y / image_height

        self.pixel00 = self.top_left() + (self.pixel_delta_x + self.pixel_delta_y) / 2

    def top_left(self) -> Point3:
        """World-space location of the viewport's top left corner."""
        return (
            self.position
            - Vec3(0, 0, self.focal_length)
            - self.viewport_x / 2
            - self.viewport_y / 2
        )

    def ray_toward_pixel(
        self,
        x: float,
        y: float,
        jitter_x: float = 0.0,
        jitter_y: float = 0.0
    ) -> Ray:
        """Generate a ray from the camera through pixel (x, y).

        Args:
            x: Pixel column (0 = left)
            y: Pixel row (0 = top)
            jitter_x: Sub-pixel horizontal offset
            jitter_y: Sub-pixel vertical offset

        Returns:
            A ray from the camera position; its direction is not normalized
        """
        direction = (
            self.pixel00
            + self.pixel_delta_x * (x + jitter_x)
            + self.pixel_delta_y * (y + jitter_y)
            - self.position
        )
        return Ray(self.position, direction)

    def resized(self, image_width: int, image_height: int) -> Camera:
        """Return a camera with the same placement for a new resolution."""
        return Camera(
            position=self.position,
            focal_length=self.focal_length,
            viewport_height=self.viewport_height,
            image_width=image_width,
            image_height=image_height
        )

    def __repr__(self) -> str:
        return (
            f"Camera(position={self.position}, "
            f"resolution={self.image_width}x{self.image_height})"
        )
