"""
Renderer module - the frame sampler.

Implements:
- Multi-sample anti-aliasing with sub-pixel jitter
- Tile-based rendering, optionally on a thread pool
- Progress reporting
- Writing into a caller-owned framebuffer
"""

from __future__ import annotations
import logging
import os
import platform
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Callable, Tuple

import numpy as np

from .vec3 import Color
from .camera import Camera
from .shapes import Scene
from .shading import ShadingOptions, resolve_color, linear_to_gamma
from .materials import MAX_CHANNEL
from .random_source import RandomSource, SystemRandomSource
from .framebuffer import FrameBuffer, to_rgba

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 640
    height: int = 360
    samples_per_pixel: int = 8
    max_bounces: int = 16
    tile_size: int = 32
    num_threads: int = 0  # 0 = auto-detect
    independent_jitter: bool = False
    gamma_correct: bool = False
    shading: ShadingOptions = field(default_factory=ShadingOptions)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces cannot be negative, got {self.max_bounces}")
        if self.tile_size < 1:
            raise ValueError(f"tile_size must be at least 1, got {self.tile_size}")
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Multi-sample ray tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def create_camera(self, **kwargs) -> Camera:
        """Camera sized for the configured resolution."""
        return Camera(image_width=self.settings.width, image_height=self.settings.height, **kwargs)

    def sample_pixel(self, scene: Scene, camera: Camera, x: int, y: int, rng: RandomSource) -> Color:
        """Average ``samples_per_pixel`` jittered rays through pixel (x, y).

        Returns:
            Mean color on the 0-255 scale, before clamping
        """
        samples = self.settings.samples_per_pixel
        total = Color(0, 0, 0)

        for _ in range(samples):
            jitter_x = jitter_y = 0.0
            if samples > 1:
                jitter_x = rng.random() - 0.5
                jitter_y = rng.random() - 0.5 if self.settings.independent_jitter else jitter_x

            ray = camera.ray_toward_pixel(x, y, jitter_x, jitter_y)
            total = total + resolve_color(
                ray, scene, self.settings.max_bounces, rng, self.settings.shading
            )

        return total / samples

    def pixel_rgba(self, scene: Scene, camera: Camera, x: int, y: int, rng: RandomSource) -> Tuple[int, int, int, int]:
        """Final displayable color for pixel (x, y)."""
        color = self.sample_pixel(scene, camera, x, y, rng)
        if self.settings.gamma_correct:
            color = Color(*(
                min(linear_to_gamma(c / MAX_CHANNEL), 1.0) * MAX_CHANNEL for c in color
            ))
        return to_rgba(color)

    def render(
        self,
        scene: Scene,
        camera: Camera,
        framebuffer: Optional[FrameBuffer] = None,
        rng: Optional[RandomSource] = None
    ) -> FrameBuffer:
        """Render the scene into a framebuffer.

        Args:
            scene: The surfaces to render
            camera: The camera to render from; its resolution is the frame size
            framebuffer: Destination (allocated if None)
            rng: Random source; each tile draws from its own spawned stream

        Returns:
            The framebuffer that was written
        """
        width = camera.image_width
        height = camera.image_height

        if framebuffer is None:
            framebuffer = FrameBuffer(width, height)
        elif framebuffer.shape != (width, height):
            raise ValueError(
                f"Framebuffer is {framebuffer.width}x{framebuffer.height} "
                f"but camera renders {width}x{height}"
            )

        if rng is None:
            rng = SystemRandomSource()

        tiles = self._generate_tiles(width, height)
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure

        logger.debug(
            "Rendering %dx%d, %d tiles, %d samples, %d bounces",
            width, height, total_tiles,
            self.settings.samples_per_pixel, self.settings.max_bounces
        )

        def render_tile(indexed_tile: Tuple[int, Tile]) -> Tuple[Tile, np.ndarray]:
            """Render a single tile."""
            index, tile = indexed_tile
            tile_rng = rng.spawn(index)
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 4), dtype=np.uint8)

            for j in range(y1 - y0):
                for i in range(x1 - x0):
                    tile_image[j, i] = self.pixel_rgba(scene, camera, x0 + i, y0 + j, tile_rng)

            completed_tiles[0] += 1
            if self._progress_callback:
                self._progress_callback(completed_tiles[0] / total_tiles)

            return tile, tile_image

        indexed_tiles = list(enumerate(tiles))
        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, indexed_tiles))
        else:
            results = [render_tile(t) for t in indexed_tiles]

        for tile, tile_image in results:
            x0, y0, _, _ = tile
            framebuffer.write_tile(x0, y0, tile_image)

        logger.debug("Frame complete")
        return framebuffer

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Split the frame into tiles as (x0, y0, x1, y1) tuples."""
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles


def get_platform_info() -> dict:
    """Get information about the current platform.

    Returns:
        Dictionary with platform details
    """
    info = {
        'system': platform.system(),
        'machine': platform.machine(),
        'processor': platform.processor(),
        'python_version': platform.python_version(),
        'cpu_count': os.cpu_count(),
        'numpy_version': np.__version__,
    }
    return info
