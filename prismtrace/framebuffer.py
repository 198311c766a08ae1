"""
RGBA8 framebuffer.

The renderer writes into a framebuffer it is handed; it never decides
where pixels end up. This class is the default destination and can be
turned into a Pillow image for display or saving.
"""

from __future__ import annotations
from pathlib import Path
from typing import Tuple, Union

import numpy as np

from .vec3 import Color
from .interval import Interval

OPAQUE = 255
CHANNEL_RANGE = Interval(0, 255)


def to_rgba(color: Color) -> Tuple[int, int, int, int]:
    """Truncate a 0-255 float color to 8-bit channels with full alpha."""
    return (
        int(CHANNEL_RANGE.clamp(color.r)),
        int(CHANNEL_RANGE.clamp(color.g)),
        int(CHANNEL_RANGE.clamp(color.b)),
        OPAQUE
    )


class FrameBuffer:
    """A width x height grid of RGBA pixels, row 0 at the top."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)
        self.pixels[:, :, 3] = OPAQUE

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def set_pixel(self, x: int, y: int, rgba: Tuple[int, int, int, int]) -> None:
        self.pixels[y, x] = rgba

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def write_tile(self, x0: int, y0: int, tile: np.ndarray) -> None:
        """Copy an (h, w, 4) uint8 block with its top left corner at (x0, y0)."""
        h, w = tile.shape[:2]
        self.pixels[y0:y0 + h, x0:x0 + w] = tile

    def fill(self, rgba: Tuple[int, int, int, int]) -> None:
        self.pixels[:, :] = rgba

    def to_image(self):
        """Return the buffer as a Pillow RGBA image."""
        from PIL import Image as PILImage
        return PILImage.fromarray(self.pixels, 'RGBA')

    def save(self, filename: Union[str, Path]) -> None:
        """Save to an image file; the extension picks the format."""
        path = Path(filename)
        image = self.to_image()
        if path.suffix.lower() in ('.jpg', '.jpeg', '.bmp'):
            image = image.convert('RGB')
        image.save(path)
