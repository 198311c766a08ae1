"""
Diagnostic fills for checking a framebuffer and its presentation path
without tracing any rays.
"""

from __future__ import annotations
import math

import numpy as np

from .framebuffer import FrameBuffer, OPAQUE
from .random_source import RandomSource

MIN_BLUE = 128


def draw_noise(framebuffer: FrameBuffer, rng: RandomSource) -> FrameBuffer:
    """Fill with pseudo-random noise.

    Each pixel draws a shift in [0, 7] and three 16-bit values; the shift
    breaks up visible patterns from low-quality generators.
    """
    for y in range(framebuffer.height):
        for x in range(framebuffer.width):
            offset = _uint16(rng) & 7
            framebuffer.set_pixel(x, y, (
                (_uint16(rng) >> offset) & 0xFF,
                (_uint16(rng) >> offset) & 0xFF,
                (_uint16(rng) >> offset) & 0xFF,
                OPAQUE
            ))
    return framebuffer


def draw_rainbow_rectangle(framebuffer: FrameBuffer) -> FrameBuffer:
    """Fill with a red/green/blue gradient across the frame."""
    width, height = framebuffer.width, framebuffer.height
    xs = np.arange(width)[np.newaxis, :]
    ys = np.arange(height)[:, np.newaxis]

    framebuffer.pixels[:, :, 0] = np.floor(xs / width * 256).astype(np.uint8)
    framebuffer.pixels[:, :, 1] = np.floor(ys / height * 256).astype(np.uint8)
    framebuffer.pixels[:, :, 2] = np.maximum(
        np.floor(xs * ys / (width * height) * 256), MIN_BLUE
    ).astype(np.uint8)
    framebuffer.pixels[:, :, 3] = OPAQUE
    return framebuffer


def _uint16(rng: RandomSource) -> int:
    return int(math.floor(rng.random() * 0xFFFF))
