"""Shared fixtures for prismtrace tests."""

import pytest

from prismtrace.vec3 import Point3
from prismtrace.camera import Camera
from prismtrace.random_source import RandomSource


class ConstantRandomSource(RandomSource):
    """Random source that always returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def random(self) -> float:
        return self.value

    def spawn(self, key: int) -> 'ConstantRandomSource':
        return ConstantRandomSource(self.value)


@pytest.fixture
def zero_rng():
    return ConstantRandomSource(0.0)


@pytest.fixture
def centered_rng():
    """Jitter of exactly zero: random() - 0.5 == 0."""
    return ConstantRandomSource(0.5)


@pytest.fixture
def small_camera():
    return Camera(
        position=Point3(0, 0, 0),
        focal_length=1.0,
        viewport_height=1.0,
        image_width=8,
        image_height=6
    )
