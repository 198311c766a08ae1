"""
Interval of real numbers.

Used as the acceptance window for ray hit parameters and for clamping
color channels.
"""

from __future__ import annotations
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Interval:
    """A range [min, max] of reals. ``min <= max`` is not enforced."""
    min: float = float('inf')
    max: float = float('-inf')

    def size(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """Inclusive membership test."""
        return self.min <= value <= self.max

    def surrounds(self, value: float) -> bool:
        """Exclusive membership test; rejects values sitting on either bound."""
        return self.min < value < self.max

    def clamp(self, value: float) -> float:
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def with_max(self, value: float) -> Interval:
        """Return a copy with the upper bound moved to ``value``."""
        return replace(self, max=value)


Interval.EMPTY = Interval(float('inf'), float('-inf'))
Interval.UNIVERSE = Interval(float('-inf'), float('inf'))
