"""
Vector3 class for 3D math operations.

Used throughout the tracer for:
- Points in 3D space
- Direction vectors
- RGB colors on the 0-255 channel scale
"""

from __future__ import annotations
import math
from typing import Optional, Union
import numpy as np


class Vec3:
    """An immutable 3D vector.

    Uses numpy internally for storage while providing a small,
    value-type API. Every operation returns a new instance.
    """

    __slots__ = ('_data',)

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self._data = np.array([x, y, z], dtype=np.float64)
        self._data.setflags(write=False)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vec3:
        """Create Vec3 from numpy array."""
        v = cls.__new__(cls)
        v._data = np.array(arr, dtype=np.float64)
        v._data.setflags(write=False)
        return v

    @property
    def x(self) -> float:
        return float(self._data[0])

    @property
    def y(self) -> float:
        return float(self._data[1])

    @property
    def z(self) -> float:
        return float(self._data[2])

    # Aliases for color operations
    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.allclose(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data))

    def __neg__(self) -> Vec3:
        return Vec3.from_array(-self._data)

    def __add__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data + other._data)
        return Vec3.from_array(self._data + other)

    def __radd__(self, other: float) -> Vec3:
        return Vec3.from_array(other + self._data)

    def __sub__(self, other: Union[Vec3, float]) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data - other._data)
        return Vec3.from_array(self._data - other)

    def __rsub__(self, other: float) -> Vec3:
        return Vec3.from_array(other - self._data)

    def __mul__(self, other: Union[Vec3, float]) -> Vec3:
        # Vector * vector is component-wise; only colors use it (tinting).
        if isinstance(other, Vec3):
            return Vec3.from_array(self._data * other._data)
        return Vec3.from_array(self._data * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3.from_array(other * self._data)

    def __truediv__(self, other: float) -> Vec3:
        return self * (1.0 / other)

    def __getitem__(self, index: int) -> float:
        return float(self._data[index])

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def length(self) -> float:
        """Return the magnitude (length) of the vector."""
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        """Return the squared magnitude (avoids sqrt for comparisons)."""
        return float(np.dot(self._data, self._data))

    def unit(self) -> Vec3:
        """Return a unit vector in the same direction.

        The zero vector has no direction; it is returned unchanged rather
        than producing NaN components.
        """
        length = self.length()
        if length == 0:
            return Vec3(0, 0, 0)
        return self / length

    normalize = unit

    def dot(self, other: Vec3) -> float:
        """Compute dot product with another vector."""
        return float(np.dot(self._data, other._data))

    def cross(self, other: Vec3) -> Vec3:
        """Compute cross product with another vector."""
        return Vec3.from_array(np.cross(self._data, other._data))

    def reflect(self, normal: Vec3) -> Vec3:
        """Mirror this vector about the given unit normal."""
        return self - normal * 2 * self.dot(normal)

    def same_hemisphere(self, normal: Vec3) -> bool:
        """True if this vector points to the same side as ``normal``."""
        return self.dot(normal) > 0.0

    def near_zero(self, epsilon: float = 1e-8) -> bool:
        """Check if vector is close to zero in all dimensions."""
        return bool(np.all(np.abs(self._data) < epsilon))

    def to_array(self) -> np.ndarray:
        """Return the underlying numpy array (copy)."""
        return self._data.copy()

    def clamp(self, min_val: float = 0.0, max_val: float = 255.0) -> Vec3:
        """Clamp all components to the given range."""
        return Vec3.from_array(np.clip(self._data, min_val, max_val))


def refract_lossy(incoming: Vec3, normal: Vec3, ratio: float) -> Vec3:
    """Bend ``incoming`` through a surface using the vector form of Snell's law.

    This is the compatibility formula: the cosine is taken against the
    normal as given (no sign flip), and the parallel component uses
    ``abs()`` under the square root, so total internal reflection is
    clamped instead of reported.

    Args:
        incoming: Incoming direction (need not be unit length)
        normal: Outward unit normal at the hit point
        ratio: Refraction ratio already chosen for the crossing direction

    Returns:
        Outgoing direction (not normalized)
    """
    cos_theta = min(incoming.unit().dot(normal.unit()), 1.0)
    perpendicular = (incoming + normal * cos_theta) * ratio
    parallel = normal * -math.sqrt(abs(1.0 - perpendicular.length_squared()))
    return parallel + perpendicular


def refract_physical(unit_incoming: Vec3, normal: Vec3, eta_ratio: float) -> Optional[Vec3]:
    """Refract a unit direction through a surface.

    Args:
        unit_incoming: Unit incoming direction
        normal: Unit normal facing against the incoming direction
        eta_ratio: Ratio of refractive indices (n1/n2)

    Returns:
        Refracted direction, or None on total internal reflection
    """
    cos_theta = min(-unit_incoming.dot(normal), 1.0)
    r_out_perp = (unit_incoming + normal * cos_theta) * eta_ratio
    perp_len_sq = r_out_perp.length_squared()

    if perp_len_sq > 1.0:
        return None

    r_out_parallel = normal * -math.sqrt(1.0 - perp_len_sq)
    return r_out_perp + r_out_parallel


# Convenience type aliases
Point3 = Vec3
Color = Vec3
