"""
Surface materials.

A material is plain data: a base color and three scalar knobs. All the
behavior lives in the shading engine, so one material can be shared by
any number of surfaces.
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Color

MAX_CHANNEL = 255.0


@dataclass(frozen=True)
class Material:
    """Appearance of a surface.

    Attributes:
        color: Base color, each channel on the 0-255 scale
        roughness: 0 = perfect mirror, 1 = diffuse scattering
        transparency: Share of the color coming from the refracted ray
        refraction_index: Index of refraction, used when transparency > 0
    """
    color: Color
    roughness: float = 1.0
    transparency: float = 0.0
    refraction_index: float = 0.0

    def __post_init__(self):
        for channel in self.color:
            if not 0.0 <= channel <= MAX_CHANNEL:
                raise ValueError(f"Color channels must be in [0, 255], got {self.color}")
        if not 0.0 <= self.roughness <= 1.0:
            raise ValueError(f"Roughness must be in [0, 1], got {self.roughness}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"Transparency must be in [0, 1], got {self.transparency}")
        if self.transparency > 0 and self.refraction_index <= 0:
            raise ValueError(
                f"Transparent materials need a positive refraction index, got {self.refraction_index}"
            )

    @classmethod
    def diffuse(cls, color: Color) -> Material:
        return cls(color, roughness=1.0)

    @classmethod
    def metal(cls, color: Color, roughness: float = 0.0) -> Material:
        return cls(color, roughness=roughness)

    @classmethod
    def glass(cls, refraction_index: float = 1.5, color: Color = None) -> Material:
        """Clear dielectric; ``color`` tints transmitted light."""
        if color is None:
            color = Color(MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL)
        return cls(color, roughness=0.0, transparency=1.0, refraction_index=refraction_index)
