"""Textures: color lookups at a surface point.

Textures are evaluated with the hit's (u, v) surface coordinates and its
world-space position. Two kinds are provided:
    - SolidColor: a constant color
    - CheckerTexture: a 3D procedural checkerboard alternating between two
      textures, independent of surface parameterization
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from pathtracer.core.vec import Color, Vec3


class Texture(ABC):
    """A color that may vary over a surface."""

    @abstractmethod
    def value(self, u: float, v: float, point: Vec3) -> Color:
        """Return the texture color at surface coordinates and position."""


class SolidColor(Texture):
    """A texture with the same color everywhere."""

    def __init__(self, albedo: Color) -> None:
        self.albedo = albedo

    def value(self, u: float, v: float, point: Vec3) -> Color:
        return self.albedo

    def __repr__(self) -> str:
        return f"SolidColor({self.albedo!r})"


class CheckerTexture(Texture):
    """A 3D checkerboard made of cubes with side length ``scale``.

    The cell containing a point is found by flooring each coordinate
    divided by the scale. Cells whose index sum is even use ``even``, the
    others use ``odd``.

    Attributes:
        inv_scale: Reciprocal of the cube side length.
        even: Texture for even cells.
        odd: Texture for odd cells.
    """

    def __init__(self, scale: float, even: Texture, odd: Texture) -> None:
        if scale <= 0.0:
            raise ValueError(f"Checker scale = {scale} must be positive.")
        self.inv_scale = 1.0 / scale
        self.even = even
        self.odd = odd

    @classmethod
    def from_colors(cls, scale: float, even: Color, odd: Color) -> CheckerTexture:
        return cls(scale, SolidColor(even), SolidColor(odd))

    def value(self, u: float, v: float, point: Vec3) -> Color:
        cell = (
            math.floor(point.x * self.inv_scale)
            + math.floor(point.y * self.inv_scale)
            + math.floor(point.z * self.inv_scale)
        )
        if cell % 2 == 0:
            return self.even.value(u, v, point)
        return self.odd.value(u, v, point)
