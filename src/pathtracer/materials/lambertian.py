"""Lambertian (ideal diffuse) material implementation.

A Lambertian surface scatters light equally in all directions, with
intensity proportional to the cosine of the angle from the normal.

Sampling a direction as ``normal + random_unit_vector()`` produces a
cosine-weighted distribution over the hemisphere around the normal, so the
sample needs no explicit PDF weighting: the attenuation is just the albedo.

Example:
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> from pathtracer.core.vec import Color
    >>> red = Lambertian(Color(0.8, 0.1, 0.1))
"""

from __future__ import annotations

from pathtracer.core import sampling
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Color
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult, validate_albedo
from pathtracer.materials.texture import SolidColor, Texture


class Lambertian(Material):
    """Ideal diffuse material.

    Attributes:
        texture: Texture giving the albedo at each hit.
    """

    def __init__(self, albedo: Color | Texture) -> None:
        """Create a diffuse material.

        Args:
            albedo: A constant color (each component in [0, 1]) or a texture.

        Raises:
            ValueError: If a constant albedo has a component outside [0, 1].
        """
        if isinstance(albedo, Texture):
            self.texture = albedo
        else:
            validate_albedo(albedo)
            self.texture = SolidColor(albedo)

    def scatter(self, ray_in: Ray, record: HitRecord) -> ScatterResult:
        scatter_direction = record.normal + sampling.random_unit_vector()

        # Sample nearly opposite the normal
        if scatter_direction.near_zero():
            scatter_direction = record.normal

        scattered = Ray(record.point, scatter_direction, ray_in.time)
        attenuation = self.texture.value(record.u, record.v, record.point)
        return ScatterResult(scattered, attenuation)

    def __repr__(self) -> str:
        return f"Lambertian({self.texture!r})"
