"""Metal (specular reflective) material implementation.

This module implements a metal surface with specular reflection and
optional fuzziness. Perfect metals (fuzz=0) produce mirror-like
reflections, while fuzzier metals perturb the reflected direction by a
random offset inside a ball of radius ``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the unit incident direction and N is the surface normal.
Perturbed rays that end up below the surface are absorbed.
"""

from __future__ import annotations

from pathtracer.core import sampling
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Color, dot, reflect
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult, validate_albedo


class Metal(Material):
    """Specular reflector with optional fuzz.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Radius of the reflection perturbation in [0, 1].
            0 = perfect mirror, 1 = maximum fuzziness.
    """

    def __init__(self, albedo: Color, fuzz: float = 0.0) -> None:
        """Create a metal material.

        Raises:
            ValueError: If any albedo component or the fuzz is outside [0, 1].
        """
        validate_albedo(albedo)
        if fuzz < 0.0 or fuzz > 1.0:
            raise ValueError(f"Fuzz = {fuzz} is outside [0, 1].")
        self.albedo = albedo
        self.fuzz = float(fuzz)

    def scatter(self, ray_in: Ray, record: HitRecord) -> ScatterResult | None:
        reflected = reflect(ray_in.direction.unit(), record.normal)
        if self.fuzz > 0.0:
            reflected = reflected + sampling.random_in_unit_sphere() * self.fuzz

        if dot(reflected, record.normal) <= 0.0:
            return None

        return ScatterResult(Ray(record.point, reflected, ray_in.time), self.albedo)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo!r}, fuzz={self.fuzz})"
