"""Dielectric (glass-like) material implementation.

This module implements dielectric materials like glass, water, and diamond.
Dielectrics both reflect and refract light, with the ratio determined by
the Fresnel equations (approximated using Schlick's approximation).

Key physics:
    - Snell's law: n1 * sin(theta1) = n2 * sin(theta2)
    - Total internal reflection when sin(theta2) > 1
    - Fresnel reflectance increases at grazing angles

Common IOR values:
    - Air: 1.0
    - Water: 1.33
    - Glass: 1.5
    - Diamond: 2.4

Example:
    >>> from pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
"""

from __future__ import annotations

import math

from pathtracer.core import sampling
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Color, dot, reflect, refract
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult

# Glass absorbs nothing
_WHITE = Color(1.0, 1.0, 1.0)


def schlick_reflectance(cosine: float, eta_ratio: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between the incident direction and normal.
        eta_ratio: Ratio of refractive indices (incident / transmitted).

    Returns:
        The approximate probability that the ray reflects.
    """
    r0 = (1.0 - eta_ratio) / (1.0 + eta_ratio)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


class Dielectric(Material):
    """A clear refractive material.

    Attributes:
        ior: Index of refraction of the material relative to its surroundings.
    """

    def __init__(self, ior: float) -> None:
        if ior <= 0.0:
            raise ValueError(f"Index of refraction = {ior} must be positive.")
        self.ior = float(ior)

    def scatter(self, ray_in: Ray, record: HitRecord) -> ScatterResult:
        """Reflect or refract the incoming ray.

        Entering the surface uses eta = 1/ior, leaving it uses eta = ior.
        The ray reflects under total internal reflection, or otherwise with
        probability given by Schlick's approximation; it refracts in all
        remaining cases.
        """
        eta_ratio = 1.0 / self.ior if record.front_face else self.ior

        unit_direction = ray_in.direction.unit()
        cos_theta = min(dot(-unit_direction, record.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = eta_ratio * sin_theta > 1.0
        if (
            cannot_refract
            or schlick_reflectance(cos_theta, eta_ratio) > sampling.canonical()
        ):
            direction = reflect(unit_direction, record.normal)
        else:
            direction = refract(unit_direction, record.normal, eta_ratio)

        return ScatterResult(Ray(record.point, direction, ray_in.time), _WHITE)

    def __repr__(self) -> str:
        return f"Dielectric(ior={self.ior})"
