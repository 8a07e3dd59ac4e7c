"""Base material interface.

A material decides what happens to a ray that hits its surface: it either
absorbs the ray or returns a scattered ray together with the RGB fraction
of light carried along it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from pathtracer.core.ray import Ray
from pathtracer.core.vec import Color
from pathtracer.geometry.hittable import HitRecord


@dataclass(frozen=True)
class ScatterResult:
    """Outcome of a successful scatter.

    Attributes:
        ray: The scattered ray. Its time equals the incident ray's time.
        attenuation: RGB fraction of light carried, each component in [0, 1].
    """

    ray: Ray
    attenuation: Color


class Material(ABC):
    """Scattering behavior of a surface."""

    @abstractmethod
    def scatter(self, ray_in: Ray, record: HitRecord) -> ScatterResult | None:
        """Scatter an incoming ray at a hit.

        Args:
            ray_in: The incident ray.
            record: Geometry at the hit.

        Returns:
            The scattered ray and attenuation, or None if the ray is absorbed.
        """


def validate_albedo(albedo: Iterable[float]) -> None:
    """Check that every albedo component lies in [0, 1].

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
