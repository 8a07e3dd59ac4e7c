"""Sphere primitive with optional linear motion.

A sphere is defined by its center at time 0, a per-unit-time displacement
and a radius. For a ray at time t the sphere is centered at
``center0 + center_vec * t``.

The ray-sphere intersection solves the quadratic:
    |O + tD - C|^2 = r^2

which expands to:
    (D.D)t^2 + 2(D.(O-C))t + (O-C).(O-C) - r^2 = 0

With h = D.(O-C) the roots are t = (-h +/- sqrt(h^2 - a*c)) / a.

Negative radii are accepted: dividing by the radius flips the outward
normal, which turns the sphere inside out (used for hollow glass).

Example:
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.core.vec import Vec3
    >>> sphere = Sphere(Vec3(0.0, 0.0, -5.0), 1.0)
    >>> moving = Sphere.moving(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), 0.5)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Vec3, dot
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import HitRecord, HitResult, Hittable

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


def sphere_uv(p: Vec3) -> tuple[float, float]:
    """Map a point on the unit sphere to texture coordinates.

    u is the angle around the Y axis from X = -1, v is the angle from
    Y = -1 to Y = +1, both normalized to [0, 1].

    Args:
        p: A point on the unit sphere centered at the origin.

    Returns:
        The (u, v) texture coordinates.
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2.0 * math.pi), theta / math.pi


class Sphere(Hittable):
    """A sphere, static or moving linearly over ray time [0, 1].

    Attributes:
        center0: Center at time 0.
        center_vec: Displacement of the center between time 0 and time 1.
        radius: Sphere radius. Negative values invert the surface.
        material: Material bound to the sphere, or None.
        is_moving: True if ``center_vec`` is non-zero.
    """

    def __init__(
        self,
        center: Vec3,
        radius: float,
        material: Material | None = None,
    ) -> None:
        """Create a static sphere.

        Raises:
            ValueError: If ``radius`` is zero.
        """
        if radius == 0.0:
            raise ValueError("Sphere radius must be non-zero.")
        self.center0 = center
        self.center_vec = Vec3(0.0, 0.0, 0.0)
        self.radius = float(radius)
        self.material = material
        self.is_moving = False
        self._bbox = self._box_at(center)

    @classmethod
    def moving(
        cls,
        center0: Vec3,
        center1: Vec3,
        radius: float,
        material: Material | None = None,
    ) -> Sphere:
        """Create a sphere moving from ``center0`` at t=0 to ``center1`` at t=1."""
        sphere = cls(center0, radius, material)
        sphere.center_vec = center1 - center0
        sphere.is_moving = True
        sphere._bbox = sphere._box_at(center0).combine(sphere._box_at(center1))
        return sphere

    def _box_at(self, center: Vec3) -> AABB:
        r = abs(self.radius)
        extent = Vec3(r, r, r)
        return AABB.from_points(center - extent, center + extent)

    def center(self, time: float) -> Vec3:
        """Return the center position at the given ray time."""
        if not self.is_moving:
            return self.center0
        return self.center0 + self.center_vec * time

    def hit(self, ray: Ray, t_range: Interval) -> HitResult | None:
        current_center = self.center(ray.time)
        oc = ray.origin - current_center
        a = ray.direction.length_squared()
        h = dot(oc, ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0:
            return None

        sqrtd = math.sqrt(discriminant)

        # Nearest root strictly inside the range
        root = (-h - sqrtd) / a
        if not t_range.surrounds(root):
            root = (-h + sqrtd) / a
            if not t_range.surrounds(root):
                return None

        point = ray.at(root)
        outward_normal = (point - current_center) / self.radius
        u, v = sphere_uv(outward_normal)
        record = HitRecord.from_outward_normal(ray, point, outward_normal, root, u, v)
        return HitResult(record, self.material)

    def bounding_box(self) -> AABB:
        return self._bbox

    def __repr__(self) -> str:
        if self.is_moving:
            return (
                f"Sphere(center0={self.center0!r}, center1="
                f"{self.center0 + self.center_vec!r}, radius={self.radius})"
            )
        return f"Sphere(center={self.center0!r}, radius={self.radius})"
