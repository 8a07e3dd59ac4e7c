"""Hit records and the intersection contract shared by all scene objects.

This module defines:
    - HitRecord: surface geometry at a ray/surface intersection
    - HitResult: a HitRecord plus the material bound to the hit object
    - Hittable: the abstract intersection interface
    - HittableList: an unordered collection answering closest-hit queries

A query returns ``None`` on a miss rather than a sentinel distance. The
normal stored in a HitRecord always faces against the incoming ray, and
``front_face`` records whether the ray arrived from outside.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Vec3, dot
from pathtracer.geometry.aabb import AABB

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Geometry at a ray/surface intersection.

    Attributes:
        point: World-space hit point.
        normal: Unit normal facing against the incoming ray.
        t: Ray parameter of the hit.
        front_face: True if the ray hit the outside of the surface.
        u: Surface texture coordinate in [0, 1].
        v: Surface texture coordinate in [0, 1].
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    u: float = 0.0
    v: float = 0.0

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        point: Vec3,
        outward_normal: Vec3,
        t: float,
        u: float = 0.0,
        v: float = 0.0,
    ) -> HitRecord:
        """Build a record, orienting the normal against the ray.

        Args:
            ray: The incoming ray.
            point: The hit point.
            outward_normal: The unit normal pointing out of the surface.
            t: Ray parameter of the hit.
            u: Texture coordinate.
            v: Texture coordinate.
        """
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point, normal, t, front_face, u, v)


@dataclass(frozen=True)
class HitResult:
    """A hit record with the material of the object that was hit.

    Attributes:
        record: Surface geometry at the hit.
        material: The hit object's material, or None for untextured debug
            geometry (shaded by its normal).
    """

    record: HitRecord
    material: Material | None = None

    @property
    def t(self) -> float:
        return self.record.t


class Hittable(ABC):
    """Anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_range: Interval) -> HitResult | None:
        """Return the nearest hit with ``t`` inside ``t_range``, or None."""

    @abstractmethod
    def bounding_box(self) -> AABB:
        """Return a box enclosing the object over ray times [0, 1]."""


class HittableList(Hittable):
    """An unordered collection of hittables.

    Intersection returns the member hit with the smallest ``t``; the
    bounding box is the union of the members' boxes.

    Example:
        >>> world = HittableList()
        >>> world.add(Sphere(Vec3(0.0, 0.0, -1.0), 0.5))
        >>> len(world)
        1
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = []
        self._bbox = AABB.EMPTY
        for obj in objects:
            self.add(obj)

    def add(self, obj: Hittable) -> None:
        self.objects.append(obj)
        self._bbox = self._bbox.combine(obj.bounding_box())

    def clear(self) -> None:
        self.objects.clear()
        self._bbox = AABB.EMPTY

    def hit(self, ray: Ray, t_range: Interval) -> HitResult | None:
        closest: HitResult | None = None
        t_closest = t_range.max

        for obj in self.objects:
            result = obj.hit(ray, Interval(t_range.min, t_closest))
            if result is not None:
                closest = result
                t_closest = result.record.t

        return closest

    def bounding_box(self) -> AABB:
        return self._bbox

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"HittableList(objects={len(self.objects)})"
