"""Axis-aligned bounding boxes and the ray/box slab test."""

from __future__ import annotations

from pathtracer.core.interval import EMPTY, Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Vec3


class AABB:
    """An axis-aligned box stored as one interval per axis.

    Attributes:
        x: Extent along the x axis.
        y: Extent along the y axis.
        z: Extent along the z axis.
    """

    __slots__ = ("x", "y", "z")

    EMPTY: AABB

    def __init__(
        self, x: Interval = EMPTY, y: Interval = EMPTY, z: Interval = EMPTY
    ) -> None:
        self.x = x
        self.y = y
        self.z = z

    @classmethod
    def from_points(cls, a: Vec3, b: Vec3) -> AABB:
        """Build the box spanned by two opposite corners, in any order."""
        return cls(
            Interval(min(a.x, b.x), max(a.x, b.x)),
            Interval(min(a.y, b.y), max(a.y, b.y)),
            Interval(min(a.z, b.z), max(a.z, b.z)),
        )

    def axis_interval(self, axis: int) -> Interval:
        if axis == 1:
            return self.y
        if axis == 2:
            return self.z
        return self.x

    def combine(self, other: AABB) -> AABB:
        """Return the smallest box enclosing both boxes."""
        return AABB(
            self.x.combine(other.x),
            self.y.combine(other.y),
            self.z.combine(other.z),
        )

    def longest_axis(self) -> int:
        """Index of the axis with the greatest extent (0 = x, 1 = y, 2 = z)."""
        x_size = self.x.size()
        y_size = self.y.size()
        z_size = self.z.size()
        if x_size > y_size:
            return 0 if x_size > z_size else 2
        return 1 if y_size > z_size else 2

    def hit(self, ray: Ray, t_range: Interval) -> bool:
        """Slab test: does the ray pass through the box within ``t_range``?

        Each axis clips the parameter range to the span where the ray lies
        between that axis' two planes. The ray misses as soon as the range
        becomes empty. A ray parallel to a slab imposes no constraint on
        that axis when its origin lies inside the slab and misses otherwise.

        Args:
            ray: The ray to test.
            t_range: Valid ray parameter range.

        Returns:
            True if some parameter in ``t_range`` lies inside the box.
        """
        t_min = t_range.min
        t_max = t_range.max
        origin = ray.origin
        direction = ray.direction

        for axis in range(3):
            slab = self.axis_interval(axis)
            o = origin[axis]
            d = direction[axis]

            if d == 0.0:
                if not slab.contains(o):
                    return False
                continue

            inv_d = 1.0 / d
            t0 = (slab.min - o) * inv_d
            t1 = (slab.max - o) * inv_d
            if t0 > t1:
                t0, t1 = t1, t0

            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if t_max <= t_min:
                return False

        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __repr__(self) -> str:
        return f"AABB(x={self.x!r}, y={self.y!r}, z={self.z!r})"


AABB.EMPTY = AABB(EMPTY, EMPTY, EMPTY)
