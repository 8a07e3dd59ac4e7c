"""Bounding volume hierarchy over hittable objects.

The hierarchy is a binary tree built once before rendering. Each node
stores the union box of everything beneath it, so a ray that misses a
node's box skips the whole subtree.

Construction splits recursively at the median along the longest axis of
the current union box, ordering objects by the lower bound of their boxes
on that axis. The sort is stable, so the tree shape is deterministic for
a given input order.

Example:
    >>> from pathtracer.geometry.bvh import BVHNode
    >>> root = BVHNode(spheres)
    >>> result = root.hit(ray, Interval(0.001, math.inf))
"""

from __future__ import annotations

import logging
from typing import Sequence

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import HitResult, Hittable, HittableList

logger = logging.getLogger(__name__)


class BVHNode(Hittable):
    """A node of the bounding volume hierarchy.

    A node over a single object is a leaf: its left child is the object
    and its right child is None. Otherwise both children are set and each
    is either an object or another node.

    Attributes:
        left: Left child.
        right: Right child, or None for a leaf.
    """

    def __init__(self, objects: Sequence[Hittable]) -> None:
        """Build the subtree over ``objects``.

        Args:
            objects: Objects to partition. The sequence itself is not modified.

        Raises:
            ValueError: If ``objects`` is empty.
        """
        if not objects:
            raise ValueError("Cannot build a BVH over an empty object list")

        self._bbox = AABB.EMPTY
        for obj in objects:
            self._bbox = self._bbox.combine(obj.bounding_box())

        self.left: Hittable
        self.right: Hittable | None

        if len(objects) == 1:
            self.left = objects[0]
            self.right = None
        elif len(objects) == 2:
            self.left = objects[0]
            self.right = objects[1]
        else:
            axis = self._bbox.longest_axis()
            ordered = sorted(
                objects,
                key=lambda obj: obj.bounding_box().axis_interval(axis).min,
            )
            mid = len(ordered) // 2
            self.left = BVHNode(ordered[:mid])
            self.right = BVHNode(ordered[mid:])

    @classmethod
    def from_list(cls, world: HittableList) -> BVHNode:
        """Build a hierarchy over every member of a list."""
        logger.debug("Building BVH over %d objects", len(world.objects))
        return cls(world.objects)

    def hit(self, ray: Ray, t_range: Interval) -> HitResult | None:
        if not self._bbox.hit(ray, t_range):
            return None

        hit_left = self.left.hit(ray, t_range)
        if self.right is None:
            return hit_left

        # Anything behind the left hit cannot be the closest
        right_max = hit_left.record.t if hit_left is not None else t_range.max
        hit_right = self.right.hit(ray, Interval(t_range.min, right_max))

        if hit_right is not None:
            return hit_right
        return hit_left

    def bounding_box(self) -> AABB:
        return self._bbox

    def depth(self) -> int:
        """Number of node levels from this node down to the deepest leaf."""
        child_depths = [
            child.depth() if isinstance(child, BVHNode) else 0
            for child in (self.left, self.right)
        ]
        return 1 + max(child_depths)

    def __repr__(self) -> str:
        return f"BVHNode(bbox={self._bbox!r})"
