"""Geometry module for shape primitives and acceleration structures.

Components:
    hittable: Hit records, the Hittable interface and HittableList
    sphere: Sphere primitive with optional linear motion
    aabb: Axis-aligned bounding boxes and the slab test
    bvh: Bounding volume hierarchy over hittables
"""

from .aabb import AABB
from .bvh import BVHNode
from .hittable import HitRecord, HitResult, Hittable, HittableList
from .sphere import Sphere

__all__ = [
    "AABB",
    "BVHNode",
    "HitRecord",
    "HitResult",
    "Hittable",
    "HittableList",
    "Sphere",
]
