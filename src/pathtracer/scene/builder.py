"""Scene assembly helpers."""

from __future__ import annotations

import logging
from typing import Iterable

from pathtracer.geometry.bvh import BVHNode
from pathtracer.geometry.hittable import Hittable, HittableList

logger = logging.getLogger(__name__)


def build_scene(objects: Iterable[Hittable], use_bvh: bool = False) -> HittableList:
    """Collect objects into a renderable scene.

    Args:
        objects: Primitives (or nested hittables) making up the scene.
        use_bvh: Wrap the objects in a single BVH root instead of listing
            them directly. Worth it for more than a handful of objects.

    Returns:
        A HittableList holding either the objects themselves or one BVH root.
    """
    objects = list(objects)
    world = HittableList()
    if use_bvh and objects:
        root = BVHNode(objects)
        logger.debug(
            "Scene of %d objects wrapped in a BVH of depth %d",
            len(objects),
            root.depth(),
        )
        world.add(root)
    else:
        for obj in objects:
            world.add(obj)
    return world
