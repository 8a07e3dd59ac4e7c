"""Named scene registry.

Maps scene names to builder functions. Requests for an unknown name, or
for no name at all, fall back to a randomly chosen known scene.
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from pathtracer.geometry.hittable import HittableList
from pathtracer.scene import book_scenes

logger = logging.getLogger(__name__)

# Type alias for scene builders
SceneBuilder = Callable[[], HittableList]

SCENES: dict[str, SceneBuilder] = {
    "random-spheres": book_scenes.random_spheres,
    "random-spheres-bouncing": book_scenes.random_spheres_bouncing,
    "random-spheres-bouncing-simple": book_scenes.random_spheres_bouncing_simple,
    "checkered-spheres": book_scenes.checkered_spheres,
}


def scene_names() -> list[str]:
    return list(SCENES)


def select_scene(name: str | None, rng: random.Random | None = None) -> str:
    """Resolve a requested scene name to a registered one.

    Args:
        name: Requested scene name, or None if none was given.
        rng: Generator used for the random fallback. Defaults to the
            module-level ``random`` functions.

    Returns:
        ``name`` if it is registered, otherwise a random registered name.
    """
    if name is not None and name in SCENES:
        logger.info("Using scene: '%s'", name)
        return name

    chosen = (rng or random).choice(scene_names())
    if name is None:
        logger.info("Scene not specified. Randomly selected scene: '%s'", chosen)
        logger.info("Specify a scene with --scene to avoid random selection")
    else:
        logger.warning("Scene '%s' not found. Randomly selected scene: '%s'", name, chosen)
    return chosen


def build_named_scene(name: str) -> HittableList:
    """Build a registered scene.

    Raises:
        KeyError: If ``name`` is not registered.
    """
    return SCENES[name]()
