"""Scene module for assembling and naming renderable worlds.

Components:
    builder: build_scene, which collects objects into a list or BVH
    book_scenes: Random-sphere and checker sample scenes
    registry: Scene name to builder mapping with random fallback
"""

from .builder import build_scene
from .registry import SCENES, build_named_scene, scene_names, select_scene

__all__ = [
    "SCENES",
    "build_named_scene",
    "build_scene",
    "scene_names",
    "select_scene",
]
