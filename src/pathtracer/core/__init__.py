"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec: Vec3 and Color value types with vector operations
    interval: Numeric ranges for ray parameters and bounding boxes
    ray: Ray data structure
    sampling: Per-thread random number generation and sampling primitives
    image: Row-major linear RGB image container
    integrator: Path tracing loop and the RayTracer front end
    parallel: Interleaved-row multi-threaded render driver
    progress: Progress tracking and the terminal progress line
"""

from .image import Image
from .interval import EMPTY, UNIVERSE, Interval
from .ray import Ray
from .vec import Color, Vec3, cross, dot, lerp, reflect, refract

# Note: integrator and parallel are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator when needed:
#   from pathtracer.core.integrator import RayTracer

__all__ = [
    "Color",
    "EMPTY",
    "Image",
    "Interval",
    "Ray",
    "UNIVERSE",
    "Vec3",
    "cross",
    "dot",
    "lerp",
    "reflect",
    "refract",
]
