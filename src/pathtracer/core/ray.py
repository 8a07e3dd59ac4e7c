"""Ray data structure.

A ray is the half-line ``origin + t * direction`` observed at a point in
time in ``[0, 1]``. The time coordinate drives motion blur: moving
primitives evaluate their position at ``ray.time``.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vec import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vec3(0.0, 0.0, -5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.core.vec import Vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point, direction vector and time.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; callers normalize where a unit direction matters.
        time: The instant the ray samples, in [0, 1].
    """

    origin: Vec3
    direction: Vec3
    time: float = 0.0

    def at(self, t: float) -> Vec3:
        """Compute the point ``origin + t * direction``."""
        return self.origin + self.direction * t
