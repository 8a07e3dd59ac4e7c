"""Closed/open numeric ranges used for ray parameters and bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Interval:
    """A range of real numbers ``[min, max]``.

    An interval with ``min > max`` is empty. ``EMPTY`` is ``(+inf, -inf)``
    so that combining it with any interval yields that interval.

    Attributes:
        min: Lower bound.
        max: Upper bound.
    """

    min: float = math.inf
    max: float = -math.inf

    def size(self) -> float:
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """Closed membership test: ``min <= value <= max``."""
        return self.min <= value <= self.max

    def surrounds(self, value: float) -> bool:
        """Open membership test: ``min < value < max``."""
        return self.min < value < self.max

    def clamp(self, value: float) -> float:
        if value < self.min:
            return self.min
        if value > self.max:
            return self.max
        return value

    def expand(self, delta: float) -> Interval:
        """Return the interval padded by ``delta`` on both sides."""
        return Interval(self.min - delta, self.max + delta)

    def combine(self, other: Interval) -> Interval:
        """Return the smallest interval enclosing both intervals."""
        return Interval(min(self.min, other.min), max(self.max, other.max))

    def is_empty(self) -> bool:
        return self.min > self.max


EMPTY = Interval(math.inf, -math.inf)
UNIVERSE = Interval(-math.inf, math.inf)
