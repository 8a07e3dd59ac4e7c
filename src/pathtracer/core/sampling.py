"""Per-thread random number generation for Monte Carlo sampling.

Every thread draws from its own ``random.Random`` instance, so worker
threads never contend on a shared generator and each observes an
independent stream. A thread's generator is created lazily with OS
entropy; call ``seed`` to make the calling thread's stream reproducible.

Example:
    >>> from pathtracer.core import sampling
    >>> sampling.seed(42)
    >>> p = sampling.random_in_unit_sphere()
    >>> p.length_squared() < 1.0
    True
"""

from __future__ import annotations

import random
import threading

import numpy as np

from pathtracer.core.vec import Vec3

_local = threading.local()


def generator() -> random.Random:
    """Return the calling thread's generator, creating it on first use."""
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = random.Random()
        _local.rng = rng
    return rng


def seed(value: int | None) -> None:
    """Install a freshly seeded generator for the calling thread.

    Args:
        value: Seed for the generator. ``None`` seeds from OS entropy.
    """
    _local.rng = random.Random(value)


def spawn_seeds(value: int | None, count: int) -> list[int]:
    """Derive ``count`` independent seeds from one root seed.

    Uses NumPy's ``SeedSequence`` so that child streams are statistically
    independent even for adjacent root seeds.

    Args:
        value: Root seed. ``None`` draws fresh entropy.
        count: Number of child seeds.

    Returns:
        A list of 64-bit integer seeds, one per child.
    """
    children = np.random.SeedSequence(value).spawn(count)
    return [int(child.generate_state(1, dtype=np.uint64)[0]) for child in children]


# =============================================================================
# Sampling Primitives
# =============================================================================


def canonical() -> float:
    """Uniform draw from [0, 1)."""
    return generator().random()


def uniform(low: float, high: float) -> float:
    """Uniform draw from [low, high)."""
    return low + (high - low) * generator().random()


def random_vector(low: float = 0.0, high: float = 1.0) -> Vec3:
    """Vector with each component drawn independently from [low, high)."""
    rng = generator()
    span = high - low
    return Vec3(
        low + span * rng.random(),
        low + span * rng.random(),
        low + span * rng.random(),
    )


def random_in_unit_sphere() -> Vec3:
    """Generate a random point inside the unit ball.

    Uses rejection sampling from the cube [-1, 1)^3. The acceptance rate is
    pi/6 (about 52%), so the loop runs about twice on average.

    Returns:
        A random point with length < 1.
    """
    rng = generator()
    while True:
        x = 2.0 * rng.random() - 1.0
        y = 2.0 * rng.random() - 1.0
        z = 2.0 * rng.random() - 1.0
        if x * x + y * y + z * z < 1.0:
            return Vec3(x, y, z)


def random_unit_vector() -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere.

    Normalizes a point from ``random_in_unit_sphere``. Points too close to
    the origin to normalize safely are rejected.
    """
    while True:
        p = random_in_unit_sphere()
        length_squared = p.length_squared()
        if length_squared > 1e-160:
            return p / length_squared**0.5


def random_in_unit_disk() -> tuple[float, float]:
    """Generate a random point inside the unit disk.

    Returns:
        A pair (x, y) with x^2 + y^2 < 1.
    """
    rng = generator()
    while True:
        x = 2.0 * rng.random() - 1.0
        y = 2.0 * rng.random() - 1.0
        if x * x + y * y < 1.0:
            return x, y
