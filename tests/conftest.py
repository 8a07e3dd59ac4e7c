"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules, including
seeding the per-thread random number generator before every test so that
sampled results are reproducible.
"""

import pytest

from pathtracer.camera.thin_lens import TracerParams
from pathtracer.core import sampling
from pathtracer.core.vec import Color, Vec3
from pathtracer.geometry.hittable import HittableList
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.lambertian import Lambertian


@pytest.fixture(autouse=True)
def seed_rng():
    """Seed the calling thread's generator before each test.

    This ensures tests are isolated from each other.
    """
    sampling.seed(42)
    yield


@pytest.fixture
def red_sphere_world():
    """A unit red Lambertian sphere at the origin."""
    return HittableList([Sphere(Vec3(0.0, 0.0, 0.0), 1.0, Lambertian(Color(1.0, 0.0, 0.0)))])


@pytest.fixture
def small_params():
    """Tiny render parameters looking at the origin from +z."""
    return TracerParams(
        aspect_ratio=1.0,
        height=4,
        sampling_rate=2,
        max_depth=3,
        vfov=20.0,
        defocus_angle=0.0,
        focus_distance=5.0,
        look_from=Vec3(0.0, 0.0, 5.0),
        look_at=Vec3(0.0, 0.0, 0.0),
    )
