"""Sample scenes built from random spheres and checker textures.

The random-sphere scenes place a large ground sphere, a 22 x 22 grid of
small spheres with randomly chosen materials, and three large feature
spheres (glass, diffuse brown, polished metal). Grid cells that would
overlap the metal feature sphere are left empty.

Material mix for the small spheres:
    - 80% diffuse, albedo = random * random (biased toward dark colors)
    - 15% metal, albedo in [0.5, 1), fuzz in [0, 0.5)
    - 5% glass, ior 1.5

All randomness comes from ``pathtracer.core.sampling``, so seeding the
calling thread makes scene construction reproducible.

Example:
    >>> from pathtracer.core import sampling
    >>> from pathtracer.scene.book_scenes import random_spheres
    >>> sampling.seed(3)
    >>> world = random_spheres()
"""

from __future__ import annotations

from pathtracer.core import sampling
from pathtracer.core.vec import Color, Vec3
from pathtracer.geometry.hittable import Hittable, HittableList
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.texture import CheckerTexture
from pathtracer.scene.builder import build_scene

# =============================================================================
# Scene Parameters
# =============================================================================

GRID_RANGE = range(-11, 11)
SMALL_RADIUS = 0.2

# Small spheres closer than this to the metal feature sphere are skipped
CLEARANCE_CENTER = Vec3(4.0, 0.2, 0.0)
CLEARANCE_DISTANCE = 0.9

GLASS_IOR = 1.5

CHECKER_SCALE = 0.32
CHECKER_EVEN = Color(0.2, 0.3, 0.1)
CHECKER_ODD = Color(0.9, 0.9, 0.9)


def _random_material() -> tuple[Material, bool]:
    """Pick a small-sphere material; the flag marks diffuse choices."""
    choose_material = sampling.canonical()
    if choose_material < 0.8:
        albedo = sampling.random_vector() * sampling.random_vector()
        return Lambertian(Color.from_vec(albedo)), True
    if choose_material < 0.95:
        albedo = sampling.random_vector(0.5, 1.0)
        fuzz = sampling.uniform(0.0, 0.5)
        return Metal(Color.from_vec(albedo), fuzz), False
    return Dielectric(GLASS_IOR), False


def _feature_spheres() -> list[Hittable]:
    return [
        Sphere(Vec3(0.0, 1.0, 0.0), 1.0, Dielectric(GLASS_IOR)),
        Sphere(Vec3(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))),
        Sphere(Vec3(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)),
    ]


def _small_spheres(bouncing: bool) -> list[Hittable]:
    """Random grid of small spheres.

    Args:
        bouncing: Move diffuse spheres upward by up to 0.5 over the shutter
            interval.
    """
    spheres: list[Hittable] = []
    for a in GRID_RANGE:
        for b in GRID_RANGE:
            center = Vec3(
                a + 0.9 * sampling.canonical(),
                SMALL_RADIUS,
                b + 0.9 * sampling.canonical(),
            )
            if (center - CLEARANCE_CENTER).length() <= CLEARANCE_DISTANCE:
                continue

            material, is_diffuse = _random_material()
            if bouncing and is_diffuse:
                center1 = center + Vec3(0.0, sampling.uniform(0.0, 0.5), 0.0)
                spheres.append(Sphere.moving(center, center1, SMALL_RADIUS, material))
            else:
                spheres.append(Sphere(center, SMALL_RADIUS, material))
    return spheres


def random_spheres() -> HittableList:
    """Static random spheres on a grey ground, as a plain list."""
    ground = Sphere(Vec3(0.0, -1000.0, 0.0), 1000.0, Lambertian(Color(0.5, 0.5, 0.5)))
    objects = [ground] + _small_spheres(bouncing=False) + _feature_spheres()
    return build_scene(objects)


def _bouncing_objects() -> list[Hittable]:
    checker = CheckerTexture.from_colors(CHECKER_SCALE, CHECKER_EVEN, CHECKER_ODD)
    ground = Sphere(Vec3(0.0, -1000.0, 0.0), 1000.0, Lambertian(checker))
    return [ground] + _small_spheres(bouncing=True) + _feature_spheres()


def random_spheres_bouncing() -> HittableList:
    """Random spheres on a checker ground with moving diffuse spheres, under a BVH."""
    return build_scene(_bouncing_objects(), use_bvh=True)


def random_spheres_bouncing_simple() -> HittableList:
    """Same objects as ``random_spheres_bouncing`` without the BVH."""
    return build_scene(_bouncing_objects())


def checkered_spheres() -> HittableList:
    """Two large checker-textured spheres stacked vertically."""
    checker = CheckerTexture.from_colors(CHECKER_SCALE, CHECKER_EVEN, CHECKER_ODD)
    material = Lambertian(checker)
    return build_scene(
        [
            Sphere(Vec3(0.0, -10.0, 0.0), 10.0, material),
            Sphere(Vec3(0.0, 10.0, 0.0), 10.0, material),
        ]
    )
