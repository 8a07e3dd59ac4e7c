"""Tests for HittableList closest-hit queries."""

import math
import random

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.vec import Vec3
from pathtracer.geometry.aabb import AABB
from pathtracer.geometry.hittable import HitRecord, HittableList
from pathtracer.geometry.sphere import Sphere

FULL_RANGE = Interval(0.001, math.inf)


class TestHittableList:
    """Tests for list intersection and bounding boxes."""

    def test_empty_list_misses(self):
        """Test an empty list reports no hit."""
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert HittableList().hit(ray, FULL_RANGE) is None

    def test_returns_closest_hit(self):
        """Test the nearest of several spheres along the ray is returned."""
        near = Sphere(Vec3(0.0, 0.0, -3.0), 0.5)
        far = Sphere(Vec3(0.0, 0.0, -10.0), 0.5)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        for world in (HittableList([near, far]), HittableList([far, near])):
            result = world.hit(ray, FULL_RANGE)
            assert result is not None
            assert abs(result.record.t - 2.5) < 1e-12

    def test_minimum_t_over_members(self):
        """Test the returned t is the minimum of all member hits in range."""
        rng = random.Random(11)
        spheres = [
            Sphere(
                Vec3(rng.uniform(-3, 3), rng.uniform(-3, 3), rng.uniform(-20, -5)),
                rng.uniform(0.3, 1.5),
            )
            for _ in range(30)
        ]
        world = HittableList(spheres)

        for _ in range(100):
            direction = Vec3(rng.uniform(-0.3, 0.3), rng.uniform(-0.3, 0.3), -1.0)
            ray = Ray(Vec3(0.0, 0.0, 0.0), direction)
            member_ts = [
                result.record.t
                for result in (s.hit(ray, FULL_RANGE) for s in spheres)
                if result is not None
            ]
            result = world.hit(ray, FULL_RANGE)
            if member_ts:
                assert result is not None
                assert result.record.t == min(member_ts)
            else:
                assert result is None

    def test_range_excludes_members(self):
        """Test members outside the query range are ignored."""
        near = Sphere(Vec3(0.0, 0.0, -3.0), 0.5)
        far = Sphere(Vec3(0.0, 0.0, -10.0), 0.5)
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        result = HittableList([near, far]).hit(ray, Interval(5.0, math.inf))
        assert abs(result.record.t - 9.5) < 1e-12

    def test_bounding_box_is_union(self):
        """Test the list's box encloses every member."""
        world = HittableList()
        world.add(Sphere(Vec3(-2.0, 0.0, 0.0), 1.0))
        world.add(Sphere(Vec3(3.0, 1.0, 0.0), 0.5))
        expected = AABB.from_points(Vec3(-3.0, -1.0, -1.0), Vec3(3.5, 1.5, 1.0))
        assert world.bounding_box() == expected
        assert len(world) == 2

    def test_clear(self):
        """Test clear empties the list and resets the box."""
        world = HittableList([Sphere(Vec3(0.0, 0.0, 0.0), 1.0)])
        world.clear()
        assert len(world) == 0
        assert world.bounding_box() == AABB.EMPTY


class TestHitRecord:
    """Tests for hit record face orientation."""

    def test_front_face_keeps_outward_normal(self):
        """Test a ray against the outward normal is a front-face hit."""
        ray = Ray(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))
        record = HitRecord.from_outward_normal(
            ray, Vec3(0.0, 0.0, 1.0), Vec3(0.0, 0.0, 1.0), 4.0
        )
        assert record.front_face
        assert record.normal == Vec3(0.0, 0.0, 1.0)

    def test_back_face_flips_normal(self):
        """Test a ray along the outward normal flips the stored normal."""
        ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0))
        record = HitRecord.from_outward_normal(
            ray, Vec3(0.0, 0.0, 1.0), Vec3(0.0, 0.0, 1.0), 1.0
        )
        assert not record.front_face
        assert record.normal == Vec3(0.0, 0.0, -1.0)
