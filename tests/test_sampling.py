"""Tests for per-thread random sampling."""

import threading

from pathtracer.core import sampling


class TestSamplingPrimitives:
    """Tests for the distribution of sampling primitives."""

    def test_canonical_range(self):
        """Test canonical draws lie in [0, 1)."""
        for _ in range(1000):
            value = sampling.canonical()
            assert 0.0 <= value < 1.0

    def test_uniform_range(self):
        """Test uniform draws lie in [low, high)."""
        for _ in range(1000):
            value = sampling.uniform(-2.0, 3.0)
            assert -2.0 <= value < 3.0

    def test_random_vector_range(self):
        """Test random_vector components lie in [low, high)."""
        for _ in range(200):
            v = sampling.random_vector(0.5, 1.0)
            assert all(0.5 <= c < 1.0 for c in v)

    def test_in_unit_sphere(self):
        """Test random_in_unit_sphere returns points inside the unit ball."""
        for _ in range(1000):
            assert sampling.random_in_unit_sphere().length_squared() < 1.0

    def test_unit_vector_is_unit(self):
        """Test random_unit_vector returns unit vectors."""
        for _ in range(1000):
            assert abs(sampling.random_unit_vector().length() - 1.0) < 1e-9

    def test_unit_vector_is_roughly_uniform(self):
        """Test random unit vectors average close to zero."""
        n = 4000
        sx = sy = sz = 0.0
        for _ in range(n):
            v = sampling.random_unit_vector()
            sx += v.x
            sy += v.y
            sz += v.z
        assert abs(sx / n) < 0.05
        assert abs(sy / n) < 0.05
        assert abs(sz / n) < 0.05

    def test_in_unit_disk(self):
        """Test random_in_unit_disk returns points inside the unit disk."""
        for _ in range(1000):
            x, y = sampling.random_in_unit_disk()
            assert x * x + y * y < 1.0


class TestSeeding:
    """Tests for reproducibility and per-thread streams."""

    def test_seed_reproduces_stream(self):
        """Test reseeding replays the same draws."""
        sampling.seed(123)
        first = [sampling.canonical() for _ in range(10)]
        sampling.seed(123)
        second = [sampling.canonical() for _ in range(10)]
        assert first == second

    def test_threads_have_independent_generators(self):
        """Test a worker thread does not share the caller's generator."""
        main_generator = sampling.generator()
        seen = []

        def worker():
            seen.append(sampling.generator())

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert seen[0] is not main_generator

    def test_seeding_other_thread_does_not_disturb_caller(self):
        """Test seeding in a thread leaves the caller's stream intact."""
        sampling.seed(5)
        expected = [sampling.canonical() for _ in range(5)]

        sampling.seed(5)
        thread = threading.Thread(target=lambda: sampling.seed(99))
        thread.start()
        thread.join()
        actual = [sampling.canonical() for _ in range(5)]

        assert actual == expected

    def test_spawn_seeds_deterministic_and_distinct(self):
        """Test child seeds are reproducible and differ from each other."""
        seeds = sampling.spawn_seeds(42, 8)
        assert seeds == sampling.spawn_seeds(42, 8)
        assert len(set(seeds)) == 8
        assert all(isinstance(s, int) for s in seeds)
