"""Unit tests for the interval module."""

import math
import random

from pathtracer.core.interval import EMPTY, UNIVERSE, Interval


class TestIntervalMembership:
    """Tests for contains, surrounds and clamp."""

    def test_contains_is_closed(self):
        """Test contains includes both endpoints."""
        interval = Interval(1.0, 2.0)
        assert interval.contains(1.0)
        assert interval.contains(2.0)
        assert interval.contains(1.5)
        assert not interval.contains(0.999)
        assert not interval.contains(2.001)

    def test_surrounds_is_open(self):
        """Test surrounds excludes both endpoints."""
        interval = Interval(1.0, 2.0)
        assert not interval.surrounds(1.0)
        assert not interval.surrounds(2.0)
        assert interval.surrounds(1.5)

    def test_membership_random(self):
        """Test contains and surrounds against direct comparisons."""
        rng = random.Random(7)
        for _ in range(200):
            a, b = sorted((rng.uniform(-10, 10), rng.uniform(-10, 10)))
            v = rng.choice([a, b, rng.uniform(-12, 12)])
            interval = Interval(a, b)
            assert interval.contains(v) == (a <= v <= b)
            assert interval.surrounds(v) == (a < v < b)

    def test_clamp_in_range(self):
        """Test clamp always lands inside the interval."""
        rng = random.Random(8)
        interval = Interval(-1.0, 3.0)
        for _ in range(100):
            v = rng.uniform(-10, 10)
            assert interval.contains(interval.clamp(v))
        assert interval.clamp(-5.0) == -1.0
        assert interval.clamp(5.0) == 3.0
        assert interval.clamp(0.5) == 0.5


class TestIntervalCombine:
    """Tests for combine, expand and the special intervals."""

    def test_combine_encloses_both(self):
        """Test combine produces the enclosing interval."""
        assert Interval(0.0, 1.0).combine(Interval(2.0, 3.0)) == Interval(0.0, 3.0)
        assert Interval(-1.0, 5.0).combine(Interval(0.0, 1.0)) == Interval(-1.0, 5.0)

    def test_combine_commutative_and_associative(self):
        """Test combine is commutative and associative."""
        rng = random.Random(9)
        for _ in range(100):
            a, b, c = (
                Interval(*sorted((rng.uniform(-5, 5), rng.uniform(-5, 5))))
                for _ in range(3)
            )
            assert a.combine(b) == b.combine(a)
            assert a.combine(b).combine(c) == a.combine(b.combine(c))

    def test_empty_is_identity_for_combine(self):
        """Test combining with EMPTY leaves an interval unchanged."""
        interval = Interval(-2.0, 4.0)
        assert EMPTY.combine(interval) == interval
        assert interval.combine(EMPTY) == interval

    def test_empty_and_universe(self):
        """Test EMPTY contains nothing and UNIVERSE contains everything."""
        assert EMPTY.is_empty()
        assert not EMPTY.contains(0.0)
        assert UNIVERSE.contains(1e300)
        assert UNIVERSE.surrounds(-1e300)
        assert UNIVERSE.size() == math.inf

    def test_expand_pads_both_sides(self):
        """Test expand moves each bound by delta."""
        assert Interval(1.0, 2.0).expand(0.5) == Interval(0.5, 2.5)

    def test_default_is_empty(self):
        """Test the default interval is empty."""
        assert Interval() == EMPTY
