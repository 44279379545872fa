"""Tests for the seeded RNG and geometry helpers."""

import pytest

from starlane.utils import GameRNG, opposite_direction, validate_direction
from starlane.utils.geometry import angle_deviation, lattice_to_pixel


class TestGameRNG:
    """Test deterministic randomness."""

    def test_same_seed_same_rolls(self):
        first = GameRNG(42)
        second = GameRNG(42)

        assert [first.roll_die() for _ in range(20)] == [second.roll_die() for _ in range(20)]

    def test_roll_die_range(self):
        rng = GameRNG(1)
        rolls = {rng.roll_die() for _ in range(200)}

        assert rolls == {1, 2, 3, 4, 5, 6}


class TestGeometry:
    """Test direction and lattice helpers."""

    def test_opposite_direction(self):
        assert [opposite_direction(d) for d in range(6)] == [3, 4, 5, 0, 1, 2]

    def test_validate_direction(self):
        validate_direction(0)
        validate_direction(5)
        for bad in (-1, 6, 1.0, True):
            with pytest.raises(ValueError, match="Invalid direction"):
                validate_direction(bad)

    def test_lattice_to_pixel(self):
        x, y = lattice_to_pixel(1, 1, 40)

        assert x == pytest.approx(20)
        assert y == pytest.approx(34.641016, rel=1e-6)

    def test_angle_deviation_wraps(self):
        assert angle_deviation(1, 0, 0) == pytest.approx(0)
        assert angle_deviation(1, -0.01, 0) == pytest.approx(0.5729, abs=1e-3)
        assert angle_deviation(-1, 0, 0) == pytest.approx(180)
