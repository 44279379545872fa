"""Tests for movement along rays."""

import pytest

from starlane.engine.lattice import generate_lattice
from starlane.engine.movement import (
    Engagement,
    compute_path,
    get_available_directions,
    is_trapped,
)

# "p" has one long ray east (0) and a one-step ray west (3)
RAYS = {
    "p": [["a", "b", "c", "d", "e"], [], [], ["w"], [], []],
}


def _path(max_steps=6, blocking=None, target="zz", black_holes=None, zones=None):
    return compute_path(
        "p",
        0,
        max_steps,
        blocking or set(),
        target,
        RAYS,
        black_hole_set=black_holes,
        enemy_zone_map=zones,
    )


class TestComputePath:
    """Test the per-step precedence of a walk."""

    def test_walks_up_to_max_steps(self):
        result = _path(max_steps=3)

        assert result.path == ["a", "b", "c"]
        assert not result.stopped_by_obstacle
        assert not result.reached_target
        assert result.final_vertex == "c"
        assert result.steps == 3

    def test_stops_at_ray_end(self):
        """Test a roll longer than the ray stops at the board edge."""
        result = _path(max_steps=6)

        assert result.path == ["a", "b", "c", "d", "e"]

    def test_obstacle_excluded(self):
        """Test an obstacle stops the walk before it."""
        result = _path(blocking={"c"})

        assert result.path == ["a", "b"]
        assert result.stopped_by_obstacle
        assert "c" not in result.path

    def test_black_hole_included(self):
        """Test a black hole is entered and ends the walk."""
        result = _path(black_holes={"b"})

        assert result.path == ["a", "b"]
        assert result.hit_black_hole
        assert result.engaged_enemy is None

    def test_enemy_zone_included(self):
        """Test an enemy zone is entered and engages."""
        result = _path(zones={"c": "enemy:x"})

        assert result.path == ["a", "b", "c"]
        assert result.engaged_enemy == Engagement(vertex_index=2, enemy_id="enemy:x")

    def test_target_stops_early(self):
        result = _path(target="b")

        assert result.path == ["a", "b"]
        assert result.reached_target

    def test_black_hole_beats_target(self):
        """Test hazard death wins over reaching a target on the same vertex."""
        result = _path(target="b", black_holes={"b"}, zones={"b": "enemy:x"})

        assert result.hit_black_hole
        assert not result.reached_target
        assert result.engaged_enemy is None

    def test_enemy_zone_beats_target(self):
        result = _path(target="b", zones={"b": "enemy:x"})

        assert result.engaged_enemy is not None
        assert not result.reached_target

    def test_obstacle_beats_hazards(self):
        result = _path(blocking={"b"}, black_holes={"b"}, zones={"b": "enemy:x"})

        assert result.path == ["a"]
        assert result.stopped_by_obstacle
        assert not result.hit_black_hole

    def test_empty_hazards_same_as_omitted(self):
        """Test empty hazard collections behave like no hazards at all."""
        with_empty = _path(blocking={"d"}, target="c", black_holes=set(), zones={})
        omitted = compute_path("p", 0, 6, {"d"}, "c", RAYS)

        assert with_empty == omitted

    def test_inputs_not_mutated(self):
        blocking = {"d"}
        black_holes = {"c"}
        zones = {"e": "enemy:x"}

        _path(blocking=blocking, black_holes=black_holes, zones=zones)

        assert blocking == {"d"}
        assert black_holes == {"c"}
        assert zones == {"e": "enemy:x"}

    def test_zero_steps(self):
        assert _path(max_steps=0).path == []

    def test_empty_ray(self):
        result = compute_path("p", 1, 6, set(), "zz", RAYS)
        assert result.path == []

    def test_invalid_inputs(self):
        with pytest.raises(ValueError, match="Unknown vertex"):
            compute_path("nowhere", 0, 3, set(), "zz", RAYS)
        with pytest.raises(ValueError, match="Invalid direction"):
            compute_path("p", 6, 3, set(), "zz", RAYS)
        with pytest.raises(ValueError, match="Invalid max_steps"):
            compute_path("p", 0, -1, set(), "zz", RAYS)


class TestAvailableDirections:
    """Test open direction queries."""

    def test_only_non_empty_rays(self):
        directions = get_available_directions("p", RAYS, set())

        assert [d.direction for d in directions] == [0, 3]
        assert directions[0].first_vertex == "a"

    def test_blocked_first_vertex_excluded(self):
        directions = get_available_directions("p", RAYS, {"w"})

        assert [d.direction for d in directions] == [0]

    def test_blocked_later_vertex_still_open(self):
        directions = get_available_directions("p", RAYS, {"b"})

        assert [d.direction for d in directions] == [0, 3]

    def test_unknown_vertex(self):
        with pytest.raises(ValueError, match="Unknown vertex"):
            get_available_directions("nowhere", RAYS, set())


class TestIsTrapped:
    """Test trapped detection."""

    def test_trapped_when_all_blocked(self):
        assert is_trapped("p", RAYS, {"a", "w"})

    def test_not_trapped(self):
        assert not is_trapped("p", RAYS, {"a"})

    def test_trapped_in_single_hex(self):
        """Test a center surrounded by obstacles cannot move."""
        lattice = generate_lattice(1, 1)
        corners = set(lattice.adjacency["c:0,0"])

        assert is_trapped("c:0,0", lattice.rays, corners)
        assert not is_trapped("c:0,0", lattice.rays, corners - {"2,0"})


class TestPathOnLattice:
    """Test walking real lattice rays."""

    def test_path_never_enters_blocking_vertex(self):
        lattice = generate_lattice(5, 4)
        blocking = {vid for i, vid in enumerate(lattice.vertices) if i % 5 == 0}

        for vertex_id in lattice.vertices:
            for direction in range(6):
                result = compute_path(vertex_id, direction, 6, blocking, "none", lattice.rays)
                assert not set(result.path) & blocking
                assert result.path == lattice.rays[vertex_id][direction][: len(result.path)]
