"""Movement along directional rays.

This module handles:
1. Which of the 6 directions are open from a position
2. Walking a ray for a dice roll with per-step precedence:
   obstacle (stop before) > black hole (enter, stop) >
   enemy zone (enter, engage) > target (enter, win)
3. Detecting a trapped player

All functions are pure: they never mutate the sets or maps passed in.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from ..utils.constants import NUM_DIRECTIONS
from ..utils.geometry import validate_direction


@dataclass(frozen=True)
class AvailableDirection:
    """An open direction and the vertex a move would enter first."""

    direction: int
    first_vertex: str


@dataclass(frozen=True)
class Engagement:
    """Where along a path an enemy zone was entered.

    Attributes:
        vertex_index: Index in the path of the zone vertex (always the last)
        enemy_id: Id of the enemy owning that zone vertex
    """

    vertex_index: int
    enemy_id: str


@dataclass
class PathResult:
    """Outcome of walking a ray.

    Attributes:
        path: Vertices entered, in order (excludes the starting position)
        stopped_by_obstacle: Walk ended in front of a blocking vertex
        reached_target: Last vertex is the target
        hit_black_hole: Last vertex is a black hole
        engaged_enemy: Set when the last vertex is in an enemy zone
    """

    path: list[str] = field(default_factory=list)
    stopped_by_obstacle: bool = False
    reached_target: bool = False
    hit_black_hole: bool = False
    engaged_enemy: Optional[Engagement] = None

    @property
    def final_vertex(self) -> Optional[str]:
        return self.path[-1] if self.path else None

    @property
    def steps(self) -> int:
        return len(self.path)


def _rays_for(position: str, rays: Mapping[str, list[list[str]]]) -> list[list[str]]:
    vertex_rays = rays.get(position)
    if vertex_rays is None:
        raise ValueError(f"Unknown vertex: {position}")
    return vertex_rays


def get_available_directions(
    position: str, rays: Mapping[str, list[list[str]]], blocking_set: set[str]
) -> list[AvailableDirection]:
    """List directions whose first vertex exists and does not block.

    Black holes and enemy zones do not close a direction.

    Args:
        position: Current vertex id
        rays: Vertex id -> 6 rays
        blocking_set: Vertex ids that stop movement

    Returns:
        Open directions in ascending order

    Raises:
        ValueError: If position is not a lattice vertex
    """
    vertex_rays = _rays_for(position, rays)
    available = []
    for direction in range(NUM_DIRECTIONS):
        ray = vertex_rays[direction]
        if ray and ray[0] not in blocking_set:
            available.append(AvailableDirection(direction=direction, first_vertex=ray[0]))
    return available


def compute_path(
    position: str,
    direction: int,
    max_steps: int,
    blocking_set: set[str],
    target_vertex: str,
    rays: Mapping[str, list[list[str]]],
    black_hole_set: Optional[set[str]] = None,
    enemy_zone_map: Optional[Mapping[str, str]] = None,
) -> PathResult:
    """Walk the ray from position in direction for up to max_steps vertices.

    Args:
        position: Current vertex id
        direction: Direction 0-5
        max_steps: Step budget (dice roll capped to the movement pool)
        blocking_set: Vertex ids that stop movement before entry
        target_vertex: Vertex id that wins when entered
        rays: Vertex id -> 6 rays
        black_hole_set: Vertex ids that end the game when entered
        enemy_zone_map: Zone vertex id -> enemy id, engages when entered

    Returns:
        PathResult describing the realized walk

    Raises:
        ValueError: If position is unknown, direction is not 0-5 or
            max_steps is negative
    """
    validate_direction(direction)
    if max_steps < 0:
        raise ValueError(f"Invalid max_steps: {max_steps} (must be >= 0)")
    ray = _rays_for(position, rays)[direction]
    black_holes = black_hole_set or set()
    zones = enemy_zone_map or {}

    result = PathResult()
    for vertex_id in ray[:max_steps]:
        if vertex_id in blocking_set:
            result.stopped_by_obstacle = True
            break

        result.path.append(vertex_id)

        if vertex_id in black_holes:
            result.hit_black_hole = True
            break
        if vertex_id in zones:
            result.engaged_enemy = Engagement(
                vertex_index=len(result.path) - 1, enemy_id=zones[vertex_id]
            )
            break
        if vertex_id == target_vertex:
            result.reached_target = True
            break

    return result


def is_trapped(
    position: str, rays: Mapping[str, list[list[str]]], blocking_set: set[str]
) -> bool:
    """True if no direction is open from position."""
    return not get_available_directions(position, rays, blocking_set)
