"""Board object placement with connectivity guarantee.

This module handles:
1. Difficulty-scaled budgets for obstacles and power-ups
2. Splitting the obstacle budget into plain obstacles, black holes and enemies
3. Enemy facing, vision range and engagement zone
4. Verifying the target stays reachable from the start (BFS), retrying
   placement a bounded number of times before giving up
"""

import logging
import math
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from ..models.board_object import BlackHole, BoardObject, Enemy, Obstacle, PowerUp
from ..utils.constants import (
    BLACK_HOLE_SHARE,
    DIFFICULTY_RANGE,
    ENEMY_MIN_DIFFICULTY,
    ENEMY_SHARE,
    ENEMY_VISION_RANGE,
    NUM_DIRECTIONS,
    OBSTACLE_PCT_RANGE,
    PLACEMENT_MAX_ATTEMPTS,
    POWERUP_PCT_RANGE,
)
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


class PlacementError(RuntimeError):
    """Raised when no board with a reachable target could be generated."""


@dataclass(frozen=True)
class PlacementCounts:
    """How many objects of each kind a board receives."""

    obstacles: int
    black_holes: int
    enemies: int
    power_ups: int

    @property
    def obstacle_budget(self) -> int:
        return self.obstacles + self.black_holes + self.enemies


@dataclass
class BoardLayout:
    """Result of placing objects on a lattice.

    Attributes:
        obstacles: Plain obstacles (block movement)
        power_ups: Collectibles (no movement effect)
        black_holes: Lethal on entry, do not block
        enemies: Sentries (block their own vertex, engage on their zone)
        blocking_set: Vertex ids that stop movement
        black_hole_set: Vertex ids of black holes
        enemy_zone_map: Zone vertex id -> id of the enemy that owns it
        attempts: Placement attempts used to find a connected board
    """

    obstacles: list[Obstacle] = field(default_factory=list)
    power_ups: list[PowerUp] = field(default_factory=list)
    black_holes: list[BlackHole] = field(default_factory=list)
    enemies: list[Enemy] = field(default_factory=list)
    blocking_set: set[str] = field(default_factory=set)
    black_hole_set: set[str] = field(default_factory=set)
    enemy_zone_map: dict[str, str] = field(default_factory=dict)
    attempts: int = 1

    @property
    def all_objects(self) -> list[BoardObject]:
        return [*self.obstacles, *self.black_holes, *self.enemies, *self.power_ups]

    @property
    def active_enemies(self) -> list[Enemy]:
        return [enemy for enemy in self.enemies if not enemy.defeated]

    @property
    def vision_budget_used(self) -> int:
        return sum(enemy_vision_cost(enemy.vision_range) for enemy in self.enemies)

    def object_at(self, vertex_id: str) -> Optional[BoardObject]:
        for obj in self.all_objects:
            if obj.vertex_id == vertex_id and not getattr(obj, "defeated", False):
                return obj
        return None

    def get_enemy(self, enemy_id: str) -> Enemy:
        """Look up an enemy by id.

        Raises:
            ValueError: If no enemy has that id
        """
        for enemy in self.enemies:
            if enemy.id == enemy_id:
                return enemy
        raise ValueError(f"Unknown enemy: {enemy_id}")

    def remove_enemy(self, enemy_id: str) -> Enemy:
        """Take a defeated enemy off the board.

        Its vertex stops blocking and its zone stops engaging. Zone
        vertices it shared with other enemies pass to the next owner.
        """
        enemy = self.get_enemy(enemy_id)
        enemy.defeated = True
        enemy.zone = []
        self.blocking_set.discard(enemy.vertex_id)
        self.rebuild_enemy_zone_map()
        return enemy

    def shrink_enemy_vision(self, enemy_id: str, rays: Mapping[str, list[list[str]]]) -> Enemy:
        """Reduce an enemy's vision to a single vertex after it flees."""
        enemy = self.get_enemy(enemy_id)
        enemy.vision_range = ENEMY_VISION_RANGE[0]
        enemy.zone = compute_enemy_zone(enemy.vertex_id, enemy.facing, enemy.vision_range, rays)
        self.rebuild_enemy_zone_map()
        return enemy

    def rebuild_enemy_zone_map(self) -> None:
        self.enemy_zone_map = build_enemy_zone_map(self.active_enemies)


def obstacle_percentage(difficulty: int) -> float:
    """Fraction of eligible vertices that receive obstacle-type objects."""
    low, high = OBSTACLE_PCT_RANGE
    return low + (difficulty - 1) * (high - low) / 9


def power_up_percentage(difficulty: int) -> float:
    """Fraction of eligible vertices that receive power-ups (falls with difficulty)."""
    low, high = POWERUP_PCT_RANGE
    return low + (difficulty - 1) * (high - low) / 9


def obstacle_value_range(difficulty: int) -> tuple[int, int]:
    return max(1, difficulty - 2), min(10, difficulty + 2)


def power_up_value_range(difficulty: int) -> tuple[int, int]:
    return max(1, 9 - difficulty), min(10, 13 - difficulty)


def enemy_vision_cost(vision_range: int) -> int:
    """Budget cost of an enemy's vision. Tunable; one unit per vertex seen."""
    return vision_range


def placement_counts(eligible_count: int, difficulty: int) -> PlacementCounts:
    """Compute object counts for a board.

    Args:
        eligible_count: Vertices available for objects (all but start/target)
        difficulty: Difficulty 1-10

    Returns:
        PlacementCounts with the obstacle budget split into its variants
    """
    total = math.floor(eligible_count * obstacle_percentage(difficulty))
    black_holes = math.floor(total * BLACK_HOLE_SHARE)
    enemies = math.floor(total * ENEMY_SHARE) if difficulty >= ENEMY_MIN_DIFFICULTY else 0
    obstacles = total - black_holes - enemies
    power_ups = math.floor(eligible_count * power_up_percentage(difficulty))
    # Power-ups only take what the obstacle budget left over
    power_ups = min(power_ups, eligible_count - total)
    return PlacementCounts(
        obstacles=obstacles, black_holes=black_holes, enemies=enemies, power_ups=power_ups
    )


def compute_enemy_zone(
    vertex_id: str, facing: int, vision_range: int, rays: Mapping[str, list[list[str]]]
) -> list[str]:
    """First vision_range vertices of the enemy's facing ray."""
    vertex_rays = rays.get(vertex_id)
    if not vertex_rays:
        return []
    return list(vertex_rays[facing][:vision_range])


def build_enemy_zone_map(enemies: Iterable[Enemy]) -> dict[str, str]:
    """Map zone vertices to enemy ids. The first enemy listed owns overlaps."""
    zone_map: dict[str, str] = {}
    for enemy in enemies:
        for vertex_id in enemy.zone:
            zone_map.setdefault(vertex_id, enemy.id)
    return zone_map


def adjacency_from_rays(rays: Mapping[str, list[list[str]]]) -> dict[str, list[str]]:
    """Recover the neighbor lists from the first vertex of every ray."""
    return {
        vertex_id: [ray[0] for ray in vertex_rays if ray]
        for vertex_id, vertex_rays in rays.items()
    }


def has_valid_path(
    adjacency: Mapping[str, list[str]], start: str, target: str, blocking: set[str]
) -> bool:
    """Check whether target is reachable from start avoiding blocking vertices.

    Args:
        adjacency: Vertex id -> neighbor ids
        start: Start vertex id
        target: Target vertex id
        blocking: Vertex ids that cannot be entered

    Returns:
        True if a path exists
    """
    if start == target:
        return True

    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency.get(current, []):
            if neighbor == target:
                return True
            if neighbor in visited or neighbor in blocking:
                continue
            visited.add(neighbor)
            queue.append(neighbor)
    return False


def generate_board_objects(
    vertices: Iterable[str],
    start: str,
    target: str,
    difficulty: int,
    rng: GameRNG,
    rays: Mapping[str, list[list[str]]],
    adjacency: Optional[Mapping[str, list[str]]] = None,
    max_attempts: int = PLACEMENT_MAX_ATTEMPTS,
) -> BoardLayout:
    """Place obstacles, black holes, enemies and power-ups on the board.

    Start and target never receive objects. Every returned layout keeps
    the target reachable from the start around the blocking set.

    Args:
        vertices: Vertex ids (a dict keyed by id works too)
        start: Start vertex id
        target: Target vertex id
        difficulty: Difficulty 1-10
        rng: Random source; all randomness comes from here
        rays: Vertex id -> 6 rays, used for enemy zones
        adjacency: Neighbor lists for the connectivity check; derived
            from the rays when omitted
        max_attempts: Placement attempts before giving up

    Returns:
        BoardLayout for the first connected placement

    Raises:
        ValueError: If difficulty is out of range or start/target is unknown
        PlacementError: If no connected placement was found
    """
    low, high = DIFFICULTY_RANGE
    if isinstance(difficulty, bool) or not isinstance(difficulty, int) or not (
        low <= difficulty <= high
    ):
        raise ValueError(f"Invalid difficulty: {difficulty!r} (must be {low}-{high})")

    vertex_ids = list(vertices)
    known = set(vertex_ids)
    if start not in known:
        raise ValueError(f"Unknown start vertex: {start}")
    if target not in known:
        raise ValueError(f"Unknown target vertex: {target}")

    if adjacency is None:
        adjacency = adjacency_from_rays(rays)

    for attempt in range(1, max_attempts + 1):
        layout = _place_objects(vertex_ids, start, target, difficulty, rng, rays)
        if has_valid_path(adjacency, start, target, layout.blocking_set):
            layout.attempts = attempt
            if attempt > 1:
                logger.info(f"Connected placement found on attempt {attempt}")
            return layout
        logger.warning(
            f"Placement attempt {attempt}/{max_attempts} left target {target} unreachable, retrying"
        )

    logger.error(f"No connected placement after {max_attempts} attempts (difficulty {difficulty})")
    raise PlacementError(
        f"Failed to place board objects with a path from {start} to {target} "
        f"after {max_attempts} attempts"
    )


def _place_objects(
    vertex_ids: list[str],
    start: str,
    target: str,
    difficulty: int,
    rng: GameRNG,
    rays: Mapping[str, list[list[str]]],
) -> BoardLayout:
    """One placement attempt, without the connectivity check."""
    eligible = [vertex_id for vertex_id in vertex_ids if vertex_id not in (start, target)]
    rng.shuffle(eligible)
    counts = placement_counts(len(eligible), difficulty)
    slots = iter(eligible)

    value_low, value_high = obstacle_value_range(difficulty)
    layout = BoardLayout()

    for _ in range(counts.obstacles):
        layout.obstacles.append(Obstacle(next(slots), rng.randint(value_low, value_high)))

    for _ in range(counts.black_holes):
        layout.black_holes.append(BlackHole(next(slots), rng.randint(value_low, value_high)))

    vision_low, vision_high = ENEMY_VISION_RANGE
    for _ in range(counts.enemies):
        vertex_id = next(slots)
        enemy = Enemy(
            vertex_id,
            rng.randint(value_low, value_high),
            facing=rng.randint(0, NUM_DIRECTIONS - 1),
            vision_range=rng.randint(vision_low, vision_high),
        )
        enemy.zone = compute_enemy_zone(vertex_id, enemy.facing, enemy.vision_range, rays)
        layout.enemies.append(enemy)

    power_low, power_high = power_up_value_range(difficulty)
    for _ in range(counts.power_ups):
        layout.power_ups.append(PowerUp(next(slots), rng.randint(power_low, power_high)))

    layout.blocking_set = {obj.vertex_id for obj in layout.obstacles} | {
        enemy.vertex_id for enemy in layout.enemies
    }
    layout.black_hole_set = {hole.vertex_id for hole in layout.black_holes}
    layout.rebuild_enemy_zone_map()
    return layout
