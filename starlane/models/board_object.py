"""Board object data models: obstacles, power-ups, black holes and enemies."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..utils.constants import ENEMY_VISION_RANGE, NUM_DIRECTIONS
from .ship import Ship


class BoardObjectKind(Enum):
    """Variants of objects that occupy a single vertex."""

    OBSTACLE = "obstacle"
    POWER_UP = "powerup"
    BLACK_HOLE = "blackhole"
    ENEMY = "enemy"


@dataclass
class BoardObject:
    """Base for every hazard or pickup on the board.

    Each object occupies exactly one vertex and carries a value (1-10)
    correlated with difficulty.
    """

    vertex_id: str
    value: int

    kind = BoardObjectKind.OBSTACLE

    def __post_init__(self):
        """Validate board object data after initialization."""
        if not self.vertex_id:
            raise ValueError("vertex_id cannot be empty")
        if not (1 <= self.value <= 10):
            raise ValueError(f"Invalid value: {self.value} (must be 1-10)")

    @property
    def id(self) -> str:
        return f"{self.kind.value}:{self.vertex_id}"

    @property
    def blocks_movement(self) -> bool:
        return self.kind in (BoardObjectKind.OBSTACLE, BoardObjectKind.ENEMY)


@dataclass
class Obstacle(BoardObject):
    """Blocks movement at its vertex."""

    kind = BoardObjectKind.OBSTACLE


@dataclass
class PowerUp(BoardObject):
    """Passive collectible; has no effect on movement."""

    kind = BoardObjectKind.POWER_UP


@dataclass
class BlackHole(BoardObject):
    """Does not block movement but ends the game when entered."""

    kind = BoardObjectKind.BLACK_HOLE


@dataclass
class Enemy(BoardObject):
    """Stationary sentry that blocks its own vertex and watches a ray.

    The engagement zone is the first vision_range vertices of the ray in
    the facing direction. The combat ship is created on first engagement
    and keeps its damage across encounters until the bridge is destroyed.
    """

    facing: int = 0  # Direction 0-5
    vision_range: int = 1  # 1-6
    zone: list[str] = field(default_factory=list)  # Engagement zone vertex ids
    ship: Optional[Ship] = None
    defeated: bool = False

    kind = BoardObjectKind.ENEMY

    def __post_init__(self):
        """Validate enemy data after initialization."""
        super().__post_init__()
        if not (0 <= self.facing < NUM_DIRECTIONS):
            raise ValueError(f"Invalid facing: {self.facing} (must be 0-5)")
        low, high = ENEMY_VISION_RANGE
        if not (low <= self.vision_range <= high):
            raise ValueError(
                f"Invalid vision_range: {self.vision_range} (must be {low}-{high})"
            )


def create_board_object(
    kind: BoardObjectKind,
    vertex_id: str,
    value: int,
    facing: int = 0,
    vision_range: int = 1,
) -> BoardObject:
    """Create a board object by kind.

    Args:
        kind: Which variant to build
        vertex_id: Vertex the object occupies
        value: Object value (1-10)
        facing: Facing direction, enemies only
        vision_range: Vision range, enemies only

    Returns:
        The new board object
    """
    if kind is BoardObjectKind.OBSTACLE:
        return Obstacle(vertex_id, value)
    if kind is BoardObjectKind.POWER_UP:
        return PowerUp(vertex_id, value)
    if kind is BoardObjectKind.BLACK_HOLE:
        return BlackHole(vertex_id, value)
    if kind is BoardObjectKind.ENEMY:
        return Enemy(vertex_id, value, facing=facing, vision_range=vision_range)
    raise ValueError(f"Unknown board object kind: {kind}")
