"""Single-board game session.

This module handles:
1. Setting up a board: lattice, start/target choice, object placement
   and the movement pool
2. The turn loop: roll -> select direction -> move, with win/lose checks
   after each move (black hole, target, exhausted pool, trapped)
3. Handing enemy engagements to the combat engine and applying the
   combat outcome back to the board

GameSession is the only place that holds mutable game state; the lattice,
placement and movement functions it calls stay pure.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..models.board_object import Enemy
from ..models.ship import Ship, create_enemy_ship, standard_player_ship
from ..utils.constants import DEFAULT_DIFFICULTY, DEFAULT_HEX_SIZE, MOVEMENT_POOL_FACTOR
from ..utils.geometry import euclidean_distance
from ..utils.rng import GameRNG
from .combat import (
    ApproachAdvantage,
    AttackResult,
    CombatEngine,
    CombatOutcome,
    get_approach_advantage,
)
from .lattice import Lattice, generate_lattice
from .movement import (
    AvailableDirection,
    PathResult,
    compute_path,
    get_available_directions,
    is_trapped,
)
from .placement import BoardLayout, generate_board_objects

logger = logging.getLogger(__name__)


class GameStateError(RuntimeError):
    """Raised when an action is attempted in the wrong game phase."""


class GamePhase(Enum):
    ROLLING = "rolling"
    SELECTING_DIRECTION = "selecting_direction"
    COMBAT = "combat"
    WON = "won"
    LOST = "lost"


class LoseReason(Enum):
    BLACK_HOLE = "black_hole"
    ENEMY = "enemy"
    TRAPPED = "trapped"
    EXHAUSTED = "exhausted"


@dataclass
class PendingCombat:
    """An engagement in progress.

    Attributes:
        engine: Combat engine resolving the duel
        enemy: Enemy being fought
        pre_move_position: Vertex the player moved from
        path: Path of the interrupted move, ending at the engagement vertex
        direction: Direction of the interrupted move
    """

    engine: CombatEngine
    enemy: Enemy
    pre_move_position: str
    path: list[str]
    direction: int

    @property
    def approach(self) -> ApproachAdvantage:
        return self.engine.approach


def choose_endpoints(lattice: Lattice) -> tuple[str, str]:
    """Pick start and target vertices far apart.

    Start is the vertex farthest from the first hex center; target is the
    vertex farthest from start. Ties go to the earliest generated vertex.

    Returns:
        Tuple of (start_id, target_id)
    """
    origin = lattice.hex_centers[0]
    vertices = list(lattice.vertices.values())
    start = max(vertices, key=lambda v: euclidean_distance(origin.x, origin.y, v.x, v.y))
    target = max(
        (v for v in vertices if v.id != start.id),
        key=lambda v: euclidean_distance(start.x, start.y, v.x, v.y),
    )
    return start.id, target.id


@dataclass
class GameSession:
    """Mutable state of one board being played."""

    lattice: Lattice
    layout: BoardLayout
    start_vertex: str
    target_vertex: str
    difficulty: int
    rng: GameRNG
    player_ship: Ship = field(default_factory=standard_player_ship)
    position: str = ""
    movement_pool: int = 0
    dice_value: Optional[int] = None
    phase: GamePhase = GamePhase.ROLLING
    lose_reason: Optional[LoseReason] = None
    visited: set[str] = field(default_factory=set)
    moves_made: int = 0
    combat: Optional[PendingCombat] = None
    last_combat_outcome: Optional[CombatOutcome] = None

    def __post_init__(self):
        """Place the player on the start vertex."""
        if not self.position:
            self.position = self.start_vertex
        self.visited.add(self.position)

    @classmethod
    def new(
        cls,
        columns: int,
        rows: int,
        difficulty: int = DEFAULT_DIFFICULTY,
        seed: Optional[int] = None,
        hex_size: float = DEFAULT_HEX_SIZE,
    ) -> "GameSession":
        """Generate a fresh board and session.

        The same (columns, rows, difficulty, seed) always produces the same
        board; a seed of None plays non-deterministically.

        Args:
            columns: Hex columns
            rows: Hex rows
            difficulty: Difficulty 1-10
            seed: RNG seed for placement, dice and combat
            hex_size: Pixel spacing of the lattice

        Returns:
            New GameSession in the rolling phase

        Raises:
            ValueError: If dimensions or difficulty are invalid
            PlacementError: If no connected board could be generated
        """
        lattice = generate_lattice(columns, rows, hex_size)
        start, target = choose_endpoints(lattice)
        rng = GameRNG(seed)
        layout = generate_board_objects(
            lattice.vertices,
            start,
            target,
            difficulty,
            rng,
            lattice.rays,
            adjacency=lattice.adjacency,
        )
        session = cls(
            lattice=lattice,
            layout=layout,
            start_vertex=start,
            target_vertex=target,
            difficulty=difficulty,
            rng=rng,
            movement_pool=(columns + rows) * MOVEMENT_POOL_FACTOR,
        )
        logger.info(
            f"New {columns}x{rows} board (difficulty {difficulty}, seed {seed}): "
            f"{len(lattice.vertices)} vertices, {len(layout.all_objects)} objects, "
            f"start {start}, target {target}"
        )
        return session

    @property
    def game_over(self) -> bool:
        return self.phase in (GamePhase.WON, GamePhase.LOST)

    def available_directions(self) -> list[AvailableDirection]:
        return get_available_directions(self.position, self.lattice.rays, self.layout.blocking_set)

    def roll_dice(self) -> Optional[int]:
        """Roll the movement die, capped to the remaining pool.

        Returns:
            Effective roll, or None if the player turned out to be trapped
            (the game is then lost)

        Raises:
            GameStateError: If not in the rolling phase
        """
        self._require_phase(GamePhase.ROLLING)
        if is_trapped(self.position, self.lattice.rays, self.layout.blocking_set):
            self._lose(LoseReason.TRAPPED)
            return None
        self.dice_value = min(self.rng.roll_die(), self.movement_pool)
        self.phase = GamePhase.SELECTING_DIRECTION
        return self.dice_value

    def preview(self, direction: int) -> PathResult:
        """Compute the path the current roll would take in a direction.

        Raises:
            GameStateError: If no roll is waiting for a direction
        """
        self._require_phase(GamePhase.SELECTING_DIRECTION)
        return compute_path(
            self.position,
            direction,
            min(self.dice_value, self.movement_pool),
            self.layout.blocking_set,
            self.target_vertex,
            self.lattice.rays,
            black_hole_set=self.layout.black_hole_set,
            enemy_zone_map=self.layout.enemy_zone_map,
        )

    def move(self, direction: int) -> PathResult:
        """Move along direction for the current roll.

        Entering an enemy zone starts combat and leaves the player where
        they were until combat resolves.

        Raises:
            GameStateError: If no roll is waiting or the direction is blocked
        """
        result = self.preview(direction)
        if not result.path:
            raise GameStateError(f"Direction {direction} is blocked from {self.position}")

        if result.engaged_enemy is not None:
            self._start_combat(result, direction)
            return result

        self._advance(result.path)

        if result.hit_black_hole:
            self._lose(LoseReason.BLACK_HOLE)
        elif result.reached_target:
            self._win()
        else:
            self._end_turn()
        return result

    def combat_attack(self, target_component_name: str) -> AttackResult:
        attack = self._require_combat().engine.execute_player_attack(target_component_name)
        self._resolve_if_over()
        return attack

    def combat_enemy_turn(self) -> AttackResult:
        attack = self._require_combat().engine.execute_enemy_attack()
        self._resolve_if_over()
        return attack

    def combat_escape(self) -> AttackResult:
        attack = self._require_combat().engine.escape()
        self._resolve_if_over()
        return attack

    def resolve_combat(self) -> None:
        """Apply the outcome of the finished combat to the board.

        player_destroyed ends the game. player_win removes the enemy and
        enemy_fled shrinks its vision; both leave the player on the
        engagement vertex. player_lose and escaped send the player back to
        where the move started. Steps up to the engagement vertex are
        spent in every surviving case.

        Raises:
            GameStateError: If no combat is in progress or it has not
                concluded yet
        """
        combat = self._require_combat()
        if not combat.engine.combat_over:
            raise GameStateError(
                f"Combat with {combat.enemy.id} is still in progress ({combat.engine.state.value})"
            )
        outcome = combat.engine.result
        self.combat = None
        self.last_combat_outcome = outcome
        logger.info(f"Combat with {combat.enemy.id} resolved: {outcome.value}")

        if outcome is CombatOutcome.PLAYER_DESTROYED:
            self._lose(LoseReason.ENEMY)
            return

        if outcome is CombatOutcome.PLAYER_WIN:
            self.layout.remove_enemy(combat.enemy.id)
        elif outcome is CombatOutcome.ENEMY_FLED:
            self.layout.shrink_enemy_vision(combat.enemy.id, self.lattice.rays)

        if outcome in (CombatOutcome.PLAYER_WIN, CombatOutcome.ENEMY_FLED):
            self._advance(combat.path)
            if self.position == self.target_vertex:
                self._win()
                return
        else:
            self.position = combat.pre_move_position
            self.movement_pool -= len(combat.path)
            self.moves_made += 1

        self._end_turn()

    def _start_combat(self, result: PathResult, direction: int) -> None:
        enemy = self.layout.get_enemy(result.engaged_enemy.enemy_id)
        if enemy.ship is None:
            enemy.ship = create_enemy_ship()
        engine = CombatEngine(
            self.player_ship,
            enemy.ship,
            rng=self.rng,
            approach=get_approach_advantage(direction, enemy.facing),
        )
        self.combat = PendingCombat(
            engine=engine,
            enemy=enemy,
            pre_move_position=self.position,
            path=list(result.path),
            direction=direction,
        )
        self.phase = GamePhase.COMBAT
        logger.info(
            f"Engaged {enemy.id} at {result.final_vertex}, "
            f"{engine.approach.first_attacker.value} attacks first"
        )

    def _resolve_if_over(self) -> None:
        if self.combat.engine.combat_over:
            self.resolve_combat()

    def _advance(self, path: list[str]) -> None:
        self.position = path[-1]
        self.visited.update(path)
        self.movement_pool -= len(path)
        self.moves_made += 1

    def _end_turn(self) -> None:
        """After a move: lose on an empty pool or when trapped, else roll again."""
        self.dice_value = None
        if self.movement_pool <= 0:
            self._lose(LoseReason.EXHAUSTED)
        elif is_trapped(self.position, self.lattice.rays, self.layout.blocking_set):
            self._lose(LoseReason.TRAPPED)
        else:
            self.phase = GamePhase.ROLLING

    def _win(self) -> None:
        self.dice_value = None
        self.phase = GamePhase.WON
        logger.info(f"Target reached after {self.moves_made} moves")

    def _lose(self, reason: LoseReason) -> None:
        self.dice_value = None
        self.phase = GamePhase.LOST
        self.lose_reason = reason
        logger.info(f"Game lost: {reason.value} at {self.position}")

    def _require_phase(self, phase: GamePhase) -> None:
        if self.phase is not phase:
            raise GameStateError(
                f"Cannot do that in phase {self.phase.value} (requires {phase.value})"
            )

    def _require_combat(self) -> PendingCombat:
        self._require_phase(GamePhase.COMBAT)
        return self.combat
