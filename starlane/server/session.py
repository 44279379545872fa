"""Game session management for browser play."""

import logging
import uuid
from dataclasses import dataclass

from ..engine.combat import AttackResult
from ..engine.movement import PathResult
from ..engine.session import GameSession
from ..models.board_object import BoardObject, Enemy
from ..models.ship import Component, Ship
from ..utils.constants import BOARD_SIZES, DEFAULT_DIFFICULTY

logger = logging.getLogger(__name__)


@dataclass
class ManagedGame:
    """One board being played through the API.

    Wraps a GameSession with its id and the settings it was created from,
    and converts its state to JSON-ready dicts.
    """

    id: str
    session: GameSession
    size: str
    seed: int

    def get_state(self) -> dict:
        """Serialize the full board and player state.

        Returns:
            Dictionary with lattice, objects, player and combat state
        """
        session = self.session
        lattice = session.lattice
        layout = session.layout
        return {
            "size": self.size,
            "columns": lattice.columns,
            "rows": lattice.rows,
            "difficulty": session.difficulty,
            "phase": session.phase.value,
            "loseReason": session.lose_reason.value if session.lose_reason else None,
            "position": session.position,
            "startVertex": session.start_vertex,
            "targetVertex": session.target_vertex,
            "movementPool": session.movement_pool,
            "diceValue": session.dice_value,
            "movesMade": session.moves_made,
            "visited": sorted(session.visited),
            "availableDirections": [
                {"direction": d.direction, "firstVertex": d.first_vertex}
                for d in session.available_directions()
            ],
            "vertices": [
                {"id": v.id, "x": v.x, "y": v.y, "kind": v.kind.value}
                for v in lattice.vertices.values()
            ],
            "hexCenters": [
                {"col": h.col, "row": h.row, "x": h.x, "y": h.y} for h in lattice.hex_centers
            ],
            "objects": [self._serialize_object(obj) for obj in layout.all_objects],
            "playerShip": self._serialize_ship(session.player_ship),
            "combat": self._serialize_combat(),
            "lastCombatOutcome": (
                session.last_combat_outcome.value if session.last_combat_outcome else None
            ),
        }

    def _serialize_object(self, obj: BoardObject) -> dict:
        data = {"id": obj.id, "kind": obj.kind.value, "vertex": obj.vertex_id, "value": obj.value}
        if isinstance(obj, Enemy):
            data.update(
                {
                    "facing": obj.facing,
                    "visionRange": obj.vision_range,
                    "zone": list(obj.zone),
                    "defeated": obj.defeated,
                }
            )
        return data

    def _serialize_ship(self, ship: Ship) -> dict:
        return {
            "name": ship.name,
            "powerLimit": ship.power_limit,
            "components": [self._serialize_component(c) for c in ship.components],
        }

    def _serialize_component(self, component: Component) -> dict:
        return {
            "name": component.name,
            "kind": component.kind.value,
            "currentHp": component.current_hp,
            "maxHp": component.max_hp,
            "powerCost": component.power_cost,
            "destroyed": component.destroyed,
        }

    def _serialize_combat(self) -> dict | None:
        combat = self.session.combat
        if combat is None:
            return None
        engine = combat.engine
        return {
            "enemyId": combat.enemy.id,
            "state": engine.state.value,
            "turn": engine.current_turn,
            "firstAttacker": combat.approach.first_attacker.value,
            "bonusAttacks": engine.bonus_attacks,
            "enemyShip": self._serialize_ship(engine.enemy_ship),
            "log": [
                {
                    "turn": entry.turn,
                    "attacker": entry.attacker.value,
                    "target": entry.target_component,
                    "roll": entry.roll,
                    "isHit": entry.is_hit,
                    "destroyed": entry.destroyed,
                }
                for entry in engine.turn_log
            ],
        }


def serialize_path(result: PathResult) -> dict:
    """Convert a PathResult to dict for API response."""
    engagement = result.engaged_enemy
    return {
        "path": result.path,
        "stoppedByObstacle": result.stopped_by_obstacle,
        "reachedTarget": result.reached_target,
        "hitBlackHole": result.hit_black_hole,
        "engagedEnemy": (
            {"vertexIndex": engagement.vertex_index, "enemyId": engagement.enemy_id}
            if engagement
            else None
        ),
    }


def serialize_attack(result: AttackResult) -> dict:
    """Convert an AttackResult to dict for API response."""
    return {
        "attacker": result.attacker.value,
        "roll": result.roll,
        "isHit": result.is_hit,
        "targetComponent": result.target_component,
        "destroyed": result.destroyed,
        "combatOver": result.combat_over,
        "result": result.result.value if result.result else None,
        "autoMiss": result.auto_miss,
    }


class GameSessionManager:
    """Manages all active games.

    In-memory storage; games are lost when the server restarts.
    """

    def __init__(self):
        self.sessions: dict[str, ManagedGame] = {}

    async def create_session(
        self,
        size: str = "small",
        difficulty: int = DEFAULT_DIFFICULTY,
        seed: int | None = None,
    ) -> ManagedGame:
        """Create a new game.

        Args:
            size: Board size preset ("small", "medium" or "large")
            difficulty: Difficulty 1-10
            seed: Optional RNG seed for determinism

        Returns:
            Newly created ManagedGame

        Raises:
            ValueError: If size or difficulty is invalid
        """
        if size not in BOARD_SIZES:
            raise ValueError(f"Invalid size: {size} (must be one of {list(BOARD_SIZES)})")
        columns, rows = BOARD_SIZES[size]

        game_id = f"game-{uuid.uuid4().hex[:8]}"

        # Always seed so a game can be replayed from its id's settings
        if seed is None:
            seed = uuid.uuid4().int % (2**32)

        session = GameSession.new(columns, rows, difficulty=difficulty, seed=seed)
        game = ManagedGame(id=game_id, session=session, size=size, seed=seed)
        self.sessions[game_id] = game

        logger.info(f"Created game {game_id}: size={size}, difficulty={difficulty}, seed={seed}")
        return game

    def get(self, game_id: str) -> ManagedGame | None:
        """Get a game by ID.

        Args:
            game_id: Game ID

        Returns:
            ManagedGame if found, None otherwise
        """
        return self.sessions.get(game_id)

    def delete(self, game_id: str) -> bool:
        """Delete a game.

        Args:
            game_id: Game ID

        Returns:
            True if deleted, False if not found
        """
        if game_id in self.sessions:
            del self.sessions[game_id]
            logger.info(f"Deleted game {game_id}")
            return True
        return False

    async def cleanup_all(self):
        """Clean up all sessions (called on shutdown)."""
        logger.info(f"Cleaning up {len(self.sessions)} game sessions")
        self.sessions.clear()
