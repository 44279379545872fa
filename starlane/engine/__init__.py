"""Game engine components."""

from .combat import (
    ApproachAdvantage,
    AttackResult,
    CombatActionError,
    CombatEngine,
    CombatOutcome,
    CombatState,
    get_approach_advantage,
    get_approach_position,
)
from .galaxy import generate_galaxy, is_galaxy_complete, record_result, unlock_adjacent
from .lattice import Lattice, generate_lattice
from .movement import (
    AvailableDirection,
    Engagement,
    PathResult,
    compute_path,
    get_available_directions,
    is_trapped,
)
from .placement import BoardLayout, PlacementError, generate_board_objects, has_valid_path
from .session import GamePhase, GameSession, GameStateError, LoseReason

__all__ = [
    "ApproachAdvantage",
    "AttackResult",
    "CombatActionError",
    "CombatEngine",
    "CombatOutcome",
    "CombatState",
    "get_approach_advantage",
    "get_approach_position",
    "generate_galaxy",
    "is_galaxy_complete",
    "record_result",
    "unlock_adjacent",
    "Lattice",
    "generate_lattice",
    "AvailableDirection",
    "Engagement",
    "PathResult",
    "compute_path",
    "get_available_directions",
    "is_trapped",
    "BoardLayout",
    "PlacementError",
    "generate_board_objects",
    "has_valid_path",
    "GamePhase",
    "GameSession",
    "GameStateError",
    "LoseReason",
]
