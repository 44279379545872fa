"""Turn-based ship combat.

This module handles:
1. Approach advantage (who opens, bonus attacks) from entry direction
   versus enemy facing
2. Player and enemy attacks: d6 roll against weapon accuracy, damage to
   a single component
3. Turn alternation and the termination check, evaluated after every
   attack in this order:
   - Enemy bridge destroyed -> player_win (wins ties)
   - Player bridge destroyed -> player_destroyed
   - Every player component destroyed -> player_destroyed
   - Enemy weapons and engines destroyed, bridge intact -> enemy_fled
   - Both sides used their turn limit -> player_lose
4. Escape, available on any player turn
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..models.ship import Component, Ship, ShipSide
from ..utils.constants import DEFAULT_HIT_THRESHOLD, DEFAULT_MAX_TURNS, DIE_SIDES, NUM_DIRECTIONS
from ..utils.geometry import opposite_direction, validate_direction
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)


class CombatActionError(RuntimeError):
    """Raised when a combat action is not allowed in the current state."""


class CombatOutcome(Enum):
    PLAYER_WIN = "player_win"
    PLAYER_DESTROYED = "player_destroyed"
    PLAYER_LOSE = "player_lose"
    ENEMY_FLED = "enemy_fled"
    ESCAPED = "escaped"


class CombatState(Enum):
    AWAITING_PLAYER = "awaiting_player_action"
    AWAITING_ENEMY = "awaiting_enemy_action"
    CONCLUDED = "concluded"


@dataclass(frozen=True)
class ApproachAdvantage:
    """Opening order of a combat.

    Attributes:
        first_attacker: Side that attacks first
        bonus_attacks: Extra player attacks before the enemy's first turn
    """

    first_attacker: ShipSide = ShipSide.PLAYER
    bonus_attacks: int = 0


@dataclass
class AttackResult:
    """Result of a single combat action.

    Attributes:
        attacker: Side that acted
        roll: Die roll (0 for an escape)
        is_hit: Whether the attack hit
        target_component: Name of the targeted component, if any
        destroyed: Whether this hit destroyed the target
        combat_over: Whether combat concluded after this action
        result: Final outcome once combat is over
        auto_miss: Enemy could not attack, so the roll was a forced miss
    """

    attacker: ShipSide
    roll: int
    is_hit: bool
    target_component: Optional[str]
    destroyed: bool
    combat_over: bool
    result: Optional[CombatOutcome] = None
    auto_miss: bool = False


@dataclass
class CombatLogEntry:
    """One line of the combat log."""

    turn: int
    attacker: ShipSide
    target_component: Optional[str]
    roll: int
    is_hit: bool
    destroyed: bool
    bonus: bool = False
    auto_miss: bool = False


def get_approach_advantage(player_direction: int, enemy_facing: int) -> ApproachAdvantage:
    """Work out who opens combat from the approach angle.

    Args:
        player_direction: Direction the player moved in (0-5)
        enemy_facing: Direction the enemy faces (0-5)

    Returns:
        ApproachAdvantage: enemy first when met head-on, player first with
        one bonus attack from directly behind, player first otherwise
    """
    validate_direction(player_direction)
    validate_direction(enemy_facing)
    if player_direction == opposite_direction(enemy_facing):
        return ApproachAdvantage(first_attacker=ShipSide.ENEMY)
    if player_direction == enemy_facing:
        return ApproachAdvantage(first_attacker=ShipSide.PLAYER, bonus_attacks=1)
    return ApproachAdvantage(first_attacker=ShipSide.PLAYER)


def get_approach_position(player_direction: int, enemy_facing: int) -> int:
    """Classify the approach relative to the enemy's facing.

    Positions run 1-6 around the enemy: 1 is in front of it (head-on),
    4 is directly behind it.

    Args:
        player_direction: Direction the player moved in (0-5)
        enemy_facing: Direction the enemy faces (0-5)

    Returns:
        Position 1-6
    """
    validate_direction(player_direction)
    validate_direction(enemy_facing)
    return (player_direction - enemy_facing + 3) % NUM_DIRECTIONS + 1


class CombatEngine:
    """Duel between the player ship and one enemy ship.

    Ships are mutated in place: component damage persists after combat.
    All dice rolls and enemy target picks come from the injected RNG.
    """

    def __init__(
        self,
        player_ship: Ship,
        enemy_ship: Ship,
        rng: Optional[GameRNG] = None,
        max_turns: int = DEFAULT_MAX_TURNS,
        hit_threshold: int = DEFAULT_HIT_THRESHOLD,
        approach: Optional[ApproachAdvantage] = None,
    ):
        """Set up combat.

        Args:
            player_ship: The player's ship
            enemy_ship: The engaged enemy's ship
            rng: Random source (non-deterministic when omitted)
            max_turns: Attacks per side before the player is forced back
            hit_threshold: Roll needed to hit for a ship without weapons
            approach: Opening order (player first, no bonus when omitted)

        Raises:
            ValueError: If max_turns or hit_threshold is out of range
        """
        if max_turns < 1:
            raise ValueError(f"Invalid max_turns: {max_turns} (must be >= 1)")
        if not (1 <= hit_threshold <= DIE_SIDES):
            raise ValueError(f"Invalid hit_threshold: {hit_threshold} (must be 1-{DIE_SIDES})")

        self.player_ship = player_ship
        self.enemy_ship = enemy_ship
        self.rng = rng if rng is not None else GameRNG()
        self.max_turns = max_turns
        self.hit_threshold = hit_threshold
        self.approach = approach if approach is not None else ApproachAdvantage()

        self.state = (
            CombatState.AWAITING_ENEMY
            if self.approach.first_attacker is ShipSide.ENEMY
            else CombatState.AWAITING_PLAYER
        )
        self.bonus_attacks = self.approach.bonus_attacks
        self.player_attacks = 0  # Bonus attacks not included
        self.enemy_attacks = 0
        self.result: Optional[CombatOutcome] = None
        self.turn_log: list[CombatLogEntry] = []

    @property
    def current_turn(self) -> int:
        """Full rounds completed plus one."""
        return min(self.player_attacks, self.enemy_attacks) + 1

    @property
    def combat_over(self) -> bool:
        return self.state is CombatState.CONCLUDED

    @property
    def is_player_turn(self) -> bool:
        return self.state is CombatState.AWAITING_PLAYER

    def roll_attack(self, ship: Ship) -> tuple[int, bool]:
        """Roll a d6 for ship's attack.

        Returns:
            Tuple of (roll, is_hit). The active weapon's accuracy sets the
            threshold; hit_threshold applies when the ship has no weapon.
        """
        roll = self.rng.roll_die()
        weapon = ship.active_weapon
        threshold = weapon.stats.accuracy if weapon is not None else self.hit_threshold
        return roll, roll >= threshold

    def execute_player_attack(self, target_component_name: str) -> AttackResult:
        """Fire the player's active weapon at a named enemy component.

        Args:
            target_component_name: Enemy component to target; hitting an
                already destroyed component is a wasted shot

        Returns:
            AttackResult for this attack

        Raises:
            CombatActionError: If combat is over, it is the enemy's turn,
                the player cannot attack or the target does not exist
        """
        self._require_player_turn()
        if not self.player_ship.can_attack:
            raise CombatActionError("Player ship has no active weapon; escape is the only option")
        target = self.enemy_ship.get_component(target_component_name)
        if target is None:
            raise CombatActionError(
                f"Enemy ship has no component named {target_component_name!r}"
            )

        weapon = self.player_ship.active_weapon
        roll, is_hit = self.roll_attack(self.player_ship)
        destroyed = target.take_damage(weapon.stats.damage) if is_hit else False

        turn = self.current_turn
        bonus = self.bonus_attacks > 0
        if bonus:
            self.bonus_attacks -= 1
        else:
            self.player_attacks += 1
            self.state = CombatState.AWAITING_ENEMY

        self.turn_log.append(
            CombatLogEntry(
                turn=turn,
                attacker=ShipSide.PLAYER,
                target_component=target.name,
                roll=roll,
                is_hit=is_hit,
                destroyed=destroyed,
                bonus=bonus,
            )
        )
        logger.debug(
            f"Player attacks {target.name}: roll {roll}, "
            f"{'hit' if is_hit else 'miss'}{', destroyed' if destroyed else ''}"
        )
        return self._finish_attack(ShipSide.PLAYER, roll, is_hit, target.name, destroyed)

    def execute_enemy_attack(self) -> AttackResult:
        """Resolve the enemy's attack on a random active player component.

        A disarmed enemy still rolls, but the attack is a forced miss.

        Returns:
            AttackResult for this attack

        Raises:
            CombatActionError: If combat is over or it is the player's turn
        """
        if self.combat_over:
            raise CombatActionError("Combat is already over")
        if self.is_player_turn:
            raise CombatActionError("It is the player's turn")

        target: Optional[Component] = None
        auto_miss = not self.enemy_ship.can_attack
        targets = self.player_ship.active_components
        if not auto_miss and targets:
            target = self.rng.choice(targets)

        roll, is_hit = self.roll_attack(self.enemy_ship)
        if target is None:
            is_hit = False
        destroyed = False
        if is_hit:
            destroyed = target.take_damage(self.enemy_ship.active_weapon.stats.damage)

        turn = self.current_turn
        self.enemy_attacks += 1
        self.state = CombatState.AWAITING_PLAYER
        target_name = target.name if target is not None else None

        self.turn_log.append(
            CombatLogEntry(
                turn=turn,
                attacker=ShipSide.ENEMY,
                target_component=target_name,
                roll=roll,
                is_hit=is_hit,
                destroyed=destroyed,
                auto_miss=auto_miss,
            )
        )
        logger.debug(
            f"Enemy attacks {target_name or 'nothing'}: roll {roll}, "
            f"{'hit' if is_hit else 'miss'}{' (disarmed)' if auto_miss else ''}"
        )
        return self._finish_attack(
            ShipSide.ENEMY, roll, is_hit, target_name, destroyed, auto_miss=auto_miss
        )

    def escape(self) -> AttackResult:
        """Disengage on the player's turn, whatever the ship's state.

        Raises:
            CombatActionError: If combat is over or it is the enemy's turn
        """
        self._require_player_turn()
        self._conclude(CombatOutcome.ESCAPED)
        return AttackResult(
            attacker=ShipSide.PLAYER,
            roll=0,
            is_hit=False,
            target_component=None,
            destroyed=False,
            combat_over=True,
            result=CombatOutcome.ESCAPED,
        )

    def check_termination(self) -> Optional[CombatOutcome]:
        """Evaluate the end conditions in priority order."""
        if self.enemy_ship.is_bridge_destroyed:
            return CombatOutcome.PLAYER_WIN
        if self.player_ship.is_bridge_destroyed or self.player_ship.is_destroyed:
            return CombatOutcome.PLAYER_DESTROYED
        if (
            self._player_has_attacked
            and self.enemy_ship.is_weapon_destroyed
            and self.enemy_ship.is_engine_destroyed
        ):
            return CombatOutcome.ENEMY_FLED
        if self.player_attacks >= self.max_turns and self.enemy_attacks >= self.max_turns:
            return CombatOutcome.PLAYER_LOSE
        return None

    @property
    def _player_has_attacked(self) -> bool:
        return any(entry.attacker is ShipSide.PLAYER for entry in self.turn_log)

    def _require_player_turn(self) -> None:
        if self.combat_over:
            raise CombatActionError("Combat is already over")
        if not self.is_player_turn:
            raise CombatActionError("It is the enemy's turn")

    def _finish_attack(
        self,
        attacker: ShipSide,
        roll: int,
        is_hit: bool,
        target_name: Optional[str],
        destroyed: bool,
        auto_miss: bool = False,
    ) -> AttackResult:
        outcome = self.check_termination()
        if outcome is not None:
            self._conclude(outcome)
        return AttackResult(
            attacker=attacker,
            roll=roll,
            is_hit=is_hit,
            target_component=target_name,
            destroyed=destroyed,
            combat_over=self.combat_over,
            result=self.result,
            auto_miss=auto_miss,
        )

    def _conclude(self, outcome: CombatOutcome) -> None:
        self.state = CombatState.CONCLUDED
        self.result = outcome
        logger.info(
            f"Combat over: {outcome.value} after {self.player_attacks} player "
            f"and {self.enemy_attacks} enemy attacks"
        )
