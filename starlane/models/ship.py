"""Ship and component data models.

A ship holds its components through a ComponentContainer, which enforces
the power budget and the single-bridge rule. Components are a closed set
of kinds (weapon, engine, bridge), each with its own stats payload.
Destroyed components are never removed by combat; they stay installed
until explicitly uninstalled.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from ..utils.constants import ENEMY_POWER_LIMIT, PLAYER_POWER_LIMIT


class ComponentKind(Enum):
    """Closed set of component kinds."""

    WEAPON = "weapon"
    ENGINE = "engine"
    BRIDGE = "bridge"


@dataclass(frozen=True)
class WeaponStats:
    damage: int = 1
    accuracy: int = 4  # Minimum die roll to hit


@dataclass(frozen=True)
class EngineStats:
    speed_bonus: int = 0


@dataclass(frozen=True)
class BridgeStats:
    evasion_bonus: int = 0


ComponentStats = Union[WeaponStats, EngineStats, BridgeStats]

_STATS_TYPES = {
    ComponentKind.WEAPON: WeaponStats,
    ComponentKind.ENGINE: EngineStats,
    ComponentKind.BRIDGE: BridgeStats,
}


def default_stats(kind: ComponentKind, power_cost: int) -> ComponentStats:
    """Stats a component gets from its power cost when none are given.

    Spending 2 or more power buys the upgraded version of each kind.

    Args:
        kind: Component kind
        power_cost: Power units the component consumes

    Returns:
        Stats payload matching the kind
    """
    upgraded = power_cost >= 2
    if kind is ComponentKind.WEAPON:
        return WeaponStats(damage=1, accuracy=3 if upgraded else 4)
    if kind is ComponentKind.ENGINE:
        return EngineStats(speed_bonus=1 if upgraded else 0)
    if kind is ComponentKind.BRIDGE:
        return BridgeStats(evasion_bonus=1 if upgraded else 0)
    raise ValueError(f"Unknown component kind: {kind}")


@dataclass
class Component:
    """A targetable ship component with hit points."""

    name: str
    kind: ComponentKind
    max_hp: int
    power_cost: int = 1
    stats: Optional[ComponentStats] = None
    current_hp: Optional[int] = None

    def __post_init__(self):
        """Fill defaults and validate component data."""
        if not self.name:
            raise ValueError("Component name cannot be empty")
        if self.max_hp <= 0:
            raise ValueError(f"Invalid max_hp: {self.max_hp} (must be > 0)")
        if self.power_cost <= 0:
            raise ValueError(f"Invalid power_cost: {self.power_cost} (must be > 0)")
        if self.stats is None:
            self.stats = default_stats(self.kind, self.power_cost)
        elif not isinstance(self.stats, _STATS_TYPES[self.kind]):
            raise ValueError(
                f"Component {self.name}: {type(self.stats).__name__} does not match kind "
                f"{self.kind.value}"
            )
        if self.current_hp is None:
            self.current_hp = self.max_hp
        if not (0 <= self.current_hp <= self.max_hp):
            raise ValueError(
                f"Invalid current_hp: {self.current_hp} (must be 0-{self.max_hp})"
            )

    @property
    def destroyed(self) -> bool:
        return self.current_hp <= 0

    def take_damage(self, amount: int) -> bool:
        """Apply damage, flooring HP at zero.

        Args:
            amount: Damage to apply

        Returns:
            True if this hit destroyed a component that was still alive
        """
        was_alive = self.current_hp > 0
        self.current_hp = max(0, self.current_hp - amount)
        return was_alive and self.current_hp <= 0

    def repair(self) -> None:
        """Restore the component to full HP."""
        self.current_hp = self.max_hp


def weapon(name: str, max_hp: int, power_cost: int = 1, **stats) -> Component:
    """Build a weapon; damage/accuracy default from power cost."""
    base = default_stats(ComponentKind.WEAPON, power_cost)
    return Component(
        name,
        ComponentKind.WEAPON,
        max_hp,
        power_cost,
        WeaponStats(
            damage=stats.get("damage", base.damage),
            accuracy=stats.get("accuracy", base.accuracy),
        ),
    )


def engine(name: str, max_hp: int, power_cost: int = 1, **stats) -> Component:
    """Build an engine; speed bonus defaults from power cost."""
    base = default_stats(ComponentKind.ENGINE, power_cost)
    return Component(
        name,
        ComponentKind.ENGINE,
        max_hp,
        power_cost,
        EngineStats(speed_bonus=stats.get("speed_bonus", base.speed_bonus)),
    )


def bridge(name: str, max_hp: int, power_cost: int = 1, **stats) -> Component:
    """Build a bridge; evasion bonus defaults from power cost."""
    base = default_stats(ComponentKind.BRIDGE, power_cost)
    return Component(
        name,
        ComponentKind.BRIDGE,
        max_hp,
        power_cost,
        BridgeStats(evasion_bonus=stats.get("evasion_bonus", base.evasion_bonus)),
    )


class ComponentContainer:
    """Ordered collection of components under a power budget.

    Invariants: installed power never exceeds power_limit, and at most one
    bridge is installed. Destroyed components still count toward power.
    """

    def __init__(self, power_limit: float = math.inf, components=None):
        if power_limit <= 0:
            raise ValueError(f"Invalid power_limit: {power_limit} (must be > 0)")
        self.power_limit = power_limit
        self._components: list[Component] = []
        for component in components or []:
            self.add_component(component)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    @property
    def components(self) -> list[Component]:
        return list(self._components)

    @property
    def total_power(self) -> int:
        return sum(c.power_cost for c in self._components)

    @property
    def remaining_power(self) -> float:
        return self.power_limit - self.total_power

    def add_component(self, component: Component) -> None:
        """Install a component.

        Raises:
            ValueError: If it would exceed power_limit or add a second bridge
        """
        if self.total_power + component.power_cost > self.power_limit:
            raise ValueError(
                f"Cannot install {component.name}: power {self.total_power} + "
                f"{component.power_cost} would exceed power_limit {self.power_limit}"
            )
        if component.kind is ComponentKind.BRIDGE and self.has_component_type(
            ComponentKind.BRIDGE
        ):
            raise ValueError(f"Cannot install {component.name}: a bridge is already installed")
        self._components.append(component)

    def remove_component(self, name: str) -> Optional[Component]:
        """Remove the first component with the given name.

        Returns:
            The removed component, or None if no component has that name
        """
        for index, component in enumerate(self._components):
            if component.name == name:
                return self._components.pop(index)
        return None

    def get_component(self, name: str) -> Optional[Component]:
        return next((c for c in self._components if c.name == name), None)

    def get_components_by_type(self, kind: ComponentKind) -> list[Component]:
        return [c for c in self._components if c.kind is kind]

    def has_component_type(self, kind: ComponentKind) -> bool:
        return any(c.kind is kind for c in self._components)


class ShipSide(Enum):
    PLAYER = "player"
    ENEMY = "enemy"


@dataclass
class Ship:
    """A combat ship; owns its components by composition."""

    name: str
    side: ShipSide
    container: ComponentContainer = field(default_factory=ComponentContainer)

    @property
    def components(self) -> list[Component]:
        return self.container.components

    @property
    def power_limit(self) -> float:
        return self.container.power_limit

    @property
    def active_components(self) -> list[Component]:
        return [c for c in self.container if not c.destroyed]

    @property
    def is_destroyed(self) -> bool:
        """True when every installed component is destroyed (False when empty)."""
        return len(self.container) > 0 and all(c.destroyed for c in self.container)

    @property
    def is_bridge_destroyed(self) -> bool:
        return self._all_destroyed(ComponentKind.BRIDGE)

    @property
    def can_attack(self) -> bool:
        return self.active_weapon is not None

    @property
    def can_flee(self) -> bool:
        return any(
            not c.destroyed for c in self.container.get_components_by_type(ComponentKind.ENGINE)
        )

    @property
    def is_weapon_destroyed(self) -> bool:
        return self._all_destroyed(ComponentKind.WEAPON)

    @property
    def is_engine_destroyed(self) -> bool:
        return self._all_destroyed(ComponentKind.ENGINE)

    @property
    def active_weapon(self) -> Optional[Component]:
        """First non-destroyed weapon in install order."""
        return next(
            (
                c
                for c in self.container.get_components_by_type(ComponentKind.WEAPON)
                if not c.destroyed
            ),
            None,
        )

    def _all_destroyed(self, kind: ComponentKind) -> bool:
        installed = self.container.get_components_by_type(kind)
        return bool(installed) and all(c.destroyed for c in installed)

    def get_component(self, name: str) -> Optional[Component]:
        return self.container.get_component(name)

    def salvageable_components(self) -> list[Component]:
        return self.active_components

    def install_component(self, component: Component) -> None:
        """Install a component under the container's power and bridge rules."""
        self.container.add_component(component)

    def uninstall_component(self, name: str) -> Component:
        """Remove a component and repair it to full HP.

        Uninstalling is the only way the player's ship heals.

        Raises:
            ValueError: If no component has that name
        """
        component = self.container.remove_component(name)
        if component is None:
            raise ValueError(f"{self.name} has no component named {name!r}")
        component.repair()
        return component

    def salvage_component(self, name: str) -> Component:
        """Strip a surviving component from this ship, keeping its damage.

        Raises:
            ValueError: If the component is missing or destroyed
        """
        component = self.container.get_component(name)
        if component is None:
            raise ValueError(f"{self.name} has no component named {name!r}")
        if component.destroyed:
            raise ValueError(f"Cannot salvage destroyed component {name!r}")
        return self.container.remove_component(name)


def create_player_ship(components=None, power_limit: int = PLAYER_POWER_LIMIT) -> Ship:
    """Create a player ship, empty unless components are given."""
    return Ship(
        name="Player Ship",
        side=ShipSide.PLAYER,
        container=ComponentContainer(power_limit, components),
    )


def standard_player_ship() -> Ship:
    """Create the player ship with its standard loadout."""
    return create_player_ship(
        [
            weapon("Weapons", 4, power_cost=2),
            engine("Engines", 4, power_cost=2),
            bridge("Bridge", 3, power_cost=2),
        ]
    )


def create_enemy_ship(components=None, power_limit: int = ENEMY_POWER_LIMIT) -> Ship:
    """Create an enemy ship; defaults to 1 HP weapons, engines and bridge."""
    if components is None:
        components = [
            weapon("Weapons", 1),
            engine("Engines", 1),
            bridge("Bridge", 1),
        ]
    return Ship(
        name="Enemy Ship",
        side=ShipSide.ENEMY,
        container=ComponentContainer(power_limit, components),
    )
