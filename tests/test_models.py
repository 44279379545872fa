"""Tests for data models."""

import pytest

from starlane.models import (
    BlackHole,
    BoardObjectKind,
    BoardSlot,
    BridgeStats,
    Component,
    ComponentContainer,
    ComponentKind,
    Enemy,
    EngineStats,
    Obstacle,
    PowerUp,
    SlotStatus,
    WeaponStats,
    bridge,
    create_board_object,
    create_enemy_ship,
    create_player_ship,
    engine,
    standard_player_ship,
    weapon,
)


class TestComponent:
    """Test Component dataclass."""

    def test_stats_from_power_cost(self):
        """Test spending 2 power buys the upgraded stats."""
        assert weapon("W", 2).stats == WeaponStats(damage=1, accuracy=4)
        assert weapon("W", 2, power_cost=2).stats == WeaponStats(damage=1, accuracy=3)
        assert engine("E", 2).stats == EngineStats(speed_bonus=0)
        assert engine("E", 2, power_cost=2).stats == EngineStats(speed_bonus=1)
        assert bridge("B", 2).stats == BridgeStats(evasion_bonus=0)
        assert bridge("B", 2, power_cost=3).stats == BridgeStats(evasion_bonus=1)

    def test_explicit_stats_override(self):
        assert weapon("W", 2, accuracy=2).stats.accuracy == 2

    def test_mismatched_stats_rejected(self):
        with pytest.raises(ValueError, match="does not match kind"):
            Component("W", ComponentKind.WEAPON, 2, stats=EngineStats())

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="Invalid max_hp"):
            weapon("W", 0)
        with pytest.raises(ValueError, match="Invalid power_cost"):
            weapon("W", 1, power_cost=0)
        with pytest.raises(ValueError, match="cannot be empty"):
            weapon("", 1)

    def test_take_damage(self):
        """Test damage floors at zero and reports the destroying hit once."""
        component = engine("E", 2)

        assert not component.take_damage(1)
        assert component.current_hp == 1
        assert component.take_damage(5)
        assert component.current_hp == 0
        assert component.destroyed
        assert not component.take_damage(1)

    def test_repair(self):
        component = bridge("B", 3)
        component.take_damage(3)

        component.repair()

        assert component.current_hp == 3
        assert not component.destroyed


class TestComponentContainer:
    """Test power budget and bridge rules."""

    def test_power_accounting(self):
        container = ComponentContainer(5, [weapon("W", 1, power_cost=2), engine("E", 1)])

        assert container.total_power == 3
        assert container.remaining_power == 2
        assert len(container) == 2

    def test_power_limit_enforced(self):
        container = ComponentContainer(3, [weapon("W", 1, power_cost=2)])

        with pytest.raises(ValueError, match="exceed power_limit"):
            container.add_component(engine("E", 1, power_cost=2))
        assert container.total_power == 2

    def test_single_bridge(self):
        container = ComponentContainer(10, [bridge("B1", 1)])

        with pytest.raises(ValueError, match="bridge is already installed"):
            container.add_component(bridge("B2", 1))

    def test_remove_component(self):
        container = ComponentContainer(10, [weapon("W", 1), engine("E", 1)])

        removed = container.remove_component("W")

        assert removed.name == "W"
        assert container.remove_component("W") is None
        assert not container.has_component_type(ComponentKind.WEAPON)
        assert [c.name for c in container.get_components_by_type(ComponentKind.ENGINE)] == ["E"]

    def test_destroyed_components_still_use_power(self):
        component = weapon("W", 1, power_cost=2)
        container = ComponentContainer(4, [component])
        component.take_damage(1)

        assert container.total_power == 2

    def test_components_is_a_copy(self):
        container = ComponentContainer(10, [weapon("W", 1)])
        container.components.clear()

        assert len(container) == 1


class TestShip:
    """Test ship queries and refit."""

    def test_standard_player_ship(self):
        ship = standard_player_ship()

        assert [c.name for c in ship.components] == ["Weapons", "Engines", "Bridge"]
        assert ship.power_limit == 7
        assert ship.container.remaining_power == 1
        assert ship.get_component("Weapons").max_hp == 4
        assert ship.get_component("Bridge").max_hp == 3
        assert ship.can_attack
        assert ship.can_flee

    def test_default_enemy_ship(self):
        ship = create_enemy_ship()

        assert ship.power_limit == 4
        assert all(c.max_hp == 1 and c.power_cost == 1 for c in ship.components)

    def test_destruction_queries(self):
        ship = standard_player_ship()
        ship.get_component("Weapons").take_damage(4)

        assert not ship.can_attack
        assert ship.is_weapon_destroyed
        assert not ship.is_engine_destroyed
        assert not ship.is_destroyed
        assert [c.name for c in ship.active_components] == ["Engines", "Bridge"]

    def test_empty_ship_not_destroyed(self):
        ship = create_player_ship()

        assert not ship.is_destroyed
        assert not ship.is_bridge_destroyed
        assert not ship.can_attack

    def test_active_weapon_skips_destroyed(self):
        ship = create_player_ship([weapon("Laser", 1), weapon("Cannon", 1)])
        ship.get_component("Laser").take_damage(1)

        assert ship.active_weapon.name == "Cannon"

    def test_uninstall_repairs(self):
        ship = standard_player_ship()
        ship.get_component("Engines").take_damage(3)

        component = ship.uninstall_component("Engines")

        assert component.current_hp == 4
        assert ship.get_component("Engines") is None
        ship.install_component(component)
        assert ship.can_flee

    def test_uninstall_missing(self):
        with pytest.raises(ValueError, match="no component named"):
            standard_player_ship().uninstall_component("Shields")

    def test_salvage(self):
        """Test only surviving components can be salvaged."""
        enemy = create_enemy_ship()
        enemy.get_component("Bridge").take_damage(1)

        assert [c.name for c in enemy.salvageable_components()] == ["Weapons", "Engines"]
        salvaged = enemy.salvage_component("Weapons")
        assert salvaged.kind is ComponentKind.WEAPON
        with pytest.raises(ValueError, match="destroyed"):
            enemy.salvage_component("Bridge")


class TestBoardObjects:
    """Test board object models."""

    def test_ids_and_blocking(self):
        assert Obstacle("1,1", 3).id == "obstacle:1,1"
        assert Obstacle("1,1", 3).blocks_movement
        assert not BlackHole("2,2", 3).blocks_movement
        assert not PowerUp("3,3", 3).blocks_movement
        assert Enemy("4,4", 3).blocks_movement

    def test_invalid_value(self):
        with pytest.raises(ValueError, match="Invalid value"):
            Obstacle("1,1", 11)

    def test_invalid_enemy(self):
        with pytest.raises(ValueError, match="Invalid facing"):
            Enemy("1,1", 3, facing=6)
        with pytest.raises(ValueError, match="Invalid vision_range"):
            Enemy("1,1", 3, vision_range=0)

    def test_create_board_object(self):
        enemy = create_board_object(BoardObjectKind.ENEMY, "1,1", 4, facing=2, vision_range=3)

        assert isinstance(enemy, Enemy)
        assert enemy.facing == 2
        assert isinstance(create_board_object(BoardObjectKind.POWER_UP, "1,1", 4), PowerUp)


class TestBoardSlot:
    """Test galaxy slot validation."""

    def test_valid_slot(self):
        slot = BoardSlot(0, 0, "medium", 7, 6, 5, 123, status="unlocked")

        assert slot.status is SlotStatus.UNLOCKED

    def test_invalid_slot(self):
        with pytest.raises(ValueError, match="Invalid size"):
            BoardSlot(0, 0, "huge", 7, 6, 5, 123)
        with pytest.raises(ValueError, match="Invalid dimensions"):
            BoardSlot(0, 0, "small", 7, 6, 5, 123)
        with pytest.raises(ValueError, match="Invalid difficulty"):
            BoardSlot(0, 0, "small", 5, 4, 0, 123)
        with pytest.raises(ValueError, match="Invalid seed"):
            BoardSlot(0, 0, "small", 5, 4, 5, 0)
