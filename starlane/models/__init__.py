"""Data models for Starlane."""

from .board_object import (
    BlackHole,
    BoardObject,
    BoardObjectKind,
    Enemy,
    Obstacle,
    PowerUp,
    create_board_object,
)
from .galaxy import BoardSlot, Galaxy, SlotStatus
from .ship import (
    BridgeStats,
    Component,
    ComponentContainer,
    ComponentKind,
    EngineStats,
    Ship,
    ShipSide,
    WeaponStats,
    bridge,
    create_enemy_ship,
    create_player_ship,
    engine,
    standard_player_ship,
    weapon,
)
from .vertex import HexCenter, Vertex, VertexKind

__all__ = [
    "BlackHole",
    "BoardObject",
    "BoardObjectKind",
    "Enemy",
    "Obstacle",
    "PowerUp",
    "create_board_object",
    "BoardSlot",
    "Galaxy",
    "SlotStatus",
    "BridgeStats",
    "Component",
    "ComponentContainer",
    "ComponentKind",
    "EngineStats",
    "Ship",
    "ShipSide",
    "WeaponStats",
    "bridge",
    "create_enemy_ship",
    "create_player_ship",
    "engine",
    "standard_player_ship",
    "weapon",
    "HexCenter",
    "Vertex",
    "VertexKind",
]
