"""Pydantic response schemas for API endpoints."""

from pydantic import BaseModel


class GameStateResponse(BaseModel):
    """Response containing current game state."""

    gameId: str  # noqa: N815
    phase: str
    state: dict


class CreateGameResponse(BaseModel):
    """Response after creating a new game."""

    gameId: str  # noqa: N815
    seed: int
    state: dict


class RollResponse(BaseModel):
    """Response after rolling the movement die."""

    gameId: str  # noqa: N815
    diceValue: int | None  # noqa: N815
    phase: str
    state: dict


class MoveResponse(BaseModel):
    """Response after a move."""

    gameId: str  # noqa: N815
    path: dict
    phase: str
    state: dict


class CombatActionResponse(BaseModel):
    """Response after a combat action."""

    gameId: str  # noqa: N815
    attack: dict
    phase: str
    state: dict
