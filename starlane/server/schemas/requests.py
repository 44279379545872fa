"""Pydantic request schemas for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    size: Literal["small", "medium", "large"] = Field(
        default="small", description="Board size preset: 'small', 'medium' or 'large'"
    )
    difficulty: int = Field(default=5, ge=1, le=10, description="Difficulty 1-10")
    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")


class MoveRequest(BaseModel):
    """Request to move in a direction for the current roll."""

    direction: int = Field(ge=0, le=5, description="Direction 0-5 (multiples of 60 degrees)")


class AttackRequest(BaseModel):
    """Request to attack an enemy component."""

    target: str = Field(min_length=1, description="Name of the enemy component to target")
