"""Utility functions and constants for Starlane."""

from .constants import (
    BOARD_SIZES,
    DEFAULT_DIFFICULTY,
    DEFAULT_HEX_SIZE,
    DEFAULT_HIT_THRESHOLD,
    DEFAULT_MAX_TURNS,
    DIE_SIDES,
    DIFFICULTY_RANGE,
    NUM_DIRECTIONS,
    PLACEMENT_MAX_ATTEMPTS,
    RNG_SEED_DEFAULT,
)
from .geometry import euclidean_distance, opposite_direction, validate_direction
from .rng import GameRNG

__all__ = [
    "BOARD_SIZES",
    "DEFAULT_DIFFICULTY",
    "DEFAULT_HEX_SIZE",
    "DEFAULT_HIT_THRESHOLD",
    "DEFAULT_MAX_TURNS",
    "DIE_SIDES",
    "DIFFICULTY_RANGE",
    "NUM_DIRECTIONS",
    "PLACEMENT_MAX_ATTEMPTS",
    "RNG_SEED_DEFAULT",
    "euclidean_distance",
    "opposite_direction",
    "validate_direction",
    "GameRNG",
]
