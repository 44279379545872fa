"""Galaxy meta-progression: a 3x3 grid of boards unlocked by winning.

This module handles:
1. Generating the grid (size preset, difficulty and seed per slot)
2. 8-neighbourhood unlocking after a win
3. Recording results and detecting a finished galaxy
"""

import logging

from ..models.galaxy import BoardSlot, Galaxy, SlotStatus
from ..utils.constants import BOARD_SIZES, DIFFICULTY_RANGE, GALAXY_SIZE
from ..utils.rng import GameRNG

logger = logging.getLogger(__name__)

MAX_BOARD_SEED = 2**31 - 1


def generate_galaxy(rng: GameRNG) -> Galaxy:
    """Generate a GALAXY_SIZE x GALAXY_SIZE grid of board slots.

    Slot (0, 0) starts unlocked; every other slot is locked.

    Args:
        rng: Random source for sizes, difficulties and board seeds

    Returns:
        Galaxy grid indexed as galaxy[row][col]
    """
    size_names = list(BOARD_SIZES)
    low, high = DIFFICULTY_RANGE
    galaxy: Galaxy = []
    for row in range(GALAXY_SIZE):
        slots = []
        for col in range(GALAXY_SIZE):
            size = rng.choice(size_names)
            columns, rows = BOARD_SIZES[size]
            slots.append(
                BoardSlot(
                    row=row,
                    col=col,
                    size=size,
                    columns=columns,
                    rows=rows,
                    difficulty=rng.randint(low, high),
                    seed=rng.randint(1, MAX_BOARD_SEED),
                    status=SlotStatus.UNLOCKED if (row, col) == (0, 0) else SlotStatus.LOCKED,
                )
            )
        galaxy.append(slots)
    return galaxy


def adjacent_slots(row: int, col: int) -> list[tuple[int, int]]:
    """Positions around (row, col) inside the grid, diagonals included."""
    neighbors = []
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, col + dc
            if 0 <= r < GALAXY_SIZE and 0 <= c < GALAXY_SIZE:
                neighbors.append((r, c))
    return neighbors


def unlock_adjacent(galaxy: Galaxy, row: int, col: int) -> list[tuple[int, int]]:
    """Unlock locked neighbours of a slot; won/lost slots keep their status.

    Returns:
        Positions that were unlocked
    """
    unlocked = []
    for r, c in adjacent_slots(row, col):
        slot = galaxy[r][c]
        if slot.status is SlotStatus.LOCKED:
            slot.status = SlotStatus.UNLOCKED
            unlocked.append((r, c))
    return unlocked


def record_result(galaxy: Galaxy, row: int, col: int, won: bool) -> None:
    """Mark a played slot won or lost; a win unlocks its neighbours.

    Raises:
        ValueError: If the slot is not currently playable
    """
    slot = galaxy[row][col]
    if slot.status is not SlotStatus.UNLOCKED:
        raise ValueError(f"Slot ({row}, {col}) is {slot.status.value}, not playable")
    slot.status = SlotStatus.WON if won else SlotStatus.LOST
    if won:
        unlocked = unlock_adjacent(galaxy, row, col)
        logger.info(f"Slot ({row}, {col}) won, unlocked {len(unlocked)} neighbours")
    else:
        logger.info(f"Slot ({row}, {col}) lost")


def is_galaxy_complete(galaxy: Galaxy) -> bool:
    """True when no slot is left to play."""
    return all(slot.status is not SlotStatus.UNLOCKED for row in galaxy for slot in row)
