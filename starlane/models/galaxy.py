"""Galaxy progress data model: a grid of board slots."""

from dataclasses import dataclass
from enum import Enum

from ..utils.constants import BOARD_SIZES, DIFFICULTY_RANGE


class SlotStatus(Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    WON = "won"
    LOST = "lost"


@dataclass
class BoardSlot:
    """One board of the galaxy, with everything needed to regenerate it.

    The (columns, rows, seed, difficulty) tuple reproduces the same board
    every time it is played.
    """

    row: int
    col: int
    size: str  # "small", "medium" or "large"
    columns: int
    rows: int
    difficulty: int
    seed: int
    status: SlotStatus = SlotStatus.LOCKED

    def __post_init__(self):
        """Validate slot data after initialization."""
        if self.size not in BOARD_SIZES:
            raise ValueError(f"Invalid size: {self.size} (must be one of {list(BOARD_SIZES)})")
        if (self.columns, self.rows) != BOARD_SIZES[self.size]:
            raise ValueError(
                f"Invalid dimensions {self.columns}x{self.rows} for size {self.size}"
            )
        low, high = DIFFICULTY_RANGE
        if not (low <= self.difficulty <= high):
            raise ValueError(f"Invalid difficulty: {self.difficulty} (must be {low}-{high})")
        if self.seed <= 0:
            raise ValueError(f"Invalid seed: {self.seed} (must be > 0)")
        if isinstance(self.status, str):
            self.status = SlotStatus(self.status)


Galaxy = list[list[BoardSlot]]
