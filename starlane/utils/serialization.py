"""Galaxy progress serialization to/from JSON.

This module provides functions to save and load the 3x3 galaxy progress
record, so a run of boards can be resumed later. The file holds a single
key, "galaxyProgress", whose value is the grid of board slots.
"""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ValidationError

from ..models.galaxy import BoardSlot, Galaxy, SlotStatus
from .constants import GALAXY_SIZE, GALAXY_STORAGE_KEY


class BoardSlotRecord(BaseModel):
    """Stored form of a board slot."""

    row: int
    col: int
    size: Literal["small", "medium", "large"]
    cols: int
    rows: int
    difficulty: int
    seed: int
    status: Literal["locked", "unlocked", "won", "lost"]


class GalaxyRecord(BaseModel):
    """Stored form of the whole galaxy progress file."""

    galaxyProgress: list[list[BoardSlotRecord]]  # noqa: N815


def _resolve_path(filepath: str, create_dir: bool = False) -> Path:
    """Resolve relative paths under the state/ directory."""
    path = Path(filepath)
    if not path.is_absolute():
        state_dir = Path(__file__).parent.parent.parent / "state"
        if create_dir:
            state_dir.mkdir(exist_ok=True)
        path = state_dir / filepath
    return path


def save_galaxy(galaxy: Galaxy, filepath: str) -> None:
    """Save galaxy progress to a JSON file.

    Args:
        galaxy: Galaxy grid to save
        filepath: Path to save file (created in the state/ directory if relative)

    Example:
        save_galaxy(galaxy, "galaxy.json")  # Saves to state/galaxy.json
    """
    path = _resolve_path(filepath, create_dir=True)
    data = {GALAXY_STORAGE_KEY: [[_serialize_slot(slot) for slot in row] for row in galaxy]}
    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def load_galaxy(filepath: str) -> Optional[Galaxy]:
    """Load galaxy progress from a JSON file.

    Args:
        filepath: Path to saved progress file

    Returns:
        Loaded galaxy grid, or None if the file does not exist

    Raises:
        ValueError: If the file is not a valid galaxy progress record
    """
    path = _resolve_path(filepath)
    if not path.exists():
        return None

    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid galaxy file {path}: {e}") from e

    try:
        record = GalaxyRecord.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid galaxy file {path}: {e}") from e

    if len(record.galaxyProgress) != GALAXY_SIZE or any(
        len(row) != GALAXY_SIZE for row in record.galaxyProgress
    ):
        raise ValueError(f"Invalid galaxy file {path}: grid must be {GALAXY_SIZE}x{GALAXY_SIZE}")

    return [[_deserialize_slot(slot) for slot in row] for row in record.galaxyProgress]


def _serialize_slot(slot: BoardSlot) -> dict[str, Any]:
    return {
        "row": slot.row,
        "col": slot.col,
        "size": slot.size,
        "cols": slot.columns,
        "rows": slot.rows,
        "difficulty": slot.difficulty,
        "seed": slot.seed,
        "status": slot.status.value,
    }


def _deserialize_slot(record: BoardSlotRecord) -> BoardSlot:
    return BoardSlot(
        row=record.row,
        col=record.col,
        size=record.size,
        columns=record.cols,
        rows=record.rows,
        difficulty=record.difficulty,
        seed=record.seed,
        status=SlotStatus(record.status),
    )
