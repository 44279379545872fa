"""Plane geometry helpers for the hex vertex lattice."""

import math

from .constants import NUM_DIRECTIONS

SQRT3 = math.sqrt(3)

# Integer lattice step for each direction (0 = 0 degrees, 1 = 60 degrees, ...).
# x is measured in half hex sizes, y in half hex heights (size * sqrt(3) / 2).
DIRECTION_OFFSETS = [
    (2, 0),
    (1, 1),
    (-1, 1),
    (-2, 0),
    (-1, -1),
    (1, -1),
]

# Directions further than this from any neighbor mean "no edge that way"
MAX_DIRECTION_DEVIATION = 30.0


def lattice_to_pixel(u: int, v: int, hex_size: float) -> tuple[float, float]:
    """Convert integer lattice coordinates to plane coordinates.

    Args:
        u: Lattice x (half hex sizes)
        v: Lattice y (half hex heights)
        hex_size: Center-to-corner distance

    Returns:
        Tuple of (x, y)
    """
    return u * hex_size / 2, v * hex_size * SQRT3 / 2


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Calculate straight-line distance between two points."""
    return math.hypot(x2 - x1, y2 - y1)


def angle_deviation(dx: float, dy: float, direction: int) -> float:
    """Angle in degrees between vector (dx, dy) and a canonical direction.

    Args:
        dx: Vector x component
        dy: Vector y component
        direction: Direction index 0-5 (direction * 60 degrees)

    Returns:
        Absolute angular difference in [0, 180]
    """
    angle = math.degrees(math.atan2(dy, dx)) % 360.0
    diff = abs(angle - direction * 60.0) % 360.0
    return min(diff, 360.0 - diff)


def opposite_direction(direction: int) -> int:
    """Return the direction pointing the other way."""
    return (direction + 3) % NUM_DIRECTIONS


def validate_direction(direction: int) -> None:
    """Raise ValueError unless direction is an index 0-5."""
    if isinstance(direction, bool) or not isinstance(direction, int):
        raise ValueError(f"Invalid direction: {direction!r} (must be an int 0-5)")
    if not (0 <= direction < NUM_DIRECTIONS):
        raise ValueError(f"Invalid direction: {direction} (must be 0-5)")
