"""Lattice vertex data model."""

from dataclasses import dataclass
from enum import Enum


class VertexKind(Enum):
    """Whether a vertex sits on a hex corner or a hex center."""

    CORNER = "corner"
    CENTER = "center"


@dataclass(frozen=True)
class Vertex:
    """A playable position on the board.

    Corners form the base triangular lattice; centers are injected at
    every hex center to densify the graph. Vertices never change after the
    lattice is generated.
    """

    id: str  # Stable key, "u,v" for corners and "c:u,v" for centers
    x: float  # Plane x coordinate
    y: float  # Plane y coordinate
    kind: VertexKind
    u: int  # Integer lattice x (half hex sizes)
    v: int  # Integer lattice y (half hex heights)

    @property
    def is_center(self) -> bool:
        return self.kind is VertexKind.CENTER


@dataclass(frozen=True)
class HexCenter:
    """A hex of the board in offset (odd-q) column/row coordinates."""

    col: int
    row: int
    x: float
    y: float
    vertex_id: str  # Id of the Center vertex injected for this hex


def corner_id(u: int, v: int) -> str:
    """Build the id of the corner vertex at lattice position (u, v)."""
    return f"{u},{v}"


def center_id(u: int, v: int) -> str:
    """Build the id of the center vertex at lattice position (u, v)."""
    return f"c:{u},{v}"


def is_center_id(vertex_id: str) -> bool:
    """Return True if the id names a hex center vertex."""
    return vertex_id.startswith("c:")
