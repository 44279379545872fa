"""Hex vertex lattice generation.

The board is a rectangle of flat-top hexes in offset (odd-q) columns.
Playable positions are the hex corners, which form the base
triangular lattice, plus one vertex injected at every hex center:

1. Every hex contributes a Center vertex and its 6 Corner vertices.
   Corners shared between hexes are stored once.
2. Corners are linked along the hex edges.
3. Each Center is linked to its 6 corners (hub and spoke).
4. For every vertex and each of the 6 directions (d * 60 degrees) a ray
   is built by graph traversal: repeatedly take the neighbor whose
   relative angle is closest to the direction until none is left.

Vertex positions live on an integer lattice (half hex sizes along x,
half hex heights along y), so deduplication is exact and vertex ids do
not depend on hex_size.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..models.vertex import HexCenter, Vertex, VertexKind, center_id, corner_id
from ..utils.constants import DEFAULT_HEX_SIZE, NUM_DIRECTIONS
from ..utils.geometry import (
    DIRECTION_OFFSETS,
    MAX_DIRECTION_DEVIATION,
    angle_deviation,
    lattice_to_pixel,
)


@dataclass
class Lattice:
    """Generated board graph.

    Attributes:
        columns: Hex columns
        rows: Hex rows
        hex_size: Center-to-corner distance in pixels
        vertices: Vertex id -> Vertex
        adjacency: Vertex id -> ordered neighbor ids
        rays: Vertex id -> 6 ordered rays, indexed by direction
        hex_centers: Hexes in generation order
    """

    columns: int
    rows: int
    hex_size: float
    vertices: dict[str, Vertex] = field(default_factory=dict)
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    rays: dict[str, list[list[str]]] = field(default_factory=dict)
    hex_centers: list[HexCenter] = field(default_factory=list)

    @property
    def edge_count(self) -> int:
        return sum(len(neighbors) for neighbors in self.adjacency.values()) // 2

    def ray(self, vertex_id: str, direction: int) -> list[str]:
        """Return the ray from vertex_id in the given direction.

        Raises:
            ValueError: If the vertex is not part of the lattice
        """
        if vertex_id not in self.rays:
            raise ValueError(f"Unknown vertex: {vertex_id}")
        return self.rays[vertex_id][direction]

    def neighbors(self, vertex_id: str) -> list[str]:
        if vertex_id not in self.adjacency:
            raise ValueError(f"Unknown vertex: {vertex_id}")
        return self.adjacency[vertex_id]


def generate_lattice(
    columns: int, rows: int, hex_size: float = DEFAULT_HEX_SIZE
) -> Lattice:
    """Generate the corner/center vertex graph and its directional rays.

    Identical inputs always produce an identical lattice.

    Args:
        columns: Number of hex columns (> 0)
        rows: Number of hex rows (> 0)
        hex_size: Center-to-corner distance; only affects pixel spacing

    Returns:
        The generated Lattice

    Raises:
        ValueError: If a dimension or hex_size is not positive
    """
    _validate_dimension("columns", columns)
    _validate_dimension("rows", rows)
    if isinstance(hex_size, bool) or not isinstance(hex_size, (int, float)) or hex_size <= 0:
        raise ValueError(f"Invalid hex_size: {hex_size!r} (must be > 0)")

    lattice = Lattice(columns=columns, rows=rows, hex_size=float(hex_size))

    for col in range(columns):
        for row in range(rows):
            _add_hex(lattice, col, row)

    lattice.rays = _build_rays(lattice.vertices, lattice.adjacency)
    return lattice


def _validate_dimension(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Invalid {name}: {value!r} (must be a positive integer)")


def _add_hex(lattice: Lattice, col: int, row: int) -> None:
    """Add one hex: its center vertex, its corners and their edges."""
    cu = 3 * col
    cv = 2 * row + (col & 1)  # Odd columns are shifted down half a hex

    hub = _add_vertex(lattice, center_id(cu, cv), cu, cv, VertexKind.CENTER)
    lattice.hex_centers.append(
        HexCenter(col=col, row=row, x=hub.x, y=hub.y, vertex_id=hub.id)
    )

    # Corner i sits at angle i * 60 degrees from the center
    corners = [
        _add_vertex(lattice, corner_id(cu + du, cv + dv), cu + du, cv + dv, VertexKind.CORNER)
        for du, dv in DIRECTION_OFFSETS
    ]

    for i, corner in enumerate(corners):
        _link(lattice.adjacency, corner.id, corners[(i + 1) % 6].id)
    for corner in corners:
        _link(lattice.adjacency, hub.id, corner.id)


def _add_vertex(lattice: Lattice, vertex_id: str, u: int, v: int, kind: VertexKind) -> Vertex:
    existing = lattice.vertices.get(vertex_id)
    if existing is not None:
        return existing
    x, y = lattice_to_pixel(u, v, lattice.hex_size)
    vertex = Vertex(id=vertex_id, x=x, y=y, kind=kind, u=u, v=v)
    lattice.vertices[vertex_id] = vertex
    lattice.adjacency[vertex_id] = []
    return vertex


def _link(adjacency: dict[str, list[str]], a: str, b: str) -> None:
    if b not in adjacency[a]:
        adjacency[a].append(b)
    if a not in adjacency[b]:
        adjacency[b].append(a)


def _build_step_table(
    vertices: dict[str, Vertex], adjacency: dict[str, list[str]]
) -> dict[str, list[Optional[str]]]:
    """For every vertex, the neighbor to step to in each direction (or None)."""
    steps: dict[str, list[Optional[str]]] = {}
    for vertex_id, vertex in vertices.items():
        best: list[Optional[str]] = [None] * NUM_DIRECTIONS
        best_deviation = [MAX_DIRECTION_DEVIATION] * NUM_DIRECTIONS
        for neighbor_id in adjacency[vertex_id]:
            neighbor = vertices[neighbor_id]
            dx = neighbor.x - vertex.x
            dy = neighbor.y - vertex.y
            for direction in range(NUM_DIRECTIONS):
                deviation = angle_deviation(dx, dy, direction)
                if deviation < best_deviation[direction]:
                    best_deviation[direction] = deviation
                    best[direction] = neighbor_id
        steps[vertex_id] = best
    return steps


def _build_rays(
    vertices: dict[str, Vertex], adjacency: dict[str, list[str]]
) -> dict[str, list[list[str]]]:
    steps = _build_step_table(vertices, adjacency)
    rays: dict[str, list[list[str]]] = {}
    for vertex_id in vertices:
        rays[vertex_id] = [
            _trace_ray(steps, vertex_id, direction) for direction in range(NUM_DIRECTIONS)
        ]
    return rays


def _trace_ray(steps: dict[str, list[Optional[str]]], origin: str, direction: int) -> list[str]:
    ray: list[str] = []
    seen = {origin}
    current = steps[origin][direction]
    while current is not None and current not in seen:
        ray.append(current)
        seen.add(current)
        current = steps[current][direction]
    return ray
