"""Tests for hex vertex lattice generation."""

import pytest

from starlane.engine.lattice import generate_lattice
from starlane.models.vertex import is_center_id
from starlane.utils import BOARD_SIZES, NUM_DIRECTIONS


def _all_rays(lattice):
    for vertex_id, vertex_rays in lattice.rays.items():
        for direction, ray in enumerate(vertex_rays):
            yield vertex_id, direction, ray


class TestLatticeShape:
    """Test vertex and edge structure."""

    def test_single_hex(self):
        """Test a 1x1 board is one center and its 6 corners."""
        lattice = generate_lattice(1, 1)

        assert len(lattice.vertices) == 7
        assert lattice.edge_count == 12
        assert len(lattice.hex_centers) == 1
        center = lattice.hex_centers[0].vertex_id
        assert center == "c:0,0"
        assert len(lattice.adjacency[center]) == 6

    def test_corners_shared_vertically(self):
        """Test two stacked hexes share one edge."""
        lattice = generate_lattice(1, 2)

        assert len(lattice.vertices) == 12
        assert lattice.edge_count == 23

    def test_corners_shared_across_columns(self):
        """Test an odd column hex shares an edge with its even neighbour."""
        lattice = generate_lattice(2, 1)

        assert len(lattice.vertices) == 12
        assert lattice.edge_count == 23
        assert "c:3,1" in lattice.vertices

    @pytest.mark.parametrize("size", list(BOARD_SIZES))
    def test_center_count_matches_hexes(self, size):
        """Test one center vertex per hex."""
        columns, rows = BOARD_SIZES[size]
        lattice = generate_lattice(columns, rows)

        centers = [v for v in lattice.vertices.values() if v.is_center]
        assert len(centers) == columns * rows
        assert len(lattice.hex_centers) == columns * rows

    @pytest.mark.parametrize("size", list(BOARD_SIZES))
    def test_neighbor_counts(self, size):
        """Test centers have exactly 6 neighbors and corners at most 6."""
        lattice = generate_lattice(*BOARD_SIZES[size])

        for vertex_id, vertex in lattice.vertices.items():
            neighbors = lattice.adjacency[vertex_id]
            if vertex.is_center:
                assert len(neighbors) == 6
            else:
                assert 2 <= len(neighbors) <= 6

    def test_centers_never_adjacent(self):
        """Test center vertices only link to corners."""
        lattice = generate_lattice(5, 4)

        for vertex_id, neighbors in lattice.adjacency.items():
            if is_center_id(vertex_id):
                assert not any(is_center_id(n) for n in neighbors)

    def test_adjacency_symmetric_without_duplicates(self):
        """Test every edge is stored once in each direction."""
        lattice = generate_lattice(7, 6)

        for vertex_id, neighbors in lattice.adjacency.items():
            assert len(neighbors) == len(set(neighbors))
            assert vertex_id not in neighbors
            for neighbor in neighbors:
                assert vertex_id in lattice.adjacency[neighbor]

    def test_edges_have_hex_size_length(self):
        """Test every edge spans exactly one hex size."""
        lattice = generate_lattice(3, 3, hex_size=40)

        for vertex_id, neighbors in lattice.adjacency.items():
            a = lattice.vertices[vertex_id]
            for neighbor in neighbors:
                b = lattice.vertices[neighbor]
                assert ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5 == pytest.approx(40)


class TestLatticeDeterminism:
    """Test regeneration and hex_size independence."""

    def test_same_inputs_same_lattice(self):
        """Test a 5x4 board generated twice compares equal."""
        first = generate_lattice(5, 4, 40)
        second = generate_lattice(5, 4, 40)

        assert first.vertices == second.vertices
        assert first.adjacency == second.adjacency
        assert first.rays == second.rays
        assert first.hex_centers == second.hex_centers

    def test_hex_size_only_scales_positions(self):
        """Test topology does not depend on hex_size."""
        small = generate_lattice(5, 4, hex_size=10)
        large = generate_lattice(5, 4, hex_size=40)

        assert small.adjacency == large.adjacency
        assert small.rays == large.rays
        for vertex_id, vertex in small.vertices.items():
            assert large.vertices[vertex_id].x == pytest.approx(vertex.x * 4)
            assert large.vertices[vertex_id].y == pytest.approx(vertex.y * 4)


class TestRays:
    """Test directional rays."""

    def test_rays_exist_for_every_direction(self):
        """Test each vertex has 6 rays."""
        lattice = generate_lattice(5, 4)

        assert set(lattice.rays) == set(lattice.vertices)
        for vertex_rays in lattice.rays.values():
            assert len(vertex_rays) == NUM_DIRECTIONS

    def test_single_hex_rays(self):
        """Test rays across a single hex."""
        lattice = generate_lattice(1, 1)

        assert lattice.ray("2,0", 3) == ["c:0,0", "-2,0"]
        assert lattice.ray("2,0", 0) == []
        assert lattice.ray("2,0", 2) == ["1,1"]
        for direction in range(NUM_DIRECTIONS):
            assert len(lattice.ray("c:0,0", direction)) == 1

    def test_ray_from_corner_through_odd_column(self):
        """Test a ray steps corner -> center -> corner."""
        lattice = generate_lattice(2, 1)

        assert lattice.ray("1,1", 0) == ["c:3,1", "5,1"]

    @pytest.mark.parametrize("size", list(BOARD_SIZES))
    def test_rays_well_formed(self, size):
        """Test rays have no duplicates, no consecutive centers and follow edges."""
        lattice = generate_lattice(*BOARD_SIZES[size])

        for vertex_id, _, ray in _all_rays(lattice):
            assert len(ray) == len(set(ray))
            assert vertex_id not in ray
            previous = vertex_id
            for step in ray:
                assert step in lattice.adjacency[previous]
                assert not (is_center_id(previous) and is_center_id(step))
                previous = step

    def test_each_neighbor_starts_one_ray(self):
        """Test the first ray vertices are exactly the neighbors."""
        lattice = generate_lattice(5, 4)

        for vertex_id, vertex_rays in lattice.rays.items():
            firsts = [ray[0] for ray in vertex_rays if ray]
            assert sorted(firsts) == sorted(lattice.adjacency[vertex_id])

    def test_opposite_rays_are_consistent(self):
        """Test stepping back from a ray's first vertex returns to the origin."""
        lattice = generate_lattice(5, 4)

        for vertex_id, direction, ray in _all_rays(lattice):
            if ray:
                back = lattice.rays[ray[0]][(direction + 3) % 6]
                assert back[0] == vertex_id

    def test_ray_unknown_vertex(self):
        """Test asking for a ray from an unknown vertex fails."""
        lattice = generate_lattice(1, 1)

        with pytest.raises(ValueError, match="Unknown vertex"):
            lattice.ray("99,99", 0)


class TestLatticeValidation:
    """Test invalid configuration is rejected."""

    @pytest.mark.parametrize(
        "columns,rows",
        [(0, 4), (5, 0), (-1, 4), (2.5, 4), (True, 4)],
    )
    def test_invalid_dimensions(self, columns, rows):
        """Test non-positive or non-integer dimensions."""
        with pytest.raises(ValueError):
            generate_lattice(columns, rows)

    def test_invalid_hex_size(self):
        """Test non-positive hex size."""
        with pytest.raises(ValueError, match="Invalid hex_size"):
            generate_lattice(5, 4, hex_size=0)
