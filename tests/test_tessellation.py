"""Tests for Delaunay/Voronoi tessellation."""

import numpy as np
import pytest
from shapely.geometry import Polygon, box

from py_plotgen.core.alea_prng import AleaPRNG
from py_plotgen.core.point_distribution import distribute_points
from py_plotgen.core.tessellation import build_tessellation, clip_cell

WIDTH, HEIGHT = 800, 600


def is_convex(polygon):
    edges = np.roll(polygon, -1, axis=0) - polygon
    nxt = np.roll(edges, -1, axis=0)
    cross = edges[:, 0] * nxt[:, 1] - edges[:, 1] * nxt[:, 0]
    cross = cross[np.abs(cross) > 1e-9]
    return np.all(cross > 0) or np.all(cross < 0)


def contains(polygon, point):
    edges = np.roll(polygon, -1, axis=0) - polygon
    rel = point - polygon
    cross = edges[:, 0] * rel[:, 1] - edges[:, 1] * rel[:, 0]
    return np.all(cross >= -1e-9) or np.all(cross <= 1e-9)


class TestTessellation:
    """Test partition properties of the clipped diagram."""

    @pytest.fixture
    def random_tessellation(self):
        sites = distribute_points(AleaPRNG(42), 50, WIDTH, HEIGHT, margin=20)
        return build_tessellation(sites, WIDTH, HEIGHT)

    def test_square_with_center(self):
        sites = np.array([[10, 10], [90, 10], [90, 90], [10, 90], [50, 50]], dtype=float)
        tess = build_tessellation(sites, 100, 100)
        assert len(tess.triangles) == 4
        assert tess.cell_indices() == [0, 1, 2, 3, 4]

    def test_one_cell_per_site(self, random_tessellation):
        assert len(random_tessellation.cells) == len(random_tessellation.sites)
        assert random_tessellation.cell_indices() == list(range(50))

    def test_cells_inside_rectangle(self, random_tessellation):
        for cell in random_tessellation.cells:
            assert np.all(cell[:, 0] >= 0) and np.all(cell[:, 0] <= WIDTH)
            assert np.all(cell[:, 1] >= 0) and np.all(cell[:, 1] <= HEIGHT)

    def test_cells_convex_and_contain_site(self, random_tessellation):
        for site, cell in zip(random_tessellation.sites, random_tessellation.cells):
            assert is_convex(cell)
            assert contains(cell, site)

    def test_cells_cover_canvas(self, random_tessellation):
        total = sum(Polygon(cell).area for cell in random_tessellation.cells)
        assert total == pytest.approx(WIDTH * HEIGHT, rel=1e-6)

    def test_triangles_reference_sites(self, random_tessellation):
        tris = random_tessellation.triangles
        assert tris.shape[1] == 3
        assert tris.min() >= 0 and tris.max() < 50

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_too_few_sites(self, count):
        sites = np.array([[10.0, 10.0], [50.0, 50.0]])[:count]
        tess = build_tessellation(sites, 100, 100)
        assert tess.is_empty
        assert tess.triangles.shape == (0, 3)
        assert tess.cells == []

    def test_collinear_sites(self):
        """Qhull failures produce an empty tessellation, not an exception."""
        sites = np.array([[10.0, 10.0], [20.0, 20.0], [30.0, 30.0], [40.0, 40.0]])
        tess = build_tessellation(sites, 100, 100)
        assert tess.is_empty


class TestClipping:
    """Test clipping cells to the canvas."""

    @pytest.fixture
    def canvas(self):
        return box(0, 0, 100, 100)

    def test_clip_corner(self, canvas):
        square = np.array([[-10, -10], [10, -10], [10, 10], [-10, 10]], dtype=float)
        clipped = clip_cell(square, canvas)
        assert Polygon(clipped).area == pytest.approx(100.0)
        assert clipped.min() >= 0 and clipped.max() <= 10

    def test_no_closing_vertex(self, canvas):
        square = np.array([[20, 20], [40, 20], [40, 40], [20, 40]], dtype=float)
        clipped = clip_cell(square, canvas)
        assert len(clipped) == 4
        assert not np.array_equal(clipped[0], clipped[-1])

    def test_clip_outside(self, canvas):
        square = np.array([[200, 200], [210, 200], [210, 210], [200, 210]], dtype=float)
        assert clip_cell(square, canvas) is None

    def test_edge_contact_has_no_area(self, canvas):
        """A cell touching the canvas only along an edge is degenerate."""
        square = np.array([[100, 20], [120, 20], [120, 40], [100, 40]], dtype=float)
        assert clip_cell(square, canvas) is None
