"""Tests for 3D scene construction."""

import numpy as np
import pytest

from py_plotgen.config.parameters import BoxParameters, MountainParameters, WormholeParameters
from py_plotgen.core.alea_prng import AleaPRNG
from py_plotgen.core.noise import PerlinNoise
from py_plotgen.core.scene import (
    BoxInstance, box_segments, generate_boxes, grid_edges, scene_rotation,
    terrain_grid, terrain_mesh, tube_edges,
    wormhole_grid, wormhole_mesh, wormhole_profile_radius,
)


def edge_lengths(segments):
    return np.linalg.norm(segments[:, 1] - segments[:, 0], axis=-1)


class TestBoxes:
    """Test box instances and their edges."""

    def test_unrotated_corners(self):
        box = BoxInstance(size=np.array([2.0, 4.0, 6.0]),
                          position=np.array([10.0, 0.0, 0.0]),
                          rotation=np.zeros(3))
        corners = box.corners()
        np.testing.assert_allclose(corners[0], [9, -2, -3])
        np.testing.assert_allclose(corners[6], [11, 2, 3])

    def test_edges_shape_and_lengths(self):
        box = BoxInstance(np.array([2.0, 4.0, 6.0]), np.zeros(3), np.zeros(3))
        edges = box.edges()
        assert edges.shape == (12, 2, 3)
        np.testing.assert_allclose(sorted(edge_lengths(edges)), [2] * 4 + [4] * 4 + [6] * 4)

    def test_rotation_preserves_lengths(self):
        plain = BoxInstance(np.array([3.0, 5.0, 7.0]), np.zeros(3), np.zeros(3))
        rotated = BoxInstance(np.array([3.0, 5.0, 7.0]), np.array([1.0, 2.0, 3.0]),
                              np.array([30.0, -20.0, 45.0]))
        np.testing.assert_allclose(edge_lengths(rotated.edges()), edge_lengths(plain.edges()))

    def test_rotation_about_own_center(self):
        box = BoxInstance(np.array([3.0, 5.0, 7.0]), np.array([50.0, -20.0, 5.0]),
                          np.array([30.0, -20.0, 45.0]))
        np.testing.assert_allclose(box.corners().mean(axis=0), box.position)

    def test_euler_order(self):
        """Z is applied first, then Y, then X."""
        # z 90 takes x to y, then x 90 takes y to z
        np.testing.assert_allclose(scene_rotation([90, 0, 90]).apply([1.0, 0.0, 0.0]),
                                   [0, 0, 1], atol=1e-12)
        # y 90 takes z to x, then x 90 leaves x alone
        np.testing.assert_allclose(scene_rotation([90, 90, 0]).apply([0.0, 0.0, 1.0]),
                                   [1, 0, 0], atol=1e-12)

    def test_euler_matches_axis_product(self):
        rx, ry, rz = np.radians([30.0, -20.0, 45.0])
        cx, sx = np.cos(rx), np.sin(rx)
        cy, sy = np.cos(ry), np.sin(ry)
        cz, sz = np.cos(rz), np.sin(rz)
        mx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
        my = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
        mz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
        np.testing.assert_allclose(scene_rotation([30.0, -20.0, 45.0]).as_matrix(),
                                   mx @ my @ mz, atol=1e-12)

    def test_generate_within_ranges(self):
        params = BoxParameters(num_boxes=30)
        boxes = generate_boxes(params, AleaPRNG(1))
        assert len(boxes) == 30
        for box in boxes:
            assert 20 <= box.size[0] <= 80
            assert 20 <= box.size[1] <= 150
            assert abs(box.position[0]) <= 250 and abs(box.position[1]) <= 200
            assert np.all(np.abs(box.rotation) <= 45)

    def test_nine_draws_per_box(self):
        rng = AleaPRNG(1)
        generate_boxes(BoxParameters(num_boxes=7), rng)
        assert rng.call_count == 63

    def test_segments(self):
        boxes = generate_boxes(BoxParameters(num_boxes=5), AleaPRNG(2))
        segments = box_segments(boxes)
        assert segments.shape == (60, 2, 3)
        assert box_segments([]).shape == (0, 2, 3)

    def test_deterministic(self):
        a = box_segments(generate_boxes(BoxParameters(), AleaPRNG(3)))
        b = box_segments(generate_boxes(BoxParameters(), AleaPRNG(3)))
        np.testing.assert_array_equal(a, b)


class TestGridEdges:
    """Test mesh connectivity."""

    def test_open_grid(self):
        points = np.arange(2 * 3 * 3, dtype=float).reshape(2, 3, 3)
        segments = grid_edges(points)
        assert len(segments) == 2 * 2 + 1 * 3
        np.testing.assert_array_equal(segments[0], [points[0, 0], points[0, 1]])
        np.testing.assert_array_equal(segments[1], [points[0, 0], points[1, 0]])

    def test_tube_wraps(self):
        points = np.arange(3 * 4 * 3, dtype=float).reshape(3, 4, 3)
        segments = tube_edges(points)
        assert len(segments) == 2 * 4 * 2 + 4
        wrap = np.array([points[0, 3], points[0, 0]])
        assert any(np.array_equal(s, wrap) for s in segments)
        last_ring = np.array([points[2, 3], points[2, 0]])
        np.testing.assert_array_equal(segments[-1], last_ring)


class TestTerrain:
    """Test the terrain mesh."""

    def test_grid_extent(self):
        params = MountainParameters(grid_resolution_x=3, grid_resolution_z=2)
        grid = terrain_grid(params, PerlinNoise(1), 1)
        assert grid.shape == (3, 4, 3)
        assert grid[0, 0, 0] == pytest.approx(-350)
        assert grid[0, -1, 0] == pytest.approx(350)
        assert grid[-1, 0, 2] == pytest.approx(350)

    def test_segment_count(self):
        params = MountainParameters(grid_resolution_x=3, grid_resolution_z=2)
        assert len(terrain_mesh(params, PerlinNoise(1), 1)) == 3 * 3 + 2 * 4

    def test_seed_changes_heights(self):
        params = MountainParameters(grid_resolution_x=5, grid_resolution_z=5)
        a = terrain_grid(params, PerlinNoise(1), 1)
        b = terrain_grid(params, PerlinNoise(2), 2)
        assert not np.array_equal(a[..., 1], b[..., 1])


class TestWormhole:
    """Test the wormhole profile and mesh."""

    @pytest.mark.parametrize("v,expected", [(0.0, 150.0), (0.5, 50.0), (1.0, 120.0)])
    def test_profile_defaults(self, v, expected):
        assert wormhole_profile_radius(v, WormholeParameters()) == pytest.approx(expected)

    def test_throat_at_ends(self):
        at_start = WormholeParameters(throat_position=0.0)
        assert wormhole_profile_radius(0.0, at_start) == pytest.approx(50.0)
        assert wormhole_profile_radius(1.0, at_start) == pytest.approx(120.0)
        at_end = WormholeParameters(throat_position=1.0)
        assert wormhole_profile_radius(1.0, at_end) == pytest.approx(50.0)
        assert wormhole_profile_radius(0.0, at_end) == pytest.approx(150.0)

    def test_profile_exponent(self):
        params = WormholeParameters(profile_exponent=2.0)
        # v = 0.25 is halfway between the first mouth and the throat
        assert wormhole_profile_radius(0.25, params) == pytest.approx(50 + 100 * 0.25)

    def test_ring_radius(self):
        grid = wormhole_grid(WormholeParameters())
        assert grid.shape == (31, 24, 3)
        np.testing.assert_allclose(np.hypot(grid[0, :, 0], grid[0, :, 1]), 150.0)
        assert grid[0, 0, 2] == pytest.approx(-200)
        assert grid[-1, 0, 2] == pytest.approx(200)

    def test_segment_count(self):
        assert len(wormhole_mesh(WormholeParameters())) == 30 * 24 * 2 + 24
