"""Tests for the tile mosaic."""

import numpy as np
import pytest

from py_plotgen.config.parameters import TileShape, TilingParameters
from py_plotgen.core.alea_prng import AleaPRNG
from py_plotgen.core.tiling import Tile, generate_tiles, tile_outline


class TestTiling:
    """Test tile layout and random draw order."""

    def test_four_draws_per_slot(self):
        rng = AleaPRNG(42)
        generate_tiles(TilingParameters(), rng, 800, 600)
        # effective size 32: 26 columns x 20 rows
        assert rng.call_count == 26 * 20 * 4

    def test_tiles_touch_canvas(self):
        tiles = generate_tiles(TilingParameters(), AleaPRNG(1), 800, 600)
        assert tiles
        for tile in tiles:
            assert tile.x < 800 and tile.y < 600
            assert tile.x + tile.size > 0 and tile.y + tile.size > 0

    def test_size_variation(self):
        tiles = generate_tiles(TilingParameters(size_randomness=0.3), AleaPRNG(1), 800, 600)
        assert all(21 <= t.size <= 39 for t in tiles)

    def test_fill_probability_extremes(self):
        none = generate_tiles(TilingParameters(fill_probability=0.0), AleaPRNG(1), 200, 200)
        every = generate_tiles(TilingParameters(fill_probability=1.0), AleaPRNG(1), 200, 200)
        assert not any(t.filled for t in none)
        assert all(t.filled for t in every)

    def test_deterministic(self):
        a = generate_tiles(TilingParameters(), AleaPRNG(5), 800, 600)
        b = generate_tiles(TilingParameters(), AleaPRNG(5), 800, 600)
        assert a == b


class TestOutlines:
    """Test tile outlines."""

    def test_square(self):
        outline = tile_outline(Tile(TileShape.SQUARE, 10, 20, 30, False))
        np.testing.assert_allclose(outline, [[10, 20], [40, 20], [40, 50], [10, 50]])

    def test_triangle_height(self):
        outline = tile_outline(Tile(TileShape.TRIANGLE, 0, 0, 100, False))
        assert outline[1, 1] == pytest.approx(86.6)
        assert outline[0, 0] == pytest.approx(50)

    def test_hexagon(self):
        outline = tile_outline(Tile(TileShape.HEXAGON, 0, 0, 20, False))
        assert outline.shape == (6, 2)
        np.testing.assert_allclose(np.hypot(outline[:, 0] - 10, outline[:, 1] - 10), 10)

    def test_diamond(self):
        outline = tile_outline(Tile(TileShape.DIAMOND, 0, 0, 10, False))
        np.testing.assert_allclose(outline, [[5, 0], [10, 5], [5, 10], [0, 5]])
