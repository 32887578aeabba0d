"""Tests for coherent noise."""

import numpy as np
import pytest

from py_plotgen.core.alea_prng import AleaPRNG
from py_plotgen.core.noise import MAX_OCTAVES, PerlinNoise


class TestPerlinNoise:
    """Test determinism, range and continuity."""

    def test_deterministic(self):
        xs = np.linspace(0, 20, 50)
        a = PerlinNoise(11).noise2d(xs, xs * 0.5)
        b = PerlinNoise(11).noise2d(xs, xs * 0.5)
        np.testing.assert_array_equal(a, b)

    def test_different_seeds(self):
        xs = np.linspace(0, 20, 50)
        assert not np.array_equal(PerlinNoise(1).noise2d(xs, xs), PerlinNoise(2).noise2d(xs, xs))

    def test_range(self):
        noise = PerlinNoise(3, octaves=4, falloff=0.5)
        gx, gy = np.meshgrid(np.linspace(0, 50, 80), np.linspace(0, 50, 80))
        values = noise.noise2d(gx, gy)
        assert values.min() >= 0.0
        assert values.max() < 1.0

    def test_continuity(self):
        """Nearby inputs give nearby outputs."""
        noise = PerlinNoise(8)
        xs = np.linspace(0.1, 30, 300)
        a = noise.noise2d(xs, 2.5)
        b = noise.noise2d(xs + 1e-4, 2.5)
        assert np.max(np.abs(a - b)) < 1e-2

    def test_scalar_matches_array(self):
        noise = PerlinNoise(21)
        xs = np.array([0.3, 4.7, 12.25])
        ys = np.array([1.1, 0.0, 9.9])
        batch = noise.noise2d(xs, ys)
        for i in range(3):
            value = noise.noise2d(float(xs[i]), float(ys[i]))
            assert isinstance(value, float)
            assert value == pytest.approx(batch[i], abs=1e-12)

    def test_lattice_point_single_octave(self):
        """At the origin with one octave the field is half the first table entry."""
        noise = PerlinNoise(5, octaves=1)
        assert noise.noise2d(0.0, 0.0) == 0.5 * AleaPRNG(5).random()

    def test_negative_inputs_mirrored(self):
        noise = PerlinNoise(4)
        assert noise.noise2d(-3.7, -1.2) == noise.noise2d(3.7, 1.2)

    def test_reseed(self):
        noise = PerlinNoise(1)
        before = noise.noise2d(2.5, 3.5)
        noise.reseed(2)
        noise.reseed(1)
        assert noise.noise2d(2.5, 3.5) == before

    def test_detail_clamped(self):
        """Out-of-range detail values are clamped rather than rejected."""
        noise = PerlinNoise(1)
        noise.set_detail(0, 2.0)
        assert noise.octaves == 1
        assert noise.falloff == 1.0
        noise.set_detail(100, -1.0)
        assert noise.octaves == MAX_OCTAVES
        assert noise.falloff == 0.0
