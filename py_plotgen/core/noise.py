"""
Coherent noise for terrain-like fields.

Classic lattice value noise with cosine interpolation, summed over octaves
("detail") where each octave doubles the frequency and scales the amplitude
by ``falloff``. The lattice is a 4096-entry table filled from the Alea PRNG,
so the field is a pure function of the seed. Output is conventionally in
[0, 1) for falloff <= 0.5.

Inputs may be scalars or NumPy arrays; arrays are evaluated element-wise.
"""

from typing import Union

import numpy as np
import structlog

from .alea_prng import AleaPRNG, Seed

logger = structlog.get_logger()

PERLIN_YWRAPB = 4
PERLIN_YWRAP = 1 << PERLIN_YWRAPB
PERLIN_SIZE = 4095

DEFAULT_OCTAVES = 4
DEFAULT_FALLOFF = 0.5
MAX_OCTAVES = 16

ArrayLike = Union[float, np.ndarray]


def _scaled_cosine(t: np.ndarray) -> np.ndarray:
    return 0.5 * (1.0 - np.cos(t * np.pi))


class PerlinNoise:
    """Seedable 2D coherent noise generator."""

    def __init__(self, seed: Seed = "default", octaves: int = DEFAULT_OCTAVES,
                 falloff: float = DEFAULT_FALLOFF):
        self.octaves = DEFAULT_OCTAVES
        self.falloff = DEFAULT_FALLOFF
        self.set_detail(octaves, falloff)
        self.reseed(seed)

    def reseed(self, seed: Seed) -> None:
        """Rebuild the lattice table for ``seed``."""
        prng = AleaPRNG(seed)
        self.seed = seed
        self._table = np.array([prng.random() for _ in range(PERLIN_SIZE + 1)])

    def set_detail(self, octaves: int, falloff: float) -> None:
        """
        Set octave count and per-octave falloff.

        Out-of-range values are clamped: octaves to [1, MAX_OCTAVES],
        falloff to [0, 1].
        """
        clamped_octaves = int(min(max(int(round(octaves)), 1), MAX_OCTAVES))
        clamped_falloff = float(min(max(falloff, 0.0), 1.0))
        if clamped_octaves != octaves or clamped_falloff != falloff:
            logger.debug("Noise detail clamped",
                         octaves=clamped_octaves, falloff=clamped_falloff)
        self.octaves = clamped_octaves
        self.falloff = clamped_falloff

    def noise2d(self, x: ArrayLike, y: ArrayLike) -> ArrayLike:
        """Sample the field at (x, y). Negative coordinates are mirrored."""
        x, y = np.broadcast_arrays(np.abs(np.asarray(x, dtype=np.float64)),
                                   np.abs(np.asarray(y, dtype=np.float64)))
        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        xf = x - xi
        yf = y - yi

        table = self._table
        result = np.zeros(xf.shape, dtype=np.float64)
        amplitude = 0.5

        for _ in range(self.octaves):
            offset = xi + (yi << PERLIN_YWRAPB)
            rxf = _scaled_cosine(xf)
            ryf = _scaled_cosine(yf)

            n1 = table[offset & PERLIN_SIZE]
            n1 = n1 + rxf * (table[(offset + 1) & PERLIN_SIZE] - n1)
            n2 = table[(offset + PERLIN_YWRAP) & PERLIN_SIZE]
            n2 = n2 + rxf * (table[(offset + PERLIN_YWRAP + 1) & PERLIN_SIZE] - n2)
            n1 = n1 + ryf * (n2 - n1)

            result += n1 * amplitude
            amplitude *= self.falloff

            xi = xi << 1
            xf = xf * 2
            yi = yi << 1
            yf = yf * 2

            x_carry = xf >= 1.0
            xi = np.where(x_carry, xi + 1, xi)
            xf = np.where(x_carry, xf - 1.0, xf)
            y_carry = yf >= 1.0
            yi = np.where(y_carry, yi + 1, yi)
            yf = np.where(y_carry, yf - 1.0, yf)

        if result.ndim == 0:
            return float(result)
        return result
