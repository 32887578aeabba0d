"""
Random number generation utilities.

A generation pass seeds its randomness exactly once, through
``GenerationContext.from_seed``, and threads the resulting context into the
geometry functions. Nothing in the package keeps a module-level generator,
so no state carries over from one pass to the next.
"""

import secrets
from dataclasses import dataclass

from ..core.alea_prng import AleaPRNG
from ..core.noise import DEFAULT_FALLOFF, DEFAULT_OCTAVES, PerlinNoise


@dataclass
class GenerationContext:
    """Seeded uniform RNG and coherent noise for one generation pass."""

    seed: int
    random: AleaPRNG
    noise: PerlinNoise

    @classmethod
    def from_seed(cls, seed: int, octaves: int = DEFAULT_OCTAVES,
                  falloff: float = DEFAULT_FALLOFF) -> "GenerationContext":
        """
        Seed both the uniform generator and the noise field.

        Args:
            seed: Integer seed shared by both sources
            octaves: Noise detail (clamped by PerlinNoise)
            falloff: Per-octave amplitude falloff (clamped by PerlinNoise)

        Returns:
            Fresh context; two contexts built from the same arguments
            produce identical sequences.
        """
        return cls(
            seed=seed,
            random=AleaPRNG(seed),
            noise=PerlinNoise(seed, octaves=octaves, falloff=falloff),
        )


def random_seed(upper: int = 10000) -> int:
    """Pick a fresh seed in [0, upper) for a generator loaded without one."""
    return secrets.randbelow(upper)
