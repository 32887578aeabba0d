"""
Pattern generators and their registry.
"""

from typing import Dict, List, Type

from .base import OrbitGenerator, PatternGenerator
from .boxes import BoxGenerator
from .delaunay import DelaunayGenerator
from .kinetic_text import KineticTextGenerator
from .maze import MazeGenerator
from .mountain import MountainGenerator
from .tiling import TilingGenerator
from .voronoi import VoronoiGenerator
from .waves import WaveGenerator
from .wormhole import WormholeGenerator

GENERATORS: Dict[str, Type[PatternGenerator]] = {
    cls.name: cls
    for cls in (
        WaveGenerator,
        MountainGenerator,
        WormholeGenerator,
        BoxGenerator,
        VoronoiGenerator,
        DelaunayGenerator,
        MazeGenerator,
        TilingGenerator,
        KineticTextGenerator,
    )
}


def list_generators() -> List[str]:
    return list(GENERATORS)


def get_generator(name: str, **kwargs) -> PatternGenerator:
    """
    Instantiate a generator by name.

    Args:
        name: Registered generator name
        **kwargs: Passed to the generator constructor

    Raises:
        ValueError: If no generator is registered under ``name``
    """
    try:
        cls = GENERATORS[name]
    except KeyError:
        raise ValueError(
            f"Unknown generator '{name}'. Available: {', '.join(GENERATORS)}"
        ) from None
    return cls(**kwargs)


__all__ = ['GENERATORS', 'PatternGenerator', 'OrbitGenerator', 'BoxGenerator',
           'DelaunayGenerator', 'KineticTextGenerator', 'MazeGenerator', 'MountainGenerator',
           'TilingGenerator',
           'VoronoiGenerator', 'WaveGenerator', 'WormholeGenerator',
           'get_generator', 'list_generators']
