"""
Configuration modules for pattern generation.
"""

from .settings import Settings, settings
from .parameters import (
    ASPECT_RATIOS,
    AspectRatio,
    BoxParameters,
    DelaunayParameters,
    DistributionType,
    GeneratorParameters,
    KineticTextParameters,
    MazeParameters,
    MountainParameters,
    TileShape,
    TextEffect,
    TextWaveForm,
    TilingParameters,
    VoronoiParameters,
    WaveParameters,
    WaveType,
    WormholeParameters,
)

__all__ = ['Settings', 'settings', 'ASPECT_RATIOS', 'AspectRatio', 'BoxParameters',
           'DelaunayParameters', 'DistributionType', 'GeneratorParameters',
           'KineticTextParameters', 'TextEffect', 'TextWaveForm',
           'MazeParameters', 'MountainParameters', 'TileShape',
           'TilingParameters', 'VoronoiParameters', 'WaveParameters',
           'WaveType', 'WormholeParameters']
