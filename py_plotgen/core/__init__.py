"""
Core geometry generation functionality.
"""

from .alea_prng import AleaPRNG
from .noise import PerlinNoise
from .point_distribution import distribute_points, filter_min_distance
from .tessellation import Tessellation, build_tessellation
from .fields import waveform, wave_height, terrain_height
from .scene import BoxInstance, generate_boxes, box_segments, terrain_mesh, wormhole_mesh
from .camera import PitchCamera, OrbitCamera, FixedMatrices, project_points, project_segments, export_visibility_mask
from .maze import Maze, Wall, generate_maze
from .tiling import Tile, generate_tiles
from .typography import Glyph, layout_glyphs

__all__ = ['AleaPRNG', 'PerlinNoise', 'distribute_points', 'filter_min_distance',
           'Tessellation', 'build_tessellation', 'waveform', 'wave_height', 'terrain_height',
           'BoxInstance', 'generate_boxes', 'box_segments', 'terrain_mesh', 'wormhole_mesh',
           'PitchCamera', 'OrbitCamera', 'FixedMatrices', 'project_points', 'project_segments',
           'export_visibility_mask', 'Maze', 'Wall', 'generate_maze', 'Tile', 'generate_tiles',
           'Glyph', 'layout_glyphs']
