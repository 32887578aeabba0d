"""
Parameter sets for the pattern generators.

Each generator takes one flat, immutable parameter model. Defaults are the
stock settings of each pattern. A change to any field means building a new
model and running a full regeneration.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class WaveType(str, Enum):
    """Waveform used by the wave height field."""

    SINE = "sine"
    TRIANGLE = "triangle"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"


class DistributionType(str, Enum):
    """Site placement policy."""

    RANDOM = "random"
    UNIFORM = "uniform"  # jittered grid
    CLUSTERED = "clustered"


class TileShape(str, Enum):
    """Tile outline for the tiling generator."""

    SQUARE = "square"
    TRIANGLE = "triangle"
    HEXAGON = "hexagon"
    DIAMOND = "diamond"
    CIRCLE = "circle"


class TextWaveForm(str, Enum):
    """Shape of the wave field behind the kinetic text grid."""

    RADIAL = "radial"
    SPIRAL = "spiral"
    VERTICAL = "vertical"      # bands stacked along y, rotated by wave_angle
    HORIZONTAL = "horizontal"  # bands side by side along x, rotated by wave_angle


class TextEffect(str, Enum):
    """Which glyph attribute the wave modulates."""

    SIZE = "size"
    OPACITY = "opacity"
    BOTH = "both"
    NONE = "none"


AspectRatio = Literal["1:1", "16:9", "9:16", "4:3", "3:4", "3:2", "2:3"]

ASPECT_RATIOS = {
    "1:1": 1 / 1,
    "16:9": 16 / 9,
    "9:16": 9 / 16,
    "4:3": 4 / 3,
    "3:4": 3 / 4,
    "3:2": 3 / 2,
    "2:3": 2 / 3,
}


class GeneratorParameters(BaseModel):
    """Base class: frozen so a generation pass never sees a field change."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class WaveParameters(GeneratorParameters):
    """Wireframe ocean waves seen from a pitched pinhole camera."""

    grid_resolution: int = Field(default=25, ge=1, description="Half-width of the wave grid in columns")
    wave_amplitude: float = Field(default=40.0, description="Height multiplier")
    wave_frequency: float = Field(default=0.015, description="Spatial frequency along depth")
    wave_phase: float = Field(default=0.0, description="Phase offset in radians")
    wave_type: WaveType = Field(default=WaveType.SINE, description="Waveform")
    stroke_weight: float = Field(default=1.0, gt=0, description="Base stroke width")
    time_offset: float = Field(default=0.0, description="Animation time sample")
    camera_height: float = Field(default=50.0, description="Camera elevation")
    viewing_angle: float = Field(default=0.3, description="Camera pitch in radians")
    perspective_distance: float = Field(default=300.0, gt=0, description="Focal distance")
    ocean_depth: float = Field(default=400.0, gt=0, description="Extent along depth")
    wave_density: float = Field(default=1.0, gt=0, description="Line density along x")
    cross_wave_density: float = Field(default=1.0, gt=0, description="Cross line density along depth")
    depth_resolution: float = Field(default=20.0, gt=0, description="Sample spacing along depth")


class MountainParameters(GeneratorParameters):
    """Noise terrain rendered as a wireframe mesh."""

    grid_size_x: float = Field(default=700.0, gt=0, description="Terrain extent along x")
    grid_size_z: float = Field(default=700.0, gt=0, description="Terrain extent along z")
    grid_resolution_x: int = Field(default=35, ge=1, description="Cells along x")
    grid_resolution_z: int = Field(default=35, ge=1, description="Cells along z")
    mountain_height_scale: float = Field(default=200.0, description="Height multiplier")
    noise_scale: float = Field(default=0.04, description="Noise input scale")
    noise_detail_lod: int = Field(default=4, description="Noise octaves (clamped)")
    noise_detail_falloff: float = Field(default=0.35, description="Noise falloff (clamped)")
    stroke_weight: float = Field(default=0.8, gt=0, description="Stroke width")
    initial_rotation_x: float = Field(default=55.0, description="Scene rotation about X in degrees")
    initial_rotation_y: float = Field(default=0.0, description="Scene rotation about Y in degrees")
    initial_rotation_z: float = Field(default=-40.0, description="Scene rotation about Z in degrees")


class WormholeParameters(GeneratorParameters):
    """Hyperboloid-like tube between two mouths."""

    grid_density_u: int = Field(default=24, ge=1, description="Angular divisions")
    grid_density_v: int = Field(default=30, ge=1, description="Axial divisions")
    mouth_radius_1: float = Field(default=150.0, ge=0, description="Radius of the first mouth")
    mouth_radius_2: float = Field(default=120.0, ge=0, description="Radius of the second mouth")
    throat_radius: float = Field(default=50.0, ge=0, description="Radius at the throat")
    throat_position: float = Field(default=0.5, ge=0, le=1, description="Throat location along the axis")
    length: float = Field(default=400.0, gt=0, description="Tube length")
    profile_exponent: float = Field(default=1.5, gt=0, description="Power-law blend exponent")
    stroke_weight: float = Field(default=1.0, gt=0, description="Stroke width")
    initial_rotation_x: float = Field(default=30.0, description="Scene rotation about X in degrees")
    initial_rotation_y: float = Field(default=-30.0, description="Scene rotation about Y in degrees")
    initial_rotation_z: float = Field(default=0.0, description="Scene rotation about Z in degrees")


class BoxParameters(GeneratorParameters):
    """Randomly placed, rotated wireframe boxes."""

    num_boxes: int = Field(default=50, ge=0, description="Number of boxes")
    min_box_width: float = Field(default=20.0, gt=0)
    max_box_width: float = Field(default=80.0, gt=0)
    min_box_height: float = Field(default=20.0, gt=0)
    max_box_height: float = Field(default=150.0, gt=0)
    min_box_depth: float = Field(default=20.0, gt=0)
    max_box_depth: float = Field(default=80.0, gt=0)
    placement_volume_width: float = Field(default=500.0, ge=0)
    placement_volume_height: float = Field(default=400.0, ge=0)
    placement_volume_depth: float = Field(default=500.0, ge=0)
    max_rotation_x: float = Field(default=45.0, ge=0, description="Max per-box rotation in degrees")
    max_rotation_y: float = Field(default=45.0, ge=0)
    max_rotation_z: float = Field(default=45.0, ge=0)
    stroke_weight: float = Field(default=1.0, gt=0, description="Stroke width")
    initial_rotation_x: float = Field(default=20.0, description="Scene rotation about X in degrees")
    initial_rotation_y: float = Field(default=-30.0, description="Scene rotation about Y in degrees")
    initial_rotation_z: float = Field(default=0.0, description="Scene rotation about Z in degrees")


class VoronoiParameters(GeneratorParameters):
    """Voronoi cells over a distributed site set."""

    num_points: int = Field(default=50, ge=0, description="Size of the site set")
    boundary_margin: float = Field(default=20.0, ge=0, description="Inset from canvas edge")
    distribution_type: DistributionType = Field(default=DistributionType.RANDOM)
    min_distance: float = Field(default=0.0, ge=0, description="Greedy rejection threshold")
    cluster_factor: float = Field(default=0.5, description="Cluster count driver in [0, 1] (clamped)")
    cluster_tightness: float = Field(default=0.5, description="Cluster radius driver in [0, 1] (clamped)")
    show_sites: bool = Field(default=True)
    show_cells: bool = Field(default=True)
    stroke_weight: float = Field(default=1.0, gt=0)


class DelaunayParameters(GeneratorParameters):
    """Delaunay triangulation of uniformly scattered sites."""

    num_points: int = Field(default=30, ge=0, description="Size of the site set")
    show_points: bool = Field(default=True)
    show_triangle_edges: bool = Field(default=True)


class MazeParameters(GeneratorParameters):
    """Perfect maze with its shortest solution."""

    density: int = Field(default=10, ge=1, description="Cells per side")
    aspect_ratio: AspectRatio = Field(default="1:1", description="Width to height ratio")
    show_solution: bool = Field(default=True)
    base_size: float = Field(default=500.0, gt=0, description="Length of the longer side")

    def display_size(self):
        """Width and height of the maze drawing for the aspect ratio."""
        ratio = ASPECT_RATIOS[self.aspect_ratio]
        if ratio >= 1:
            return self.base_size, self.base_size / ratio
        return self.base_size * ratio, self.base_size


class TilingParameters(GeneratorParameters):
    """Random tile mosaic."""

    tile_shape: TileShape = Field(default=TileShape.SQUARE)
    base_tile_size: float = Field(default=30.0, gt=0)
    size_randomness: float = Field(default=0.3, ge=0)
    fill_probability: float = Field(default=0.7, ge=0, le=1)
    stroke_weight: float = Field(default=1.0, gt=0)
    tile_spacing: float = Field(default=2.0, ge=0)


class KineticTextParameters(GeneratorParameters):
    """Character grid whose glyph size and opacity follow a wave field."""

    text: str = Field(default="4 8 15 16 23 42", description="Characters cycled through the grid")
    base_font_size: float = Field(default=10.0, gt=0, description="Unmodulated font size")
    density: float = Field(default=0.7, gt=0, description="Grid cell size as a fraction of the font size")
    wave_amplitude: float = Field(default=0.8, ge=0, le=1, description="Effect strength")
    wave_frequency: float = Field(default=0.05, description="Spatial frequency")
    wave_phase: float = Field(default=0.0, description="Phase offset in radians")
    effect_type: TextEffect = Field(default=TextEffect.SIZE)
    wave_form: TextWaveForm = Field(default=TextWaveForm.RADIAL)
    spiral_tightness: float = Field(default=5.0, description="Arm count of the spiral field")
    wave_angle: float = Field(default=0.0, description="Band rotation in radians")
