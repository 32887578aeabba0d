"""
3D wireframe scene construction.

Builds world-space line segments for the box, terrain and wormhole
generators. Segments are returned as ``(n, 2, 3)`` arrays: segment, endpoint,
xyz.
"""

from dataclasses import dataclass
from typing import List

import numpy as np
import structlog
from scipy.spatial.transform import Rotation

from ..config.parameters import BoxParameters, MountainParameters, WormholeParameters
from .alea_prng import AleaPRNG
from .fields import terrain_height
from .noise import PerlinNoise

logger = structlog.get_logger()

# Corner order: bottom face (-h) then top face (+h), each walked around.
BOX_CORNER_SIGNS = np.array([
    [-1, -1, -1], [1, -1, -1], [1, -1, 1], [-1, -1, 1],
    [-1, 1, -1], [1, 1, -1], [1, 1, 1], [-1, 1, 1],
], dtype=np.float64)

BOX_EDGE_INDICES = np.array([
    [0, 1], [1, 2], [2, 3], [3, 0],
    [4, 5], [5, 6], [6, 7], [7, 4],
    [0, 4], [1, 5], [2, 6], [3, 7],
])


def scene_rotation(angles) -> Rotation:
    """
    Rotation for (x, y, z) angles in degrees.

    Intrinsic XYZ: applied to a vector, Z acts first, then Y, then X.
    """
    return Rotation.from_euler("XYZ", angles, degrees=True)


@dataclass
class BoxInstance:
    """One randomly sized, placed and rotated box."""

    size: np.ndarray       # full width, height, depth
    position: np.ndarray   # center in world space
    rotation: np.ndarray   # degrees about x, y, z

    def corners(self) -> np.ndarray:
        """The eight world-space corners in canonical order."""
        local = BOX_CORNER_SIGNS * (self.size / 2.0)
        return scene_rotation(self.rotation).apply(local) + self.position

    def edges(self) -> np.ndarray:
        """The twelve edges as a (12, 2, 3) array."""
        return self.corners()[BOX_EDGE_INDICES]


def generate_boxes(params: BoxParameters, rng: AleaPRNG) -> List[BoxInstance]:
    """
    Sample box instances.

    Per box the generator is consumed in a fixed order: width, height, depth,
    then position x, y, z, then rotation x, y, z.
    """
    boxes = []
    half_w = params.placement_volume_width / 2
    half_h = params.placement_volume_height / 2
    half_d = params.placement_volume_depth / 2

    for _ in range(params.num_boxes):
        size = np.array([
            rng.uniform(params.min_box_width, params.max_box_width),
            rng.uniform(params.min_box_height, params.max_box_height),
            rng.uniform(params.min_box_depth, params.max_box_depth),
        ])
        position = np.array([
            rng.uniform(-half_w, half_w),
            rng.uniform(-half_h, half_h),
            rng.uniform(-half_d, half_d),
        ])
        rotation = np.array([
            rng.uniform(-params.max_rotation_x, params.max_rotation_x),
            rng.uniform(-params.max_rotation_y, params.max_rotation_y),
            rng.uniform(-params.max_rotation_z, params.max_rotation_z),
        ])
        boxes.append(BoxInstance(size=size, position=position, rotation=rotation))

    logger.debug("Boxes generated", count=len(boxes))
    return boxes


def box_segments(boxes: List[BoxInstance]) -> np.ndarray:
    """All box edges, box by box, as an (n, 2, 3) array."""
    if not boxes:
        return np.empty((0, 2, 3))
    return np.concatenate([box.edges() for box in boxes])


def grid_edges(points: np.ndarray) -> np.ndarray:
    """
    Connect an open (rows, cols, 3) point grid.

    For each point in row-major order the edge to its right neighbour comes
    first, then the edge to the neighbour below.
    """
    rows, cols = points.shape[:2]
    segments = []
    for i in range(rows):
        for j in range(cols):
            if j < cols - 1:
                segments.append((points[i, j], points[i, j + 1]))
            if i < rows - 1:
                segments.append((points[i, j], points[i + 1, j]))
    return np.array(segments, dtype=np.float64).reshape(-1, 2, 3)


def tube_edges(points: np.ndarray) -> np.ndarray:
    """
    Connect a (rings, columns, 3) point grid closed around its columns.

    For each ring but the last, every point is joined to the next ring and
    then to its angular neighbour (wrapping to column 0). The last ring is
    closed on its own at the end.
    """
    rings, cols = points.shape[:2]
    segments = []
    for i in range(rings - 1):
        for j in range(cols):
            next_j = (j + 1) % cols
            segments.append((points[i, j], points[i + 1, j]))
            segments.append((points[i, j], points[i, next_j]))
    if rings > 1:
        last = rings - 1
        for j in range(cols):
            segments.append((points[last, j], points[last, (j + 1) % cols]))
    return np.array(segments, dtype=np.float64).reshape(-1, 2, 3)


def terrain_grid(params: MountainParameters, noise: PerlinNoise, seed: int) -> np.ndarray:
    """
    Sample the terrain into a (res_z + 1, res_x + 1, 3) point grid.

    The grid is centered on the origin in x and z, and y is the terrain
    height. Noise detail is taken from the parameters.
    """
    noise.set_detail(params.noise_detail_lod, params.noise_detail_falloff)

    cell_w = params.grid_size_x / params.grid_resolution_x
    cell_d = params.grid_size_z / params.grid_resolution_z
    xs = np.arange(params.grid_resolution_x + 1) * cell_w - params.grid_size_x / 2
    zs = np.arange(params.grid_resolution_z + 1) * cell_d - params.grid_size_z / 2
    gx, gz = np.meshgrid(xs, zs)

    heights = terrain_height(noise, gx, gz, seed, params.noise_scale,
                             params.mountain_height_scale)
    return np.stack([gx, heights, gz], axis=-1)


def terrain_mesh(params: MountainParameters, noise: PerlinNoise, seed: int) -> np.ndarray:
    """Terrain wireframe as an (n, 2, 3) segment array."""
    segments = grid_edges(terrain_grid(params, noise, seed))
    logger.debug("Terrain mesh built", segments=len(segments))
    return segments


def wormhole_profile_radius(v: float, params: WormholeParameters) -> float:
    """
    Tube radius at normalized axial position ``v`` in [0, 1].

    The radius blends from the throat radius towards the mouth on the same
    side of the throat with a power-law curve. A throat sitting exactly on
    an end collapses that end to the throat radius.
    """
    tp = params.throat_position
    mouth = params.mouth_radius_1 if v < tp else params.mouth_radius_2

    if (tp == 0 and v == 0) or (tp == 1 and v == 1):
        t = 0.0
    elif v <= tp:
        t = 0.0 if tp == 0 else 1 - v / tp
    else:
        t = 0.0 if tp == 1 else (v - tp) / (1 - tp)
    t = min(1.0, max(0.0, t))

    return params.throat_radius + (mouth - params.throat_radius) * t ** params.profile_exponent


def wormhole_grid(params: WormholeParameters) -> np.ndarray:
    """Sample the tube into a (v_density + 1, u_density, 3) point grid along z."""
    n_v = params.grid_density_v
    n_u = params.grid_density_u
    angles = np.arange(n_u) / n_u * 2 * np.pi

    rings = []
    for i in range(n_v + 1):
        v = i / n_v
        z = -params.length / 2 + v * params.length
        radius = wormhole_profile_radius(v, params)
        ring = np.stack([radius * np.cos(angles), radius * np.sin(angles),
                         np.full(n_u, z)], axis=-1)
        rings.append(ring)
    return np.array(rings)


def wormhole_mesh(params: WormholeParameters) -> np.ndarray:
    """Wormhole wireframe as an (n, 2, 3) segment array."""
    segments = tube_edges(wormhole_grid(params))
    logger.debug("Wormhole mesh built", segments=len(segments))
    return segments
