"""Random tile mosaic laid over the canvas on a jittered grid."""

from dataclasses import dataclass
from typing import Callable, Dict, List

import numpy as np
import structlog

from ..config.parameters import TileShape, TilingParameters
from .alea_prng import AleaPRNG

logger = structlog.get_logger()

TRIANGLE_HEIGHT = 0.866


@dataclass
class Tile:
    """One tile: top-left corner of its bounding box, edge size and fill."""

    shape: TileShape
    x: float
    y: float
    size: float
    filled: bool


def square_outline(x: float, y: float, size: float) -> np.ndarray:
    return np.array([[x, y], [x + size, y], [x + size, y + size], [x, y + size]])


def triangle_outline(x: float, y: float, size: float) -> np.ndarray:
    h = size * TRIANGLE_HEIGHT
    return np.array([[x + size / 2, y], [x, y + h], [x + size, y + h]])


def hexagon_outline(x: float, y: float, size: float) -> np.ndarray:
    radius = size / 2
    angles = np.arange(6) * 2 * np.pi / 6
    return np.stack([x + radius + radius * np.cos(angles),
                     y + radius + radius * np.sin(angles)], axis=-1)


def diamond_outline(x: float, y: float, size: float) -> np.ndarray:
    half = size / 2
    return np.array([[x + half, y], [x + size, y + half], [x + half, y + size], [x, y + half]])


# Circles have no polygon outline; they are drawn as discs.
TILE_OUTLINES: Dict[TileShape, Callable[[float, float, float], np.ndarray]] = {
    TileShape.SQUARE: square_outline,
    TileShape.TRIANGLE: triangle_outline,
    TileShape.HEXAGON: hexagon_outline,
    TileShape.DIAMOND: diamond_outline,
}


def tile_outline(tile: Tile) -> np.ndarray:
    return TILE_OUTLINES[tile.shape](tile.x, tile.y, tile.size)


def generate_tiles(params: TilingParameters, rng: AleaPRNG,
                   width: float, height: float) -> List[Tile]:
    """
    Lay tiles row by row over the canvas.

    Every grid slot draws its size variation, x and y offsets and fill
    decision in that order, even when the tile ends up outside the canvas
    and is skipped.
    """
    effective = params.base_tile_size + params.tile_spacing
    cols = int(np.ceil(width / effective)) + 1
    rows = int(np.ceil(height / effective)) + 1

    tiles = []
    for row in range(rows):
        for col in range(cols):
            variation = rng.uniform(-params.size_randomness, params.size_randomness)
            size = params.base_tile_size * (1 + variation)
            x = col * effective + rng.uniform(-params.tile_spacing, params.tile_spacing)
            y = row * effective + rng.uniform(-params.tile_spacing, params.tile_spacing)
            filled = rng.random() < params.fill_probability

            if x < width and y < height and x + size > 0 and y + size > 0:
                tiles.append(Tile(TileShape(params.tile_shape), x, y, size, filled))

    logger.debug("Tiles laid", slots=rows * cols, drawn=len(tiles))
    return tiles
