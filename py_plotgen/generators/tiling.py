"""Random tile mosaic."""

from typing import List

from ..config.parameters import TileShape, TilingParameters
from ..core.tiling import Tile, generate_tiles, tile_outline
from ..export.frame import TILES, Circle, Frame, Layer, Polygon
from ..utils.random import GenerationContext
from .base import PatternGenerator


class TilingGenerator(PatternGenerator):
    name = "tiling"
    parameters_model = TilingParameters

    def build(self, context: GenerationContext) -> List[Tile]:
        return generate_tiles(self.params, context.random, self.width, self.height)

    def draw(self, cache: List[Tile]) -> Frame:
        frame = self.new_frame()
        layer = frame.add_layer(Layer(TILES, stroke_width=self.params.stroke_weight))
        for tile in cache:
            fill = "black" if tile.filled else None
            if tile.shape == TileShape.CIRCLE:
                half = tile.size / 2
                layer.add(Circle(tile.x + half, tile.y + half, half, fill=fill))
            else:
                points = [(float(x), float(y)) for x, y in tile_outline(tile)]
                layer.add(Polygon(points, fill=fill))
        return frame
