"""Voronoi cells over a distributed site set."""

import structlog

from ..config.parameters import VoronoiParameters
from ..core.point_distribution import distribute_points
from ..core.tessellation import Tessellation, build_tessellation
from ..export.frame import CELLS, SITES, Circle, Frame, Layer, Polygon
from ..utils.random import GenerationContext
from .base import PatternGenerator

logger = structlog.get_logger()

SITE_RADIUS = 2.5


class VoronoiGenerator(PatternGenerator):
    name = "voronoi"
    parameters_model = VoronoiParameters

    def build(self, context: GenerationContext) -> Tessellation:
        p = self.params
        sites = distribute_points(
            context.random, p.num_points, self.width, self.height,
            margin=p.boundary_margin,
            distribution=p.distribution_type,
            min_distance=p.min_distance,
            cluster_factor=p.cluster_factor,
            cluster_tightness=p.cluster_tightness,
        )
        return build_tessellation(sites, self.width, self.height)

    def cache_size(self) -> int:
        return len(self._cache.sites) if self._cache is not None else 0

    def draw(self, cache: Tessellation) -> Frame:
        frame = self.new_frame()

        if self.params.show_cells:
            cells = frame.add_layer(Layer(CELLS, stroke_width=self.params.stroke_weight))
            for index in cache.cell_indices():
                cells.add(Polygon([(float(x), float(y)) for x, y in cache.cells[index]]))

        # Sites are only drawn alongside a valid tessellation.
        if self.params.show_sites and not cache.is_empty:
            sites = frame.add_layer(Layer(SITES, stroke="none", fill="black"))
            for x, y in cache.sites:
                sites.add(Circle(float(x), float(y), SITE_RADIUS))

        return frame
