"""Delaunay triangulation of uniformly scattered sites."""

from ..config.parameters import DelaunayParameters
from ..core.point_distribution import random_points
from ..core.tessellation import Tessellation, build_tessellation
from ..export.frame import SITES, TRIANGLES, Circle, Frame, Layer, Polygon
from ..utils.random import GenerationContext
from .base import PatternGenerator
from .voronoi import SITE_RADIUS


class DelaunayGenerator(PatternGenerator):
    """Sites are spread over the whole canvas, x then y per site."""

    name = "delaunay"
    parameters_model = DelaunayParameters

    def build(self, context: GenerationContext) -> Tessellation:
        sites = random_points(context.random, self.params.num_points,
                              0.0, 0.0, self.width, self.height)
        return build_tessellation(sites, self.width, self.height)

    def cache_size(self) -> int:
        return len(self._cache.triangles) if self._cache is not None else 0

    def draw(self, cache: Tessellation) -> Frame:
        frame = self.new_frame()
        if len(cache.triangles) == 0:
            return frame

        if self.params.show_triangle_edges:
            layer = frame.add_layer(Layer(TRIANGLES, stroke_width=1))
            for triangle in cache.triangles:
                layer.add(Polygon([(float(x), float(y)) for x, y in cache.sites[triangle]]))

        if self.params.show_points:
            sites = frame.add_layer(Layer(SITES, stroke="none", fill="black"))
            for x, y in cache.sites:
                sites.add(Circle(float(x), float(y), SITE_RADIUS))

        return frame
