"""
Common generator pipeline.

Every generator follows the same sequence:

1. ``generate(params, seed)`` seeds one ``GenerationContext`` and builds the
   geometry cache (sites, meshes, segments). This is the only writer of the
   cache.
2. ``render()`` projects and styles the cached geometry with the current
   camera into a ``Frame``.
3. ``export_svg(path)`` renders again with the same camera, applies any
   export-only filtering and serializes the frame.

Before the first ``generate`` the cache is not valid: rendering yields an
empty frame and exporting yields ``None``, each with a warning.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple, Type, Union

import numpy as np
import structlog

from ..config import Settings, settings as default_settings
from ..config.parameters import GeneratorParameters
from ..core.camera import MAX_DEPTH, OrbitCamera, Projection, export_visibility_mask, project_segments
from ..export.frame import WIREFRAME, Frame, Layer, Line
from ..export.svg import frame_to_svg, save_svg
from ..utils.random import GenerationContext, random_seed

logger = structlog.get_logger()

ParamsInput = Union[GeneratorParameters, Dict[str, Any], None]


class PatternGenerator(ABC):
    """Base class for all pattern generators."""

    name: str = ""
    parameters_model: Type[GeneratorParameters] = GeneratorParameters

    def __init__(self, params: ParamsInput = None, settings: Optional[Settings] = None,
                 width: Optional[float] = None, height: Optional[float] = None):
        self.settings = settings or default_settings
        self.width = width if width is not None else self.settings.canvas_width
        self.height = height if height is not None else self.settings.canvas_height
        self.params = self.coerce_params(params)
        self.seed: Optional[int] = None
        self._cache: Any = None

    def coerce_params(self, params: ParamsInput) -> GeneratorParameters:
        """Accept a parameter model, a mapping of field values, or None for defaults."""
        if params is None:
            return self.parameters_model()
        if isinstance(params, self.parameters_model):
            return params
        if isinstance(params, dict):
            return self.parameters_model(**params)
        raise TypeError(
            f"{self.name} expects {self.parameters_model.__name__} or dict, "
            f"got {type(params).__name__}"
        )

    def with_overrides(self, **overrides) -> GeneratorParameters:
        """A new validated parameter set with ``overrides`` applied."""
        return self.parameters_model(**{**self.params.model_dump(), **overrides})

    @property
    def has_geometry(self) -> bool:
        return self._cache is not None

    def generate(self, params: ParamsInput = None, seed: Optional[int] = None) -> Any:
        """
        Regenerate all geometry from (params, seed).

        Args:
            params: New parameter set; keeps the current one when omitted
            seed: Integer seed; a fresh random seed when omitted

        Returns:
            The new geometry cache
        """
        if params is not None:
            self.params = self.coerce_params(params)
        if seed is None:
            seed = random_seed(self.settings.max_random_seed)

        context = GenerationContext.from_seed(seed)
        self.seed = seed
        self._cache = self.build(context)

        logger.info("Geometry generated", generator=self.name, seed=seed,
                    size=self.cache_size())
        return self._cache

    @abstractmethod
    def build(self, context: GenerationContext) -> Any:
        """Build the geometry cache from a freshly seeded context."""

    @abstractmethod
    def draw(self, cache: Any) -> Frame:
        """Turn the cache into a frame with the current view state."""

    def cache_size(self) -> int:
        return len(self._cache) if self._cache is not None else 0

    def new_frame(self) -> Frame:
        return Frame(width=self.width, height=self.height)

    def render(self) -> Frame:
        """The frame for the current cache and view state."""
        if self._cache is None:
            logger.warning("Render requested before generation", generator=self.name)
            return self.new_frame()
        return self.draw(self._cache)

    def export_frame(self) -> Frame:
        """The frame to serialize; the rendered frame unless a subclass filters it."""
        return self.render()

    def default_filename(self) -> str:
        return f"{self.name}-{self.seed}.svg"

    def resolve_export_path(self, path: str) -> str:
        """
        Map ``path`` to the SVG file to write.

        A path ending in ``.svg`` is used as is. Any other path names a
        directory, which receives ``default_filename()`` and is created on
        write.
        """
        if os.path.isdir(path) or os.path.splitext(path)[1].lower() != ".svg":
            return os.path.join(path, self.default_filename())
        return path

    def export_svg(self, path: Optional[str] = None,
                   precision: Optional[int] = None) -> Optional[str]:
        """
        Serialize the current geometry.

        Args:
            path: File to write; a directory receives ``default_filename()``.
                Nothing is written when omitted.
            precision: Coordinate decimals, defaults to settings

        Returns:
            The SVG document, or None when there is nothing to export
        """
        if self._cache is None:
            logger.warning("Export skipped, geometry not generated", generator=self.name)
            return None

        frame = self.export_frame()
        if frame.is_empty:
            logger.warning("Export skipped, no visible geometry", generator=self.name,
                           seed=self.seed)
            return None

        if path is None:
            return frame_to_svg(frame, precision)
        return save_svg(frame, self.resolve_export_path(path), precision)


class OrbitGenerator(PatternGenerator):
    """
    Generator whose cache is a set of 3D segments viewed by an orbit camera.

    The camera persists across regenerations so interactive orbit and dolly
    state survives a parameter change; only its scene rotation is reset from
    the parameters.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.camera = OrbitCamera(self.width, self.height)
        self.apply_scene_rotation()

    def apply_scene_rotation(self) -> None:
        p = self.params
        self.camera.model_rotation = (p.initial_rotation_x, p.initial_rotation_y,
                                      p.initial_rotation_z)

    def generate(self, params: ParamsInput = None, seed: Optional[int] = None) -> Any:
        if params is not None:
            self.params = self.coerce_params(params)
        self.apply_scene_rotation()
        return super().generate(None, seed)

    def export_margin(self) -> Tuple[float, float]:
        """Slack around the canvas inside which an endpoint still counts as visible."""
        margin = max(self.width, self.height) * 0.5
        return margin, margin

    def project(self, segments: np.ndarray) -> Projection:
        return project_segments(segments, self.camera, self.width, self.height)

    def segment_frame(self, projected: Projection, keep: np.ndarray) -> Frame:
        frame = self.new_frame()
        layer = frame.add_layer(Layer(WIREFRAME, stroke_width=self.params.stroke_weight))
        for (x1, y1), (x2, y2) in projected.screen[keep]:
            layer.add(Line(float(x1), float(y1), float(x2), float(y2)))
        return frame

    def draw(self, cache: np.ndarray) -> Frame:
        projected = self.project(cache)
        keep = projected.valid.all(axis=-1) & (projected.depth < MAX_DEPTH).all(axis=-1)
        return self.segment_frame(projected, keep)

    def export_frame(self) -> Frame:
        projected = self.project(self._cache)
        margin_x, margin_y = self.export_margin()
        keep = export_visibility_mask(projected, self.width, self.height, margin_x, margin_y)
        logger.info("Export visibility filter", generator=self.name,
                    segments=len(keep), kept=int(np.count_nonzero(keep)))
        return self.segment_frame(projected, keep)
