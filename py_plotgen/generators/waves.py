"""Wireframe ocean waves viewed from a pitched pinhole camera."""

import math
from typing import List, NamedTuple

import numpy as np
import structlog

from ..config.parameters import WaveParameters
from ..core.camera import PitchCamera
from ..core.fields import frange, wave_height
from ..export.frame import WIREFRAME, Frame, Layer, Polyline
from ..utils.random import GenerationContext
from .base import PatternGenerator

logger = structlog.get_logger()

MIN_DEPTH_SPACING = 5.0
DEPTH_LINE_MIN_WEIGHT = 0.3
CROSS_LINE_MIN_WEIGHT = 0.2
WEIGHT_PER_SCALE = 0.01


class WaveLine(NamedTuple):
    """One sampled wave line in world space."""

    kind: str            # "depth" runs away from the viewer, "cross" runs across
    points: np.ndarray   # (n, 3)


def sample_steps(params: WaveParameters):
    """Depth spacing, x step of depth lines, cross line spacing and cross line x step."""
    spacing = max(MIN_DEPTH_SPACING, params.depth_resolution / params.wave_density)
    x_step = max(1, int(math.floor(2 / params.wave_density + 0.5)))
    cross_spacing = max(spacing, spacing * 2 / params.cross_wave_density)
    cross_x_step = max(0.5, 1 / params.wave_density)
    return spacing, x_step, cross_spacing, cross_x_step


def build_wave_lines(params: WaveParameters) -> List[WaveLine]:
    """
    Sample the wave field along depth lines and cross lines.

    Grid x indices run from ``-grid_resolution`` to ``grid_resolution`` and
    are scaled by the depth spacing into world x.
    """
    spacing, x_step, cross_spacing, cross_x_step = sample_steps(params)
    res = params.grid_resolution

    def height(x, z):
        return wave_height(x, z, params.wave_type, params.wave_amplitude,
                           params.wave_frequency, params.wave_phase, params.time_offset)

    lines = []
    zs = np.array(frange(0.0, params.ocean_depth, spacing))
    for gx in frange(-res, res, x_step, inclusive=True):
        xs = np.full_like(zs, gx * spacing)
        lines.append(WaveLine("depth", np.stack([xs, height(xs, zs), zs], axis=-1)))

    cross_xs = np.array(frange(-res, res, cross_x_step, inclusive=True)) * spacing
    for z in frange(0.0, params.ocean_depth, cross_spacing):
        zs_row = np.full_like(cross_xs, z)
        lines.append(WaveLine("cross", np.stack([cross_xs, height(cross_xs, zs_row), zs_row], axis=-1)))

    return lines


class WaveGenerator(PatternGenerator):
    """Ocean surface drawn as depth lines and cross lines."""

    name = "wireframe-waves"
    parameters_model = WaveParameters

    def build(self, context: GenerationContext) -> List[WaveLine]:
        # The wave field is closed-form; the seed only names the output.
        return build_wave_lines(self.params)

    def camera(self) -> PitchCamera:
        p = self.params
        return PitchCamera(height=p.camera_height, pitch=p.viewing_angle,
                           focal_distance=p.perspective_distance,
                           canvas_width=self.width, canvas_height=self.height)

    def draw(self, cache: List[WaveLine]) -> Frame:
        camera = self.camera()
        frame = self.new_frame()
        layer = frame.add_layer(Layer(WIREFRAME, stroke_width=self.params.stroke_weight))

        culled = 0
        for line in cache:
            projected = [camera.project(*p) for p in line.points]
            visible = [p for p in projected if p is not None]
            if len(visible) < 2:
                culled += 1
                continue

            avg_scale = sum(p.scale for p in visible) / len(visible)
            floor = DEPTH_LINE_MIN_WEIGHT if line.kind == "depth" else CROSS_LINE_MIN_WEIGHT
            weight = self.params.stroke_weight * max(floor, min(1.0, avg_scale * WEIGHT_PER_SCALE))
            layer.add(Polyline([(p.x, p.y) for p in visible], stroke_width=weight))

        if culled:
            logger.debug("Wave lines behind camera dropped", culled=culled)
        return frame
