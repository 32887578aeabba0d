"""Character grid modulated by a wave field."""

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import structlog

from ..config.parameters import KineticTextParameters, TextEffect
from .fields import opacity_factor, size_factor, text_wave

logger = structlog.get_logger()

# Glyph advance as a fraction of the font size.
CHAR_WIDTH_RATIO = 0.6

SIZE_EFFECTS = (TextEffect.SIZE, TextEffect.BOTH)
OPACITY_EFFECTS = (TextEffect.OPACITY, TextEffect.BOTH)


@dataclass
class Glyph:
    """One character placed at an offset (x, y) from the canvas center."""

    char: str
    x: float
    y: float
    font_size: float
    opacity: float


def cell_size(params: KineticTextParameters) -> Tuple[float, float]:
    """Grid cell width and height."""
    height = params.base_font_size * params.density
    return height * CHAR_WIDTH_RATIO, height


def grid_shape(params: KineticTextParameters, width: float, height: float) -> Tuple[int, int]:
    """Rows and columns needed to cover the canvas."""
    cell_w, cell_h = cell_size(params)
    return int(math.ceil(height / cell_h)), int(math.ceil(width / cell_w))


def layout_glyphs(params: KineticTextParameters, width: float, height: float) -> List[Glyph]:
    """
    Lay the text out row by row over a grid centered on the canvas.

    Characters cycle through ``params.text`` in reading order. Whitespace
    still takes its cell and advances the cycle but produces no glyph.

    Args:
        params: Text, grid and wave settings
        width: Canvas width
        height: Canvas height

    Returns:
        Glyphs in reading order
    """
    rows, cols = grid_shape(params, width, height)
    cell_w, cell_h = cell_size(params)

    xs = (np.arange(cols) - (cols - 1) / 2) * cell_w
    ys = (np.arange(rows) - (rows - 1) / 2) * cell_h
    gx, gy = np.meshgrid(xs, ys)
    wave = text_wave(params.wave_form, gx, gy, params.wave_frequency, params.wave_phase,
                     spiral_tightness=params.spiral_tightness, angle=params.wave_angle)

    sizes = np.full(gx.shape, params.base_font_size)
    if params.effect_type in SIZE_EFFECTS:
        sizes = params.base_font_size * size_factor(wave, params.wave_amplitude)
    opacities = np.ones(gx.shape)
    if params.effect_type in OPACITY_EFFECTS:
        opacities = opacity_factor(wave, params.wave_amplitude)

    text = params.text
    glyphs = []
    for index in range(rows * cols):
        char = text[index % len(text)] if text else " "
        if char.isspace():
            continue
        r, c = divmod(index, cols)
        glyphs.append(Glyph(char, float(gx[r, c]), float(gy[r, c]),
                            float(sizes[r, c]), float(opacities[r, c])))

    logger.debug("Text grid laid out", rows=rows, cols=cols, glyphs=len(glyphs))
    return glyphs
