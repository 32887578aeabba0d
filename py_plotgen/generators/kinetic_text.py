"""Kinetic typography: a character grid modulated by a wave field."""

from typing import List

from ..config.parameters import KineticTextParameters
from ..core.typography import Glyph, layout_glyphs
from ..export.frame import GLYPHS, Frame, Layer, Text
from ..utils.random import GenerationContext
from .base import PatternGenerator

TEXT_ATTRIBUTES = {
    "text_anchor": "middle",
    "dominant_baseline": "middle",
    "font_family": "sans-serif",
}


class KineticTextGenerator(PatternGenerator):
    name = "kinetic-text"
    parameters_model = KineticTextParameters

    def build(self, context: GenerationContext) -> List[Glyph]:
        # The layout is closed-form; the seed only names the output.
        return layout_glyphs(self.params, self.width, self.height)

    def draw(self, cache: List[Glyph]) -> Frame:
        frame = self.new_frame()
        layer = frame.add_layer(Layer(GLYPHS, stroke="none", fill="black",
                                      attributes=dict(TEXT_ATTRIBUTES)))
        cx, cy = self.width / 2, self.height / 2
        for glyph in cache:
            layer.add(Text(cx + glyph.x, cy + glyph.y, glyph.char, glyph.font_size,
                           opacity=glyph.opacity))
        return frame
