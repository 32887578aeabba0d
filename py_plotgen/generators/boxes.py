"""Randomly placed wireframe boxes."""

import numpy as np

from ..config.parameters import BoxParameters
from ..core.scene import box_segments, generate_boxes
from ..utils.random import GenerationContext
from .base import OrbitGenerator


class BoxGenerator(OrbitGenerator):
    """
    Boxes sampled inside a placement volume, each rotated about its own center.

    The cache holds the twelve edges of every box in generation order.
    """

    name = "abstract-boxes"
    parameters_model = BoxParameters

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.boxes = []

    def build(self, context: GenerationContext) -> np.ndarray:
        self.boxes = generate_boxes(self.params, context.random)
        return box_segments(self.boxes)
