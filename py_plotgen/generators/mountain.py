"""Noise terrain wireframe."""

import numpy as np

from ..config.parameters import MountainParameters
from ..core.scene import terrain_mesh
from ..utils.random import GenerationContext
from .base import OrbitGenerator


class MountainGenerator(OrbitGenerator):
    name = "mountain"
    parameters_model = MountainParameters

    def build(self, context: GenerationContext) -> np.ndarray:
        return terrain_mesh(self.params, context.noise, context.seed)
