"""Wormhole tube wireframe."""

from typing import Tuple

import numpy as np

from ..config.parameters import WormholeParameters
from ..core.scene import wormhole_mesh
from ..utils.random import GenerationContext
from .base import OrbitGenerator


class WormholeGenerator(OrbitGenerator):
    name = "wormhole"
    parameters_model = WormholeParameters

    def build(self, context: GenerationContext) -> np.ndarray:
        return wormhole_mesh(self.params)

    def export_margin(self) -> Tuple[float, float]:
        return self.width * 0.5, self.height * 0.5
