"""
2D frame model shared by the render and export paths.

A generator's ``render()`` produces a ``Frame``: screen-space elements
grouped into named layers. The SVG serializer writes exactly these
coordinates, so an export is a static copy of the last rendered frame.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

Point = Tuple[float, float]

# Layer names used by the generators.
WIREFRAME = "wireframe"
SOLUTION = "solution"
CELLS = "cells"
WALLS = "walls"
SITES = "sites"
MARKERS = "markers"
TILES = "tiles"
TRIANGLES = "triangles"
GLYPHS = "glyphs"


@dataclass
class Line:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass
class Polyline:
    points: Sequence[Point]
    stroke_width: Optional[float] = None


@dataclass
class Polygon:
    points: Sequence[Point]
    fill: Optional[str] = None


@dataclass
class Circle:
    cx: float
    cy: float
    r: float
    fill: Optional[str] = None


@dataclass
class Text:
    """A single text run centered on (x, y) by its layer attributes."""

    x: float
    y: float
    text: str
    font_size: float
    opacity: Optional[float] = None


Element = Union[Line, Polyline, Polygon, Circle, Text]


@dataclass
class Layer:
    """A group of elements sharing stroke and fill styling."""

    name: str
    stroke: str = "black"
    stroke_width: Optional[float] = None
    fill: str = "none"
    attributes: Dict[str, str] = field(default_factory=dict)
    elements: List[Element] = field(default_factory=list)

    def add(self, element: Element) -> None:
        self.elements.append(element)

    def __len__(self) -> int:
        return len(self.elements)


@dataclass
class Frame:
    """Canvas size, background and ordered layers."""

    width: float
    height: float
    background: str = "white"
    layers: List[Layer] = field(default_factory=list)

    def add_layer(self, layer: Layer) -> Layer:
        self.layers.append(layer)
        return layer

    def layer(self, name: str) -> Optional[Layer]:
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    @property
    def element_count(self) -> int:
        return sum(len(layer) for layer in self.layers)

    @property
    def is_empty(self) -> bool:
        return self.element_count == 0
