"""
Frame to SVG serialization.

The document is a root sized to the canvas, a background rectangle and
one ``<g>`` per layer carrying the shared stroke/fill attributes.
Coordinates are rounded to ``settings.svg_precision`` decimals.
"""

import io
import os
from typing import Optional

import structlog
import svgwrite

from ..config import settings
from .frame import Circle, Frame, Line, Polygon, Polyline, Text

logger = structlog.get_logger()


def _r(value, precision: int) -> float:
    return round(float(value), precision)


def _points(points, precision: int):
    return [(_r(x, precision), _r(y, precision)) for x, y in points]


def frame_to_drawing(frame: Frame, precision: Optional[int] = None) -> svgwrite.Drawing:
    """
    Build an svgwrite drawing for ``frame``.

    Args:
        frame: Rendered frame
        precision: Decimal places for coordinates, defaults to settings

    Returns:
        Drawing ready to be written
    """
    if precision is None:
        precision = settings.svg_precision

    dwg = svgwrite.Drawing(size=(frame.width, frame.height))
    dwg.add(dwg.rect(insert=(0, 0), size=(frame.width, frame.height), fill=frame.background))

    for layer in frame.layers:
        attrs = {"id": layer.name, "stroke": layer.stroke, "fill": layer.fill}
        if layer.stroke_width is not None:
            attrs["stroke_width"] = _r(layer.stroke_width, precision)
        attrs.update(layer.attributes)
        group = dwg.g(**attrs)

        for element in layer.elements:
            if isinstance(element, Line):
                group.add(dwg.line(
                    start=(_r(element.x1, precision), _r(element.y1, precision)),
                    end=(_r(element.x2, precision), _r(element.y2, precision)),
                ))
            elif isinstance(element, Polyline):
                extra = {}
                if element.stroke_width is not None:
                    extra["stroke_width"] = _r(element.stroke_width, precision)
                group.add(dwg.polyline(_points(element.points, precision), **extra))
            elif isinstance(element, Polygon):
                extra = {}
                if element.fill is not None:
                    extra["fill"] = element.fill
                group.add(dwg.polygon(_points(element.points, precision), **extra))
            elif isinstance(element, Circle):
                extra = {}
                if element.fill is not None:
                    extra["fill"] = element.fill
                group.add(dwg.circle(
                    center=(_r(element.cx, precision), _r(element.cy, precision)),
                    r=_r(element.r, precision),
                    **extra,
                ))
            elif isinstance(element, Text):
                extra = {}
                if element.opacity is not None:
                    extra["fill_opacity"] = _r(element.opacity, precision)
                group.add(dwg.text(
                    element.text,
                    insert=(_r(element.x, precision), _r(element.y, precision)),
                    font_size=_r(element.font_size, precision),
                    **extra,
                ))
            else:
                raise TypeError(f"Unsupported frame element: {type(element).__name__}")

        dwg.add(group)

    return dwg


def frame_to_svg(frame: Frame, precision: Optional[int] = None) -> str:
    """Serialize ``frame`` to an SVG document string."""
    buffer = io.StringIO()
    frame_to_drawing(frame, precision).write(buffer, pretty=True)
    return buffer.getvalue()


def save_svg(frame: Frame, path: str, precision: Optional[int] = None) -> str:
    """
    Write ``frame`` to ``path``, creating parent directories.

    Returns:
        The document text that was written
    """
    document = frame_to_svg(frame, precision)
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(document)

    logger.info("SVG written", path=path, elements=frame.element_count,
                width=frame.width, height=frame.height)
    return document
