"""
Frame model and SVG export.
"""

from .frame import Circle, Frame, Layer, Line, Polygon, Polyline, Text
from .svg import frame_to_drawing, frame_to_svg, save_svg

__all__ = ['Circle', 'Frame', 'Layer', 'Line', 'Polygon', 'Polyline', 'Text',
           'frame_to_drawing', 'frame_to_svg', 'save_svg']
