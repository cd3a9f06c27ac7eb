"""Per-brush drawing rules for annotation lines."""

from __future__ import annotations

import logging

from ..model import BrushColor, Line, StrokeData, is_eraser, is_highlighter
from .geometry import to_pdf
from .surface import LineCap, LineJoin, Surface

LOGGER = logging.getLogger("inkpdf.annotations")

MIN_STROKE_WIDTH = 0.5
HIGHLIGHTER_WIDTH = 30
HIGHLIGHTER_RGBA = (1.0, 1.0, 0.0, 0.5)

_COLORS = {
    BrushColor.BLACK: (0.0, 0.0, 0.0),
    BrushColor.WHITE: (1.0, 1.0, 1.0),
    BrushColor.GREY: (0.5, 0.5, 0.5),
}


def stroke_color(color: BrushColor | int) -> tuple[float, float, float]:
    """Return the RGB triple for *color*, black for unknown values."""

    return _COLORS.get(color, _COLORS[BrushColor.BLACK])


def stroke_width(brush_size: float) -> float:
    return max(MIN_STROKE_WIDTH, brush_size * 6.0 - 10.8)


def draw_stroke(surface: Surface, line: Line, scale: float, page_height: float) -> None:
    if len(line.points) < 1:
        return

    surface.set_source_rgb(*stroke_color(line.brush_color))
    surface.set_line_width(stroke_width(line.brush_size))
    surface.set_line_cap(LineCap.ROUND)
    surface.set_line_join(LineJoin.ROUND)

    first, *rest = line.points
    surface.move_to(*to_pdf(first, scale, page_height))
    for point in rest:
        surface.line_to(*to_pdf(point, scale, page_height))
    surface.stroke()


def draw_highlighter(surface: Surface, line: Line, scale: float, page_height: float) -> None:
    """Draw a highlighter line as a flat band between its end points.

    Only the first point's height is used; interior points are ignored.
    """

    if len(line.points) < 2:
        return

    width = scale * HIGHLIGHTER_WIDTH
    first, last = line.points[0], line.points[-1]
    x1 = first.x * scale
    x2 = last.x * scale
    y = page_height - (first.y * scale + width / 2)

    surface.set_source_rgba(*HIGHLIGHTER_RGBA)
    surface.set_line_width(width)
    surface.set_line_cap(LineCap.BUTT)
    surface.move_to(x1, y)
    surface.line_to(x2, y)
    surface.stroke()


def render_line(surface: Surface, line: Line, scale: float, page_height: float) -> bool:
    """Draw *line* and return ``True`` if it produced a visible mark."""

    if len(line.points) < 1 or is_eraser(line.brush_type):
        return False
    if is_highlighter(line.brush_type):
        if len(line.points) < 2:
            return False
        draw_highlighter(surface, line, scale, page_height)
    else:
        draw_stroke(surface, line, scale, page_height)
    return True


def render_stroke_data(surface: Surface, data: StrokeData, scale: float, page_height: float) -> int:
    """Draw every layer of *data* in order and return the number of lines drawn."""

    drawn = 0
    surface.save_state()
    try:
        for layer_index, layer in enumerate(data.layers):
            for line in layer.lines:
                if render_line(surface, line, scale, page_height):
                    drawn += 1
            LOGGER.debug("Rendered layer %d with %d line(s)", layer_index, len(layer.lines))
    finally:
        surface.restore_state()
    return drawn


__all__ = [
    "MIN_STROKE_WIDTH",
    "stroke_color",
    "stroke_width",
    "draw_stroke",
    "draw_highlighter",
    "render_line",
    "render_stroke_data",
]
