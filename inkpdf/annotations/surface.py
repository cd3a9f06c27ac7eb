"""Paged vector drawing surface backed by :mod:`reportlab`."""

from __future__ import annotations

import io
import logging
from enum import IntEnum
from typing import Callable, Protocol

from reportlab.pdfgen import canvas

LOGGER = logging.getLogger("inkpdf.annotations")


class LineCap(IntEnum):
    BUTT = 0
    ROUND = 1
    SQUARE = 2


class LineJoin(IntEnum):
    MITER = 0
    ROUND = 1
    BEVEL = 2


class Surface(Protocol):
    """Drawing primitives used by the brush renderer and the page sequencer."""

    def save_state(self) -> None: ...

    def restore_state(self) -> None: ...

    def set_source_rgb(self, red: float, green: float, blue: float) -> None: ...

    def set_source_rgba(self, red: float, green: float, blue: float, alpha: float) -> None: ...

    def set_line_width(self, width: float) -> None: ...

    def set_line_cap(self, cap: LineCap) -> None: ...

    def set_line_join(self, join: LineJoin) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...

    def set_font_size(self, size: float) -> None: ...

    def show_text(self, x: float, y: float, text: str) -> None: ...

    def set_page_size(self, width: float, height: float) -> None: ...

    def show_page(self) -> None: ...

    def finish(self) -> bytes: ...


SurfaceFactory = Callable[[float, float], Surface]


class ReportlabSurface:
    """Multi-page PDF surface writing into an in-memory buffer.

    Coordinates are PDF points with the origin in the bottom-left corner.
    :meth:`show_page` commits the current page. :meth:`finish` commits the
    last page only if something was issued against it, or if no page has
    been committed yet, so the result always has at least one page and never
    a trailing empty one.
    """

    def __init__(
        self,
        width: float,
        height: float,
        *,
        invariant: bool = True,
        font_name: str = "Helvetica",
    ) -> None:
        self._buffer = io.BytesIO()
        self._canvas = canvas.Canvas(
            self._buffer,
            pagesize=(width, height),
            invariant=1 if invariant else 0,
        )
        self._font_name = font_name
        self._font_size = 12.0
        self._path = None
        self._alpha = 1.0
        self._alpha_stack: list[float] = []
        self._page_open = False
        self._finished = False
        self.page_count = 0
        self.draw_count = 0

    def _touch(self) -> None:
        if self._finished:
            raise RuntimeError("Surface has already been finished")
        self._page_open = True

    def _set_alpha(self, alpha: float) -> None:
        if alpha != self._alpha:
            self._canvas.setStrokeAlpha(alpha)
            self._canvas.setFillAlpha(alpha)
            self._alpha = alpha

    def save_state(self) -> None:
        self._touch()
        self._canvas.saveState()
        self._alpha_stack.append(self._alpha)

    def restore_state(self) -> None:
        self._touch()
        self._canvas.restoreState()
        if self._alpha_stack:
            self._alpha = self._alpha_stack.pop()

    def set_source_rgb(self, red: float, green: float, blue: float) -> None:
        self.set_source_rgba(red, green, blue, 1.0)

    def set_source_rgba(self, red: float, green: float, blue: float, alpha: float) -> None:
        self._touch()
        self._canvas.setStrokeColorRGB(red, green, blue)
        self._canvas.setFillColorRGB(red, green, blue)
        self._set_alpha(alpha)

    def set_line_width(self, width: float) -> None:
        self._touch()
        self._canvas.setLineWidth(width)

    def set_line_cap(self, cap: LineCap) -> None:
        self._touch()
        self._canvas.setLineCap(int(cap))

    def set_line_join(self, join: LineJoin) -> None:
        self._touch()
        self._canvas.setLineJoin(int(join))

    def move_to(self, x: float, y: float) -> None:
        self._touch()
        if self._path is None:
            self._path = self._canvas.beginPath()
        self._path.moveTo(x, y)

    def line_to(self, x: float, y: float) -> None:
        if self._path is None:
            self.move_to(x, y)
            return
        self._touch()
        self._path.lineTo(x, y)

    def stroke(self) -> None:
        self._touch()
        if self._path is None:
            return
        self._canvas.drawPath(self._path, stroke=1, fill=0)
        self._path = None
        self.draw_count += 1

    def set_font_size(self, size: float) -> None:
        self._touch()
        self._font_size = size
        self._canvas.setFont(self._font_name, size)

    def show_text(self, x: float, y: float, text: str) -> None:
        self._touch()
        self._canvas.setFont(self._font_name, self._font_size)
        self._canvas.drawString(x, y, text)
        self.draw_count += 1

    def set_page_size(self, width: float, height: float) -> None:
        self._touch()
        self._canvas.setPageSize((width, height))

    def show_page(self) -> None:
        if self._finished:
            raise RuntimeError("Surface has already been finished")
        self._path = None
        self._canvas.showPage()
        self._alpha = 1.0
        self._alpha_stack.clear()
        self._page_open = False
        self.page_count += 1

    def finish(self) -> bytes:
        """Commit the last page if needed and return the document bytes."""

        if self._finished:
            raise RuntimeError("Surface has already been finished")
        if self._page_open or self.page_count == 0:
            self.show_page()
        self._canvas.save()
        self._finished = True
        LOGGER.debug("Finished PDF surface with %d page(s), %d drawing(s)", self.page_count, self.draw_count)
        return self._buffer.getvalue()


def reportlab_surface_factory(*, invariant: bool = True) -> SurfaceFactory:
    def _create(width: float, height: float) -> Surface:
        return ReportlabSurface(width, height, invariant=invariant)

    return _create


__all__ = [
    "LineCap",
    "LineJoin",
    "Surface",
    "SurfaceFactory",
    "ReportlabSurface",
    "reportlab_surface_factory",
]
