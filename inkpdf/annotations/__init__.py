"""Annotation rendering and composition for :mod:`inkpdf`."""

from __future__ import annotations

from .brushes import render_line, render_stroke_data, stroke_color, stroke_width
from .generator import (
    PdfGenerator,
    UnavailablePdfGenerator,
    create_pdf_generator,
    generate_pdf,
    registry,
)
from .geometry import DEVICE_HEIGHT, DEVICE_WIDTH, page_scale, to_device, to_pdf
from .sequencer import RenderedDocument, render_pages
from .surface import LineCap, LineJoin, ReportlabSurface, Surface

__all__ = [
    "DEVICE_WIDTH",
    "DEVICE_HEIGHT",
    "page_scale",
    "to_pdf",
    "to_device",
    "stroke_color",
    "stroke_width",
    "render_line",
    "render_stroke_data",
    "RenderedDocument",
    "render_pages",
    "LineCap",
    "LineJoin",
    "Surface",
    "ReportlabSurface",
    "PdfGenerator",
    "UnavailablePdfGenerator",
    "create_pdf_generator",
    "generate_pdf",
    "registry",
]
