"""Mapping between device pixels and PDF points."""

from __future__ import annotations

from ..model import Point

DEVICE_WIDTH = 1404
DEVICE_HEIGHT = 1872

# Pages taller than this ratio are constrained by height, wider ones by width.
ASPECT_THRESHOLD = 1.33


def page_scale(page_width: float, page_height: float) -> float:
    """Return the uniform device-to-page scale factor for a page size."""

    ratio = page_height / page_width
    if ratio < ASPECT_THRESHOLD:
        return page_width / DEVICE_WIDTH
    return page_height / DEVICE_HEIGHT


def to_pdf(point: Point, scale: float, page_height: float) -> tuple[float, float]:
    """Map a device *point* into PDF space (origin bottom-left)."""

    return point.x * scale, page_height - point.y * scale


def to_device(x: float, y: float, scale: float, page_height: float) -> Point:
    """Inverse of :func:`to_pdf`."""

    return Point(x / scale, (page_height - y) / scale)


__all__ = ["DEVICE_WIDTH", "DEVICE_HEIGHT", "ASPECT_THRESHOLD", "page_scale", "to_pdf", "to_device"]
