"""Data model for annotation documents and export options."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union


class BrushType(IntEnum):
    """Tool codes as stored in ``.rm`` lines files."""

    BRUSH = 0
    TILT_PENCIL = 1
    BALLPOINT = 2
    MARKER = 3
    FINELINER = 4
    HIGHLIGHTER = 5
    ERASER = 6
    SHARP_PENCIL = 7
    ERASE_AREA = 8

    BRUSH_V5 = 12
    SHARP_PENCIL_V5 = 13
    TILT_PENCIL_V5 = 14
    BALLPOINT_V5 = 15
    MARKER_V5 = 16
    FINELINER_V5 = 17
    HIGHLIGHTER_V5 = 18


class BrushColor(IntEnum):
    BLACK = 0
    GREY = 1
    WHITE = 2


_HIGHLIGHTERS = frozenset({BrushType.HIGHLIGHTER, BrushType.HIGHLIGHTER_V5})
_ERASERS = frozenset({BrushType.ERASER, BrushType.ERASE_AREA})


def is_highlighter(brush_type: Union[BrushType, int]) -> bool:
    return brush_type in _HIGHLIGHTERS


def is_eraser(brush_type: Union[BrushType, int]) -> bool:
    return brush_type in _ERASERS


@dataclass(frozen=True)
class Point:
    """A captured sample in device pixels, origin top-left."""

    x: float
    y: float
    speed: float = 0.0
    direction: float = 0.0
    width: float = 0.0
    pressure: float = 0.0


@dataclass(frozen=True)
class Line:
    brush_type: Union[BrushType, int]
    brush_color: Union[BrushColor, int]
    brush_size: float
    points: Tuple[Point, ...] = ()
    unknown: float = 0.0


@dataclass(frozen=True)
class Layer:
    lines: Tuple[Line, ...] = ()


@dataclass(frozen=True)
class StrokeData:
    """Decoded contents of one ``.rm`` lines file."""

    layers: Tuple[Layer, ...] = ()
    version: int = 5


@dataclass(frozen=True)
class Page:
    data: Optional[StrokeData] = None
    template: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class Document:
    pages: Tuple[Page, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.pages)


@dataclass(frozen=True)
class GeneratorOptions:
    """Caller options for a single export.

    Attributes:
        add_page_numbers: Draw the 1-based output page index on each page.
        all_pages: Emit pages without stroke data as blank pages.
        annotations_only: Ignore the background document even if present.
    """

    add_page_numbers: bool = False
    all_pages: bool = False
    annotations_only: bool = False


class GenerationMode(Enum):
    BLANK = "blank"
    OVERLAY = "overlay"

    @classmethod
    def select(cls, has_background: bool, annotations_only: bool) -> "GenerationMode":
        if has_background and not annotations_only:
            return cls.OVERLAY
        return cls.BLANK


__all__ = [
    "BrushType",
    "BrushColor",
    "is_highlighter",
    "is_eraser",
    "Point",
    "Line",
    "Layer",
    "StrokeData",
    "Page",
    "Document",
    "GeneratorOptions",
    "GenerationMode",
]
