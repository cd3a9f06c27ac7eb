"""Reading and writing of binary ``.rm`` lines files (versions 3 and 5).

Layout, all little-endian::

    header          43 bytes, "reMarkable .lines file, version=N" + spaces
    layer count     u32
    per layer:
        line count  u32
        per line:
            brush type   u32
            colour       u32
            padding      u32
            brush size   f32
            unknown      f32   (version 5 only)
            point count  u32
            per point:   6 x f32 (x, y, speed, direction, width, pressure)
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import Type, TypeVar, Union

from ..exceptions import InputError
from ..model import BrushColor, BrushType, Layer, Line, Point, StrokeData

HEADER_PREFIX = b"reMarkable .lines file, version="
HEADER_LENGTH = 43
SUPPORTED_VERSIONS = (3, 5)

_U32 = struct.Struct("<I")
_LINE_V3 = struct.Struct("<IIIf")
_LINE_V5 = struct.Struct("<IIIff")
_POINT = struct.Struct("<ffffff")

E = TypeVar("E", bound=IntEnum)


def header_for(version: int) -> bytes:
    return (HEADER_PREFIX + str(version).encode("ascii")).ljust(HEADER_LENGTH, b" ")


def _coerce(enum: Type[E], value: int) -> Union[E, int]:
    try:
        return enum(value)
    except ValueError:
        return value


class _Cursor:
    def __init__(self, data: bytes, offset: int) -> None:
        self.data = data
        self.offset = offset

    def unpack(self, fmt: struct.Struct) -> tuple:
        end = self.offset + fmt.size
        if end > len(self.data):
            raise InputError(f"Lines file truncated at byte {self.offset}")
        values = fmt.unpack_from(self.data, self.offset)
        self.offset = end
        return values


def read_version(data: bytes) -> int:
    """Return the format version announced by the header of *data*."""

    header = data[:HEADER_LENGTH]
    if len(header) < HEADER_LENGTH or not header.startswith(HEADER_PREFIX):
        raise InputError("Not a reMarkable lines file")
    try:
        return int(header[len(HEADER_PREFIX):].strip())
    except ValueError as exc:
        raise InputError("Invalid lines file header") from exc


def decode_lines(data: bytes) -> StrokeData:
    """Decode a lines file into :class:`~inkpdf.model.StrokeData`."""

    version = read_version(data)
    if version not in SUPPORTED_VERSIONS:
        raise InputError(f"Unsupported lines file version: {version}")

    line_struct = _LINE_V5 if version == 5 else _LINE_V3
    cursor = _Cursor(data, HEADER_LENGTH)
    layers = []
    (layer_count,) = cursor.unpack(_U32)
    for _ in range(layer_count):
        (line_count,) = cursor.unpack(_U32)
        lines = []
        for _ in range(line_count):
            fields = cursor.unpack(line_struct)
            brush_type, color, _padding, size = fields[:4]
            unknown = fields[4] if version == 5 else 0.0
            (point_count,) = cursor.unpack(_U32)
            points = tuple(Point(*cursor.unpack(_POINT)) for _ in range(point_count))
            lines.append(
                Line(
                    brush_type=_coerce(BrushType, brush_type),
                    brush_color=_coerce(BrushColor, color),
                    brush_size=size,
                    points=points,
                    unknown=unknown,
                )
            )
        layers.append(Layer(lines=tuple(lines)))
    return StrokeData(layers=tuple(layers), version=version)


def encode_lines(data: StrokeData) -> bytes:
    """Encode *data* as a version 5 lines file."""

    chunks = [header_for(5), _U32.pack(len(data.layers))]
    for layer in data.layers:
        chunks.append(_U32.pack(len(layer.lines)))
        for line in layer.lines:
            chunks.append(
                _LINE_V5.pack(int(line.brush_type), int(line.brush_color), 0, line.brush_size, line.unknown)
            )
            chunks.append(_U32.pack(len(line.points)))
            for point in line.points:
                chunks.append(
                    _POINT.pack(point.x, point.y, point.speed, point.direction, point.width, point.pressure)
                )
    return b"".join(chunks)


__all__ = ["HEADER_LENGTH", "SUPPORTED_VERSIONS", "header_for", "read_version", "decode_lines", "encode_lines"]
