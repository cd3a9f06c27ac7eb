"""Annotation archive reading and packing for :mod:`inkpdf`."""

from __future__ import annotations

from .lines import decode_lines, encode_lines
from .reader import Archive, get_id_from_zip, read_archive
from .thumbnails import make_thumbnail
from .writer import (
    create_content,
    create_metadata,
    create_zip_directory,
    create_zip_document,
)

__all__ = [
    "Archive",
    "read_archive",
    "get_id_from_zip",
    "decode_lines",
    "encode_lines",
    "make_thumbnail",
    "create_zip_document",
    "create_zip_directory",
    "create_content",
    "create_metadata",
]
