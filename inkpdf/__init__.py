"""Export handwritten annotation archives to PDF."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from . import annotations, archive, background
from .annotations import (
    PdfGenerator,
    UnavailablePdfGenerator,
    create_pdf_generator,
    generate_pdf,
)
from .archive import create_zip_document, make_thumbnail, read_archive
from .background import BackgroundInfo, inspect_background, overlay_pdfs
from .config import RenderSettings, load_settings
from .exceptions import (
    CapabilityUnavailable,
    CompositionError,
    InkPdfError,
    InputError,
    MalformedDocument,
    MergeError,
    ResourceError,
    ThumbnailError,
    UnsupportedDocumentError,
)
from .model import Document, GenerationMode, GeneratorOptions
from .utils import PathLike

__version__ = "0.1.0"

__all__ = [
    "annotations",
    "archive",
    "background",
    "PdfGenerator",
    "UnavailablePdfGenerator",
    "create_pdf_generator",
    "generate_pdf",
    "read_archive",
    "create_zip_document",
    "make_thumbnail",
    "inspect_background",
    "overlay_pdfs",
    "BackgroundInfo",
    "RenderSettings",
    "load_settings",
    "Document",
    "GeneratorOptions",
    "GenerationMode",
    "InkPdfError",
    "InputError",
    "UnsupportedDocumentError",
    "MalformedDocument",
    "CompositionError",
    "MergeError",
    "ResourceError",
    "CapabilityUnavailable",
    "ThumbnailError",
    "export_document",
]


def export_document(
    archive_path: PathLike,
    output_path: PathLike,
    *,
    add_page_numbers: bool = False,
    all_pages: bool = False,
    annotations_only: bool = False,
    settings: Optional[RenderSettings] = None,
) -> Path:
    """Convenience wrapper around :func:`annotations.generate_pdf`."""

    options = GeneratorOptions(
        add_page_numbers=add_page_numbers,
        all_pages=all_pages,
        annotations_only=annotations_only,
    )
    return generate_pdf(archive_path, output_path, options, settings=settings)
