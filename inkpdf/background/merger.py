"""Stacking of annotation pages onto background PDF pages."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Optional, Sequence

from pypdf import PasswordType, PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import CompositionError

LOGGER = logging.getLogger("inkpdf.background")


def _load_reader(data: bytes, label: str) -> PdfReader:
    try:
        reader = PdfReader(io.BytesIO(data))
    except (PdfReadError, ValueError) as exc:
        LOGGER.error("Failed to read %s PDF: %s", label, exc)
        raise CompositionError(f"Unable to read {label} PDF") from exc

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted %s PDF", label)
        try:
            result = reader.decrypt("")
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            LOGGER.error("Failed to decrypt %s PDF: %s", label, exc)
            raise CompositionError(f"Unable to decrypt encrypted {label} PDF") from exc
        if result == PasswordType.NOT_DECRYPTED:
            LOGGER.error("Empty password does not open the %s PDF", label)
            raise CompositionError(f"Unable to decrypt encrypted {label} PDF")
    return reader


def overlay_pdfs(
    background: bytes,
    annotations: bytes,
    sink: BinaryIO,
    *,
    page_map: Optional[Sequence[int]] = None,
) -> int:
    """Stack *annotations* on top of *background* and write the result to *sink*.

    Args:
        background: The background document. Every one of its pages is kept,
            in order.
        annotations: The annotation document, rendered on a transparent
            background.
        sink: Binary stream receiving the merged PDF.
        page_map: Background page index for each annotation page. Defaults to
            the identity mapping. Annotation pages mapped past the end of the
            background are appended after the last background page.

    Returns:
        The number of pages written.

    Raises:
        CompositionError: If either document cannot be read or the merged
            document cannot be written.
    """

    background_reader = _load_reader(background, "background")
    annotation_reader = _load_reader(annotations, "annotation")

    try:
        annotation_pages = list(annotation_reader.pages)
        if page_map is None:
            page_map = range(len(annotation_pages))
        stamps = dict(zip(page_map, annotation_pages))

        writer = PdfWriter()
        for index, page in enumerate(background_reader.pages):
            target = writer.add_page(page)
            stamp = stamps.pop(index, None)
            if stamp is not None:
                LOGGER.debug("Stacking annotations onto background page %d", index)
                target.merge_page(stamp)

        for index in sorted(stamps):
            LOGGER.debug("Appending annotation page for source page %d", index)
            writer.add_page(stamps[index])

        writer.write(sink)
    except CompositionError:
        raise
    except Exception as exc:
        LOGGER.error("Failed to merge background and annotations: %s", exc)
        raise CompositionError("Failed to merge background and annotation PDFs") from exc

    page_count = len(writer.pages)
    LOGGER.info("Merged annotations onto %d page(s)", page_count)
    return page_count


__all__ = ["overlay_pdfs"]
