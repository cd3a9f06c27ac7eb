"""Validation of background PDF documents."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from pypdf import PasswordType, PdfReader
from pypdf.errors import PdfReadError

from ..exceptions import MalformedDocument

LOGGER = logging.getLogger("inkpdf.background")


@dataclass(frozen=True)
class BackgroundInfo:
    """Summary of a background PDF.

    ``num_pages`` is ``None`` and ``page_sizes`` is empty when the document
    is encrypted and cannot be opened with an empty password.
    """

    encrypted: bool
    num_pages: Optional[int]
    page_sizes: Tuple[Tuple[float, float], ...] = ()


def open_reader(data: bytes) -> PdfReader:
    """Return a :class:`PdfReader` over *data*, raising ``MalformedDocument``."""

    try:
        return PdfReader(io.BytesIO(data))
    except (PdfReadError, ValueError) as exc:
        LOGGER.error("Failed to read background PDF: %s", exc)
        raise MalformedDocument("Unable to read background PDF") from exc


def inspect_background(data: bytes) -> BackgroundInfo:
    """Confirm *data* is a PDF and report whether it is encrypted."""

    if not data:
        raise MalformedDocument("Background PDF is empty")

    reader = open_reader(data)
    encrypted = bool(reader.is_encrypted)
    if encrypted:
        LOGGER.info("Background PDF is encrypted; merging will use an empty password")
        try:
            result = reader.decrypt("")
        except Exception as exc:  # pragma: no cover - decrypt errors vary
            LOGGER.warning("Background PDF cannot be decrypted for inspection: %s", exc)
            return BackgroundInfo(encrypted=True, num_pages=None)
        if result == PasswordType.NOT_DECRYPTED:
            LOGGER.warning("Background PDF requires a password; page count unknown")
            return BackgroundInfo(encrypted=True, num_pages=None)

    try:
        sizes = tuple(
            (float(page.mediabox.width), float(page.mediabox.height)) for page in reader.pages
        )
    except Exception as exc:
        if encrypted:
            LOGGER.warning("Encrypted background PDF pages are unreadable: %s", exc)
            return BackgroundInfo(encrypted=True, num_pages=None)
        LOGGER.error("Failed to parse background PDF pages: %s", exc)
        raise MalformedDocument("Background PDF page tree is unreadable") from exc

    info = BackgroundInfo(encrypted=encrypted, num_pages=len(sizes), page_sizes=sizes)
    LOGGER.info("Background PDF: pages=%s, encrypted=%s", info.num_pages, info.encrypted)
    return info


__all__ = ["BackgroundInfo", "open_reader", "inspect_background"]
