"""Custom exceptions raised by :mod:`inkpdf`."""

from __future__ import annotations


class InkPdfError(Exception):
    """Base exception for all errors raised by :mod:`inkpdf`."""


class InputError(InkPdfError):
    """Raised when an annotation archive cannot be read or is unusable."""


class UnsupportedDocumentError(InputError):
    """Raised when the archive holds a container kind that cannot be exported."""

    def __init__(self, file_type: str) -> None:
        self.file_type = file_type
        super().__init__(f"only pdf and notebooks supported, got {file_type!r}")


class MalformedDocument(InkPdfError):
    """Raised when background bytes do not parse as a PDF document."""


class CompositionError(InkPdfError):
    """Raised when the background and annotation documents cannot be merged."""


MergeError = CompositionError


class ResourceError(InkPdfError):
    """Raised when temporary or output storage cannot be allocated or written."""


class CapabilityUnavailable(InkPdfError):
    """Raised when annotation rendering is disabled in this deployment."""


class ThumbnailError(InkPdfError):
    """Raised when a thumbnail cannot be rendered from a PDF."""


__all__ = [
    "InkPdfError",
    "InputError",
    "UnsupportedDocumentError",
    "MalformedDocument",
    "CompositionError",
    "MergeError",
    "ResourceError",
    "CapabilityUnavailable",
    "ThumbnailError",
]
