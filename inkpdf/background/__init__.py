"""Background PDF inspection and annotation overlay for :mod:`inkpdf`."""

from __future__ import annotations

from .inspector import BackgroundInfo, inspect_background
from .merger import overlay_pdfs

__all__ = ["BackgroundInfo", "inspect_background", "overlay_pdfs"]
