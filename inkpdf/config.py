"""Runtime configuration for annotation rendering."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

BACKEND_ENV_VAR = "INKPDF_RENDER_BACKEND"
BACKGROUND_SIZE_ENV_VAR = "INKPDF_USE_BACKGROUND_PAGE_SIZE"
THUMBNAILS_ENV_VARS = ("INKPDF_THUMBNAILS", "RMAPI_THUMBNAILS")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RenderSettings:
    """Settings shared by the generator, the sequencer and the archive writer.

    Attributes:
        page_width: Width in PDF points of pages without a known size.
        page_height: Height in PDF points of pages without a known size.
        page_number_font_size: Font size of the page number label.
        backend: Name of the rendering backend. ``"reportlab"`` renders,
            ``"disabled"`` makes every export fail with
            :class:`~inkpdf.exceptions.CapabilityUnavailable`.
        invariant: Produce byte-reproducible PDFs (fixed dates and IDs).
        use_background_page_size: Size each page after the matching
            background page instead of the fixed default.
        thumbnails: Render a first-page thumbnail when packing PDFs.
    """

    page_width: float = 445.0
    page_height: float = 594.0
    page_number_font_size: float = 8.0
    backend: str = "reportlab"
    invariant: bool = True
    use_background_page_size: bool = False
    thumbnails: bool = False

    @property
    def default_page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)


def _flag(environ: Mapping[str, str], *names: str) -> bool:
    for env_name in names:
        value = environ.get(env_name)
        if value is not None:
            return value.strip().lower() in _TRUTHY
    return False


def load_settings(environ: Mapping[str, str] | None = None) -> RenderSettings:
    """Build :class:`RenderSettings` from environment variables."""

    if environ is None:
        environ = os.environ
    backend = environ.get(BACKEND_ENV_VAR, "").strip().lower() or RenderSettings.backend
    return RenderSettings(
        backend=backend,
        use_background_page_size=_flag(environ, BACKGROUND_SIZE_ENV_VAR),
        thumbnails=_flag(environ, *THUMBNAILS_ENV_VARS),
    )


__all__ = ["RenderSettings", "load_settings"]
