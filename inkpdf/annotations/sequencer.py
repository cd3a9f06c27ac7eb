"""Page sequencing: which source pages become output pages, and how."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..model import Document, GeneratorOptions
from .brushes import render_stroke_data
from .geometry import page_scale
from .surface import Surface, SurfaceFactory

LOGGER = logging.getLogger("inkpdf.annotations")

PAGE_NUMBER_FONT_SIZE = 8.0
PAGE_NUMBER_MARGIN_X = 20
PAGE_NUMBER_MARGIN_Y = 10

PageSize = Tuple[float, float]


@dataclass(frozen=True)
class RenderedDocument:
    """Finished annotation PDF.

    Attributes:
        data: The PDF bytes.
        page_map: Source page index of every output page, in output order.
            Empty when every source page was skipped.
        page_count: Number of pages in :attr:`data`.
    """

    data: bytes
    page_map: Tuple[int, ...]
    page_count: int


def _page_size(index: int, default_size: PageSize, page_sizes: Optional[Sequence[PageSize]]) -> PageSize:
    if page_sizes is not None and index < len(page_sizes):
        return page_sizes[index]
    return default_size


def draw_page_number(
    surface: Surface,
    page_number: int,
    page_width: float,
    *,
    font_size: float = PAGE_NUMBER_FONT_SIZE,
) -> None:
    surface.save_state()
    try:
        surface.set_font_size(font_size)
        surface.set_source_rgb(0.0, 0.0, 0.0)
        surface.show_text(page_width - PAGE_NUMBER_MARGIN_X, PAGE_NUMBER_MARGIN_Y, str(page_number))
    finally:
        surface.restore_state()


def render_pages(
    document: Document,
    options: GeneratorOptions,
    surface_factory: SurfaceFactory,
    *,
    default_size: PageSize,
    page_sizes: Optional[Sequence[PageSize]] = None,
    font_size: float = PAGE_NUMBER_FONT_SIZE,
) -> RenderedDocument:
    """Render *document* page by page onto a fresh surface.

    Pages without stroke data are left out unless ``options.all_pages`` is
    set. The first surface page always exists, so a document whose pages are
    all skipped still yields a single empty page.
    """

    pages = document.pages
    included = [
        index for index, page in enumerate(pages) if options.all_pages or page.has_content
    ]
    first_width, first_height = (
        _page_size(included[0], default_size, page_sizes) if included else default_size
    )
    surface = surface_factory(first_width, first_height)

    page_map: list[int] = []
    last_index = len(pages) - 1
    for index, page in enumerate(pages):
        if not options.all_pages and not page.has_content:
            LOGGER.debug("Skipping page %d without annotations", index)
            continue

        page_map.append(index)
        page_count = len(page_map)
        page_width, page_height = _page_size(index, default_size, page_sizes)
        if page_count > 1:
            surface.set_page_size(page_width, page_height)

        scale = page_scale(page_width, page_height)
        if page.data is not None:
            drawn = render_stroke_data(surface, page.data, scale, page_height)
            LOGGER.debug("Page %d: drew %d line(s) at scale %.4f", index, drawn, scale)

        if options.add_page_numbers:
            draw_page_number(surface, page_count, page_width, font_size=font_size)

        if index < last_index or options.all_pages:
            surface.show_page()

    data = surface.finish()
    page_count = max(len(page_map), 1)
    LOGGER.info("Rendered %d of %d source page(s)", len(page_map), len(pages))
    return RenderedDocument(data=data, page_map=tuple(page_map), page_count=page_count)


__all__ = ["RenderedDocument", "PageSize", "draw_page_number", "render_pages"]
