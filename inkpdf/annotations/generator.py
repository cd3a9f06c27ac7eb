"""Export of annotation archives to PDF, with or without a background."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from ..archive import read_archive
from ..background import BackgroundInfo, inspect_background, overlay_pdfs
from ..config import RenderSettings, load_settings
from ..exceptions import CapabilityUnavailable, InputError, UnsupportedDocumentError
from ..model import Document, GenerationMode, GeneratorOptions
from ..utils import PathLike, atomic_output, ensure_path
from .sequencer import RenderedDocument, render_pages
from .surface import reportlab_surface_factory

LOGGER = logging.getLogger("inkpdf.annotations")


class BaseGenerator:
    """Common constructor and interface for PDF generators."""

    backend: str

    def __init__(
        self,
        archive_path: PathLike,
        output_path: PathLike,
        options: Optional[GeneratorOptions] = None,
        *,
        settings: Optional[RenderSettings] = None,
    ) -> None:
        self.archive_path = ensure_path(archive_path)
        self.output_path = ensure_path(output_path)
        self.options = options or GeneratorOptions()
        self.settings = settings or load_settings()

    def generate(self) -> Path:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError


class GeneratorRegistry:
    """Registry of generator implementations keyed by backend name."""

    def __init__(self) -> None:
        self._generators: Dict[str, type[BaseGenerator]] = {}

    def register(self, name: str, generator_class: type[BaseGenerator]) -> None:
        if name in self._generators:
            raise ValueError(f"Backend '{name}' is already registered")
        self._generators[name] = generator_class

    def get(self, name: str) -> type[BaseGenerator] | None:
        return self._generators.get(name)

    def names(self) -> list[str]:
        return sorted(self._generators)


registry = GeneratorRegistry()


def register_generator(name: str):
    def decorator(cls: type[BaseGenerator]) -> type[BaseGenerator]:
        registry.register(name, cls)
        cls.backend = name
        return cls

    return decorator


@register_generator("reportlab")
class PdfGenerator(BaseGenerator):
    """Render the annotations of an archive into a PDF file.

    Without a background PDF, or with ``annotations_only``, the annotations
    are written directly. Otherwise they are rendered into an intermediate
    document that is stacked page by page onto the background.
    """

    def generate(self) -> Path:
        archive = read_archive(self.archive_path)
        if archive.file_type == "epub":
            raise UnsupportedDocumentError(archive.file_type)

        background: Optional[BackgroundInfo] = None
        if archive.payload is not None:
            background = inspect_background(archive.payload)

        document = archive.document
        if len(document) == 0:
            raise InputError("the document has no pages")

        mode = GenerationMode.select(background is not None, self.options.annotations_only)
        LOGGER.debug("Exporting %s in %s mode", self.archive_path, mode.value)
        if mode is GenerationMode.OVERLAY:
            self._generate_with_background(document, archive.payload, background)
        else:
            self._generate_annotations_only(document, background)

        LOGGER.info("Exported %s to %s", self.archive_path, self.output_path)
        return self.output_path

    def render(self, document: Document, background: Optional[BackgroundInfo] = None) -> RenderedDocument:
        """Render *document* into an in-memory annotation PDF."""

        page_sizes = None
        if background is not None and self.settings.use_background_page_size:
            page_sizes = background.page_sizes
        return render_pages(
            document,
            self.options,
            reportlab_surface_factory(invariant=self.settings.invariant),
            default_size=self.settings.default_page_size,
            page_sizes=page_sizes,
            font_size=self.settings.page_number_font_size,
        )

    def _generate_annotations_only(self, document: Document, background: Optional[BackgroundInfo]) -> None:
        rendered = self.render(document, background)
        with atomic_output(self.output_path) as sink:
            sink.write(rendered.data)

    def _generate_with_background(self, document: Document, payload: bytes, background: BackgroundInfo) -> None:
        rendered = self.render(document, background)
        with atomic_output(self.output_path) as sink:
            overlay_pdfs(payload, rendered.data, sink, page_map=rendered.page_map)


@register_generator("disabled")
class UnavailablePdfGenerator(BaseGenerator):
    """Generator used when annotation rendering is switched off."""

    def generate(self) -> Path:
        raise CapabilityUnavailable(
            "PDF generation with annotations requires the reportlab rendering backend. "
            "Unset INKPDF_RENDER_BACKEND or set it to 'reportlab'."
        )


def create_pdf_generator(
    archive_path: PathLike,
    output_path: PathLike,
    options: Optional[GeneratorOptions] = None,
    *,
    settings: Optional[RenderSettings] = None,
) -> BaseGenerator:
    """Return the generator registered for ``settings.backend``."""

    settings = settings or load_settings()
    generator_class = registry.get(settings.backend)
    if generator_class is None:
        raise CapabilityUnavailable(
            f"Unknown rendering backend '{settings.backend}'. "
            f"Choose one of: {', '.join(registry.names())}"
        )
    return generator_class(archive_path, output_path, options, settings=settings)


def generate_pdf(
    archive_path: PathLike,
    output_path: PathLike,
    options: Optional[GeneratorOptions] = None,
    *,
    settings: Optional[RenderSettings] = None,
) -> Path:
    """Export the archive at *archive_path* to the PDF at *output_path*."""

    generator = create_pdf_generator(archive_path, output_path, options, settings=settings)
    return generator.generate()


__all__ = [
    "BaseGenerator",
    "GeneratorRegistry",
    "registry",
    "register_generator",
    "PdfGenerator",
    "UnavailablePdfGenerator",
    "create_pdf_generator",
    "generate_pdf",
]
